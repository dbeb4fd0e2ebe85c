from dataclasses import dataclass, field


@dataclass(frozen=True)
class SimilarSeatPrice:
    seat_id: str | None  # None for external marketplace listings
    section: str
    row: str
    number: str
    current_price: float = 0.0
    sold: bool = False
    marketplace: str | None = None
    seller: str | None = None
    url: str | None = None


@dataclass
class GameSimilarPrices:
    game_id: str
    game_date: str
    opponent: str
    similar_seats: list[SimilarSeatPrice] = field(default_factory=list)
