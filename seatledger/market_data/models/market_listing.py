from dataclasses import dataclass, field


@dataclass(frozen=True)
class MarketListing:
    section: str
    row: str
    price: float
    quantity: int
    seller: str
    marketplace: str  # 'seatgeek' | 'stubhub'
    url: str | None = None


@dataclass(frozen=True)
class GameMarketData:
    game_date: str
    opponent: str
    venue: str
    listings: list[MarketListing] = field(default_factory=list)
