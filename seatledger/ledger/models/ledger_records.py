"""Typed rows handed from the ledger reader to the aggregation code.

Numeric fields default to zero so nothing downstream does arithmetic on None.
``sold_price`` is the one exception: None means the seat was not sold for that game.
"""
from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class OwnershipRow:
    ownership_id: str
    seat_id: str
    season_id: str
    ticket_holder_id: str
    owner_name: str
    license_cost: float = 0.0
    team_id: str | None = None


@dataclass(frozen=True)
class PricingRow:
    game_id: str
    seat_id: str
    season_id: str
    opponent: str = ""
    game_date: date | None = None
    cost: float = 0.0
    sold_price: float | None = None

    @property
    def sold_amount(self) -> float:
        return self.sold_price or 0.0

    @property
    def is_sale(self) -> bool:
        return self.sold_price is not None and self.sold_price > 0


@dataclass(frozen=True)
class PaymentRow:
    payment_id: str
    amount: float
    type: str
    ticket_holder_id: str | None = None
    team_id: str | None = None
    season_id: str | None = None
    category: str | None = None


@dataclass(frozen=True)
class SeatRow:
    seat_id: str
    team_id: str
    section: str
    row: str
    number: str
    license_cost: float | None = None


@dataclass(frozen=True)
class SeasonRow:
    season_id: str
    season_year: int
    team_id: str
    team_name: str
