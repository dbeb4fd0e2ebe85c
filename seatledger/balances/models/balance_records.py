from dataclasses import dataclass


@dataclass(frozen=True)
class OwnerBalance:
    ticket_holder_id: str
    name: str
    seats_owned: int = 0
    sales_total: float = 0.0
    costs_total: float = 0.0
    license_costs_total: float = 0.0
    payments_from_owner: float = 0.0
    payments_to_owner: float = 0.0
    balance: float = 0.0


@dataclass(frozen=True)
class OwnerSeasonLine:
    """Sales and game costs for one owner in one season, license costs excluded."""
    ticket_holder_id: str
    name: str
    seats_owned: int = 0
    sales: float = 0.0
    costs: float = 0.0
    profit: float = 0.0


@dataclass(frozen=True)
class OwnerProfit:
    ticket_holder_id: str
    name: str
    revenue: float = 0.0
    costs: float = 0.0
    profit: float = 0.0
    balance: float = 0.0


@dataclass(frozen=True)
class FinancialSummaryRow:
    ticket_holder_id: str
    name: str
    seats_owned: int = 0
    balance: float = 0.0
