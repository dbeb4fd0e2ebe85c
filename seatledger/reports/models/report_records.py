from dataclasses import dataclass, field
from seatledger.balances.models.balance_records import OwnerSeasonLine


@dataclass(frozen=True)
class SeasonReport:
    """Season totals. Costs are game costs only; license costs live in GrandTotals."""
    season_id: str
    season_year: int
    team_name: str
    total_sales: float = 0.0
    total_costs: float = 0.0
    total_profit: float = 0.0
    owner_details: list[OwnerSeasonLine] = field(default_factory=list)


@dataclass(frozen=True)
class LicenseInvestment:
    ticket_holder_id: str
    name: str
    total_license_costs: float = 0.0
    seats_owned: int = 0


@dataclass(frozen=True)
class PaymentTotals:
    payments_to_teams: float = 0.0
    payments_from_teams: float = 0.0
    seat_license_payments: float = 0.0
    total_payments: float = 0.0
    net_team_payments: float = 0.0


@dataclass(frozen=True)
class GrandTotals:
    sales: float = 0.0
    costs: float = 0.0  # game costs, same basis as SeasonReport.total_costs
    profit: float = 0.0
    license_costs: float = 0.0
    total_costs: float = 0.0  # costs + license_costs
    total_profit: float = 0.0
    payments: PaymentTotals = field(default_factory=PaymentTotals)


@dataclass(frozen=True)
class OwnerTotal:
    ticket_holder_id: str
    name: str
    sales: float = 0.0
    costs: float = 0.0
    profit: float = 0.0


@dataclass(frozen=True)
class DashboardStats:
    total_revenue: float = 0.0
    total_costs: float = 0.0
    total_profit: float = 0.0
    games_played: int = 0
    total_games: int = 0
    active_seats: int = 0
    ticket_holders: int = 0
