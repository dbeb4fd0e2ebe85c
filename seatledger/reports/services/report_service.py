from datetime import date
from sqlalchemy.orm import Session
from seatledger.ledger.services.ledger_reader import LedgerReader
from seatledger.balances.services.balance_calculator import owner_season_lines
from seatledger.reports.models.report_records import (
    SeasonReport,
    LicenseInvestment,
    PaymentTotals,
    GrandTotals,
    OwnerTotal,
    DashboardStats,
)
from seatledger.reports.services.report_builder import (
    build_season_reports,
    build_license_investments,
    build_payment_totals,
    build_grand_totals,
    build_owner_totals,
)


class ReportService:
    def __init__(self, db: Session):
        self.db = db
        self.reader = LedgerReader(db)

    def get_season_summary_report(self, team_id: str | None = None) -> list[SeasonReport]:
        """Per-season sales, game costs and profit, newest season first."""
        return build_season_reports(
            self.reader.list_seasons(team_id),
            self.reader.list_ownerships(team_id=team_id),
            self.reader.list_game_pricing(team_id=team_id),
        )

    def get_seat_license_investments(self, team_id: str | None = None) -> list[LicenseInvestment]:
        return build_license_investments(self.reader.list_ownerships(team_id=team_id))

    def get_payment_totals(self, team_id: str | None = None) -> PaymentTotals:
        return build_payment_totals(self._payments_for_team(team_id))

    def get_grand_totals(self, team_id: str | None = None) -> GrandTotals:
        """Totals across every season, with license costs added to the game costs."""
        ownerships = self.reader.list_ownerships(team_id=team_id)
        season_reports = build_season_reports(
            self.reader.list_seasons(team_id),
            ownerships,
            self.reader.list_game_pricing(team_id=team_id),
        )
        return build_grand_totals(season_reports, ownerships, self._payments_for_team(team_id))

    def get_owner_totals(self, team_id: str | None = None) -> list[OwnerTotal]:
        return build_owner_totals(self.get_season_summary_report(team_id))

    def get_dashboard_stats(self, season_id: str, today: date | None = None) -> DashboardStats:
        today = today or date.today()
        games = self.reader.list_games(season_id)
        ownerships = self.reader.list_ownerships(season_id=season_id)
        lines = owner_season_lines(ownerships, self.reader.list_game_pricing(season_id=season_id), season_id)

        revenue = sum(line.sales for line in lines)
        costs = sum(line.costs for line in lines)
        return DashboardStats(
            total_revenue=round(revenue, 2),
            total_costs=round(costs, 2),
            total_profit=round(revenue - costs, 2),
            games_played=sum(1 for game in games if game.date <= today),
            total_games=len(games),
            active_seats=len({o.seat_id for o in ownerships}),
            ticket_holders=len({o.ticket_holder_id for o in ownerships}),
        )

    def _payments_for_team(self, team_id: str | None):
        payments = self.reader.list_payments()
        if not team_id:
            return payments
        season_ids = {s.season_id for s in self.reader.list_seasons(team_id)}
        return [p for p in payments if p.team_id == team_id or p.season_id in season_ids]
