from sqlalchemy.orm import Session
from seatledger.core.config import settings
from seatledger.ledger.services.ledger_reader import LedgerReader
from seatledger.balances.models.balance_records import OwnerBalance, OwnerProfit, FinancialSummaryRow
from seatledger.balances.services.balance_calculator import (
    FROM_OWNER,
    TO_OWNER,
    NO_EXCLUSIONS,
    PaymentExclusionPolicy,
    aggregate_owner_balances,
    owner_season_lines,
    sum_owner_payments,
)


class OwnerBalanceService:
    def __init__(self, db: Session, exclusion: PaymentExclusionPolicy | None = None,
                 retain_seatless_owners: bool | None = None):
        self.db = db
        self.reader = LedgerReader(db)
        self.exclusion = exclusion or PaymentExclusionPolicy.from_settings(settings)
        self.retain_seatless_owners = (
            settings.RETAIN_SEATLESS_OWNERS if retain_seatless_owners is None else retain_seatless_owners
        )

    def get_owner_balances(self, season_id: str | None = None) -> list[OwnerBalance]:
        """Lifetime (or single season) balance for every owner with seats."""
        holders = {h.ticket_holder_id: h.name for h in self.reader.list_ticket_holders()}
        return aggregate_owner_balances(
            ownerships=self.reader.list_ownerships(),
            pricing=self.reader.list_game_pricing(),
            payments=self.reader.list_payments(types=[FROM_OWNER, TO_OWNER]),
            season_id=season_id,
            exclusion=self.exclusion,
            retain_seatless_owners=self.retain_seatless_owners,
            holders=holders,
        )

    def get_ticket_holder_profits(self, season_id: str) -> list[OwnerProfit]:
        """Season revenue, costs and profit per owner, with recurring payments netted in.

        License costs are not part of this figure; legacy license payments are
        excluded the same way as in the lifetime balance.
        """
        lines = owner_season_lines(
            self.reader.list_ownerships(season_id=season_id),
            self.reader.list_game_pricing(season_id=season_id),
            season_id,
        )
        payments = sum_owner_payments(self.reader.list_payments(season_id=season_id), self.exclusion)

        results = []
        for line in lines:
            totals = payments.get(line.ticket_holder_id, {FROM_OWNER: 0.0, TO_OWNER: 0.0})
            balance = (line.sales + totals[FROM_OWNER]) - (line.costs + totals[TO_OWNER])
            results.append(OwnerProfit(
                ticket_holder_id=line.ticket_holder_id,
                name=line.name,
                revenue=line.sales,
                costs=line.costs,
                profit=line.profit,
                balance=round(balance, 2),
            ))
        return results

    def get_financial_summary(self, season_id: str) -> list[FinancialSummaryRow]:
        """Dashboard balance per owner for one season.

        Unlike the recurring balance this path counts every from_owner payment,
        seat-license payments included, and treats it as settled against profit:
        balance = profit - (from_owner - to_owner).
        """
        lines = owner_season_lines(
            self.reader.list_ownerships(season_id=season_id),
            self.reader.list_game_pricing(season_id=season_id),
            season_id,
        )
        payments = sum_owner_payments(self.reader.list_payments(season_id=season_id), NO_EXCLUSIONS)

        results = []
        for line in lines:
            totals = payments.get(line.ticket_holder_id, {FROM_OWNER: 0.0, TO_OWNER: 0.0})
            balance = line.profit - (totals[FROM_OWNER] - totals[TO_OWNER])
            results.append(FinancialSummaryRow(
                ticket_holder_id=line.ticket_holder_id,
                name=line.name,
                seats_owned=line.seats_owned,
                balance=round(balance, 2),
            ))
        return results
