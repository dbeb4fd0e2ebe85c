import logging
from sqlalchemy.orm import Session
from sqlalchemy import func
from seatledger.core.utils import to_amount
from seatledger.ledger.models.ledger_records import OwnershipRow, PricingRow, PaymentRow, SeatRow, SeasonRow
from seatledger.seats.models.seat_model import Seat
from seatledger.seats.models.seat_ownership_model import SeatOwnership
from seatledger.ticket_holders.models.ticket_holder_model import TicketHolder
from seatledger.games.models.game_model import Game
from seatledger.games.models.game_attendance_model import GameAttendance
from seatledger.pricing.models.game_pricing_model import GamePricing
from seatledger.payments.models.payment_model import Payment
from seatledger.seasons.models.seasons_model import Season
from seatledger.teams.models.team_model import Team

logger = logging.getLogger(__name__)


class LedgerReader:
    """Read-only access to the ledger tables, returned as typed rows."""

    def __init__(self, db: Session):
        self.db = db

    def list_ownerships(self, season_id: str | None = None, team_id: str | None = None) -> list[OwnershipRow]:
        """Ownership rows with owner name and seat license cost attached.

        Rows pointing at a seat or ticket holder that does not exist are skipped.
        """
        query = (
            self.db.query(SeatOwnership, Seat, TicketHolder)
            .outerjoin(Seat, SeatOwnership.seat_id == Seat.seat_id)
            .outerjoin(TicketHolder, SeatOwnership.ticket_holder_id == TicketHolder.ticket_holder_id)
        )
        if season_id:
            query = query.filter(SeatOwnership.season_id == season_id)

        rows = []
        for ownership, seat, holder in query.order_by(SeatOwnership.ownership_id).all():
            if seat is None or holder is None:
                logger.warning(
                    "Skipping ownership %s: unknown %s",
                    ownership.ownership_id,
                    "seat " + str(ownership.seat_id) if seat is None else "owner " + str(ownership.ticket_holder_id),
                )
                continue
            if team_id and seat.team_id != team_id:
                continue
            rows.append(OwnershipRow(
                ownership_id=ownership.ownership_id,
                seat_id=seat.seat_id,
                season_id=ownership.season_id,
                ticket_holder_id=holder.ticket_holder_id,
                owner_name=holder.name,
                license_cost=to_amount(seat.license_cost, field="license_cost"),
                team_id=seat.team_id,
            ))
        return rows

    def list_game_pricing(
        self,
        season_id: str | None = None,
        game_id: str | None = None,
        seat_id: str | None = None,
        team_id: str | None = None,
    ) -> list[PricingRow]:
        query = (
            self.db.query(GamePricing, Game)
            .outerjoin(Game, GamePricing.game_id == Game.game_id)
        )
        if season_id:
            query = query.filter(Game.season_id == season_id)
        if game_id:
            query = query.filter(GamePricing.game_id == game_id)
        if seat_id:
            query = query.filter(GamePricing.seat_id == seat_id)
        if team_id:
            query = (
                query.join(Seat, GamePricing.seat_id == Seat.seat_id)
                .filter(Seat.team_id == team_id)
            )

        rows = []
        for pricing, game in query.order_by(GamePricing.pricing_id).all():
            if game is None:
                logger.warning("Skipping pricing %s: unknown game %s", pricing.pricing_id, pricing.game_id)
                continue
            rows.append(PricingRow(
                game_id=game.game_id,
                seat_id=pricing.seat_id,
                season_id=game.season_id,
                opponent=game.opponent,
                game_date=game.date,
                cost=to_amount(pricing.cost, field="cost"),
                sold_price=to_amount(pricing.sold_price, default=None, field="sold_price"),
            ))
        return rows

    def list_payments(self, season_id: str | None = None, types=None) -> list[PaymentRow]:
        query = self.db.query(Payment)
        if season_id:
            query = query.filter(Payment.season_id == season_id)
        if types:
            query = query.filter(Payment.type.in_(list(types)))

        return [
            PaymentRow(
                payment_id=p.payment_id,
                amount=to_amount(p.amount),
                type=p.type,
                ticket_holder_id=p.ticket_holder_id,
                team_id=p.team_id,
                season_id=p.season_id,
                category=p.category,
            )
            for p in query.order_by(Payment.payment_id).all()
        ]

    def list_games(self, season_id: str) -> list[Game]:
        return (
            self.db.query(Game)
            .filter(Game.season_id == season_id)
            .order_by(Game.date, Game.game_id)
            .all()
        )

    def attendance_counts(self, game_ids) -> dict[str, int]:
        """Attendance row count per game; games without attendance map to 0."""
        game_ids = list(game_ids)
        counts = {game_id: 0 for game_id in game_ids}
        if not game_ids:
            return counts

        results = (
            self.db.query(GameAttendance.game_id, func.count(GameAttendance.attendance_id))
            .filter(GameAttendance.game_id.in_(game_ids))
            .group_by(GameAttendance.game_id)
            .all()
        )
        for game_id, count in results:
            counts[game_id] = count
        return counts

    def list_seats(self, team_id: str | None = None) -> list[SeatRow]:
        query = self.db.query(Seat)
        if team_id:
            query = query.filter(Seat.team_id == team_id)
        return [self._seat_row(seat) for seat in query.order_by(Seat.seat_id).all()]

    def get_seat(self, seat_id: str) -> SeatRow | None:
        seat = self.db.query(Seat).filter(Seat.seat_id == seat_id).first()
        return self._seat_row(seat) if seat else None

    def list_seasons(self, team_id: str | None = None) -> list[SeasonRow]:
        query = (
            self.db.query(Season, Team)
            .join(Team, Season.team_id == Team.team_id)
        )
        if team_id:
            query = query.filter(Season.team_id == team_id)

        return [
            SeasonRow(
                season_id=season.season_id,
                season_year=season.season_year,
                team_id=team.team_id,
                team_name=team.team_name,
            )
            for season, team in query.order_by(Season.season_year.desc(), Team.team_name).all()
        ]

    def get_season(self, season_id: str) -> SeasonRow | None:
        result = (
            self.db.query(Season, Team)
            .outerjoin(Team, Season.team_id == Team.team_id)
            .filter(Season.season_id == season_id)
            .first()
        )
        if not result:
            return None
        season, team = result
        return SeasonRow(
            season_id=season.season_id,
            season_year=season.season_year,
            team_id=season.team_id,
            team_name=team.team_name if team else "",
        )

    def list_ticket_holders(self) -> list[TicketHolder]:
        return self.db.query(TicketHolder).order_by(TicketHolder.name).all()

    @staticmethod
    def _seat_row(seat: Seat) -> SeatRow:
        return SeatRow(
            seat_id=seat.seat_id,
            team_id=seat.team_id,
            section=seat.section,
            row=seat.row,
            number=seat.number,
            license_cost=to_amount(seat.license_cost, default=None, field="license_cost"),
        )
