import os

os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

from datetime import date

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from seatledger.core.database import init_db
from seatledger.teams.models.team_model import Team
from seatledger.seasons.models.seasons_model import Season
from seatledger.games.models.game_model import Game
from seatledger.games.models.game_attendance_model import GameAttendance
from seatledger.ticket_holders.models.ticket_holder_model import TicketHolder
from seatledger.seats.models.seat_model import Seat
from seatledger.seats.models.seat_ownership_model import SeatOwnership
from seatledger.pricing.models.game_pricing_model import GamePricing
from seatledger.payments.models.payment_model import Payment


@pytest.fixture
def db():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    session = sessionmaker(bind=engine, autocommit=False, autoflush=False)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


class LedgerBuilder:
    """Inserts ledger rows with explicit ids and commits after each one."""

    def __init__(self, db):
        self.db = db
        self._counter = 0

    def _next(self, prefix):
        self._counter += 1
        return f"{prefix}{self._counter}"

    def _add(self, row):
        self.db.add(row)
        self.db.commit()
        return row

    def team(self, team_id="T1", name="Hawks"):
        return self._add(Team(team_id=team_id, team_name=name))

    def season(self, season_id="S1", team_id="T1", year=2024):
        return self._add(Season(season_id=season_id, team_id=team_id, season_year=year))

    def game(self, game_id, season_id="S1", opponent="Rivals", on=None):
        return self._add(Game(game_id=game_id, season_id=season_id, opponent=opponent, date=on or date(2024, 10, 1)))

    def seat(self, seat_id, team_id="T1", section="101", row="1", number="1", license_cost=None):
        return self._add(Seat(
            seat_id=seat_id, team_id=team_id, section=section, row=row, number=number, license_cost=license_cost,
        ))

    def holder(self, holder_id, name):
        return self._add(TicketHolder(ticket_holder_id=holder_id, name=name))

    def own(self, seat_id, holder_id, season_id="S1"):
        return self._add(SeatOwnership(
            ownership_id=self._next("SO"), seat_id=seat_id, season_id=season_id, ticket_holder_id=holder_id,
        ))

    def price(self, game_id, seat_id, cost=None, sold_price=None):
        return self._add(GamePricing(
            pricing_id=self._next("GP"), game_id=game_id, seat_id=seat_id, cost=cost, sold_price=sold_price,
        ))

    def pay(self, amount, type, holder_id=None, season_id=None, category=None, team_id=None):
        return self._add(Payment(
            payment_id=self._next("P"), amount=amount, type=type, ticket_holder_id=holder_id,
            season_id=season_id, category=category, team_id=team_id,
        ))

    def attend(self, game_id, seat_id="ST1", holder_id="TH1", times=1):
        for _ in range(times):
            self._add(GameAttendance(
                attendance_id=self._next("GA"), game_id=game_id, seat_id=seat_id, ticket_holder_id=holder_id,
            ))


@pytest.fixture
def ledger(db):
    return LedgerBuilder(db)
