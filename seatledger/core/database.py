from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool
from seatledger.core.config import settings


def _engine_options(url: str) -> dict:
    if url.startswith("sqlite"):
        options = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in url:
            options["poolclass"] = StaticPool
        return options
    return {
        "pool_pre_ping": True,   # tests connections before using them
        "pool_recycle": 1800,    # recycle every 30 min to avoid stale connections
        "pool_size": 10,
        "max_overflow": 10,
        "pool_timeout": 30,
    }


engine = create_engine(settings.DATABASE_URL, **_engine_options(settings.DATABASE_URL))

# Create session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for models
Base = declarative_base()

# Dependency to get DB session
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def import_models():
    # Every model has to be registered on Base before create_all
    from seatledger.teams.models.team_model import Team
    from seatledger.seasons.models.seasons_model import Season
    from seatledger.games.models.game_model import Game
    from seatledger.games.models.game_attendance_model import GameAttendance
    from seatledger.ticket_holders.models.ticket_holder_model import TicketHolder
    from seatledger.seats.models.seat_model import Seat
    from seatledger.seats.models.seat_ownership_model import SeatOwnership
    from seatledger.pricing.models.game_pricing_model import GamePricing
    from seatledger.payments.models.payment_model import Payment
    from seatledger.team_performance.models.team_performance_model import TeamPerformance
    from seatledger.seat_predictions.models.seat_value_prediction_model import SeatValuePrediction

# Function to initialize the database
def init_db(bind=None):
    import_models()

    # Use context manager to ensure connection is released
    with (bind or engine).begin() as conn:
        Base.metadata.create_all(bind=conn)
