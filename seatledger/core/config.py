from pydantic_settings import BaseSettings, SettingsConfigDict
from pathlib import Path

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./seatledger.db"

    # Market-data marketplaces (optional enrichment)
    SEATGEEK_CLIENT_ID: str = ""
    SEATGEEK_CLIENT_SECRET: str = ""
    STUBHUB_API_KEY: str = ""
    MARKET_DATA_TIMEOUT: float = 10.0

    # Seat value predictions stay valid this long before a read recomputes them
    PREDICTION_TTL_DAYS: int = 7

    # Minimum attendance rows for a game to count as a win (inclusive: a game with
    # exactly this many is a win, one fewer is a loss)
    WIN_ATTENDANCE_THRESHOLD: int = 3

    # Legacy seat-license payments left out of recurring owner balances.
    # Comma separated, e.g. "seat_license" / "1249.55"
    EXCLUDED_PAYMENT_CATEGORIES: str = "seat_license"
    LEGACY_EXCLUDED_PAYMENT_AMOUNTS: str = ""

    # Keep owners with payment history but no seats in lifetime balances
    RETAIN_SEATLESS_OWNERS: bool = True

    # Go up two levels from core/config.py → project root
    model_config = SettingsConfigDict(
        env_file=str(Path(__file__).resolve().parents[2] / ".env"),
        extra="ignore",
    )

    @property
    def excluded_payment_categories(self) -> frozenset:
        return frozenset(c.strip() for c in self.EXCLUDED_PAYMENT_CATEGORIES.split(",") if c.strip())

    @property
    def legacy_excluded_payment_amounts(self) -> frozenset:
        return frozenset(float(a) for a in self.LEGACY_EXCLUDED_PAYMENT_AMOUNTS.split(",") if a.strip())

settings = Settings()
