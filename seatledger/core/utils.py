from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from sqlalchemy.orm import Session
from sqlalchemy import func


class LedgerValueError(ValueError):
    """A ledger field that should hold a number holds something else."""


def generate_custom_id(db: Session, model, prefix: str, id_field: str):
    """
    Generate a human-readable unique ID with a prefix using COUNT instead of ORDER BY.

    :param db: SQLAlchemy session
    :param model: SQLAlchemy model class
    :param prefix: String prefix for the ID (e.g., "ST" for seat, "SVP" for prediction)
    :param id_field: Field name storing the custom ID
    :return: Generated custom ID (e.g., "ST1", "ST10000", "SVP1")
    """
    row_count = db.query(func.count()).select_from(model).scalar()

    new_id = row_count + 1
    new_id_str = f"{prefix}{new_id}"

    # Ensure uniqueness by checking if the ID already exists (rare case)
    while db.query(model).filter(getattr(model, id_field) == new_id_str).first():
        new_id += 1
        new_id_str = f"{prefix}{new_id}"

    return new_id_str


def to_amount(value, default: float | None = 0.0, field: str = "amount") -> float | None:
    """
    Coerce a ledger value (float, int, Decimal or numeric string) to float.

    None and blank strings become ``default``. Anything else that is not a number
    raises LedgerValueError so malformed rows surface instead of skewing totals.
    """
    if value is None:
        return default
    if isinstance(value, bool):
        raise LedgerValueError(f"Invalid {field}: {value!r}")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, str):
        if not value.strip():
            return default
        try:
            return float(Decimal(value.strip()))
        except InvalidOperation:
            raise LedgerValueError(f"Invalid {field}: {value!r}")
    raise LedgerValueError(f"Invalid {field}: {value!r}")


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def safe_mean(values) -> float:
    """Mean of the values, 0 for an empty collection."""
    values = list(values)
    if not values:
        return 0.0
    return sum(values) / len(values)


def utc_now() -> datetime:
    """Naive UTC timestamp, comparable with values read back from any backend."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def as_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value
