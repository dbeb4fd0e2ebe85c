"""Write helpers shared by the derived-row services."""

import logging
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

UPSERT_ATTEMPTS = 3


def run_upsert(db: Session, write, attempts: int = UPSERT_ATTEMPTS):
    """
    Run ``write()``, a look-up-by-natural-key then update-or-insert that commits.

    Another writer can commit the same natural key (or take the same generated id)
    between the look-up and the commit. The unique constraint then rejects the
    insert; the session is rolled back and ``write()`` runs again against the
    committed row, so the last writer wins.

    Any other error rolls back and propagates.
    """
    for attempt in range(1, attempts + 1):
        try:
            return write()
        except IntegrityError as e:
            db.rollback()
            if attempt == attempts:
                raise e
            logger.info(f"Upsert conflict, retrying ({attempt}/{attempts}): {e.orig}")
        except Exception as e:
            db.rollback()  # rollback to prevent dirty session
            raise e
