from __future__ import annotations

import logging
from typing import Callable, TypeVar

from sqlalchemy.exc import DBAPIError
from sqlalchemy.orm import Session

from backend.app.core.config import get_settings

log = logging.getLogger("oms.tx")

T = TypeVar("T")

# serialization_failure, deadlock_detected
RETRYABLE_SQLSTATES = {"40001", "40P01"}


def is_retryable(exc: DBAPIError) -> bool:
    orig = getattr(exc, "orig", None)
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    return sqlstate in RETRYABLE_SQLSTATES


def run_in_transaction(
    db: Session,
    fn: Callable[[Session], T],
    *,
    max_attempts: int | None = None,
) -> T:
    """
    Exécute fn(db) puis commit, en tout-ou-rien.

    - toute exception => rollback, rien ne survit (stock ni commande)
    - échec de sérialisation / deadlock => rollback puis rejeu complet,
      dans la limite de max_attempts
    """
    attempts = max_attempts or get_settings().TX_MAX_ATTEMPTS

    for attempt in range(1, attempts + 1):
        try:
            result = fn(db)
            db.commit()
            return result
        except DBAPIError as exc:
            db.rollback()
            if not is_retryable(exc) or attempt == attempts:
                raise
            log.warning("transaction conflict (attempt %d/%d), retrying: %s", attempt, attempts, exc.orig)
        except Exception:
            db.rollback()
            raise

    raise RuntimeError("unreachable")  # pragma: no cover
