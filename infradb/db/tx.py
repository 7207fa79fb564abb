"""
Transaction handle shared by DAO calls, plus PostgreSQL advisory locks.
"""
from __future__ import annotations

import logging
import random
import time
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import text
from sqlalchemy.orm import Session

from infradb.db.database import DBSession, lock_timeout_seconds
from infradb.db.errors import AdvisoryLockError

logger = logging.getLogger(__name__)

DEFAULT_LOCK_RETRIES = 3
DEFAULT_LOCK_RETRY_DELAY = 0.3  # seconds
DEFAULT_LOCK_RETRY_MAX_JITTER = 0.1  # seconds


class Tx:
    """An open database transaction that several DAO calls can share.

    Usable as a context manager: commits when the block exits cleanly and
    rolls back otherwise.
    """

    def __init__(self, session: Session):
        self.session = session
        self.committed = False
        self._closed = False

    @classmethod
    def begin(cls, db_session: DBSession, lock_timeout: Optional[int] = None) -> "Tx":
        session = db_session.session_factory()
        try:
            session.begin()
            if session.get_bind().dialect.name == "postgresql":
                timeout = lock_timeout if lock_timeout is not None else lock_timeout_seconds()
                session.execute(text(f"SET LOCAL lock_timeout = '{int(timeout)}s'"))
        except Exception:
            session.rollback()
            session.close()
            raise
        return cls(session)

    @property
    def dialect_name(self) -> str:
        return self.session.get_bind().dialect.name

    def commit(self) -> None:
        self.session.commit()
        self.committed = True
        self._close()

    def rollback(self) -> None:
        """Roll back unless already committed; safe to call more than once."""
        if self.committed or self._closed:
            return
        self.session.rollback()
        self._close()

    def _close(self) -> None:
        if not self._closed:
            self.session.close()
            self._closed = True

    def __enter__(self) -> "Tx":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None and not self._closed:
            self.commit()
        else:
            self.rollback()

    def acquire_advisory_lock(self, lock_id: int, blocking: bool = True) -> None:
        """Take a transaction-scoped advisory lock, released on commit/rollback."""
        if blocking:
            self.session.execute(text("SELECT pg_advisory_xact_lock(:lock_id)"), {"lock_id": lock_id})
            return
        acquired = self.session.execute(
            text("SELECT pg_try_advisory_xact_lock(:lock_id)"), {"lock_id": lock_id}
        ).scalar()
        if not acquired:
            raise AdvisoryLockError(lock_id)

    def try_acquire_advisory_lock(
        self,
        lock_id: int,
        retries: int = DEFAULT_LOCK_RETRIES,
        delay: float = DEFAULT_LOCK_RETRY_DELAY,
        jitter: float = DEFAULT_LOCK_RETRY_MAX_JITTER,
    ) -> None:
        """Non-blocking lock attempts with exponential backoff plus random jitter.

        ``retries`` is the total number of attempts. Only lock contention is
        retried; database errors propagate immediately.
        """
        attempts = max(retries, 1)
        for attempt in range(attempts):
            try:
                self.acquire_advisory_lock(lock_id, blocking=False)
                return
            except AdvisoryLockError:
                if attempt == attempts - 1:
                    logger.warning(f"Advisory lock {lock_id} still held after {attempts} attempts")
                    raise
                pause = delay * (2 ** attempt) + random.uniform(0, jitter)
                logger.debug(f"Advisory lock {lock_id} busy, retrying in {pause:.3f}s")
                time.sleep(pause)


@contextmanager
def get_idb(tx: Optional[Tx], db_session: DBSession) -> Iterator[Session]:
    """Yield the session to run a DAO statement on.

    With a transaction the caller owns commit/rollback. Without one a
    short-lived session is opened and committed when the block succeeds.
    """
    if tx is not None:
        yield tx.session
        return
    session = db_session.session_factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
