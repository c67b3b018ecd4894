# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import logging
import time
from typing import Callable, TypeVar

from sqlalchemy import create_engine, text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker

from myshop.config import Settings
from myshop.models import Base
from myshop.retry import DEFAULT_BASE_DELAY_MS, with_retry

logger = logging.getLogger(__name__)

T = TypeVar("T")


class _Rejected:
    def __init__(self, error: IntegrityError) -> None:
        self.error = error


class Database:
    """Engine + session factory. Units of work run through with_retry()."""

    def __init__(
        self,
        url: str,
        *,
        retry_attempts: int = 3,
        retry_base_delay_ms: int = DEFAULT_BASE_DELAY_MS,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
        self.engine = create_engine(url, pool_pre_ping=True, connect_args=connect_args)
        self.SessionLocal = sessionmaker(bind=self.engine, expire_on_commit=False)
        self.retry_attempts = retry_attempts
        self.retry_base_delay_ms = retry_base_delay_ms
        self._sleep = sleep

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs) -> "Database":
        return cls(
            settings.database_url,
            retry_attempts=settings.retry_attempts,
            retry_base_delay_ms=settings.retry_base_delay_ms,
            **kwargs,
        )

    def create_all(self) -> None:
        Base.metadata.create_all(bind=self.engine)
        logger.info("Database schema ready")

    def run(self, work: Callable[[Session], T]) -> T:
        """Run ``work(session)`` in a fresh session and commit.

        The whole unit is retried, so ``work`` must not raise for business
        reasons; check those outside and raise afterwards. ``IntegrityError``
        is raised on the first occurrence, never retried.
        """

        def _attempt():
            with self.SessionLocal() as session:
                try:
                    result = work(session)
                    session.commit()
                except IntegrityError as exc:
                    # constraint violations are not transient
                    return _Rejected(exc)
                return result

        outcome = with_retry(_attempt, self.retry_attempts, self.retry_base_delay_ms, sleep=self._sleep)
        if isinstance(outcome, _Rejected):
            raise outcome.error
        return outcome

    def ping(self) -> bool:
        return self.run(lambda s: s.execute(text("SELECT 1")).scalar() == 1)

    def dispose(self) -> None:
        self.engine.dispose()
