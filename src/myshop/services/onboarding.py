# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, Optional

from myshop.db import Database
from myshop.models import OnboardingProgress


def _utc_now() -> datetime:
    return datetime.now(timezone.utc).replace(microsecond=0)


class OnboardingStore:
    """Per-seller onboarding wizard progress, persisted in the database."""

    def __init__(self, db: Database, *, clock: Callable[[], datetime] = _utc_now) -> None:
        self._db = db
        self._clock = clock

    def get(self, seller_id: int) -> Optional[dict]:
        row = self._db.run(lambda s: s.get(OnboardingProgress, seller_id))
        if row is None:
            return None
        return dict(row.data or {})

    def save(self, seller_id: int, data: dict) -> dict:
        now = self._clock()
        progress = {**(data or {}), "updatedAt": now.isoformat()}

        def _upsert(s):
            row = s.get(OnboardingProgress, seller_id)
            if row is None:
                s.add(OnboardingProgress(seller_id=seller_id, data=progress, updated_at=now))
            else:
                row.data = progress
                row.updated_at = now

        self._db.run(_upsert)
        return progress

    def clear(self, seller_id: int) -> bool:
        def _delete(s):
            row = s.get(OnboardingProgress, seller_id)
            if row is None:
                return False
            s.delete(row)
            return True

        return self._db.run(_delete)
