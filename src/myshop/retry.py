# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import logging
import time
from typing import Callable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_BASE_DELAY_MS = 250


def backoff_delay_ms(attempt_index: int, base_delay_ms: int = DEFAULT_BASE_DELAY_MS) -> int:
    return base_delay_ms * (2 ** attempt_index)


def with_retry(
    operation: Callable[[], T],
    max_attempts: int,
    base_delay_ms: int = DEFAULT_BASE_DELAY_MS,
    *,
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """Call ``operation`` up to ``max_attempts`` times with exponential backoff.

    Every exception is treated as transient. After a failed attempt ``i`` the
    caller waits ``base_delay_ms * 2**i`` ms; the last error is re-raised
    unchanged once attempts are exhausted.
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be >= 1")

    attempt = 0
    while True:
        try:
            return operation()
        except Exception as exc:
            attempt += 1
            if attempt >= max_attempts:
                logger.error("Giving up after %d attempt(s): %s", max_attempts, exc)
                raise
            delay_ms = backoff_delay_ms(attempt - 1, base_delay_ms)
            logger.warning(
                "Attempt %d/%d failed (%s); retrying in %d ms",
                attempt,
                max_attempts,
                exc,
                delay_ms,
            )
            sleep(delay_ms / 1000.0)
