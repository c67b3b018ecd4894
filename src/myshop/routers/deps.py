# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import logging

from fastapi import HTTPException, Request

from myshop.config import Settings
from myshop.db import Database
from myshop.services.accounts import AccountError

logger = logging.getLogger(__name__)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_db(request: Request) -> Database:
    return request.app.state.db


def account_error(exc: AccountError) -> HTTPException:
    return HTTPException(status_code=exc.status_code, detail=exc.message)


def database_unavailable(context: str) -> HTTPException:
    logger.exception("Database failure during %s", context)
    return HTTPException(status_code=503, detail="Database unavailable")
