# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from typing import Callable, Optional

from fastapi import FastAPI, Request

from myshop.auth.session import build_signers
from myshop.config import Settings
from myshop.db import Database
from myshop.logging_config import configure_logging
from myshop.permissions import load_customer_from_request, load_seller_from_request
from myshop.routers import admin, customer_auth, health, onboarding, seller_auth
from myshop.services.onboarding import OnboardingStore

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    *,
    db: Optional[Database] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> FastAPI:
    """Build the MyShop API. With no arguments, settings come from the environment."""
    settings = settings or Settings()
    configure_logging(settings.log_level)
    db = db or Database.from_settings(settings, sleep=sleep)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        db.create_all()
        logger.info("MyShop started | env=%s", settings.environment)
        yield
        db.dispose()

    app = FastAPI(title="MyShop", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.db = db
    app.state.signers = build_signers(settings)
    app.state.onboarding = OnboardingStore(db)

    @app.middleware("http")
    async def _auth_middleware(request: Request, call_next):
        request.state.seller = load_seller_from_request(request)
        request.state.customer = load_customer_from_request(request)
        return await call_next(request)

    app.include_router(seller_auth.router)
    app.include_router(customer_auth.router)
    app.include_router(onboarding.router)
    app.include_router(admin.router)
    app.include_router(health.router)
    return app
