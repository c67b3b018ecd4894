# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, Request
from sqlalchemy.exc import SQLAlchemyError

from myshop.auth.session import SellerSession
from myshop.permissions import require_seller
from myshop.routers.deps import database_unavailable
from myshop.services.onboarding import OnboardingStore

router = APIRouter(prefix="/api/onboarding", tags=["Onboarding"])


def get_onboarding_store(request: Request) -> OnboardingStore:
    return request.app.state.onboarding


@router.get("/progress")
def get_progress(
    seller: SellerSession = Depends(require_seller),
    store: OnboardingStore = Depends(get_onboarding_store),
):
    try:
        data = store.get(seller.seller_id)
    except SQLAlchemyError:
        raise database_unavailable("onboarding read")
    return {"success": True, "data": data}


@router.post("/progress")
def save_progress(
    data: Dict[str, Any] = Body(...),
    seller: SellerSession = Depends(require_seller),
    store: OnboardingStore = Depends(get_onboarding_store),
):
    try:
        saved = store.save(seller.seller_id, data)
    except SQLAlchemyError:
        raise database_unavailable("onboarding save")
    return {"success": True, "message": "Progress saved", "data": saved}


@router.delete("/progress")
def clear_progress(
    seller: SellerSession = Depends(require_seller),
    store: OnboardingStore = Depends(get_onboarding_store),
):
    try:
        store.clear(seller.seller_id)
    except SQLAlchemyError:
        raise database_unavailable("onboarding clear")
    return {"success": True, "message": "Progress cleared"}
