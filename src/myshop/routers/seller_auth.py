# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import logging
from dataclasses import asdict
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError

from myshop.auth.session import (
    SELLER_COOKIE_NAME,
    SellerSession,
    clear_session_cookie,
    set_session_cookie,
    sign_seller_session,
)
from myshop.config import Settings
from myshop.db import Database
from myshop.permissions import current_seller_optional
from myshop.routers.deps import account_error, database_unavailable, get_db, get_settings
from myshop.services.accounts import AccountError, authenticate_seller, register_seller

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Seller Auth"])


class SellerRegisterIn(BaseModel):
    store_name: str = ""
    slug: str = ""
    owner_name: str = ""
    email: str = ""
    password: str = ""
    business_type: Optional[str] = None
    currency: Optional[str] = None
    city: Optional[str] = None


class LoginIn(BaseModel):
    email: str = ""
    password: str = ""


@router.post("/register")
def seller_register(body: SellerRegisterIn, db: Database = Depends(get_db)):
    try:
        seller = register_seller(
            db,
            store_name=body.store_name,
            slug=body.slug,
            owner_name=body.owner_name,
            email=body.email,
            password=body.password,
            business_type=body.business_type,
            currency=body.currency,
            city=body.city,
        )
    except AccountError as e:
        raise account_error(e)
    except SQLAlchemyError:
        raise database_unavailable("seller registration")
    return {"success": True, "sellerId": seller.id}


@router.post("/login")
def seller_login(
    body: LoginIn,
    request: Request,
    response: Response,
    db: Database = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    if not body.email or not body.password:
        raise HTTPException(400, "Email and password required")
    try:
        seller = authenticate_seller(db, body.email, body.password)
    except SQLAlchemyError:
        raise database_unavailable("seller login")
    if not seller:
        raise HTTPException(401, "Invalid email or password")

    session = SellerSession(
        seller_id=seller.id,
        email=seller.email,
        seller_slug=seller.slug,
        store_name=seller.name,
        role=seller.role,
    )
    token = sign_seller_session(request.app.state.signers.seller, session)
    set_session_cookie(response, SELLER_COOKIE_NAME, token, settings)
    logger.info("Seller login | seller_id=%s", seller.id)

    return {
        "success": True,
        "seller": {"id": seller.id, "slug": seller.slug, "name": seller.name, "email": seller.email},
    }


@router.post("/logout")
def seller_logout(response: Response, settings: Settings = Depends(get_settings)):
    clear_session_cookie(response, SELLER_COOKIE_NAME, settings)
    return {"success": True}


@router.get("/me")
def seller_me(session: Optional[SellerSession] = Depends(current_seller_optional)):
    return {"session": asdict(session) if session else None}
