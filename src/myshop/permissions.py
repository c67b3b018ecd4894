# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

from typing import Optional

from fastapi import HTTPException, Request
from sqlalchemy.exc import SQLAlchemyError

from myshop.auth.session import (
    CUSTOMER_COOKIE_NAME,
    SELLER_COOKIE_NAME,
    CustomerSession,
    SellerSession,
    verify_customer_session,
    verify_seller_session,
)
from myshop.models import Seller
from myshop.routers.deps import database_unavailable

ROLE_ORDER = {"seller": 0, "admin": 1}


def _rank(role: Optional[str]) -> int:
    return ROLE_ORDER.get((role or "seller").strip().lower(), 0)


def load_seller_from_request(request: Request) -> Optional[SellerSession]:
    token = request.cookies.get(SELLER_COOKIE_NAME, "")
    return verify_seller_session(request.app.state.signers.seller, token)


def load_customer_from_request(request: Request) -> Optional[CustomerSession]:
    token = request.cookies.get(CUSTOMER_COOKIE_NAME, "")
    return verify_customer_session(request.app.state.signers.customer, token)


def current_seller_optional(request: Request) -> Optional[SellerSession]:
    s = getattr(request.state, "seller", None)
    if s is not None:
        return s
    return load_seller_from_request(request)


def current_customer_optional(request: Request) -> Optional[CustomerSession]:
    c = getattr(request.state, "customer", None)
    if c is not None:
        return c
    return load_customer_from_request(request)


def require_seller(request: Request) -> SellerSession:
    s = current_seller_optional(request)
    if s:
        return s
    raise HTTPException(status_code=401, detail="Authentication required")


def require_customer(request: Request) -> CustomerSession:
    c = current_customer_optional(request)
    if c:
        return c
    raise HTTPException(status_code=401, detail="Authentication required")


def require_role(min_role: str):
    def _dep(request: Request) -> SellerSession:
        s = require_seller(request)
        db = request.app.state.db
        # role in the cookie may be stale; the seller row decides
        try:
            seller = db.run(lambda sess: sess.get(Seller, s.seller_id))
        except SQLAlchemyError:
            raise database_unavailable("role check")
        if seller is None or _rank(seller.role) < _rank(min_role):
            raise HTTPException(status_code=403, detail="Forbidden")
        return s

    return _dep
