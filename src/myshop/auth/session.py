# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from typing import Optional

from starlette.responses import Response

from myshop.auth.signer import SessionSigner
from myshop.config import Settings

SELLER_COOKIE_NAME = "myshop_session"
CUSTOMER_COOKIE_NAME = "myshop_customer"
CUSTOMER_SECRET_SUFFIX = "_customer"


@dataclass(frozen=True)
class SellerSession:
    seller_id: int
    email: str
    seller_slug: str
    store_name: str
    role: Optional[str] = None


@dataclass(frozen=True)
class CustomerSession:
    customer_id: int
    email: str
    name: str


@dataclass(frozen=True)
class SessionSigners:
    seller: SessionSigner
    customer: SessionSigner


def build_signers(settings: Settings) -> SessionSigners:
    return SessionSigners(
        seller=SessionSigner(settings.secret_key),
        customer=SessionSigner(settings.secret_key, suffix=CUSTOMER_SECRET_SUFFIX),
    )


def _dump(session) -> str:
    return json.dumps(asdict(session), separators=(",", ":"), sort_keys=True)


def _load(signer: SessionSigner, token: str) -> Optional[dict]:
    payload = signer.verify(token or "")
    if payload is None:
        return None
    try:
        data = json.loads(payload)
    except ValueError:
        return None
    return data if isinstance(data, dict) else None


def _is_id(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def sign_seller_session(signer: SessionSigner, session: SellerSession) -> str:
    return signer.sign(_dump(session))


def verify_seller_session(signer: SessionSigner, token: str) -> Optional[SellerSession]:
    data = _load(signer, token)
    if not data:
        return None
    seller_id = data.get("seller_id")
    email = data.get("email")
    slug = data.get("seller_slug")
    store_name = data.get("store_name")
    role = data.get("role")
    if not _is_id(seller_id):
        return None
    if not all(isinstance(v, str) for v in (email, slug, store_name)):
        return None
    if role is not None and not isinstance(role, str):
        return None
    return SellerSession(
        seller_id=seller_id,
        email=email,
        seller_slug=slug,
        store_name=store_name,
        role=role,
    )


def sign_customer_session(signer: SessionSigner, session: CustomerSession) -> str:
    return signer.sign(_dump(session))


def verify_customer_session(signer: SessionSigner, token: str) -> Optional[CustomerSession]:
    data = _load(signer, token)
    if not data:
        return None
    customer_id = data.get("customer_id")
    email = data.get("email")
    name = data.get("name")
    if not _is_id(customer_id):
        return None
    if not isinstance(email, str) or not isinstance(name, str):
        return None
    return CustomerSession(customer_id=customer_id, email=email, name=name)


def set_session_cookie(response: Response, name: str, token: str, settings: Settings) -> None:
    response.set_cookie(
        name,
        token,
        max_age=settings.session_max_age,
        path="/",
        httponly=True,
        samesite="lax",
        secure=settings.cookie_secure,
    )


def clear_session_cookie(response: Response, name: str, settings: Settings) -> None:
    response.delete_cookie(
        name,
        path="/",
        httponly=True,
        samesite="lax",
        secure=settings.cookie_secure,
    )
