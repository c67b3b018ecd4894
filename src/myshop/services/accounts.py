# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import logging
from typing import List, Optional

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerifyMismatchError
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from myshop.db import Database
from myshop.models import Customer, Seller

logger = logging.getLogger(__name__)

SELLER_MIN_PASSWORD = 8
CUSTOMER_MIN_PASSWORD = 6


class AccountError(ValueError):
    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _clean(value: Optional[str]) -> str:
    return (value or "").strip()


def normalize_email(email: Optional[str]) -> str:
    return _clean(email).lower()


# ------------------ Passwords ------------------

_hasher = PasswordHasher()


def hash_password(plain: str) -> str:
    if not plain:
        raise AccountError("Password is required")
    return _hasher.hash(plain)


def password_matches(stored_hash: str, plain: str) -> bool:
    """argon2 check; an unreadable stored hash counts as a mismatch."""
    if not (stored_hash and plain):
        return False
    try:
        return _hasher.verify(stored_hash, plain)
    except (VerifyMismatchError, InvalidHashError):
        return False


# ------------------ Sellers ------------------


def register_seller(
    db: Database,
    *,
    store_name: str,
    slug: str,
    owner_name: str,
    email: str,
    password: str,
    business_type: Optional[str] = None,
    currency: Optional[str] = None,
    city: Optional[str] = None,
    role: Optional[str] = None,
) -> Seller:
    store_name, slug, owner_name, email = _clean(store_name), _clean(slug), _clean(owner_name), _clean(email)
    if not (store_name and slug and owner_name and email and password):
        raise AccountError("Missing required fields")
    if len(password) < SELLER_MIN_PASSWORD:
        raise AccountError(f"Password must be at least {SELLER_MIN_PASSWORD} characters")
    if "@" not in email:
        raise AccountError("Invalid email address")

    if db.run(lambda s: s.scalar(select(Seller.id).where(Seller.email == email))) is not None:
        raise AccountError("Email already registered", status_code=409)
    if db.run(lambda s: s.scalar(select(Seller.id).where(Seller.slug == slug))) is not None:
        raise AccountError("Store slug already taken", status_code=409)

    password_hash = hash_password(password)

    def _insert(s):
        seller = Seller(
            name=store_name,
            slug=slug,
            owner_name=owner_name,
            email=email,
            password_hash=password_hash,
            business_type=_clean(business_type) or "Retail",
            currency=(_clean(currency) or "USD").upper(),
            city=_clean(city),
            role=_clean(role) or None,
        )
        s.add(seller)
        s.flush()
        return seller

    try:
        created = db.run(_insert)
    except IntegrityError:
        # lost a race with a concurrent registration
        if db.run(lambda s: s.scalar(select(Seller.id).where(Seller.email == email))) is not None:
            raise AccountError("Email already registered", status_code=409)
        raise AccountError("Store slug already taken", status_code=409)
    logger.info("Seller registered | seller_id=%s | slug=%s", created.id, created.slug)
    return created


def authenticate_seller(db: Database, email: str, password: str) -> Optional[Seller]:
    email = _clean(email)
    if not email or not password:
        return None
    seller = db.run(lambda s: s.scalar(select(Seller).where(Seller.email == email).limit(1)))
    if seller is None or not password_matches(seller.password_hash, password):
        logger.warning("Seller login failed | email=%s", email)
        return None
    return seller


def list_sellers(db: Database) -> List[Seller]:
    return db.run(lambda s: list(s.scalars(select(Seller).order_by(Seller.id))))


# ------------------ Customers ------------------


def register_customer(
    db: Database,
    *,
    name: str,
    email: str,
    password: str,
    phone: Optional[str] = None,
) -> Customer:
    name, email = _clean(name), normalize_email(email)
    if not (name and email and password):
        raise AccountError("Name, email, and password are required")
    if len(password) < CUSTOMER_MIN_PASSWORD:
        raise AccountError(f"Password must be at least {CUSTOMER_MIN_PASSWORD} characters")

    if db.run(lambda s: s.scalar(select(Customer.id).where(Customer.email == email))) is not None:
        raise AccountError("Email already registered", status_code=409)

    password_hash = hash_password(password)

    def _insert(s):
        customer = Customer(
            name=name,
            email=email,
            password_hash=password_hash,
            phone=_clean(phone),
        )
        s.add(customer)
        s.flush()
        return customer

    try:
        created = db.run(_insert)
    except IntegrityError:
        raise AccountError("Email already registered", status_code=409)
    logger.info("Customer registered | customer_id=%s", created.id)
    return created


def authenticate_customer(db: Database, email: str, password: str) -> Optional[Customer]:
    email = normalize_email(email)
    if not email or not password:
        return None
    customer = db.run(lambda s: s.scalar(select(Customer).where(Customer.email == email).limit(1)))
    if customer is None or not password_matches(customer.password_hash, password):
        logger.warning("Customer login failed | email=%s", email)
        return None
    return customer
