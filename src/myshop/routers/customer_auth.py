# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import logging
from dataclasses import asdict
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from myshop.auth.session import (
    CUSTOMER_COOKIE_NAME,
    CustomerSession,
    clear_session_cookie,
    set_session_cookie,
    sign_customer_session,
)
from myshop.config import Settings
from myshop.db import Database
from myshop.models import Customer
from myshop.permissions import current_customer_optional, require_customer
from myshop.routers.deps import account_error, database_unavailable, get_db, get_settings
from myshop.services.accounts import AccountError, authenticate_customer, register_customer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth/customer", tags=["Customer Auth"])


class CustomerRegisterIn(BaseModel):
    name: str = ""
    email: str = ""
    password: str = ""
    phone: Optional[str] = None


class CustomerLoginIn(BaseModel):
    email: str = ""
    password: str = ""


def _public(customer: Customer) -> dict:
    return {"id": customer.id, "name": customer.name, "email": customer.email}


def _start_session(request: Request, response: Response, customer: Customer, settings: Settings) -> None:
    session = CustomerSession(customer_id=customer.id, email=customer.email, name=customer.name)
    token = sign_customer_session(request.app.state.signers.customer, session)
    set_session_cookie(response, CUSTOMER_COOKIE_NAME, token, settings)


@router.post("/register", status_code=201)
def customer_register(
    body: CustomerRegisterIn,
    request: Request,
    response: Response,
    db: Database = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    try:
        customer = register_customer(
            db, name=body.name, email=body.email, password=body.password, phone=body.phone
        )
    except AccountError as e:
        raise account_error(e)
    except SQLAlchemyError:
        raise database_unavailable("customer registration")

    _start_session(request, response, customer, settings)
    return {"ok": True, "customer": _public(customer)}


@router.post("/login")
def customer_login(
    body: CustomerLoginIn,
    request: Request,
    response: Response,
    db: Database = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    if not body.email or not body.password:
        raise HTTPException(400, "Email and password are required")
    try:
        customer = authenticate_customer(db, body.email, body.password)
    except SQLAlchemyError:
        raise database_unavailable("customer login")
    if not customer:
        raise HTTPException(401, "Invalid email or password")

    _start_session(request, response, customer, settings)
    logger.info("Customer login | customer_id=%s", customer.id)
    return {"ok": True, "customer": _public(customer)}


@router.post("/logout")
def customer_logout(response: Response, settings: Settings = Depends(get_settings)):
    clear_session_cookie(response, CUSTOMER_COOKIE_NAME, settings)
    return {"ok": True}


@router.get("/me")
def customer_me(session: Optional[CustomerSession] = Depends(current_customer_optional)):
    return {"session": asdict(session) if session else None}


@router.get("/profile")
def customer_profile(
    session: CustomerSession = Depends(require_customer),
    db: Database = Depends(get_db),
):
    try:
        customer = db.run(lambda s: s.scalar(select(Customer).where(Customer.id == session.customer_id)))
    except SQLAlchemyError:
        raise database_unavailable("customer profile")
    if customer is None:
        raise HTTPException(404, "Customer not found")
    return {**_public(customer), "phone": customer.phone}
