# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.sql import func


class Base(DeclarativeBase):
    pass


class Seller(Base):
    __tablename__ = "sellers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False)  # store name
    slug = Column(String, unique=True, nullable=False)
    owner_name = Column(String, nullable=False)
    email = Column(String, unique=True, nullable=False)
    password_hash = Column(String, nullable=False)
    business_type = Column(String, nullable=False, default="Retail")
    currency = Column(String(3), nullable=False, default="USD")
    city = Column(String, nullable=False, default="")
    role = Column(String, nullable=True)  # None | "admin"
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class Customer(Base):
    __tablename__ = "customers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, nullable=False)
    password_hash = Column(String, nullable=False)
    phone = Column(String, nullable=False, default="")
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class OnboardingProgress(Base):
    __tablename__ = "onboarding_progress"

    seller_id = Column(Integer, ForeignKey("sellers.id", ondelete="CASCADE"), primary_key=True)
    data = Column(JSON, nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)
