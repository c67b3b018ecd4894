# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError

from myshop.db import Database
from myshop.permissions import require_role
from myshop.routers.deps import database_unavailable, get_db
from myshop.services.accounts import list_sellers

router = APIRouter(prefix="/api/admin", tags=["Admin"])


@router.get("/sellers")
def admin_sellers(_admin=Depends(require_role("admin")), db: Database = Depends(get_db)):
    try:
        sellers = list_sellers(db)
    except SQLAlchemyError:
        raise database_unavailable("seller listing")
    return [
        {
            "id": s.id,
            "name": s.name,
            "slug": s.slug,
            "email": s.email,
            "ownerName": s.owner_name,
            "role": s.role,
        }
        for s in sellers
    ]
