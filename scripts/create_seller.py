#!/usr/bin/env python3
from __future__ import annotations

from getpass import getpass

from myshop.config import Settings
from myshop.db import Database
from myshop.services.accounts import AccountError, register_seller


def main() -> None:
    settings = Settings()
    db = Database.from_settings(settings)
    db.create_all()

    store_name = input("Store name: ").strip()
    slug = input("Store slug: ").strip()
    owner_name = input("Owner name: ").strip()
    email = input("Email: ").strip()
    role = (input("Role [seller/admin]: ").strip().lower() or "seller")

    pw1 = getpass("Password: ")
    pw2 = getpass("Repeat password: ")
    if pw1 != pw2:
        raise SystemExit("Passwords do not match")

    try:
        seller = register_seller(
            db,
            store_name=store_name,
            slug=slug,
            owner_name=owner_name,
            email=email,
            password=pw1,
            role="admin" if role == "admin" else None,
        )
    except AccountError as e:
        raise SystemExit(e.message)
    print(f"OK -> seller_id={seller.id} ({settings.database_url})")


if __name__ == "__main__":
    main()
