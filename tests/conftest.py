import sys
from pathlib import Path as _Path
sys.path.insert(0, str(_Path(__file__).resolve().parents[1] / "src"))

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from myshop.app import create_app
from myshop.config import Settings
from myshop.db import Database

SECRET = "test-secret-key"


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    """Settings on a throwaway SQLite file, zero backoff so retries never sleep."""
    return Settings(
        secret_key=SECRET,
        database_url=f"sqlite:///{tmp_path / 'myshop.db'}",
        retry_attempts=3,
        retry_base_delay_ms=0,
        _env_file=None,
    )


@pytest.fixture()
def db(settings: Settings) -> Database:
    database = Database.from_settings(settings, sleep=lambda _s: None)
    database.create_all()
    yield database
    database.dispose()


@pytest.fixture()
def client(settings: Settings, db: Database):
    app = create_app(settings, db=db)
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def seller_payload() -> dict:
    return {
        "store_name": "Corner Shop",
        "slug": "corner-shop",
        "owner_name": "Sam Owner",
        "email": "owner@corner.test",
        "password": "s3cret-pass",
    }


@pytest.fixture()
def customer_payload() -> dict:
    return {
        "name": "Alex Buyer",
        "email": "Alex@Buyer.test ",
        "password": "buyer-pw",
    }
