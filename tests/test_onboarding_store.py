from datetime import datetime, timezone

from myshop.services.accounts import register_seller
from myshop.services.onboarding import OnboardingStore

FIXED = datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


def test_get_save_clear(db, seller_payload):
    seller = register_seller(db, **seller_payload)
    store = OnboardingStore(db, clock=lambda: FIXED)

    assert store.get(seller.id) is None
    saved = store.save(seller.id, {"step": 2, "storeInfo": {"city": "Lyon"}})
    assert saved["updatedAt"] == FIXED.isoformat()
    assert store.get(seller.id) == saved

    store.save(seller.id, {"step": 3})
    assert store.get(seller.id)["step"] == 3
    assert "storeInfo" not in store.get(seller.id)

    assert store.clear(seller.id) is True
    assert store.get(seller.id) is None
    assert store.clear(seller.id) is False


def test_progress_survives_a_new_store_instance(db, seller_payload):
    seller = register_seller(db, **seller_payload)
    OnboardingStore(db).save(seller.id, {"step": 1})
    assert OnboardingStore(db).get(seller.id)["step"] == 1


def test_progress_is_keyed_by_seller(db, seller_payload):
    a = register_seller(db, **seller_payload)
    b = register_seller(db, **{**seller_payload, "slug": "b", "email": "b@b.test"})
    store = OnboardingStore(db)
    store.save(a.id, {"step": 4})
    assert store.get(b.id) is None
