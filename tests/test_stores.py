# tests/test_stores.py
import asyncio
import pytest

from marketplace.core import AuthError, ConflictError, ValidationError
from marketplace.database import AccountStore, CatalogStore
from marketplace.models import ProductForm
from marketplace.uploads import StoredUpload

PLACEHOLDER = "http://img.test/none.png"

def _form(**kw):
    base = {"title": "Lamp", "category": "Home", "condition": "Good", "price": "12.5"}
    base.update(kw)
    return ProductForm(**base)

def test_catalog_assigns_max_plus_one():
    store = CatalogStore(PLACEHOLDER)
    first = asyncio.run(store.create(_form()))
    second = asyncio.run(store.create(_form(title="Rug")))
    assert (first.id, second.id) == (1, 2)
    assert first.image_url == PLACEHOLDER
    assert second.price == 12.5
    assert [p.title for p in store.list()] == ["Lamp", "Rug"]

def test_catalog_uses_upload_url(tmp_path):
    store = CatalogStore(PLACEHOLDER)
    upload = StoredUpload(path=tmp_path / "1-ab.png", url="/uploads/1-ab.png")
    product = asyncio.run(store.create(_form(), upload))
    assert product.image_url == "/uploads/1-ab.png"

def test_catalog_list_is_a_copy():
    store = CatalogStore(PLACEHOLDER)
    asyncio.run(store.create(_form()))
    store.list().clear()
    assert len(store.list()) == 1

def test_catalog_rejects_bad_input():
    store = CatalogStore(PLACEHOLDER)
    with pytest.raises(ValidationError):
        asyncio.run(store.create(_form(condition="")))
    with pytest.raises(ValidationError):
        asyncio.run(store.create(_form(price="12,5")))
    assert store.list() == []

def test_accounts_register_and_authenticate():
    store = AccountStore()
    store.register("alice", "a@example.com", "pw")
    assert store.authenticate("alice", "pw").username == "alice"
    with pytest.raises(AuthError):
        store.authenticate("alice", "PW")
    with pytest.raises(AuthError):
        store.authenticate("bob", "pw")

def test_accounts_conflicts():
    store = AccountStore()
    store.register("alice", "a@example.com", "pw")
    with pytest.raises(ConflictError):
        store.register("alice", "b@example.com", "pw")
    with pytest.raises(ConflictError):
        store.register("bob", "a@example.com", "pw")

def test_accounts_missing_fields():
    store = AccountStore()
    with pytest.raises(ValidationError):
        store.register("alice", None, "pw")
    with pytest.raises(ValidationError):
        store.authenticate("", "pw")

def test_create_waits_for_the_id_lock():
    store = CatalogStore(PLACEHOLDER)

    async def run():
        await store._lock.acquire()
        task = asyncio.create_task(store.create(_form()))
        await asyncio.sleep(0.01)
        blocked = not task.done() and store.list() == []
        store._lock.release()
        return blocked, await task

    blocked, product = asyncio.run(run())
    assert blocked
    assert product.id == 1
