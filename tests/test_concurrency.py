# tests/test_concurrency.py
import asyncio
import time
import httpx

async def _list_item(app, n):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        data = {"title": f"lot {n}", "category": "x", "condition": "New", "price": str(n)}
        files = {"image": (f"lot{n}.jpg", b"jpeg bytes", "image/jpeg")}
        return await ac.post("/api/products", data=data, files=files)

async def _list_many(app, count):
    return await asyncio.gather(*(_list_item(app, n) for n in range(count)))

def test_concurrent_creates_get_unique_ids(app, uploads_dir):
    results = asyncio.run(_list_many(app, 20))
    assert [r.status_code for r in results] == [201] * 20

    ids = sorted(r.json()["product"]["id"] for r in results)
    assert ids == list(range(1, 21))

    urls = {r.json()["product"]["imageUrl"] for r in results}
    assert len(urls) == 20
    assert len(list(uploads_dir.iterdir())) == 20

def test_catalog_is_served_while_an_upload_is_written(app, monkeypatch):
    import marketplace.uploads as uploads
    real_copy = uploads.shutil.copyfileobj

    def slow_copy(src, dst):
        time.sleep(0.5)
        real_copy(src, dst)
    monkeypatch.setattr(uploads.shutil, "copyfileobj", slow_copy)

    async def run():
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
            data = {"title": "Piano", "category": "Music", "condition": "Used", "price": "900"}
            files = {"image": ("piano.jpg", b"jpeg bytes", "image/jpeg")}
            post = asyncio.create_task(ac.post("/api/products", data=data, files=files))
            await asyncio.sleep(0.1)
            started = time.perf_counter()
            listing = await ac.get("/api/products")
            elapsed = time.perf_counter() - started
            created = await post
        return listing, elapsed, created

    listing, elapsed, created = asyncio.run(run())
    assert listing.status_code == 200
    assert listing.json() == []
    assert elapsed < 0.3
    assert created.status_code == 201
