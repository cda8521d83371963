import asyncio
from sdk.marketclient import MarketClient

async def list_item(client, seller, n):
    r = await client.create_product_async(f"{seller}'s item {n}", "misc", "Used", 5 * n)
    if r.status_code == 201:
        product = r.json()["product"]
        print(f"✅ {seller} listed '{product['title']}' as #{product['id']}")
    else:
        print(f"❌ {seller} listing failed ({r.status_code}): {r.json()}")
    return r

async def main():
    c = MarketClient(base_url="http://127.0.0.1:5000")
    before = len(c.list_products())

    print("\n⚡ Simulating concurrent listings...")
    results = await asyncio.gather(*(
        list_item(c, seller, n)
        for seller in ("alice", "bob", "carol")
        for n in range(1, 4)
    ))

    ids = [r.json()["product"]["id"] for r in results if r.status_code == 201]
    print(f"\n📦 {len(ids)} new listings, ids {sorted(ids)}")
    print("🔎 ids unique:", len(ids) == len(set(ids)))
    print("📚 catalog size:", before, "->", len(c.list_products()))

if __name__ == "__main__":
    asyncio.run(main())
