#!/usr/bin/env python
from sdk.marketclient import MarketClient

def main():
    c = MarketClient(base_url="http://127.0.0.1:5000")

    # -----------------------------
    # Accounts
    # -----------------------------
    print("Registering alice...")
    r = c.register("alice", "alice@example.com", "wonderland")
    print(r.status_code, r.json())

    print("\nRegistering alice again (expect 409)...")
    r = c.register("alice", "alice2@example.com", "wonderland")
    print(r.status_code, r.json())

    print("\nLogging in with a wrong password (expect 400)...")
    r = c.login("alice", "nope")
    print(r.status_code, r.json())

    print("\nLogging in...")
    r = c.login("alice", "wonderland")
    print(r.status_code, r.json())

    # -----------------------------
    # Listings
    # -----------------------------
    print("\nListing a bike...")
    r = c.create_product("Bike", "Sports", "Used", 50, "Blue, 21 gears")
    print(r.status_code, r.json())

    print("\nListing without a price (expect 400)...")
    r = c.create_product("Lamp", "Home", "Good", "")
    print(r.status_code, r.json())

    print("\nCatalog:")
    for p in c.list_products():
        print(f"  #{p['id']} {p['title']} ${p['price']:.2f} -> {c.image_url(p)}")

if __name__ == "__main__":
    main()
