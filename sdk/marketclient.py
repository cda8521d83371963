# sdk/marketclient.py
import mimetypes
import os
import requests
import httpx
from typing import Optional, Dict, Any

class MarketClient:
    def __init__(self, base_url: str = "http://localhost:5000", timeout: int = 10):
        self.base_url = base_url.rstrip("/")
        self.session = requests.Session()
        self.timeout = timeout

    @staticmethod
    def _listing_fields(title, category, condition, price, description) -> Dict[str, Any]:
        data = {"title": title, "category": category, "condition": condition, "price": str(price)}
        if description:
            data["description"] = description
        return data

    @staticmethod
    def _image_part(image_path: str):
        mime = mimetypes.guess_type(image_path)[0] or "application/octet-stream"
        with open(image_path, "rb") as fh:
            return (os.path.basename(image_path), fh.read(), mime)

    # Catalog
    def list_products(self):
        r = self.session.get(f"{self.base_url}/api/products", timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def create_product(self, title: str, category: str, condition: str, price,
                       description: Optional[str] = None, image_path: Optional[str] = None):
        data = self._listing_fields(title, category, condition, price, description)
        files = {"image": self._image_part(image_path)} if image_path else None
        r = self.session.post(f"{self.base_url}/api/products", data=data, files=files, timeout=self.timeout)
        # do not r.raise_for_status(), callers may want to inspect 400/500
        return r

    async def create_product_async(self, title: str, category: str, condition: str, price,
                                   description: Optional[str] = None, image_path: Optional[str] = None):
        data = self._listing_fields(title, category, condition, price, description)
        files = {"image": self._image_part(image_path)} if image_path else None
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await client.post(f"{self.base_url}/api/products", data=data, files=files)

    def image_url(self, product: Dict[str, Any]) -> str:
        url = product.get("imageUrl", "")
        return url if url.startswith("http") else f"{self.base_url}{url}"

    # Accounts
    def register(self, username: str, email: str, password: str):
        return self.session.post(f"{self.base_url}/api/register", json={
            "username": username, "email": email, "password": password
        }, timeout=self.timeout)

    def login(self, username: str, password: str):
        return self.session.post(f"{self.base_url}/api/login", json={
            "username": username, "password": password
        }, timeout=self.timeout)


if __name__ == "__main__":
    import argparse
    from rich import print

    parser = argparse.ArgumentParser(description="Marketplace CLI")
    parser.add_argument("--base-url", default="http://127.0.0.1:5000")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list-products", help="List all products")

    cp = subparsers.add_parser("create-product", help="List a new product")
    cp.add_argument("--title", required=True)
    cp.add_argument("--category", required=True)
    cp.add_argument("--condition", required=True)
    cp.add_argument("--price", required=True, help="Price, e.g. 49.99")
    cp.add_argument("--description")
    cp.add_argument("--image", help="Path to an image file to upload")

    rg = subparsers.add_parser("register", help="Register an account")
    rg.add_argument("--username", required=True)
    rg.add_argument("--email", required=True)
    rg.add_argument("--password", required=True)

    lg = subparsers.add_parser("login", help="Check credentials")
    lg.add_argument("--username", required=True)
    lg.add_argument("--password", required=True)

    args = parser.parse_args()
    c = MarketClient(base_url=args.base_url)

    if args.command == "list-products":
        print(c.list_products())
    elif args.command == "create-product":
        r = c.create_product(args.title, args.category, args.condition, args.price,
                             args.description, args.image)
        print(r.status_code, r.json())
    elif args.command == "register":
        r = c.register(args.username, args.email, args.password)
        print(r.status_code, r.json())
    elif args.command == "login":
        r = c.login(args.username, args.password)
        print(r.status_code, r.json())
