import asyncio
from datetime import datetime, timezone
from typing import List, Optional

from .core import AuthError, ConflictError, require_fields, parse_price
from .models import Account, Product, ProductForm
from .uploads import StoredUpload
from .log import get_logger

logger = get_logger(__name__)

# In-memory stores. They live as long as the process and are owned by the
# Stores object hanging off app.state, never by module globals.

class CatalogStore:
    def __init__(self, placeholder_image_url: str):
        self.placeholder_image_url = placeholder_image_url
        self._products: List[Product] = []
        self._lock = asyncio.Lock()

    def list(self) -> List[Product]:
        return list(self._products)

    def _next_id(self) -> int:
        return max((p.id for p in self._products), default=0) + 1

    async def create(self, form: ProductForm, upload: Optional[StoredUpload] = None) -> Product:
        require_fields({
            "title": form.title,
            "category": form.category,
            "condition": form.condition,
            "price": form.price,
        })
        price = parse_price(form.price)
        image_url = upload.url if upload is not None else self.placeholder_image_url

        # read-max-then-append must not interleave with another create. There is
        # no await inside the block today, the lock keeps that true if one appears.
        async with self._lock:
            product = Product(
                id=self._next_id(),
                title=form.title,
                category=form.category,
                condition=form.condition,
                price=price,
                description=form.description or None,
                image_url=image_url,
                created_at=datetime.now(timezone.utc),
            )
            self._products.append(product)
        logger.info("product %d created: %s", product.id, product.title)
        return product

class AccountStore:
    def __init__(self):
        self._accounts: List[Account] = []

    def register(self, username: Optional[str], email: Optional[str], password: Optional[str]) -> Account:
        require_fields({"username": username, "email": email, "password": password})
        for acc in self._accounts:
            if acc.username == username or acc.email == email:
                raise ConflictError()
        account = Account(username=username, email=email, password=password)
        self._accounts.append(account)
        logger.info("account registered: %s", username)
        return account

    def authenticate(self, username: Optional[str], password: Optional[str]) -> Account:
        require_fields({"username": username, "password": password})
        for acc in self._accounts:
            if acc.username == username and acc.password == password:
                return acc
        logger.info("failed login for %s", username)
        raise AuthError()

class Stores:
    """Process-scoped context handed to every request handler."""

    def __init__(self, placeholder_image_url: str):
        self.catalog = CatalogStore(placeholder_image_url)
        self.accounts = AccountStore()
