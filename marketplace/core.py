import math
from typing import Optional, Dict

# Error taxonomy shared by the stores and the HTTP layer.

class MarketplaceError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

class ValidationError(MarketplaceError):
    status_code = 400
    default_message = "Missing required fields"

class ConflictError(MarketplaceError):
    status_code = 409
    default_message = "Username or email already exists"

class AuthError(MarketplaceError):
    # 400 rather than 401, clients already rely on it
    status_code = 400
    default_message = "Invalid credentials"

class InternalError(MarketplaceError):
    status_code = 500
    default_message = "Internal server error"

# ---------------------------
# Helpers
# ---------------------------
def _is_blank(value: Optional[str]) -> bool:
    return value is None or not str(value).strip()

def require_fields(fields: Dict[str, Optional[str]]) -> None:
    missing = [name for name, value in fields.items() if _is_blank(value)]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")

def parse_price(raw: str) -> float:
    try:
        price = float(raw)
    except (TypeError, ValueError):
        raise ValidationError("price must be a number")
    if math.isnan(price) or math.isinf(price) or price < 0:
        raise ValidationError("price must be a non-negative number")
    return price
