"""
Pydantic Models - Persisted records

Each collection is stored as a JSON list of these models dumped with
``model_dump(mode="json")``. References between records (seller_id,
buyer_id, product_id, user_id) are plain ids with no integrity checks;
resolving them is the managers' job and a miss yields None.
"""

import secrets
import string
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, Field

# Sentinel seller for seeded demo products
SYSTEM_SELLER_ID = "system"

_ID_ALPHABET = string.ascii_lowercase + string.digits


def new_id(prefix: str = "id") -> str:
    """Generate an id such as ``prod_k3j9x0ab``."""
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(8))
    return f"{prefix}_{suffix}"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(BaseModel):
    """Registered user."""
    id: str = Field(default_factory=lambda: new_id("user"))
    name: str
    email: str
    password_hash: str  # hex SHA-256, see marketplace.auth.password
    created_at: datetime = Field(default_factory=utcnow)

    class Config:
        extra = "ignore"  # Ignore unknown fields from storage

    def public_dict(self) -> dict:
        """User fields safe to hand to a UI."""
        return self.model_dump(mode="json", exclude={"password_hash"})


class Session(BaseModel):
    """The single active login."""
    user_id: str
    since: datetime = Field(default_factory=utcnow)

    class Config:
        extra = "ignore"


class Product(BaseModel):
    """Catalog entry."""
    id: str = Field(default_factory=lambda: new_id("prod"))
    title: str
    price: float = Field(ge=0)  # "9.99" is coerced to 9.99
    desc: Optional[str] = None
    image: Optional[str] = None
    seller_id: str = SYSTEM_SELLER_ID
    created_at: datetime = Field(default_factory=utcnow)

    class Config:
        extra = "ignore"


class CartItem(BaseModel):
    """One cart line: a product reference and a positive quantity."""
    product_id: str = Field(validation_alias=AliasChoices("product_id", "productId"))
    qty: int = Field(default=1, gt=0)

    class Config:
        extra = "ignore"
        validate_assignment = True


class OrderItem(BaseModel):
    """Order line as handed in at checkout; qty is recorded unchecked."""
    product_id: str = Field(validation_alias=AliasChoices("product_id", "productId"))
    qty: int = 0

    class Config:
        extra = "ignore"
        frozen = True


class Order(BaseModel):
    """Placed order. Items are a snapshot of the cart at checkout."""
    id: str = Field(default_factory=lambda: new_id("ord"))
    buyer_id: Optional[str] = None
    items: List[OrderItem] = []
    total: float = 0.0
    created_at: datetime = Field(default_factory=utcnow)

    class Config:
        extra = "ignore"
        frozen = True
