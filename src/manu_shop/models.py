"""
Row and view models for Manu-shop.

Rows come back from the hosted database as plain dicts; these models give
them types and light coercion (numeric strings, ISO timestamps).
"""

import uuid
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from .core.constants import LOW_STOCK_THRESHOLD


class Product(BaseModel):
    """A row of the ``products`` table."""
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    id: Optional[str] = None
    name: str
    category: Optional[str] = ""
    price: float = 0.0
    stock_quantity: int = 0
    image_url: Optional[str] = None
    created_at: Optional[datetime] = None

    def is_low_stock(self, threshold: int = LOW_STOCK_THRESHOLD) -> bool:
        return self.stock_quantity < threshold


class Sale(BaseModel):
    """A sale header row."""
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    id: Optional[str] = None
    total_amount: float = 0.0
    sale_date: Optional[datetime] = None


class SaleItem(BaseModel):
    """A line of a sale, as written to ``sale_items``."""
    sale_id: str
    product_id: str
    quantity: int
    unit_price: float


class NotificationType(str, Enum):
    SYSTEM = "system"
    STOCK = "stock"


class Notification(BaseModel):
    """A row of the ``notifications`` table."""
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    id: str
    message: str
    created_at: datetime
    is_read: bool = False
    type: Optional[NotificationType] = None


class CartItem(BaseModel):
    """A product selected at the point of sale with the requested quantity."""
    id: str
    name: str
    price: float
    stock_quantity: int
    cart_quantity: int = 1

    @classmethod
    def from_product(cls, product: Product) -> "CartItem":
        return cls(
            id=product.id,
            name=product.name,
            price=product.price,
            stock_quantity=product.stock_quantity,
        )

    @property
    def subtotal(self) -> float:
        return self.price * self.cart_quantity


class ChatRole(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


class ChatMessage(BaseModel):
    """One entry of the visible assistant transcript."""
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    role: ChatRole
    content: str

    def to_api(self) -> Dict[str, Any]:
        return {"role": self.role.value, "content": self.content}
