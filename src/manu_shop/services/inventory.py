"""
Inventory service: product CRUD over the ``products`` table.
"""

import logging
import math
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional

from ..core.constants import LOW_STOCK_THRESHOLD, PRODUCTS_TABLE
from ..core.exceptions import ErrorCode, ValidationError
from ..db.client import execute, get_supabase_client
from ..models import Product

logger = logging.getLogger(__name__)


@dataclass
class ProductForm:
    """Form state for adding or editing a product; values are kept as typed."""
    name: str = ""
    category: str = ""
    price: str = ""
    stock_quantity: str = ""
    image_url: str = ""

    @classmethod
    def from_product(cls, product: Product) -> "ProductForm":
        """Pre-fill the form from an existing row."""
        return cls(
            name=product.name,
            category=product.category or "",
            price=str(product.price),
            stock_quantity=str(product.stock_quantity),
            image_url=product.image_url or "",
        )

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)

    def to_payload(self) -> Dict[str, Any]:
        """
        Convert the form into a row payload.

        Raises:
            ValidationError: If a required field is empty or a number does not parse
        """
        errors = []
        for field_name in ("name", "price", "stock_quantity"):
            if not str(getattr(self, field_name)).strip():
                errors.append({"field": field_name, "error": "required"})

        price = None
        stock_quantity = None
        if not errors:
            try:
                price = float(self.price)
            except ValueError:
                errors.append({"field": "price", "error": "not a number"})
            else:
                if not math.isfinite(price):
                    errors.append({"field": "price", "error": "not a finite number"})
            try:
                stock_quantity = int(self.stock_quantity)
            except ValueError:
                errors.append({"field": "stock_quantity", "error": "not an integer"})

        if errors:
            code = (ErrorCode.MISSING_REQUIRED_FIELD
                    if any(e["error"] == "required" for e in errors)
                    else ErrorCode.DATA_TYPE_ERROR)
            raise ValidationError(
                "Invalid product form",
                error_code=code,
                validation_errors=errors
            )

        return {
            "name": self.name.strip(),
            "category": self.category.strip(),
            "price": price,
            "stock_quantity": stock_quantity,
            "image_url": self.image_url.strip(),
        }


class InventoryService:
    """CRUD operations on products."""

    def __init__(self, client=None):
        self.client = client or get_supabase_client()

    def _table(self):
        return self.client.table(PRODUCTS_TABLE)

    def list_products(self) -> List[Product]:
        """All products, newest first."""
        rows = execute(
            self._table().select("*").order("created_at", desc=True),
            PRODUCTS_TABLE, "select"
        )
        return [Product.model_validate(row) for row in rows]

    def save_product(self, form: ProductForm, editing_id: Optional[str] = None) -> None:
        """Update the product being edited, or insert a new one."""
        payload = form.to_payload()
        if editing_id:
            execute(
                self._table().update(payload).eq("id", editing_id),
                PRODUCTS_TABLE, "update"
            )
            logger.info(f"Updated product {editing_id}")
        else:
            execute(self._table().insert([payload]), PRODUCTS_TABLE, "insert")
            logger.info(f"Inserted product {payload['name']!r}")

    def delete_product(self, product_id: str) -> None:
        execute(self._table().delete().eq("id", product_id), PRODUCTS_TABLE, "delete")
        logger.info(f"Deleted product {product_id}")


def low_stock_label(product: Product, threshold: int = LOW_STOCK_THRESHOLD) -> str:
    """Stock badge text for the inventory table."""
    label = f"{product.stock_quantity} unidades"
    if product.is_low_stock(threshold):
        label += " ⚠️"
    return label
