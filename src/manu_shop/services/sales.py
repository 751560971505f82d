"""
Point-of-sale service: the in-memory cart and checkout.

Checkout writes the sale header, then each line item and its stock
decrement one call at a time. Nothing is wrapped in a transaction; a
failure part-way leaves the rows written so far in place and is reported
through ``CheckoutError``.
"""

import logging
from typing import Iterator, List, Optional

import sentry_sdk

from ..core.constants import PRODUCTS_TABLE, SALE_ITEMS_TABLE, SALES_TABLE
from ..core.exceptions import CheckoutError, DatabaseError, EmptyCartError
from ..db.client import execute, get_supabase_client
from ..models import CartItem, Product, Sale, SaleItem

logger = logging.getLogger(__name__)


class Cart:
    """Client-held list of selected products; never persisted."""

    def __init__(self, items: Optional[List[CartItem]] = None):
        self.items: List[CartItem] = list(items or [])

    def __iter__(self) -> Iterator[CartItem]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    @property
    def is_empty(self) -> bool:
        return not self.items

    @property
    def total(self) -> float:
        return sum(item.price * item.cart_quantity for item in self.items)

    def get(self, product_id: str) -> Optional[CartItem]:
        return next((item for item in self.items if item.id == product_id), None)

    def add(self, product: Product) -> None:
        """Add one unit of ``product``; capped at the product's stock."""
        existing = self.get(product.id)
        if existing:
            if existing.cart_quantity >= product.stock_quantity:
                return
            existing.cart_quantity += 1
            return
        self.items.append(CartItem.from_product(product))

    def update_quantity(self, product_id: str, delta: int, products: List[Product]) -> None:
        """
        Change a line's quantity by ``delta``.

        The quantity never drops below 1 and the change is ignored when it
        would exceed the stock of the product in ``products``.
        """
        item = self.get(product_id)
        if item is None:
            return
        new_qty = max(1, item.cart_quantity + delta)
        product = next((p for p in products if p.id == product_id), None)
        if product and new_qty > product.stock_quantity:
            return
        item.cart_quantity = new_qty

    def remove(self, product_id: str) -> None:
        self.items = [item for item in self.items if item.id != product_id]

    def clear(self) -> None:
        self.items = []


class SalesService:
    """Product lookup and checkout for the point of sale."""

    def __init__(self, client=None):
        self.client = client or get_supabase_client()

    def available_products(self) -> List[Product]:
        """Products with stock left."""
        rows = execute(
            self.client.table(PRODUCTS_TABLE).select("*").gt("stock_quantity", 0),
            PRODUCTS_TABLE, "select"
        )
        return [Product.model_validate(row) for row in rows]

    def checkout(self, cart: Cart, products: List[Product]) -> Sale:
        """
        Record the sale and decrement stock for every cart line.

        Args:
            cart: The cart to sell; cleared on success
            products: The product list the cart was built from; its stock
                values are the base for the decrement

        Returns:
            The created sale header

        Raises:
            EmptyCartError: If the cart has no lines
            CheckoutError: If any backend call fails
        """
        if cart.is_empty:
            raise EmptyCartError()

        total = cart.total
        try:
            rows = execute(
                self.client.table(SALES_TABLE).insert([{"total_amount": total}]),
                SALES_TABLE, "insert"
            )
        except DatabaseError as e:
            sentry_sdk.capture_exception(e)
            raise CheckoutError("Could not create sale", original_exception=e)

        sale = Sale.model_validate(rows[0]) if rows else None
        if sale is None or not sale.id:
            error = CheckoutError("Sale insert returned no sale id")
            sentry_sdk.capture_exception(error)
            raise error

        completed: List[str] = []
        stock_by_id = {p.id: p.stock_quantity for p in products}

        for item in cart:
            line = SaleItem(
                sale_id=sale.id,
                product_id=item.id,
                quantity=item.cart_quantity,
                unit_price=item.price,
            )
            current_stock = stock_by_id.get(item.id) or 0
            try:
                execute(
                    self.client.table(SALE_ITEMS_TABLE).insert(line.model_dump()),
                    SALE_ITEMS_TABLE, "insert"
                )
                execute(
                    self.client.table(PRODUCTS_TABLE)
                    .update({"stock_quantity": current_stock - item.cart_quantity})
                    .eq("id", item.id),
                    PRODUCTS_TABLE, "update"
                )
            except DatabaseError as e:
                sentry_sdk.capture_exception(e)
                raise CheckoutError(
                    f"Checkout stopped at product {item.id}",
                    original_exception=e,
                    sale_id=sale.id,
                    completed_items=completed
                )
            completed.append(item.id)

        logger.info(f"Sale {sale.id} completed: {len(completed)} lines, total {total:.2f}")
        cart.clear()
        return sale
