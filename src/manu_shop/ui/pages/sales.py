"""
Sales page: point of sale with the product grid and the current cart.
"""

import logging
from typing import List, Optional

import streamlit as st

from ...core.config import SessionKeys
from ...core.constants import MSG_EMPTY_CART, MSG_SALE_COMPLETED, MSG_SALE_FAILED
from ...core.exceptions import CheckoutError, EmptyCartError, ManuShopError
from ...models import Product
from ...services.sales import Cart, SalesService
from ..utils import flash, format_currency, get_state, show_flash

logger = logging.getLogger(__name__)

GRID_COLUMNS = 3


def get_cart() -> Cart:
    return get_state(SessionKeys.CART, Cart)


def handle_checkout(service: SalesService, cart: Cart, products: List[Product]) -> bool:
    """Run checkout and queue the outcome message; True on success."""
    try:
        service.checkout(cart, products)
    except EmptyCartError:
        return False
    except CheckoutError as e:
        logger.error(f"Checkout failed: {e.message}")
        flash("error", MSG_SALE_FAILED)
        return False

    flash("success", MSG_SALE_COMPLETED)
    return True


def render_product_grid(products: List[Product], cart: Cart) -> None:
    st.subheader("Productos Disponibles")
    if not products:
        st.caption("No hay productos con existencias.")
        return

    columns = st.columns(GRID_COLUMNS)
    for index, product in enumerate(products):
        with columns[index % GRID_COLUMNS].container(border=True):
            st.markdown(f"**{product.name}**")
            st.markdown(f"`${product.price}` · Existencias: {product.stock_quantity}")
            if st.button("Agregar", key=f"add_{product.id}", use_container_width=True):
                cart.add(product)
                st.rerun()


def render_cart(service: SalesService, cart: Cart, products: List[Product]) -> None:
    st.subheader("🛒 Venta Actual")

    if cart.is_empty:
        st.info(MSG_EMPTY_CART)
    for item in cart:
        info_col, minus_col, qty_col, plus_col, remove_col = st.columns([4, 1, 1, 1, 1])
        info_col.markdown(f"**{item.name}**  \n${item.price} x {item.cart_quantity}")
        if minus_col.button("➖", key=f"dec_{item.id}"):
            cart.update_quantity(item.id, -1, products)
            st.rerun()
        qty_col.write(item.cart_quantity)
        if plus_col.button("➕", key=f"inc_{item.id}"):
            cart.update_quantity(item.id, 1, products)
            st.rerun()
        if remove_col.button("✖️", key=f"remove_{item.id}"):
            cart.remove(item.id)
            st.rerun()

    st.divider()
    total_col, amount_col = st.columns(2)
    total_col.markdown("### Total")
    amount_col.markdown(f"### {format_currency(cart.total)}")

    if st.button("Completar Venta", type="primary", disabled=cart.is_empty,
                 use_container_width=True):
        with st.spinner("Procesando..."):
            handle_checkout(service, cart, products)
        st.rerun()


def render(service: Optional[SalesService] = None) -> None:
    """Render the point-of-sale page."""
    try:
        service = service or SalesService()
        products = service.available_products()
    except ManuShopError as e:
        st.error(f"No se pudieron cargar los productos: {e.message}")
        return

    show_flash()
    cart = get_cart()
    grid_col, cart_col = st.columns([2, 1])
    with grid_col:
        render_product_grid(products, cart)
    with cart_col:
        render_cart(service, cart, products)
