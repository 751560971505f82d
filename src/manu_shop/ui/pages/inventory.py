"""
Inventory page: product table with add, edit and delete.
"""

import html
import logging
from typing import List, Optional

import streamlit as st

from ...core.config import SessionKeys, get_settings
from ...core.exceptions import ManuShopError, ValidationError
from ...models import Product
from ...services.inventory import InventoryService, ProductForm, low_stock_label
from ..styles import LOW_STOCK_BADGE_HTML
from ..utils import flash, show_flash

logger = logging.getLogger(__name__)

FIELD_LABELS = {
    "name": "Nombre del Producto",
    "category": "Categoría",
    "price": "Precio",
    "stock_quantity": "Cantidad",
    "image_url": "URL de Imagen (opcional)",
}


def start_adding() -> None:
    st.session_state[SessionKeys.IS_ADDING] = True
    st.session_state[SessionKeys.EDITING_ID] = None
    st.session_state[SessionKeys.PRODUCT_FORM] = ProductForm()


def start_editing(product: Product) -> None:
    st.session_state[SessionKeys.IS_ADDING] = True
    st.session_state[SessionKeys.EDITING_ID] = product.id
    st.session_state[SessionKeys.PRODUCT_FORM] = ProductForm.from_product(product)


def reset_form() -> None:
    st.session_state[SessionKeys.IS_ADDING] = False
    st.session_state[SessionKeys.EDITING_ID] = None
    st.session_state[SessionKeys.PRODUCT_FORM] = ProductForm()


def submit_form(service: InventoryService, form: ProductForm,
                editing_id: Optional[str]) -> bool:
    """Save the form; returns True and resets the form on success."""
    try:
        service.save_product(form, editing_id)
    except ValidationError as e:
        fields = ", ".join(FIELD_LABELS.get(err["field"], err["field"]) for err in e.validation_errors)
        st.error(f"Revisa los campos: {fields}")
        return False
    except ManuShopError as e:
        st.error(f"No se pudo guardar el producto: {e.message}")
        return False

    reset_form()
    return True


def delete_product(service: InventoryService, product_id: str) -> bool:
    st.session_state[SessionKeys.CONFIRM_DELETE_ID] = None
    try:
        service.delete_product(product_id)
    except ManuShopError as e:
        st.error(f"No se pudo eliminar el producto: {e.message}")
        return False
    return True


def render_product_form(service: InventoryService) -> None:
    editing_id = st.session_state.get(SessionKeys.EDITING_ID)
    current = st.session_state.get(SessionKeys.PRODUCT_FORM) or ProductForm()

    st.subheader("Editar Producto" if editing_id else "Nuevo Producto")
    with st.form("product_form"):
        col1, col2 = st.columns(2)
        name = col1.text_input(FIELD_LABELS["name"], value=current.name)
        category = col2.text_input(FIELD_LABELS["category"], value=current.category)
        price = col1.text_input(FIELD_LABELS["price"], value=current.price)
        stock_quantity = col2.text_input(FIELD_LABELS["stock_quantity"], value=current.stock_quantity)
        image_url = st.text_input(FIELD_LABELS["image_url"], value=current.image_url)

        submit_col, cancel_col = st.columns([3, 1])
        submitted = submit_col.form_submit_button(
            "Actualizar Producto" if editing_id else "Guardar Producto",
            type="primary",
            use_container_width=True
        )
        cancelled = cancel_col.form_submit_button("Cancelar", use_container_width=True)

    if cancelled:
        reset_form()
        st.rerun()

    if submitted:
        form = ProductForm(
            name=name,
            category=category,
            price=price,
            stock_quantity=stock_quantity,
            image_url=image_url
        )
        st.session_state[SessionKeys.PRODUCT_FORM] = form
        if submit_form(service, form, editing_id):
            flash("success", "Producto guardado")
            st.rerun()


def render_product_table(products: List[Product], service: InventoryService) -> None:
    threshold = get_settings().application.low_stock_threshold

    header = st.columns([3, 2, 1, 2, 1, 1])
    for col, title in zip(header, ["Producto", "Categoría", "Precio", "Inventario", "", ""]):
        col.markdown(f"**{title}**")

    for product in products:
        cols = st.columns([3, 2, 1, 2, 1, 1])
        cols[0].write(product.name)
        cols[1].write(product.category or "")
        cols[2].write(f"${product.price}")
        css_class = "badge-low-stock" if product.is_low_stock(threshold) else ""
        cols[3].markdown(
            LOW_STOCK_BADGE_HTML.format(
                css_class=css_class,
                label=html.escape(low_stock_label(product, threshold))
            ),
            unsafe_allow_html=True
        )
        if cols[4].button("✏️", key=f"edit_{product.id}", help="Editar"):
            start_editing(product)
            st.rerun()
        if cols[5].button("🗑️", key=f"delete_{product.id}", help="Eliminar"):
            st.session_state[SessionKeys.CONFIRM_DELETE_ID] = product.id
            st.rerun()

        if st.session_state.get(SessionKeys.CONFIRM_DELETE_ID) == product.id:
            st.warning("¿Eliminar este producto?")
            yes_col, no_col, _ = st.columns([1, 1, 6])
            if yes_col.button("Sí", key=f"confirm_delete_{product.id}"):
                if delete_product(service, product.id):
                    st.rerun()
            if no_col.button("No", key=f"cancel_delete_{product.id}"):
                st.session_state[SessionKeys.CONFIRM_DELETE_ID] = None
                st.rerun()


def render(service: Optional[InventoryService] = None) -> None:
    """Render the inventory page."""
    try:
        service = service or InventoryService()
    except ManuShopError as e:
        st.error(e.message)
        return

    title_col, action_col = st.columns([4, 1])
    title_col.header("Gestión de Inventario")
    show_flash()

    if not st.session_state.get(SessionKeys.IS_ADDING):
        if action_col.button("➕ Agregar Producto", type="primary"):
            start_adding()
            st.rerun()
    else:
        render_product_form(service)

    try:
        products = service.list_products()
    except ManuShopError as e:
        st.error(f"No se pudo cargar el inventario: {e.message}")
        return

    render_product_table(products, service)
