"""
System prompts for the inventory assistants.
"""

from enum import Enum
from typing import Any, Iterable, Mapping, Optional

from ..core.constants import EMPTY_INVENTORY_CONTEXT


class AssistantVariant(str, Enum):
    PAGE = "page"
    FLOATING = "floating"


PAGE_SYSTEM_PROMPT = """
Eres un asistente experto en componentes electrónicos y ventas para el sistema "ElectroMonitor".
Tu objetivo es verificar inventario y sugerir componentes.

INVENTARIO ACTUAL:
{inventory}

INSTRUCCIONES:
1. Responde basándote PRIMORDIALMENTE en el inventario actual.
2. Indica qué tenemos en stock y qué falta para el proyecto del usuario.
"""

FLOATING_SYSTEM_PROMPT = """
Eres un asistente experto en componentes electrónicos y ventas para el sistema "ElectroMonitor".
Tu objetivo es ayudar al usuario (vendedor o administrador) a encontrar componentes para proyectos, verificar stock y sugerir materiales faltantes.

INVENTARIO ACTUAL:
{inventory}

INSTRUCCIONES:
1. Responde basándote PRIMORDIALMENTE en el inventario actual.
2. Si el usuario pide componentes para un proyecto (ej. "cableado de casa"):
   - Lista los materiales necesarios.
   - Indica cuáles TENEMOS en stock (con cantidad y precio).
   - Indica cuáles FALTAN en el inventario y recomiéndalos agregar.
3. Sé amable, conciso y profesional.
4. Si te preguntan por algo que no es de electrónica, trata de relacionarlo o indica amablemente tu función.
"""

_TEMPLATES = {
    AssistantVariant.PAGE: PAGE_SYSTEM_PROMPT,
    AssistantVariant.FLOATING: FLOATING_SYSTEM_PROMPT,
}


def _format_price(price: Any) -> str:
    if isinstance(price, float) and price.is_integer():
        return str(int(price))
    return str(price)


def build_inventory_context(products: Optional[Iterable[Mapping[str, Any]]]) -> str:
    """One line per product; a fixed sentence when there is nothing to list."""
    if not products:
        return EMPTY_INVENTORY_CONTEXT
    return "\n".join(
        f"- {p.get('name')} (Stock: {p.get('stock_quantity')}, "
        f"Precio: ${_format_price(p.get('price'))}, Categoria: {p.get('category')})"
        for p in products
    )


def build_system_prompt(inventory_context: str,
                        variant: AssistantVariant = AssistantVariant.PAGE) -> str:
    return _TEMPLATES[AssistantVariant(variant)].format(inventory=inventory_context)
