"""Add / edit product dialog."""
from typing import Awaitable, Callable

from nicegui import ui

from src.models.product import COST_FIELD, NAME_FIELD, QUANTITY_FIELD, Product
from src.ui.components.helpers import INPUT_PROPS


def product_dialog(
    product: Product | None,
    on_save: Callable[[dict], Awaitable[bool]],
    on_close: Callable[[], None] | None = None,
):
    """Open a form dialog; it closes itself only when *on_save* returns True."""
    editing = product is not None

    with ui.dialog() as dialog, ui.card().classes("w-96"):
        ui.label("Edit Product" if editing else "Add New Product").classes(
            "text-h6 font-bold"
        )

        name_input = ui.input(
            "Product Name",
            value=product.product_name if editing else "",
            placeholder="e.g., iPhone 15 Pro",
        ).props(INPUT_PROPS).classes("w-full")
        with ui.row().classes("w-full gap-3 no-wrap"):
            qty_input = ui.number(
                "Quantity", value=product.quantity if editing else 0, min=0, precision=0,
            ).props(INPUT_PROPS).classes("flex-1")
            cost_input = ui.number(
                "Unit Cost ($)", value=product.cost if editing else 0, min=0, step=0.01,
                format="%.2f",
            ).props(INPUT_PROPS).classes("flex-1")

        def _close():
            dialog.close()
            if on_close:
                on_close()

        async def _submit():
            draft = {
                NAME_FIELD: (name_input.value or "").strip(),
                QUANTITY_FIELD: int(qty_input.value) if qty_input.value is not None else None,
                COST_FIELD: float(cost_input.value or 0),
            }
            if not draft[NAME_FIELD]:
                ui.notify("Please enter a product name.", type="warning")
                return
            if await on_save(draft):
                dialog.close()

        with ui.row().classes("w-full justify-end gap-2 mt-4"):
            ui.button("Cancel", on_click=_close).props("flat")
            ui.button(
                "Update Details" if editing else "Save Product", on_click=_submit,
            ).props("color=primary")

    dialog.open()
    return dialog
