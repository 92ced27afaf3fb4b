"""Recycle Bin page -- view and restore soft-deleted products."""
from nicegui import ui

from src.ui.components.helpers import format_money, letter_avatar, page_header
from src.ui.layout import build_layout
from src.ui.state import get_controller, run_blocking, show_alert


def recycle_bin_page():
    """Render the Recycle Bin page."""
    controller = get_controller()
    content = build_layout()

    with content:
        page_header(
            "Recycle Bin",
            subtitle="Deleted products stay here until restored.",
            icon="delete_sweep",
        )
        product_container = ui.column().classes("w-full gap-2")

    deleted = []

    def render():
        product_container.clear()
        with product_container:
            if not deleted:
                with ui.card().classes("w-full p-8"):
                    with ui.column().classes("items-center w-full gap-2"):
                        ui.icon("check_circle", size="xl").classes("text-positive")
                        ui.label("Recycle Bin is empty").classes("text-h6 text-secondary")
                return

            ui.label(
                f"{len(deleted)} deleted product{'s' if len(deleted) != 1 else ''}"
            ).classes("text-body1 text-secondary")
            for product in deleted:
                _deleted_product_row(product, _restore)

    async def _load():
        loaded = await run_blocking(controller.load_deleted)
        show_alert(controller)
        if loaded is not None:
            deleted[:] = loaded
        render()

    async def _restore(name: str):
        ok = await run_blocking(controller.restore, name)
        show_alert(controller)
        if ok:
            ui.notify("Product restored", type="positive")
        await _load()

    ui.timer(0.1, _load, once=True)


def _deleted_product_row(product, on_restore):
    """Render a single deleted product row with a restore action."""
    with ui.card().classes("w-full p-3"):
        with ui.row().classes("items-center gap-4 w-full"):
            letter_avatar(product.product_name, size=48)

            with ui.column().classes("flex-1 gap-0"):
                ui.label(product.product_name).classes("text-body1 font-medium")
                ui.label(
                    f"Qty {product.quantity:,} · {format_money(product.cost)} each"
                ).classes("text-caption text-secondary")

            ui.button(
                "Restore", icon="restore",
                on_click=lambda n=product.product_name: on_restore(n),
            ).props("color=positive outline dense")
