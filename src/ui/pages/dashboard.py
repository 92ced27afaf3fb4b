"""Dashboard page -- inventory overview, catalog and recent activity."""
import logging

from nicegui import ui

from src.services.excel_importer import ImportStaging
from src.ui.components.activity_feed import activity_feed
from src.ui.components.excel_upload import excel_upload_dialog
from src.ui.components.inventory_table import inventory_table
from src.ui.components.product_dialog import product_dialog
from src.ui.components.stats_card import inventory_stats_row
from src.ui.layout import build_layout
from src.ui.state import get_controller, run_blocking, show_alert

logger = logging.getLogger(__name__)

_VISIBILITY_OPTIONS = {"active": "Active", "inactive": "Inactive", "all": "All"}


def dashboard_page(search: str | None = None):
    """Render the main inventory dashboard.

    Args:
        search: Optional name filter (from the header search box).
    """
    controller = get_controller()
    controller.search(search or "")
    staging = ImportStaging()
    content = build_layout(search)

    with content:
        # ------------------------------------------------------------------
        # Hero
        # ------------------------------------------------------------------
        with ui.card().classes("w-full p-6"):
            with ui.row().classes("items-center justify-between w-full"):
                with ui.column().classes("gap-1 flex-1"):
                    ui.label("Smart Stock: fast, clear inventory for teams").classes(
                        "text-h5 font-bold"
                    )
                    ui.label(
                        "Track stock, get alerts, and make smarter purchasing decisions."
                    ).classes("text-body2 text-secondary")
                    with ui.row().classes("gap-2 mt-2"):
                        ui.button(
                            "Add Product", icon="add", on_click=lambda: _open_editor(None),
                        ).props("color=primary")
                        ui.button(
                            "Bulk Upload", icon="upload_file",
                            on_click=lambda: excel_upload_dialog(staging, _commit_import),
                        ).props("color=primary outline")
                        refresh_btn = ui.button(
                            "Refresh", icon="refresh", on_click=lambda: _reload(),
                        ).props("flat color=secondary")
                with ui.card().classes("w-56 p-4 items-center"):
                    ui.label("Total Products").classes("text-caption text-secondary")
                    total_label = ui.label("0").classes("text-h4 font-bold")
                    ui.label("Updated live").classes("text-caption text-grey-6")

        with ui.row().classes("items-center gap-3"):
            ui.label("Show").classes("text-body2 text-secondary")
            ui.toggle(
                _VISIBILITY_OPTIONS,
                value=controller.visibility,
                on_change=lambda e: _change_visibility(e.value),
            ).props("dense no-caps toggle-color=primary")

        @ui.refreshable
        def body():
            total_label.text = str(len(controller.products))
            inventory_stats_row(controller.stats())
            inventory_table(
                controller.filtered_products(),
                loading=controller.loading,
                low_threshold=controller.low_stock_threshold,
                on_edit=_open_editor,
                on_delete=_request_delete,
                on_restore=_restore,
            )
            activity_feed(controller.activities)

    # ----------------------------------------------------------------------
    # Actions
    # ----------------------------------------------------------------------

    async def _reload(quiet: bool = False):
        if not quiet:
            refresh_btn.props("loading")
        await run_blocking(controller.refresh, quiet=quiet)
        refresh_btn.props(remove="loading")
        show_alert(controller)
        body.refresh()

    async def _change_visibility(mode: str):
        await run_blocking(controller.set_visibility, mode)
        show_alert(controller)
        body.refresh()

    def _open_editor(product):
        controller.open_editor(product)
        product_dialog(product, _save, on_close=controller.close_editor)

    async def _save(draft: dict) -> bool:
        ok = await run_blocking(controller.save, draft)
        show_alert(controller)
        if ok:
            ui.notify("Product saved.", type="positive")
            body.refresh()
        return ok

    def _request_delete(name: str):
        controller.request_delete(name)
        prompt = controller.prompt
        with ui.dialog() as dialog, ui.card():
            ui.label(prompt.message).classes("text-subtitle1 font-bold")
            ui.label(
                "The product will be hidden from the active list. "
                "You can restore it from the Recycle Bin."
            ).classes("text-body2 text-secondary")

            def _cancel():
                controller.cancel_delete()
                dialog.close()

            async def _confirm():
                dialog.close()
                ok = await run_blocking(controller.confirm_delete)
                show_alert(controller)
                if ok:
                    ui.notify(f"Deleted {name}.", type="positive")
                body.refresh()

            with ui.row().classes("justify-end gap-2 mt-4"):
                ui.button("Cancel", on_click=_cancel).props("flat")
                ui.button("Delete", on_click=_confirm).props("color=negative")
        dialog.props("persistent")
        dialog.open()

    async def _restore(name: str):
        ok = await run_blocking(controller.restore, name)
        show_alert(controller)
        if ok:
            ui.notify(f"Restored {name}.", type="positive")
        body.refresh()

    async def _commit_import(staged: ImportStaging) -> bool:
        ok = await run_blocking(controller.commit_import, staged)
        show_alert(controller)
        if ok:
            ui.notify("Upload saved.", type="positive")
            body.refresh()
        return ok

    with content:
        body()

    ui.timer(0.1, _reload, once=True)
