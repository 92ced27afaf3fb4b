"""Bulk upload dialog: parse a spreadsheet, edit the rows, then upsert them."""
from typing import Awaitable, Callable

from nicegui import ui

from src.models.product import COST_FIELD, NAME_FIELD, QUANTITY_FIELD
from src.services.excel_importer import (
    ImportStaging,
    build_template,
    is_valid_row,
    staged_value,
)
from src.ui.components.helpers import section_header
from src.ui.state import run_blocking


def excel_upload_dialog(
    staging: ImportStaging,
    on_commit: Callable[[ImportStaging], Awaitable[bool]],
):
    """Open the bulk upload dialog backed by *staging*."""
    with ui.dialog() as dialog, ui.card().classes("w-full").style("min-width: 720px"):
        with ui.row().classes("items-center justify-between w-full"):
            section_header("Bulk Upload", icon="upload_file")
            ui.button(icon="close", on_click=dialog.close).props("flat round dense")

        with ui.card().classes("w-full p-4 bg-grey-1"):
            ui.label("Upload Excel or CSV File").classes("text-subtitle1 font-bold")
            ui.label("Supported formats: .xlsx, .xls, .csv").classes(
                "text-body2 text-secondary"
            )
            ui.label("Required columns: product_name, quantity, cost").classes(
                "text-caption text-grey-6"
            )
            ui.button(
                "Download Template", icon="download",
                on_click=lambda: ui.download(build_template(), "inventory_template.xlsx"),
            ).props("flat dense color=primary size=sm")

            async def _handle_upload(e):
                data = e.content.read()
                count = await run_blocking(staging.load, data, e.name)
                if count:
                    ui.notify(f"Parsed {count} row(s) from {e.name}.", type="info")
                else:
                    ui.notify(f"No rows could be read from {e.name}.", type="warning")
                preview.refresh()

            ui.upload(
                label="Choose file",
                auto_upload=True,
                on_upload=_handle_upload,
            ).props('accept=".xlsx,.xls,.csv" max-file-size=10485760').classes("w-full")

        @ui.refreshable
        def preview():
            if not staging.rows:
                return
            with ui.row().classes("items-center justify-between w-full"):
                with ui.row().classes("items-center gap-2"):
                    ui.label("Preview & Edit").classes("text-subtitle1 font-bold")
                    ui.badge(f"{len(staging)} rows", color="primary").props("rounded")
                    invalid = staging.invalid_count()
                    if invalid:
                        ui.badge(f"{invalid} invalid", color="negative").props("rounded")

                def _clear():
                    staging.clear()
                    preview.refresh()

                ui.button("Clear All", icon="delete", on_click=_clear).props(
                    "flat dense color=negative size=sm"
                )

            with ui.scroll_area().classes("w-full h-80 border rounded"):
                for idx, row in enumerate(staging.rows):
                    _editable_row(idx, row)

            with ui.row().classes("w-full justify-end mt-2"):
                ui.button(
                    "Confirm & Save", icon="check_circle", on_click=_confirm,
                ).props("color=primary")

        def _editable_row(idx: int, row: dict):
            def _set(field, value):
                staging.update_row(idx, **{field: staged_value(field, value)})

            with ui.row().classes("items-center gap-2 w-full no-wrap px-2 py-1"):
                ui.label(str(idx + 1)).classes("text-caption text-grey-6 font-mono w-6")
                ui.input(
                    value=row.get(NAME_FIELD, ""), placeholder="Product name",
                    on_change=lambda e: _set(NAME_FIELD, e.value),
                ).props("dense outlined").classes("flex-[3]")
                ui.number(
                    value=row.get(QUANTITY_FIELD), precision=0,
                    on_change=lambda e: _set(QUANTITY_FIELD, e.value),
                ).props("dense outlined").classes("flex-1")
                ui.number(
                    value=row.get(COST_FIELD), step=0.01,
                    on_change=lambda e: _set(COST_FIELD, e.value),
                ).props("dense outlined").classes("flex-1")
                if not is_valid_row(row):
                    ui.icon("error", size="xs").classes("text-negative").tooltip("Invalid row")

        def _confirm():
            with ui.dialog() as confirm_dlg, ui.card().classes("w-96"):
                ui.label("Confirm Upload").classes("text-h6 font-bold")
                ui.label(
                    f"You are about to save {len(staging)} products to the inventory."
                ).classes("text-body2 text-secondary")

                async def _do_save():
                    confirm_dlg.close()
                    if await on_commit(staging):
                        dialog.close()
                    else:
                        preview.refresh()

                with ui.row().classes("w-full justify-end gap-2 mt-4"):
                    ui.button("Cancel", on_click=confirm_dlg.close).props("flat")
                    ui.button("Confirm", on_click=_do_save).props("color=primary")
            confirm_dlg.open()

        preview()

    dialog.open()
    return dialog
