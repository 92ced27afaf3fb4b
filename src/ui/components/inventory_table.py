"""Inventory catalog: one row per product with edit / delete / restore actions."""
from typing import Callable

from nicegui import ui

from src.models.product import Product
from src.ui.components.helpers import (
    HOVER_BG,
    format_money,
    letter_avatar,
    section_header,
    stock_badge,
)


def inventory_table(
    products: list[Product],
    *,
    loading: bool = False,
    low_threshold: int = 10,
    on_edit: Callable[[Product], None] | None = None,
    on_delete: Callable[[str], None] | None = None,
    on_restore: Callable[[str], None] | None = None,
):
    """Render the product catalog.

    Active rows get edit/delete buttons; inactive rows get a restore button.
    """
    with ui.card().classes("w-full p-0"):
        with ui.row().classes("items-center justify-between w-full px-5 pt-4"):
            section_header(
                "Inventory Catalog", icon="inventory_2",
                subtitle="Manage your products and stock levels",
            )
            ui.badge(f"{len(products)} Products", color="grey-4").props("rounded").classes(
                "text-grey-8"
            )

        # Column headings
        with ui.row().classes(
            "w-full px-5 py-2 text-caption text-secondary uppercase font-bold no-wrap"
        ):
            ui.label("Product").classes("flex-[3]")
            ui.label("Status").classes("flex-[2]")
            ui.label("Quantity").classes("flex-1")
            ui.label("Unit Price").classes("flex-1")
            ui.label("Total Value").classes("flex-1")
            ui.label("").classes("w-24")
        ui.separator()

        if loading and not products:
            for _ in range(5):
                ui.skeleton().classes("w-full h-10 mx-5 my-2")
            return

        if not products:
            with ui.column().classes("items-center w-full gap-2 py-12"):
                ui.icon("inventory", size="xl").classes("text-grey-5")
                ui.label("Inventory Empty").classes("text-subtitle1 text-secondary")
                ui.label("Start by adding your first product.").classes("text-body2 text-grey-6")
            return

        for product in products:
            _product_row(product, low_threshold, on_edit, on_delete, on_restore)


def _product_row(product: Product, low_threshold, on_edit, on_delete, on_restore):
    with ui.row().classes(f"w-full items-center px-5 py-3 no-wrap {HOVER_BG}"):
        with ui.row().classes("flex-[3] items-center gap-3 no-wrap"):
            letter_avatar(product.product_name)
            with ui.column().classes("gap-0"):
                ui.label(product.product_name).classes("text-body1 font-bold")
                ui.label(f"#{product.product_id}").classes(
                    "text-caption text-grey-6 font-mono uppercase"
                )
        with ui.row().classes("flex-[2]"):
            if product.is_active:
                stock_badge(product.quantity, low_threshold)
            else:
                ui.badge("Inactive", color="grey-6").props("outline")
        ui.label(f"{product.quantity:,}").classes("flex-1 text-body2 font-bold")
        ui.label(format_money(product.cost)).classes("flex-1 text-body2 text-secondary")
        ui.label(format_money(product.total_value)).classes("flex-1 text-body2 font-bold")

        with ui.row().classes("w-24 justify-end gap-1"):
            if product.is_active:
                if on_edit:
                    ui.button(icon="edit", on_click=lambda p=product: on_edit(p)).props(
                        "flat round dense color=primary size=sm"
                    ).tooltip(f"Edit {product.product_name}")
                if on_delete:
                    ui.button(
                        icon="delete", on_click=lambda n=product.product_name: on_delete(n),
                    ).props("flat round dense color=negative size=sm").tooltip(
                        f"Delete {product.product_name}"
                    )
            elif on_restore:
                ui.button(
                    icon="restore", on_click=lambda n=product.product_name: on_restore(n),
                ).props("flat round dense color=positive size=sm").tooltip(
                    f"Restore {product.product_name}"
                )
