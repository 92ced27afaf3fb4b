"""Reusable statistics card component."""
from nicegui import ui


def stats_card(
    title: str,
    value: str,
    icon: str = "info",
    color: str = "primary",
    caption: str | None = None,
    warning: bool = False,
):
    """Render a small KPI / stats card; *warning* tints the value."""
    with ui.card().classes("min-w-[180px] flex-1 p-5"):
        with ui.row().classes("items-center gap-3 w-full"):
            ui.icon(icon).classes(f"text-{color} text-3xl")
            with ui.column().classes("gap-0"):
                ui.label(value).classes(
                    "text-h5 font-bold" + (" text-warning" if warning else "")
                )
                ui.label(title).classes("text-caption text-secondary")
        if caption:
            ui.label(caption).classes(
                "text-caption " + ("text-warning font-medium" if warning else "text-grey-6")
            )


def inventory_stats_row(stats) -> None:
    """The four dashboard KPIs for an ``InventoryStats``."""
    with ui.row().classes("w-full gap-4"):
        stats_card("Total Units", f"{stats.total_units:,}", icon="inventory", color="primary")
        stats_card(
            "Inventory Value", f"${stats.total_value:,.2f}",
            icon="payments", color="positive",
        )
        stats_card(
            "Low Stock Alerts", str(stats.low_stock_count),
            icon="warning", color="warning",
            caption="Requires attention" if stats.low_stock_count else "All stocked",
            warning=stats.low_stock_count > 0,
        )
        stats_card("Products", str(stats.unique_products), icon="sell", color="accent")
