"""Reusable UI components."""
from src.ui.components.activity_feed import activity_feed
from src.ui.components.helpers import avatar_color, format_money, stock_status
from src.ui.components.inventory_table import inventory_table
from src.ui.components.stats_card import inventory_stats_row, stats_card

__all__ = [
    "activity_feed",
    "avatar_color",
    "format_money",
    "stock_status",
    "inventory_table",
    "inventory_stats_row",
    "stats_card",
]
