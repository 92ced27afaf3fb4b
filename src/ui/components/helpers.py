"""Shared UI helper functions and design tokens for inventory display."""

from nicegui import ui


# ─── Design Tokens ────────────────────────────────────────────────────────────

# Card & layout
CARD_CLASSES = "w-full p-5"
INPUT_PROPS = "outlined dense"
HOVER_BG = "hover:bg-[#EEF2FF]"

# Nav active-state tokens (used by the sidebar highlight JS in layout.py)
NAV_ACTIVE_BG = "#E0E7FF"
NAV_ACTIVE_BORDER = "#4F46E5"
NAV_ACTIVE_TEXT = "#312E81"


def page_header(title: str, subtitle: str | None = None, icon: str | None = None):
    """Render a consistent page title with optional icon + subtitle."""
    with ui.row().classes("items-center gap-3"):
        if icon:
            ui.icon(icon, size="sm").classes("text-accent")
        ui.label(title).classes("text-h5 font-bold")
    if subtitle:
        ui.label(subtitle).classes("text-body2 text-secondary")


def section_header(title: str, icon: str | None = None, subtitle: str | None = None):
    """Render a consistent card section header with accent-colored icon."""
    with ui.row().classes("items-center gap-2 mb-2"):
        if icon:
            ui.icon(icon).classes("text-accent")
        ui.label(title).classes("text-subtitle1 font-bold")
    if subtitle:
        ui.label(subtitle).classes("text-caption text-secondary")


# ─── Stock Status Badges ──────────────────────────────────────────────────────

STOCK_COLORS = {
    "out": "negative",
    "low": "warning",
    "in": "positive",
}
STOCK_LABELS = {
    "out": "Out of Stock",
    "low": "Low Stock",
    "in": "In Stock",
}


def stock_status(quantity: int, low_threshold: int = 10) -> str:
    """Return 'out', 'low' or 'in' for a stock quantity."""
    if quantity <= 0:
        return "out"
    if quantity < low_threshold:
        return "low"
    return "in"


def stock_badge(quantity: int, low_threshold: int = 10) -> None:
    status = stock_status(quantity, low_threshold)
    ui.badge(STOCK_LABELS[status], color=STOCK_COLORS[status]).props("outline")


# Predefined palette for letter-avatar backgrounds
AVATAR_COLORS = [
    "#E57373", "#F06292", "#BA68C8", "#9575CD", "#7986CB",
    "#64B5F6", "#4FC3F7", "#4DD0E1", "#4DB6AC", "#81C784",
    "#AED581", "#DCE775", "#FFD54F", "#FFB74D", "#FF8A65",
    "#A1887F", "#90A4AE",
]


def avatar_color(name: str) -> str:
    """Return a deterministic color based on the first letter of *name*."""
    idx = ord(name[0].upper()) % len(AVATAR_COLORS) if name else 0
    return AVATAR_COLORS[idx]


def letter_avatar(name: str, size: int = 40) -> None:
    letter = name[0].upper() if name else "?"
    ui.avatar(
        letter, color=avatar_color(name or "?"), text_color="white",
        size=f"{size}px", font_size=f"{size // 2}px",
    ).classes("rounded-lg")


def format_money(value, na_text: str = "-") -> str:
    """Format a number as a dollar amount with thousands separators."""
    if value is None:
        return na_text
    return f"${value:,.2f}"
