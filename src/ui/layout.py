"""Shared layout: header, sidebar navigation, and content area."""
from urllib.parse import quote

from nicegui import ui

from config import APP_TITLE
from src.ui.components.helpers import HOVER_BG, NAV_ACTIVE_BG, NAV_ACTIVE_BORDER, NAV_ACTIVE_TEXT


# JavaScript to highlight the current sidebar nav link on page load.
_ACTIVE_NAV_JS = f"""
(function() {{
    var path = window.location.pathname;
    var links = document.querySelectorAll('.q-drawer a[href]');
    links.forEach(function(a) {{
        var href = a.getAttribute('href');
        var isActive = (href === '/') ? (path === '/') : path.startsWith(href);
        if (isActive) {{
            var row = a.querySelector('.row, .q-item');
            if (row) {{
                row.style.background = '{NAV_ACTIVE_BG}';
                row.style.borderLeft = '3px solid {NAV_ACTIVE_BORDER}';
            }}
            a.querySelectorAll('.text-secondary').forEach(function(child) {{
                child.style.color = '{NAV_ACTIVE_TEXT}';
                child.style.fontWeight = '600';
            }});
        }}
    }});
}})();
"""


def apply_theme():
    ui.colors(
        primary="#4F46E5",
        secondary="#64748B",
        accent="#06B6D4",
        positive="#10B981",
        negative="#F43F5E",
        warning="#F59E0B",
    )


def build_layout(search: str | None = None):
    """Create the shared page layout with sidebar navigation."""
    apply_theme()

    with ui.header().classes("items-center justify-between px-4 bg-primary"):
        with ui.row().classes("items-center gap-3"):
            ui.icon("inventory_2", size="md").classes("text-white")
            ui.label(APP_TITLE).classes("text-h6 text-white font-bold")

        # Global search filters the dashboard list by name
        _search = ui.input(placeholder="Search products...", value=search or "").classes(
            "w-64"
        ).props("dark dense standout='bg-white/10' input-class='text-white' clearable")
        _search.props('prepend-inner-icon="search"')

        def _do_global_search(e=None):
            q = (_search.value or "").strip()
            ui.navigate.to(f"/?search={quote(q)}" if q else "/")

        _search.on("keydown.enter", _do_global_search)

    with ui.left_drawer(value=True).classes("bg-grey-1") as drawer:
        drawer.props("width=240 bordered")
        ui.element("div").classes("h-3")

        _nav_link("Dashboard", "dashboard", "/")
        _nav_link("Recycle Bin", "delete_sweep", "/recycle-bin")

    ui.timer(0.1, lambda: ui.run_javascript(_ACTIVE_NAV_JS), once=True)

    content = ui.column().classes("w-full p-6 max-w-7xl mx-auto gap-4")
    return content


def _nav_link(label: str, icon: str, path: str):
    """Render a main sidebar nav item."""
    with ui.link(target=path).classes("no-underline w-full"):
        with ui.row().classes(
            "items-center gap-3 px-4 py-2 rounded-lg w-full "
            f"{HOVER_BG} cursor-pointer"
        ):
            ui.icon(icon).classes("text-secondary")
            ui.label(label).classes("text-body1 text-secondary")
