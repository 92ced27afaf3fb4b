"""Recent activity list."""
from nicegui import ui

from src.models.activity import ActivityEntry
from src.ui.components.helpers import CARD_CLASSES, section_header

_ICONS = {
    "create": ("add_circle", "text-positive"),
    "update": ("sync", "text-primary"),
    "delete": ("remove_circle", "text-negative"),
    "check": ("visibility", "text-grey-6"),
}


def activity_feed(activities: list[ActivityEntry]):
    with ui.card().classes(CARD_CLASSES):
        section_header("Recent Activity", icon="timeline")
        if not activities:
            ui.label("No recent activity recorded.").classes(
                "text-body2 text-grey-6 italic w-full text-center py-4"
            )
            return
        for entry in activities:
            icon, color = _ICONS.get(entry.kind, _ICONS["check"])
            with ui.row().classes("items-center gap-3 w-full no-wrap"):
                ui.icon(icon, size="sm").classes(color)
                with ui.column().classes("gap-0 flex-1 min-w-0"):
                    ui.label(entry.message).classes("text-body2 font-medium ellipsis")
                    ui.label(entry.timestamp.strftime("%H:%M")).classes(
                        "text-caption text-grey-6 uppercase"
                    )
