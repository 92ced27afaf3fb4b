"""Static screen shown when the store connection is not configured."""
from nicegui import ui

from config import REQUIRED_ENV_VARS
from src.ui.layout import apply_theme


def setup_page():
    """Render the 'Configuration Missing' instructions."""
    apply_theme()
    with ui.column().classes("w-full min-h-screen items-center justify-center bg-grey-9 p-6"):
        with ui.card().classes("max-w-md w-full p-10 items-center text-center"):
            ui.icon("warning", size="xl").classes("text-negative")
            ui.label("Configuration Missing").classes("text-h5 font-bold")
            ui.label(
                "Please set the following environment variables in your .env file:"
            ).classes("text-body2 text-secondary")
            with ui.column().classes("w-full bg-grey-2 rounded p-4 gap-1 items-start"):
                for name in REQUIRED_ENV_VARS:
                    ui.label(name).classes("font-mono text-body2")
            ui.label("Check the .env.example file for reference").classes(
                "text-caption text-grey-6"
            )
