"""Per-browser controller registry and helpers to run store calls off the UI loop."""
import asyncio
import functools
import logging

from nicegui import app, ui

from config import ACTIVITY_LOG_SIZE, LOW_STOCK_THRESHOLD, MAX_BROWSER_SESSIONS
from src.services.inventory_controller import ControllerRegistry, InventoryController
from src.services.product_store import ProductStore

logger = logging.getLogger(__name__)

_store: ProductStore | None = None


def get_store() -> ProductStore:
    """The anon-key store shared by every visitor. Makes no request."""
    global _store
    if _store is None:
        _store = ProductStore.from_config()
    return _store


async def probe_store() -> None:
    """Resolve the store's schema capabilities once, off the event loop."""
    store = get_store()
    capabilities = await run_blocking(store.probe_capabilities)
    logger.info("Store capabilities: %s", capabilities)


def _new_controller() -> InventoryController:
    return InventoryController(
        get_store(),
        low_stock_threshold=LOW_STOCK_THRESHOLD,
        activity_log_size=ACTIVITY_LOG_SIZE,
    )


# Keeps activity and visibility across page navigation for recent visitors
_controllers = ControllerRegistry(_new_controller, max_size=MAX_BROWSER_SESSIONS)


def get_controller() -> InventoryController:
    return _controllers.get(app.storage.browser["id"])


async def run_blocking(fn, *args, **kwargs):
    """Run a blocking controller call in the default executor."""
    loop = asyncio.get_event_loop()
    return await loop.run_in_executor(None, functools.partial(fn, *args, **kwargs))


def show_alert(controller: InventoryController) -> bool:
    """Surface a pending alert as a notification; True if one was shown."""
    prompt = controller.prompt
    if prompt is None or prompt.kind != "alert":
        return False
    ui.notify(prompt.message, type="negative", multi_line=True)
    controller.dismiss_prompt()
    return True
