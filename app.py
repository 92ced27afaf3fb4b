"""Smart Stock inventory manager - Main entry point."""
import logging

from nicegui import app, ui

from config import (
    APP_HOST,
    APP_PORT,
    APP_TITLE,
    LOG_LEVEL,
    STORAGE_SECRET,
    SUPABASE_SERVICE_KEY,
    is_configured,
)
from src.api import proxy_router
from src.ui.pages.dashboard import dashboard_page
from src.ui.pages.recycle_bin import recycle_bin_page
from src.ui.pages.setup import setup_page
from src.ui.state import probe_store

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Serve the product API alongside the UI when an elevated key is present
if SUPABASE_SERVICE_KEY:
    app.include_router(proxy_router)
    logger.info("Backend proxy mounted at /api")


@ui.page("/")
def index(search: str | None = None):
    if not is_configured():
        setup_page()
        return
    dashboard_page(search=search)


@ui.page("/recycle-bin")
def recycle_bin_view():
    if not is_configured():
        setup_page()
        return
    recycle_bin_page()


@app.get("/_health")
async def health_check():
    return {"status": "ok", "app": "smart-stock", "configured": is_configured()}


if is_configured():
    app.on_startup(probe_store)
else:
    logger.warning("SUPABASE_URL / SUPABASE_ANON_KEY missing; serving setup screen only")

ui.run(
    title=APP_TITLE,
    host=APP_HOST,
    port=APP_PORT,
    reload=False,
    dark=False,
    storage_secret=STORAGE_SECRET,
)
