"""Standalone backend proxy: the product API without the web UI."""
import logging
import sys

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import APP_HOST, APP_TITLE, LOG_LEVEL, PROXY_PORT, SUPABASE_SERVICE_KEY, SUPABASE_URL
from src.api import proxy_router

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Instantiate the proxy app with permissive CORS for the UI."""
    app = FastAPI(title=f"{APP_TITLE} API", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(proxy_router)
    return app


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=LOG_LEVEL)
    if not SUPABASE_URL or not SUPABASE_SERVICE_KEY:
        logger.error("Missing SUPABASE_URL or SUPABASE_SERVICE_KEY in environment")
        sys.exit(1)
    logger.info("Inventory backend listening on http://localhost:%d", PROXY_PORT)
    uvicorn.run(create_app(), host=APP_HOST, port=PROXY_PORT)
