"""HTTP API package (backend proxy)."""
from src.api.proxy import router as proxy_router

__all__ = ["proxy_router"]
