"""Application configuration."""
import os
from dotenv import load_dotenv

load_dotenv()


def _env(*names: str, default: str = "") -> str:
    """Return the first non-empty environment variable among *names*."""
    for name in names:
        value = os.getenv(name, "").strip()
        if value:
            return value
    return default


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, default))
    except (TypeError, ValueError):
        return default


def _env_float(name: str) -> float | None:
    raw = os.getenv(name, "").strip()
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError:
        return None


def _env_tristate(name: str) -> bool | None:
    """Parse 'true' / 'false' / 'auto' (or unset) into True / False / None."""
    raw = os.getenv(name, "auto").strip().lower()
    if raw in ("1", "true", "yes", "on"):
        return True
    if raw in ("0", "false", "no", "off"):
        return False
    return None


# Supabase (PostgREST) connection. The VITE_ names are accepted so an
# existing frontend .env file can be reused as-is.
SUPABASE_URL = _env("SUPABASE_URL", "VITE_SUPABASE_URL").rstrip("/")
SUPABASE_ANON_KEY = _env("SUPABASE_ANON_KEY", "VITE_SUPABASE_ANON_KEY")

# Elevated key, only used by the backend proxy
SUPABASE_SERVICE_KEY = _env("SUPABASE_SERVICE_KEY")

# Remote schema
PRODUCTS_TABLE = _env("PRODUCTS_TABLE", default="products")
ACTIVE_VIEW = _env("ACTIVE_VIEW", default="active_products")
PROXY_RELATION = _env("PROXY_RELATION", default=ACTIVE_VIEW)

# None means "auto": detect a missing isActive column from store errors
STORE_HAS_ACTIVE_FLAG = _env_tristate("STORE_HAS_ACTIVE_FLAG")

# Seconds; unset means requests run until the network gives up
STORE_TIMEOUT = _env_float("STORE_TIMEOUT")

# Inventory settings
LOW_STOCK_THRESHOLD = _env_int("LOW_STOCK_THRESHOLD", 10)
ACTIVITY_LOG_SIZE = _env_int("ACTIVITY_LOG_SIZE", 10)
# Per-browser dashboards kept in memory before the least recent is dropped
MAX_BROWSER_SESSIONS = _env_int("MAX_BROWSER_SESSIONS", 200)

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# App settings
APP_TITLE = "Smart Stock"
APP_PORT = _env_int("APP_PORT", 8080)
APP_HOST = os.getenv("APP_HOST", "0.0.0.0")
PROXY_PORT = _env_int("PROXY_PORT", 4000)

# Signs the per-browser id NiceGUI uses to keep one controller per visitor
STORAGE_SECRET = os.getenv("STORAGE_SECRET", "smart-stock-dev-secret")

# Environment variables shown on the setup screen when missing
REQUIRED_ENV_VARS = ("SUPABASE_URL", "SUPABASE_ANON_KEY")


def is_configured() -> bool:
    """True when both store connection parameters are present."""
    return bool(SUPABASE_URL and SUPABASE_ANON_KEY)
