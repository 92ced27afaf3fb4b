"""Supabase (PostgREST) adapter for the products table.

Every public operation either succeeds or raises exactly one
``ProductStoreError`` subclass; nothing is cached locally. The store's
schema is not owned by this code, so writes tolerate missing columns by
retrying once with the offending fields removed.
"""
import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Optional

import requests

from src.models.product import (
    ACTIVE_FIELD,
    ID_FIELD,
    LEGACY_COST_FIELDS,
    NAME_FIELD,
    QUANTITY_FIELD,
    VISIBILITY_MODES,
    normalize_row,
)
from src.services.utils import generate_product_id

logger = logging.getLogger(__name__)


class ProductStoreError(Exception):
    """Raised when a request to the product store fails."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class FetchError(ProductStoreError):
    """Listing products failed on every attempt."""


class CreateError(ProductStoreError):
    """Inserting a product failed."""


class UpdateError(ProductStoreError):
    """Patching a product failed."""


class DeleteError(ProductStoreError):
    """Soft (and fallback hard) delete failed."""


class RestoreError(ProductStoreError):
    """Re-activating a product failed."""


class BulkUploadError(ProductStoreError):
    """The batch upsert was rejected."""


# PostgREST / Postgres phrasing for unknown columns
_MISSING_COLUMN_RE = re.compile(
    r"Could not find the '\w+' column|column .* does not exist|missing column",
    re.IGNORECASE,
)
_ACTIVE_COLUMN_RE = re.compile(re.escape(ACTIVE_FIELD), re.IGNORECASE)


def is_missing_column_error(message: str | None) -> bool:
    """True if a store error message says a column does not exist."""
    return bool(message) and bool(_MISSING_COLUMN_RE.search(message))


def mentions_active_column(message: str | None) -> bool:
    return bool(message) and bool(_ACTIVE_COLUMN_RE.search(message))


@dataclass(frozen=True)
class StoreCapabilities:
    """What the remote schema is known to support.

    ``None`` means unknown: missing columns are then detected from error
    messages on each write.
    """

    has_active_flag: Optional[bool] = None


@dataclass
class StoreResult:
    """Outcome of a single HTTP request against the store."""

    ok: bool
    data: Any = None
    message: str = ""
    status_code: int | None = None


class ProductStore:
    """Typed operations over the remote products table."""

    REST_PATH = "/rest/v1"

    def __init__(
        self,
        base_url: str,
        api_key: str,
        *,
        table: str = "products",
        active_view: str = "active_products",
        capabilities: StoreCapabilities | None = None,
        timeout: float | None = None,
        session: requests.Session | None = None,
    ):
        self.rest_url = base_url.rstrip("/") + self.REST_PATH
        self.api_key = api_key
        self.table = table
        self.active_view = active_view
        self.capabilities = capabilities or StoreCapabilities()
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_config(cls, use_service_key: bool = False) -> "ProductStore":
        """Build a store from ``config``; the proxy uses the service key."""
        import config

        key = config.SUPABASE_SERVICE_KEY if use_service_key else config.SUPABASE_ANON_KEY
        return cls(
            config.SUPABASE_URL,
            key,
            table=config.PRODUCTS_TABLE,
            active_view=config.ACTIVE_VIEW,
            capabilities=StoreCapabilities(has_active_flag=config.STORE_HAS_ACTIVE_FLAG),
            timeout=config.STORE_TIMEOUT,
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def list_products(self, visibility: str = "active") -> list[dict]:
        """Return normalized product rows for a visibility mode.

        ``active`` tries the filtered table, then the active view, then the
        unfiltered table, and keeps rows whose flag is not false.
        ``inactive`` and ``all`` read the whole table once.
        """
        if visibility not in VISIBILITY_MODES:
            raise ValueError(f"Unknown visibility mode: {visibility!r}")

        base_params = {"select": "*", "order": f"{NAME_FIELD}.asc"}

        if visibility == "active":
            attempts = []
            if self.capabilities.has_active_flag is not False:
                attempts.append((self.table, {ACTIVE_FIELD: "eq.true", **base_params}))
            attempts.append((self.active_view, base_params))
            attempts.append((self.table, base_params))
        else:
            attempts = [(self.table, base_params)]

        result = None
        for relation, params in attempts:
            result = self.send("GET", relation, params=params)
            if result.ok:
                break
            logger.warning(
                "Product list query on %s failed (%s): %s",
                relation, result.status_code, result.message,
            )

        if not result.ok:
            raise FetchError(
                f"Failed to fetch inventory: {result.message}", result.status_code
            )

        rows = [normalize_row(r) for r in (result.data or [])]
        if visibility == "active":
            return [r for r in rows if r[ACTIVE_FIELD] is not False]
        if visibility == "inactive":
            return [r for r in rows if r[ACTIVE_FIELD] is False]
        return rows

    def create_product(self, record: dict) -> dict | None:
        """Insert one product and return the row the store created.

        Returns None when the store accepted the insert but sent no row back.
        """
        payload = dict(record)
        if not payload.get(ID_FIELD):
            payload[ID_FIELD] = generate_product_id()
        quantity = payload.get(QUANTITY_FIELD)
        if quantity is None or quantity < 1:
            payload[QUANTITY_FIELD] = 1
        if payload.get(ACTIVE_FIELD) is None:
            payload[ACTIVE_FIELD] = True
        if self.capabilities.has_active_flag is False:
            payload.pop(ACTIVE_FIELD, None)

        result = self._write_with_fallback("POST", payload)
        if not result.ok:
            raise CreateError(
                f"Failed to create product: {result.message}", result.status_code
            )
        return result.data[0] if result.data else None

    def update_product(self, name: str, updates: dict) -> dict | None:
        """Patch the row(s) named *name*; returns the first updated row."""
        payload = dict(updates)
        quantity = payload.get(QUANTITY_FIELD)
        if quantity is not None and quantity < 1:
            payload[QUANTITY_FIELD] = 1
        if self.capabilities.has_active_flag is False:
            payload.pop(ACTIVE_FIELD, None)

        result = self._write_with_fallback("PATCH", payload, params=self._name_filter(name))
        if not result.ok:
            raise UpdateError(
                f"Failed to update product: {result.message}", result.status_code
            )
        return result.data[0] if result.data else None

    def delete_product(self, name: str) -> None:
        """Soft-delete by clearing the active flag.

        Falls back to a hard DELETE when the store has no active-flag column.
        """
        if self.capabilities.has_active_flag is False:
            self._hard_delete(name)
            return

        result = self.send(
            "PATCH", self.table, params=self._name_filter(name), json={ACTIVE_FIELD: False}
        )
        if result.ok:
            return

        if mentions_active_column(result.message) or is_missing_column_error(result.message):
            logger.warning(
                "Soft delete of %r rejected (%s), falling back to hard delete",
                name, result.message,
            )
            self._hard_delete(name)
            return

        raise DeleteError(
            f"Failed to delete (soft) product: {result.message}", result.status_code
        )

    def restore_product(self, name: str) -> None:
        """Set the active flag back to true. No fallback."""
        if self.capabilities.has_active_flag is False:
            raise RestoreError(
                f"Failed to restore product: the {self.table} table has no "
                f"{ACTIVE_FIELD} column"
            )
        result = self.send(
            "PATCH", self.table, params=self._name_filter(name), json={ACTIVE_FIELD: True}
        )
        if not result.ok:
            raise RestoreError(
                f"Failed to restore product: {result.message}", result.status_code
            )

    def bulk_upsert_products(self, records: list[dict]) -> None:
        """Insert-or-merge a batch in a single request; all or nothing."""
        if not records:
            return
        body = [dict(r) for r in records]
        if self.capabilities.has_active_flag is False:
            for row in body:
                row.pop(ACTIVE_FIELD, None)

        result = self.send(
            "POST",
            self.table,
            json=body,
            prefer="resolution=merge-duplicates,return=minimal",
        )
        if not result.ok:
            raise BulkUploadError(
                f"Failed to bulk upsert products: {result.message}", result.status_code
            )
        logger.info("Upserted %d product rows", len(body))

    def probe_capabilities(self) -> StoreCapabilities:
        """Ask the store once whether the active-flag column exists.

        A declared capability is kept as-is; otherwise the probe result
        replaces ``self.capabilities``.
        """
        if self.capabilities.has_active_flag is not None:
            return self.capabilities

        result = self.send("GET", self.table, params={"select": ACTIVE_FIELD, "limit": "1"})
        if result.ok:
            has_flag = True
        elif is_missing_column_error(result.message):
            has_flag = False
        else:
            logger.warning("Schema probe failed, leaving capabilities unknown: %s", result.message)
            return self.capabilities

        self.capabilities = StoreCapabilities(has_active_flag=has_flag)
        logger.info("Store %s active-flag column", "has an" if has_flag else "has no")
        return self.capabilities

    # ------------------------------------------------------------------
    # HTTP plumbing
    # ------------------------------------------------------------------

    def headers(self, prefer: str = "return=representation") -> dict:
        return {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
            "Prefer": prefer,
        }

    def send(
        self,
        method: str,
        relation: str,
        *,
        params: dict | None = None,
        json: Any = None,
        prefer: str = "return=representation",
    ) -> StoreResult:
        """Issue one request; transport failures become a failed result."""
        url = f"{self.rest_url}/{relation}"
        try:
            resp = self.session.request(
                method,
                url,
                params=params,
                json=json,
                headers=self.headers(prefer),
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.error("%s %s failed: %s", method, url, exc)
            return StoreResult(ok=False, message=str(exc))

        if not resp.ok:
            return StoreResult(
                ok=False, message=self._error_message(resp), status_code=resp.status_code
            )

        data = None
        if resp.content:
            try:
                data = resp.json()
            except ValueError:
                data = None
        return StoreResult(ok=True, data=data, status_code=resp.status_code)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _name_filter(name: str) -> dict:
        return {NAME_FIELD: f"eq.{name}"}

    def _hard_delete(self, name: str) -> None:
        result = self.send("DELETE", self.table, params=self._name_filter(name))
        if not result.ok:
            raise DeleteError(
                f"Failed to delete product (hard delete attempted): {result.message}",
                result.status_code,
            )
        logger.info("Hard-deleted product %r", name)

    def _write_once(self, method: str, body: dict, params: dict | None) -> StoreResult:
        """Write to the base table, trying the active view as a last resort.

        A schema mismatch on the table is returned as-is so the caller can
        retry with a narrower payload.
        """
        result = self.send(method, self.table, params=params, json=body)
        if result.ok or is_missing_column_error(result.message):
            return result
        logger.warning(
            "%s on %s failed (%s), trying %s", method, self.table, result.message, self.active_view
        )
        via_view = self.send(method, self.active_view, params=params, json=body)
        return via_view if via_view.ok else result

    def _write_with_fallback(
        self, method: str, body: dict, params: dict | None = None
    ) -> StoreResult:
        result = self._write_once(method, body, params)
        if result.ok or not is_missing_column_error(result.message):
            return result

        cleaned = self._strip_unknown_fields(body, result.message)
        logger.warning(
            "Store rejected a column (%s); retrying with fields %s",
            result.message, sorted(cleaned),
        )
        return self._write_once(method, cleaned, params)

    @staticmethod
    def _strip_unknown_fields(body: dict, message: str) -> dict:
        cleaned = dict(body)
        for legacy in LEGACY_COST_FIELDS:
            cleaned.pop(legacy, None)
        if mentions_active_column(message):
            cleaned.pop(ACTIVE_FIELD, None)
        return cleaned

    @staticmethod
    def _error_message(resp) -> str:
        """Extract the store's error text, falling back to the status text."""
        try:
            body = resp.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            for key in ("message", "hint", "details", "error"):
                if body.get(key):
                    return str(body[key])
            return json.dumps(body)
        return resp.reason or f"HTTP {resp.status_code}"
