"""In-memory view state for the inventory pages.

The controller is the only caller of ``ProductStore``. It keeps the last
successfully loaded list, so a failed request never leaves the UI with a
half-applied change; the failure is posted as a prompt instead.
"""
from __future__ import annotations

import logging
from collections import OrderedDict, deque
from dataclasses import dataclass
from typing import Callable, Literal

from src.models.activity import ActivityEntry, ActivityKind
from src.models.product import (
    ACTIVE_FIELD,
    COST_FIELD,
    ID_FIELD,
    NAME_FIELD,
    QUANTITY_FIELD,
    VISIBILITY_MODES,
    Product,
)
from src.services.excel_importer import ImportStaging
from src.services.product_store import ProductStore, ProductStoreError
from src.services.utils import generate_product_id

logger = logging.getLogger(__name__)

DEFAULT_LOW_STOCK_THRESHOLD = 10
DEFAULT_ACTIVITY_LOG_SIZE = 10
DEFAULT_MAX_SESSIONS = 200


@dataclass(frozen=True)
class Prompt:
    """A pending user interaction: an alert to show or a confirm to answer."""

    kind: Literal["alert", "confirm"]
    message: str
    target: str | None = None


@dataclass(frozen=True)
class InventoryStats:
    total_units: int
    total_value: float
    low_stock_count: int
    unique_products: int


class InventoryController:
    """Owns the product list, filters, prompts and recent activity."""

    def __init__(
        self,
        store: ProductStore,
        *,
        low_stock_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD,
        activity_log_size: int = DEFAULT_ACTIVITY_LOG_SIZE,
    ):
        self.store = store
        self.low_stock_threshold = low_stock_threshold
        self.products: list[Product] = []
        self.visibility: str = "active"
        self.search_query: str = ""
        self.loading = False
        self.editing: Product | None = None
        self.editor_open = False
        self.pending_delete: str | None = None
        self.prompt: Prompt | None = None
        self._activities: deque[ActivityEntry] = deque(maxlen=activity_log_size)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def refresh(self, visibility: str | None = None, quiet: bool = False) -> bool:
        """Reload the list; on failure keep the previous one and alert."""
        mode = visibility or self.visibility
        if not quiet:
            self.loading = True
        try:
            products = self._fetch(mode)
        finally:
            if not quiet:
                self.loading = False
        if products is None:
            return False
        self.products = products
        return True

    def load_deleted(self) -> list[Product] | None:
        """Inactive products, leaving the loaded list and mode untouched."""
        return self._fetch("inactive")

    def _fetch(self, mode: str) -> list[Product] | None:
        try:
            rows = self.store.list_products(mode)
        except ProductStoreError as exc:
            logger.error("Error fetching inventory: %s", exc)
            self._alert(f"Error fetching inventory: {exc}")
            return None
        return [Product.from_row(r) for r in rows]

    def set_visibility(self, mode: str) -> bool:
        if mode not in VISIBILITY_MODES:
            raise ValueError(f"Unknown visibility mode: {mode!r}")
        self.visibility = mode
        return self.refresh(mode, quiet=True)

    # ------------------------------------------------------------------
    # Search & stats (local only)
    # ------------------------------------------------------------------

    def search(self, query: str) -> list[Product]:
        self.search_query = query or ""
        return self.filtered_products()

    def filtered_products(self) -> list[Product]:
        needle = self.search_query.strip().lower()
        if not needle:
            return list(self.products)
        return [p for p in self.products if needle in p.product_name.lower()]

    def stats(self) -> InventoryStats:
        return InventoryStats(
            total_units=sum(p.quantity or 0 for p in self.products),
            total_value=sum(p.total_value for p in self.products),
            low_stock_count=sum(1 for p in self.products if p.quantity < self.low_stock_threshold),
            unique_products=len(self.products),
        )

    # ------------------------------------------------------------------
    # Create / edit
    # ------------------------------------------------------------------

    def open_editor(self, product: Product | None = None) -> None:
        self.editing = product
        self.editor_open = True

    def close_editor(self) -> None:
        self.editing = None
        self.editor_open = False

    def save(self, draft: dict, editing: Product | None = None) -> bool:
        """Create or update a product from form input.

        Quantity below 1 (or missing) and blank names are rejected before
        any request is made, for edits as well as new products. On failure
        the editor stays open.
        """
        target = editing if editing is not None else self.editing
        name = str(draft.get(NAME_FIELD) or "").strip()
        quantity = draft.get(QUANTITY_FIELD)

        if quantity is None or quantity < 1:
            self._alert("Quantity must be at least 1.")
            return False
        if not name:
            self._alert("Product name is required.")
            return False

        payload = {k: v for k, v in draft.items() if v is not None}
        payload[NAME_FIELD] = name

        try:
            if target is not None:
                self.store.update_product(target.product_name, payload)
                self._log("update", f"Manually updated {target.product_name}")
            else:
                payload[ID_FIELD] = generate_product_id()
                self.store.create_product(payload)
                self._log("create", f"Manually added {name}")
        except ProductStoreError as exc:
            logger.error("Error saving product %r: %s", name, exc)
            self._alert(f"Error saving product: {exc}")
            return False

        self.refresh(quiet=True)
        self.close_editor()
        return True

    # ------------------------------------------------------------------
    # Delete / restore
    # ------------------------------------------------------------------

    def request_delete(self, name: str) -> None:
        """Stage *name* for deletion and ask the user to confirm."""
        self.pending_delete = name
        self.prompt = Prompt("confirm", f"Delete {name} from inventory?", target=name)

    def cancel_delete(self) -> None:
        self.pending_delete = None
        if self.prompt is not None and self.prompt.kind == "confirm":
            self.prompt = None

    def confirm_delete(self) -> bool:
        name = self.pending_delete
        self.cancel_delete()
        if name is None:
            return False
        try:
            self.store.delete_product(name)
        except ProductStoreError as exc:
            logger.error("Error deleting product %r: %s", name, exc)
            self._alert(f"Error deleting product: {exc}")
            return False
        self._log("delete", f"Deleted product: {name}")
        self.refresh(quiet=True)
        return True

    def restore(self, name: str) -> bool:
        try:
            self.store.restore_product(name)
        except ProductStoreError as exc:
            logger.error("Error restoring product %r: %s", name, exc)
            self._alert(f"Error restoring product: {exc}")
            return False
        self._log("update", f"Restored product: {name}")
        self.refresh(quiet=True)
        return True

    # ------------------------------------------------------------------
    # Bulk import
    # ------------------------------------------------------------------

    def commit_import(self, staging: ImportStaging) -> bool:
        """Validate the staged rows and upsert them in one request."""
        invalid = staging.invalid_count()
        if invalid:
            self._alert(
                f"Please fix {invalid} invalid rows. All products must have a name, "
                "quantity >= 1, and cost >= 1."
            )
            return False
        batch = staging.prepare_batch()
        if not batch:
            return False
        try:
            self.store.bulk_upsert_products(batch)
        except ProductStoreError as exc:
            logger.error("Error saving %d uploaded rows: %s", len(batch), exc)
            self._alert(f"Error saving uploaded rows: {exc}")
            return False
        staging.clear()
        self._log("create", f"Bulk uploaded {len(batch)} products")
        self.refresh(quiet=True)
        return True

    # ------------------------------------------------------------------
    # Activity & prompts
    # ------------------------------------------------------------------

    @property
    def activities(self) -> list[ActivityEntry]:
        """Most recent first."""
        return list(self._activities)

    def dismiss_prompt(self) -> None:
        self.prompt = None

    def _log(self, kind: ActivityKind, message: str) -> None:
        self._activities.appendleft(ActivityEntry(kind, message))

    def _alert(self, message: str) -> None:
        self.prompt = Prompt("alert", message)


def draft_from_product(product: Product) -> dict:
    """Form values for editing an existing product."""
    return {
        NAME_FIELD: product.product_name,
        QUANTITY_FIELD: product.quantity,
        COST_FIELD: product.cost,
        ACTIVE_FIELD: product.is_active,
    }


class ControllerRegistry:
    """One controller per browser id, evicting the least recently used.

    Args:
        factory: Builds a fresh controller for an unseen browser id.
        max_size: Controllers kept before the oldest is dropped.
    """

    def __init__(
        self,
        factory: Callable[[], InventoryController],
        max_size: int = DEFAULT_MAX_SESSIONS,
    ):
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        self.factory = factory
        self.max_size = max_size
        self._controllers: OrderedDict[str, InventoryController] = OrderedDict()

    def __len__(self) -> int:
        return len(self._controllers)

    def __contains__(self, browser_id: str) -> bool:
        return browser_id in self._controllers

    def get(self, browser_id: str) -> InventoryController:
        controller = self._controllers.get(browser_id)
        if controller is not None:
            self._controllers.move_to_end(browser_id)
            return controller
        controller = self.factory()
        self._controllers[browser_id] = controller
        while len(self._controllers) > self.max_size:
            evicted, _ = self._controllers.popitem(last=False)
            logger.info("Dropped inventory state for browser %s", evicted)
        return controller
