"""Tests for the inventory view-state controller."""

import pytest

from src.models.product import Product
from src.services.excel_importer import ImportStaging
from src.services.inventory_controller import (
    ControllerRegistry,
    InventoryController,
    InventoryStats,
    draft_from_product,
)


def _names(controller):
    return [p.product_name for p in controller.products]


class TestRefresh:

    def test_refresh_loads_active_products(self, controller):
        assert controller.refresh() is True
        assert _names(controller) == ["Anvil", "Bolt"]
        assert all(isinstance(p, Product) for p in controller.products)
        assert controller.loading is False

    def test_failed_refresh_keeps_previous_list(self, controller, backend):
        controller.refresh()
        backend.fail("GET", "products", message="database is asleep")
        backend.fail("GET", "active_products", message="database is asleep")

        assert controller.refresh() is False
        assert _names(controller) == ["Anvil", "Bolt"]
        assert controller.prompt.kind == "alert"
        assert controller.prompt.message.startswith("Error fetching inventory:")
        assert "database is asleep" in controller.prompt.message
        assert controller.loading is False

    def test_set_visibility_reloads_in_that_mode(self, controller):
        controller.set_visibility("inactive")
        assert controller.visibility == "inactive"
        assert _names(controller) == ["Crate"]

        controller.set_visibility("all")
        assert _names(controller) == ["Anvil", "Bolt", "Crate"]

    def test_unknown_visibility_is_rejected(self, controller):
        with pytest.raises(ValueError):
            controller.set_visibility("deleted")


class TestSearchAndStats:

    def test_search_is_case_insensitive_substring(self, controller):
        controller.refresh()
        assert [p.product_name for p in controller.search("BOL")] == ["Bolt"]
        assert [p.product_name for p in controller.search("n")] == ["Anvil"]

    def test_blank_search_returns_everything(self, controller):
        controller.refresh()
        controller.search("anvil")
        assert len(controller.search("  ")) == 2
        assert len(controller.search("")) == 2

    def test_search_makes_no_requests(self, controller, backend):
        controller.refresh()
        calls = len(backend.calls)
        controller.search("bolt")
        assert len(backend.calls) == calls

    def test_stats(self, controller):
        controller.refresh()
        assert controller.stats() == InventoryStats(
            total_units=43,
            total_value=380.0,
            low_stock_count=1,
            unique_products=2,
        )

    def test_low_stock_threshold_is_configurable(self, store):
        controller = InventoryController(store, low_stock_threshold=50)
        controller.refresh()
        assert controller.stats().low_stock_count == 2

    def test_stats_of_empty_list(self, controller):
        assert controller.stats() == InventoryStats(0, 0, 0, 0)


class TestSave:

    @pytest.mark.parametrize("quantity", [None, 0, -2])
    def test_low_quantity_is_rejected_without_request(self, controller, backend, quantity):
        ok = controller.save({"product_name": "Gizmo", "quantity": quantity, "cost": 3})
        assert ok is False
        assert controller.prompt.message == "Quantity must be at least 1."
        assert backend.calls == []

    def test_blank_name_is_rejected_on_create(self, controller, backend):
        assert controller.save({"product_name": "  ", "quantity": 2, "cost": 3}) is False
        assert backend.calls == []

    @pytest.mark.parametrize("name", ["", "   ", None])
    def test_blank_name_is_rejected_on_edit(self, controller, backend, name):
        controller.refresh()
        bolt = next(p for p in controller.products if p.product_name == "Bolt")
        calls = len(backend.calls)

        ok = controller.save({"product_name": name, "quantity": 5, "cost": 1.0}, editing=bolt)

        assert ok is False
        assert controller.prompt.message == "Product name is required."
        assert len(backend.calls) == calls
        assert backend.row("Bolt")["quantity"] == 40

    def test_edit_sends_stripped_name(self, controller, backend):
        controller.refresh()
        bolt = next(p for p in controller.products if p.product_name == "Bolt")
        controller.save({"product_name": " Bolt M4 ", "quantity": 5, "cost": 1.0}, editing=bolt)
        assert backend.calls_to("PATCH")[0]["json"]["product_name"] == "Bolt M4"
        assert backend.row("Bolt M4") is not None

    def test_create_logs_and_reloads(self, controller, backend):
        controller.open_editor()
        ok = controller.save({"product_name": " Gizmo ", "quantity": 4, "cost": 2.5})

        assert ok is True
        stored = backend.row("Gizmo")
        assert stored["quantity"] == 4
        assert stored["product_id"]
        assert "Gizmo" in _names(controller)
        assert controller.editor_open is False
        entry = controller.activities[0]
        assert entry.kind == "create"
        assert entry.message == "Manually added Gizmo"

    def test_update_targets_the_product_being_edited(self, controller, backend):
        controller.refresh()
        bolt = next(p for p in controller.products if p.product_name == "Bolt")
        controller.open_editor(bolt)

        draft = draft_from_product(bolt)
        draft["quantity"] = 12
        assert controller.save(draft) is True

        assert backend.row("Bolt")["quantity"] == 12
        assert backend.calls_to("PATCH")[0]["params"] == {"product_name": "eq.Bolt"}
        assert controller.activities[0].kind == "update"
        assert controller.activities[0].message == "Manually updated Bolt"
        assert controller.editing is None

    def test_failed_save_keeps_editor_open(self, controller, backend):
        backend.fail("POST", "products", message="insert blocked")
        controller.open_editor()

        ok = controller.save({"product_name": "Gizmo", "quantity": 1, "cost": 1})

        assert ok is False
        assert controller.editor_open is True
        assert controller.prompt.kind == "alert"
        assert controller.prompt.message == (
            "Error saving product: Failed to create product: insert blocked"
        )
        assert controller.activities == []


class TestDelete:

    def test_request_delete_asks_for_confirmation(self, controller, backend):
        controller.request_delete("Bolt")
        assert controller.pending_delete == "Bolt"
        assert controller.prompt.kind == "confirm"
        assert controller.prompt.message == "Delete Bolt from inventory?"
        assert controller.prompt.target == "Bolt"
        assert backend.calls == []

    def test_cancel_leaves_product_untouched(self, controller, backend):
        controller.request_delete("Bolt")
        controller.cancel_delete()
        assert controller.pending_delete is None
        assert controller.prompt is None
        assert backend.row("Bolt")["isActive"] is True

    def test_confirm_soft_deletes_and_logs(self, controller, backend):
        controller.refresh()
        controller.request_delete("Bolt")

        assert controller.confirm_delete() is True

        assert backend.row("Bolt")["isActive"] is False
        assert "Bolt" not in _names(controller)
        assert controller.activities[0].kind == "delete"
        assert controller.activities[0].message == "Deleted product: Bolt"
        assert controller.prompt is None

    def test_confirm_without_request_does_nothing(self, controller, backend):
        assert controller.confirm_delete() is False
        assert backend.calls == []

    def test_failed_delete_alerts(self, controller, backend):
        backend.fail("PATCH", "products", message="permission denied")
        controller.request_delete("Bolt")
        assert controller.confirm_delete() is False
        assert controller.prompt.kind == "alert"
        assert "permission denied" in controller.prompt.message
        assert controller.activities == []

    def test_restore_returns_product_to_active(self, controller, backend):
        controller.set_visibility("inactive")
        assert controller.restore("Crate") is True

        assert backend.row("Crate")["isActive"] is True
        assert _names(controller) == []
        assert controller.activities[0].kind == "update"
        assert controller.activities[0].message == "Restored product: Crate"

    def test_failed_restore_alerts(self, legacy_store):
        controller = InventoryController(legacy_store)
        assert controller.restore("Crate") is False
        assert controller.prompt.message.startswith("Error restoring product:")


class TestActivityLog:

    def test_log_keeps_ten_newest_first(self, controller):
        for i in range(12):
            controller.save({"product_name": f"Part {i}", "quantity": 1, "cost": 1})

        messages = [a.message for a in controller.activities]
        assert len(messages) == 10
        assert messages[0] == "Manually added Part 11"
        assert messages[-1] == "Manually added Part 2"

    def test_log_size_is_configurable(self, store):
        controller = InventoryController(store, activity_log_size=2)
        for name in ("Bolt", "Anvil", "Bolt"):
            controller.restore(name)
        assert len(controller.activities) == 2

    def test_dismiss_prompt(self, controller):
        controller.save({"product_name": "x", "quantity": 0})
        controller.dismiss_prompt()
        assert controller.prompt is None


class TestCommitImport:

    def test_invalid_rows_block_the_upload(self, controller, backend):
        staging = ImportStaging([
            {"product_name": "", "quantity": 3, "cost": 2},
            {"product_name": "Sprocket", "quantity": 0, "cost": 2},
            {"product_name": "Gear", "quantity": 2, "cost": 2},
        ])
        assert controller.commit_import(staging) is False
        assert controller.prompt.message == (
            "Please fix 2 invalid rows. All products must have a name, "
            "quantity >= 1, and cost >= 1."
        )
        assert backend.calls == []
        assert len(staging) == 3

    def test_successful_upload_clears_staging(self, controller, backend):
        staging = ImportStaging([
            {"product_name": "Bolt", "quantity": 5, "cost": 1},
            {"product_name": " Sprocket ", "quantity": 2, "cost": 4},
        ])
        assert controller.commit_import(staging) is True

        assert len(staging) == 0
        assert backend.row("Sprocket")["isActive"] is True
        assert backend.row("Bolt")["quantity"] == 5
        assert "Sprocket" in _names(controller)
        assert controller.activities[0].kind == "create"
        assert controller.activities[0].message == "Bulk uploaded 2 products"

    def test_failed_upload_keeps_staging(self, controller, backend):
        backend.fail("POST", "products", message="payload too large")
        staging = ImportStaging([{"product_name": "Sprocket", "quantity": 2, "cost": 4}])

        assert controller.commit_import(staging) is False
        assert len(staging) == 1
        assert controller.prompt.message.startswith("Error saving uploaded rows:")
        assert backend.row("Sprocket") is None

    def test_empty_staging_is_a_no_op(self, controller, backend):
        assert controller.commit_import(ImportStaging()) is False
        assert backend.calls == []


def test_draft_from_product():
    product = Product("p1", "Bolt", quantity=4, cost=0.5, is_active=False)
    assert draft_from_product(product) == {
        "product_name": "Bolt",
        "quantity": 4,
        "cost": 0.5,
        "isActive": False,
    }


class TestLoadDeleted:

    def test_returns_inactive_without_touching_mode_or_list(self, controller):
        controller.refresh()

        deleted = controller.load_deleted()

        assert [p.product_name for p in deleted] == ["Crate"]
        assert controller.visibility == "active"
        assert _names(controller) == ["Anvil", "Bolt"]
        assert controller.stats().unique_products == 2

    def test_failure_alerts_and_returns_none(self, controller, backend):
        backend.fail("GET", "products", message="timeout")
        assert controller.load_deleted() is None
        assert controller.prompt.message.startswith("Error fetching inventory:")


class TestControllerRegistry:

    @pytest.fixture
    def registry(self, store):
        return ControllerRegistry(lambda: InventoryController(store), max_size=2)

    def test_same_browser_gets_same_controller(self, registry):
        assert registry.get("a") is registry.get("a")
        assert len(registry) == 1

    def test_least_recently_used_is_evicted(self, registry):
        first = registry.get("a")
        registry.get("b")
        registry.get("a")
        registry.get("c")

        assert len(registry) == 2
        assert "b" not in registry
        assert registry.get("a") is first

    def test_size_never_exceeds_bound(self, registry):
        for i in range(50):
            registry.get(f"browser-{i}")
        assert len(registry) == 2

    def test_bound_must_be_positive(self, store):
        with pytest.raises(ValueError):
            ControllerRegistry(lambda: InventoryController(store), max_size=0)
