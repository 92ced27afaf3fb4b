"""Services package."""
from src.services.excel_importer import ImportStaging, build_template, parse_inventory_file
from src.services.inventory_controller import InventoryController, InventoryStats, Prompt
from src.services.product_store import (
    BulkUploadError,
    CreateError,
    DeleteError,
    FetchError,
    ProductStore,
    ProductStoreError,
    RestoreError,
    StoreCapabilities,
    UpdateError,
    is_missing_column_error,
)
from src.services.utils import generate_product_id

__all__ = [
    "ImportStaging",
    "build_template",
    "parse_inventory_file",
    "InventoryController",
    "InventoryStats",
    "Prompt",
    "ProductStore",
    "ProductStoreError",
    "FetchError",
    "CreateError",
    "UpdateError",
    "DeleteError",
    "RestoreError",
    "BulkUploadError",
    "StoreCapabilities",
    "is_missing_column_error",
    "generate_product_id",
]
