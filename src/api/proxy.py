"""Pass-through product endpoints backed by the service-role key."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any

from fastapi import APIRouter, Body, Depends, Response, status
from fastapi.responses import JSONResponse

from src.models.product import NAME_FIELD
from src.services.product_store import ProductStore, StoreResult

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["products"])


@lru_cache
def get_proxy_store() -> ProductStore:
    """Service-role store shared by all proxy requests."""
    return ProductStore.from_config(use_service_key=True)


@lru_cache
def get_proxy_relation() -> str:
    import config

    return config.PROXY_RELATION


def _store_error(result: StoreResult, fallback: str) -> JSONResponse:
    message = result.message or fallback
    logger.error("Proxy store error: %s", message)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": message},
    )


def _first(data: Any) -> Any:
    if isinstance(data, list):
        return data[0] if data else None
    return data


@router.get("/health", summary="Liveness probe")
def health() -> dict[str, bool]:
    return {"ok": True}


@router.get("/products", summary="List products sorted by name")
def list_products(
    store: ProductStore = Depends(get_proxy_store),
    relation: str = Depends(get_proxy_relation),
):
    result = store.send(
        "GET", relation, params={"select": "*", "order": f"{NAME_FIELD}.asc"}
    )
    if not result.ok:
        return _store_error(result, "Failed to fetch products")
    return result.data or []


@router.post(
    "/products",
    summary="Create a product",
    status_code=status.HTTP_201_CREATED,
)
def create_product(
    product: dict = Body(...),
    store: ProductStore = Depends(get_proxy_store),
    relation: str = Depends(get_proxy_relation),
):
    result = store.send("POST", relation, json=[product])
    if not result.ok:
        return _store_error(result, "Failed to create product")
    return _first(result.data)


@router.patch("/products/{name}", summary="Update the named product")
def update_product(
    name: str,
    updates: dict = Body(...),
    store: ProductStore = Depends(get_proxy_store),
    relation: str = Depends(get_proxy_relation),
):
    result = store.send(
        "PATCH", relation, params={NAME_FIELD: f"eq.{name}"}, json=updates
    )
    if not result.ok:
        return _store_error(result, "Failed to update product")
    return _first(result.data)


@router.delete("/products/{name}", summary="Delete the named product")
def delete_product(
    name: str,
    store: ProductStore = Depends(get_proxy_store),
    relation: str = Depends(get_proxy_relation),
) -> Response:
    result = store.send("DELETE", relation, params={NAME_FIELD: f"eq.{name}"})
    if not result.ok:
        return _store_error(result, "Failed to delete product")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
