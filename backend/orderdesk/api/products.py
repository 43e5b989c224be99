"""
Products API Endpoints
Product creation, lookup and deletion

Author: TM3
Date: 2025-10-17
"""
from fastapi import APIRouter, Depends

from orderdesk.api.dependencies import get_catalog_service
from orderdesk.api.schemas import ProductCreate
from orderdesk.services.catalog_service import CatalogService

router = APIRouter()


@router.post("", status_code=201, summary="Create a new product")
def create_product(
    body: ProductCreate,
    service: CatalogService = Depends(get_catalog_service)
):
    """
    Add a product to the catalog

    Returns 400 if name, description, price or stock is missing or invalid.
    """
    product = service.create_product(body.name, body.description, body.price, body.stock)
    return product.to_dict()


@router.get("/{product_id}", summary="Get a product by ID")
def get_product(
    product_id: str,
    service: CatalogService = Depends(get_catalog_service)
):
    return service.get_product(product_id).to_dict()


@router.delete("/{product_id}", summary="Delete a product by ID")
def delete_product(
    product_id: str,
    service: CatalogService = Depends(get_catalog_service)
):
    """
    Delete a product and remove it from current orders

    Order totals are not recalculated.
    """
    removed = service.delete_product(product_id)
    return {
        "message": "Product deleted and removed from current orders",
        "removedLineItems": removed
    }
