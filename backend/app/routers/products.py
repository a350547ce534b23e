from fastapi import APIRouter, Depends, Query
from app.schemas.product import (
    MessageResponse,
    ProductCreate,
    ProductListResponse,
    ProductOut,
    ProductResponse,
    ProductUpdate,
)
from app.services.product_query import parse_pagination
from app.services.product_service import ProductService, get_product_service
from app.services.validation import parse_product_id

router = APIRouter(prefix="/products", tags=["products"])


@router.post("", response_model=ProductResponse, status_code=201)
async def create_product(
    payload: ProductCreate,
    service: ProductService = Depends(get_product_service),
):
    product = await service.create(payload)
    return ProductResponse(
        message="Product added successfully!",
        product=ProductOut.model_validate(product)
    )


@router.get("", response_model=ProductListResponse)
async def list_products(
    page: str | None = Query(None),
    limit: str | None = Query(None),
    search: str | None = Query(None),
    service: ProductService = Depends(get_product_service),
):
    # Raw strings; parse_pagination rejects non-integers with a 400
    pagination = parse_pagination(page, limit)
    result = await service.list_products(pagination, search)

    return ProductListResponse(
        total_items=result.total_items,
        total_pages=result.total_pages,
        current_page=result.current_page,
        products=[ProductOut.model_validate(p) for p in result.items]
    )


@router.get("/{product_id}", response_model=ProductOut)
async def get_product(
    product_id: str,
    service: ProductService = Depends(get_product_service),
):
    product = await service.get(parse_product_id(product_id))
    return ProductOut.model_validate(product)


@router.put("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: str,
    payload: ProductUpdate | None = None,
    service: ProductService = Depends(get_product_service),
):
    # No body means no changes
    product = await service.update(parse_product_id(product_id), payload or ProductUpdate())
    return ProductResponse(
        message="Product updated successfully!",
        product=ProductOut.model_validate(product)
    )


@router.delete("/{product_id}", response_model=MessageResponse)
async def delete_product(
    product_id: str,
    service: ProductService = Depends(get_product_service),
):
    await service.delete(parse_product_id(product_id))
    return MessageResponse(message="Product deleted successfully!")
