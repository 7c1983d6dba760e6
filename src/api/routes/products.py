"""Product catalog API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status

from src.api.deps import get_product_service
from src.schemas.product import ProductCreate, ProductResponse, ProductUpdate
from src.services.product_service import ProductService

router = APIRouter(prefix="/products", tags=["products"])


@router.get("", response_model=list[ProductResponse])
async def list_products(
    product_service: ProductService = Depends(get_product_service),
) -> list[ProductResponse]:
    """List all products."""
    products = await product_service.list_products()
    return [ProductResponse(**p) for p in products]


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
async def create_product(
    data: ProductCreate,
    product_service: ProductService = Depends(get_product_service),
) -> ProductResponse:
    """Create a new product."""
    product = await product_service.create_product(data.model_dump())
    return ProductResponse(**product)


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(
    product_id: UUID,
    product_service: ProductService = Depends(get_product_service),
) -> ProductResponse:
    """Get a product by ID."""
    product = await product_service.get_product(product_id)
    if not product:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Product not found",
        )

    return ProductResponse(**product)


@router.put("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: UUID,
    data: ProductUpdate,
    product_service: ProductService = Depends(get_product_service),
) -> ProductResponse:
    """Update the fields present in the request body."""
    product = await product_service.update_product(
        product_id, data.model_dump(exclude_unset=True, exclude_none=True)
    )
    if not product:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Product not found",
        )

    return ProductResponse(**product)


@router.delete("/{product_id}", response_model=ProductResponse)
async def delete_product(
    product_id: UUID,
    product_service: ProductService = Depends(get_product_service),
) -> ProductResponse:
    """Delete a product and return it."""
    product = await product_service.delete_product(product_id)
    if not product:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Product not found",
        )

    return ProductResponse(**product)
