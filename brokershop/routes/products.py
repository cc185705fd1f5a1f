"""Product catalogue routes."""
from typing import Optional

from fastapi import APIRouter, Depends, Request, Response

from ..dependencies import EntityId, get_db, require_admin, get_product_service
from ..schemas import ProductCreate, ProductModel, ProductUpdate, ResponseModel

router = APIRouter(tags=["products"])

FILTERED_PATH = "/api/products/filtered::orderBy:{order_by}::sortingDirection:{sorting_direction}"


@router.get("/api/products")
def list_products(db=Depends(get_db)):
    products = get_product_service(db).list_products()
    return ResponseModel.success(
        f"{len(products)} product(s)",
        [ProductModel.from_row(product) for product in products]
    )


# Registered before /api/products/{product_id}; both spellings are in use.
@router.get(FILTERED_PATH)
@router.get(FILTERED_PATH + "/")
def filter_products(
    order_by: str,
    sorting_direction: str,
    search: Optional[str] = None,
    db=Depends(get_db)
):
    """List products matching ``search``, ordered by a field.

    Example:
        /api/products/filtered::orderBy:id::sortingDirection:DESC/?search=category:[1,2];price>70
    """
    products = get_product_service(db).filter_products(search, order_by, sorting_direction)
    return ResponseModel.success(
        f"{len(products)} product(s) found",
        [ProductModel.from_row(product) for product in products]
    )


@router.get("/api/products/{product_id}")
def get_product(product_id: EntityId, db=Depends(get_db)):
    product = get_product_service(db).get_product(product_id)
    return ResponseModel.success(data=ProductModel.from_row(product))


@router.post("/api/admin/products", status_code=201)
def create_product(request: Request, data: ProductCreate, db=Depends(get_db)):
    require_admin(request)

    product = get_product_service(db).create_product(
        title=data.title,
        description=data.description,
        price=data.price,
        quantity=data.quantity,
        category_id=data.category_id,
        image=data.image
    )
    return ResponseModel.success(f"Product {product['id']} created", ProductModel.from_row(product))


@router.patch("/api/admin/products/{product_id}")
def update_product(request: Request, product_id: EntityId, data: ProductUpdate, db=Depends(get_db)):
    """Partially update a product; only fields present in the body change."""
    require_admin(request)

    product = get_product_service(db).update_product(
        product_id, data.model_dump(exclude_unset=True)
    )
    return ResponseModel.success(f"Product {product_id} updated", ProductModel.from_row(product))


@router.delete("/api/admin/products/{product_id}", status_code=204)
def delete_product(request: Request, product_id: EntityId, db=Depends(get_db)):
    require_admin(request)

    get_product_service(db).delete_product(product_id)
    return Response(status_code=204)
