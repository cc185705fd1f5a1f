"""Category routes."""
from fastapi import APIRouter, Depends, Request, Response

from ..dependencies import EntityId, get_db, require_admin, get_category_service
from ..schemas import CategoryCreate, CategoryModel, ResponseModel

router = APIRouter(tags=["categories"])


@router.get("/api/categories")
def list_categories(db=Depends(get_db)):
    categories = get_category_service(db).list_categories()
    return ResponseModel.success(
        f"{len(categories)} category(ies)",
        [CategoryModel(**category) for category in categories]
    )


@router.post("/api/admin/categories", status_code=201)
def create_category(request: Request, data: CategoryCreate, db=Depends(get_db)):
    require_admin(request)

    category = get_category_service(db).create_category(data.name)
    return ResponseModel.success(f"Category {category['name']} created", CategoryModel(**category))


@router.put("/api/admin/categories/{category_id}")
def rename_category(request: Request, category_id: EntityId, data: CategoryCreate, db=Depends(get_db)):
    require_admin(request)

    category = get_category_service(db).rename_category(category_id, data.name)
    return ResponseModel.success(f"Category {category_id} updated", CategoryModel(**category))


@router.delete("/api/admin/categories/{category_id}", status_code=204)
def delete_category(request: Request, category_id: EntityId, db=Depends(get_db)):
    """Delete a category that has no products."""
    require_admin(request)

    get_category_service(db).delete_category(category_id)
    return Response(status_code=204)
