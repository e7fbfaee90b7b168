"""
Endpoints públicos de categorías.
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.deps import category_product_filters, get_db
from app.core.exceptions import NotFoundException
from app.crud.category import category as crud_category
from app.crud.product import product as crud_product
from app.schemas.catalog import CategoryListResponse
from app.schemas.common import PaginatedResponse
from app.schemas.listing import ProductFilterSpec
from app.schemas.product import ProductResponse

router = APIRouter()


@router.get("", response_model=CategoryListResponse)
def get_categories(
    parent_only: bool = Query(False, description="Solo categorías raíz"),
    db: Session = Depends(get_db)
):
    """
    Obtener categorías activas con sus subcategorías activas.
    Ordenadas por sort_order y nombre. No requiere autenticación.
    """
    return {"categories": crud_category.get_active(db, parent_only=parent_only)}


@router.get("/{category_id}/products", response_model=PaginatedResponse[ProductResponse])
def get_category_products(
    category_id: int,
    filters: ProductFilterSpec = Depends(category_product_filters),
    db: Session = Depends(get_db)
):
    """
    Productos activos de una categoría (sin incluir subcategorías).

    Raises:
        404: Si la categoría no existe o está inactiva
    """
    category = crud_category.get(db, id=category_id)
    if not category or not category.is_active:
        raise NotFoundException("Categoría no encontrada")

    spec = filters.model_copy(update={"category_id": category_id})
    return crud_product.get_page(db, spec=spec)
