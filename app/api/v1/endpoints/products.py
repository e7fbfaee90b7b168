"""
Endpoints públicos de productos.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.deps import get_db, product_filters
from app.core.exceptions import NotFoundException
from app.crud.product import product as crud_product
from app.schemas.common import PaginatedResponse
from app.schemas.listing import ProductFilterSpec
from app.schemas.product import ProductResponse

router = APIRouter()


@router.get("", response_model=PaginatedResponse[ProductResponse])
def list_products(
    filters: ProductFilterSpec = Depends(product_filters),
    db: Session = Depends(get_db)
):
    """
    Listar productos activos.

    Filtros opcionales:
    - search: Texto en nombre o descripciones
    - category_id: Categoría exacta
    - featured / in_stock: Solo destacados / con stock
    - sort_by, sort_order, per_page, page
    """
    return crud_product.get_page(db, spec=filters)


@router.get("/{product_id}", response_model=ProductResponse)
def get_product(
    product_id: int,
    db: Session = Depends(get_db)
):
    """Obtener un producto activo por ID."""
    product = crud_product.get_visible(db, id=product_id)
    if not product:
        raise NotFoundException("Producto no encontrado")
    return product
