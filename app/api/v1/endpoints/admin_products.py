"""
Endpoints de administración de productos.
"""
import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.core.deps import get_db, get_current_admin_user, product_filters
from app.core.exceptions import NotFoundException
from app.crud.product import product as crud_product
from app.models.user import User
from app.schemas.common import MessageResponse, PaginatedResponse
from app.schemas.listing import ProductFilterSpec
from app.schemas.product import ProductCreate, ProductResponse, ProductUpdate

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_product_or_404(db: Session, product_id: int):
    product = crud_product.get(db, id=product_id)
    if not product:
        raise NotFoundException("Producto no encontrado")
    return product


@router.get("", response_model=PaginatedResponse[ProductResponse])
def list_products(
    include_deleted: bool = Query(False, description="Incluir productos eliminados"),
    filters: ProductFilterSpec = Depends(product_filters),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin_user)
):
    """
    Listar todos los productos (activos e inactivos).

    El filtro status permite ver solo activos (true) o inactivos (false).
    """
    return crud_product.get_page(
        db, spec=filters, include_inactive=True, include_deleted=include_deleted
    )


@router.get("/{product_id}", response_model=ProductResponse)
def get_product(
    product_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin_user)
):
    """Obtener un producto (activo o inactivo)."""
    return _get_product_or_404(db, product_id)


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
def create_product(
    product_in: ProductCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin_user)
):
    """
    Crear un producto.

    El slug se genera a partir del nombre y el usuario actual queda como agente.
    """
    product = crud_product.create(db, obj_in=product_in, agent_id=current_user.id)
    logger.info(f"Producto {product.id} creado por usuario {current_user.id}")
    return product


@router.put("/{product_id}", response_model=ProductResponse)
def update_product(
    product_id: int,
    product_in: ProductUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin_user)
):
    """Actualizar un producto. El slug se recalcula si cambia el nombre."""
    product = _get_product_or_404(db, product_id)
    return crud_product.update(db, db_obj=product, obj_in=product_in)


@router.delete("/{product_id}", response_model=MessageResponse)
def delete_product(
    product_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin_user)
):
    """Eliminar un producto (soft delete). Sus imágenes se conservan."""
    if not crud_product.soft_delete(db, id=product_id):
        raise NotFoundException("Producto no encontrado")
    logger.info(f"Producto {product_id} eliminado por usuario {current_user.id}")
    return MessageResponse(message="Producto eliminado exitosamente")


@router.post("/{product_id}/restore", response_model=ProductResponse)
def restore_product(
    product_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin_user)
):
    """Restaurar un producto eliminado."""
    product = crud_product.restore(db, id=product_id)
    if not product:
        raise NotFoundException("Producto no encontrado")
    return product
