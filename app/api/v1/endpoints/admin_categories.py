"""
Endpoints de administración de categorías.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.deps import get_db, get_current_admin_user
from app.core.exceptions import NotFoundException
from app.crud.category import category as crud_category
from app.models.user import User
from app.schemas.catalog import CategoryCreate, CategoryResponse, CategoryUpdate
from app.schemas.common import MessageResponse

router = APIRouter()


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
def create_category(
    category_in: CategoryCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin_user)
):
    """
    Crear una nueva categoría.
    El slug se genera a partir del nombre.
    """
    return crud_category.create(db, obj_in=category_in)


@router.get("/{category_id}", response_model=CategoryResponse)
def get_category(
    category_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin_user)
):
    """Obtener una categoría (activa o no)."""
    category = crud_category.get(db, id=category_id)
    if not category:
        raise NotFoundException("Categoría no encontrada")
    return category


@router.put("/{category_id}", response_model=CategoryResponse)
def update_category(
    category_id: int,
    category_in: CategoryUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin_user)
):
    """Actualizar una categoría existente."""
    category = crud_category.get(db, id=category_id)
    if not category:
        raise NotFoundException("Categoría no encontrada")
    return crud_category.update(db, db_obj=category, obj_in=category_in)


@router.delete("/{category_id}", response_model=MessageResponse)
def delete_category(
    category_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin_user)
):
    """Eliminar una categoría (soft delete)."""
    if not crud_category.soft_delete(db, id=category_id):
        raise NotFoundException("Categoría no encontrada")
    return MessageResponse(message="Categoría eliminada exitosamente")
