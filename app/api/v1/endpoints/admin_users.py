"""
Endpoints de administración de usuarios.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.deps import get_db, get_current_admin_user, page_params
from app.core.exceptions import BadRequestException, NotFoundException
from app.crud.user import user as crud_user
from app.models.user import User
from app.schemas.common import PaginatedResponse
from app.schemas.listing import PageSpec
from app.schemas.user import UserResponse, UserStatusUpdate

router = APIRouter()


@router.get("", response_model=PaginatedResponse[UserResponse])
def list_users(
    paging: PageSpec = Depends(page_params),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin_user)
):
    """Listar usuarios, los más recientes primero."""
    return crud_user.get_page(db, page=paging.page, per_page=paging.per_page)


@router.put("/{user_id}/status", response_model=UserResponse)
def update_user_status(
    user_id: int,
    status_in: UserStatusUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin_user)
):
    """
    Activar o desactivar un usuario.

    Un usuario desactivado no puede iniciar sesión.
    """
    user = crud_user.get(db, id=user_id)
    if not user:
        raise NotFoundException("Usuario no encontrado")

    if user.id == current_user.id and not status_in.is_active:
        raise BadRequestException("No puedes desactivar tu propia cuenta")

    return crud_user.set_active(db, user=user, is_active=status_in.is_active)
