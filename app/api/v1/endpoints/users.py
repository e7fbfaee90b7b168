"""
Endpoints de usuarios (perfil propio).
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.deps import get_db, get_current_active_user
from app.core.exceptions import BadRequestException
from app.core.security import verify_password
from app.crud.user import user as crud_user
from app.models.user import User
from app.schemas.common import MessageResponse
from app.schemas.user import PasswordUpdate, ProfileUpdate, UserResponse

router = APIRouter()


@router.put("/me/profile", response_model=UserResponse)
def update_profile(
    profile_in: ProfileUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """
    Actualizar el perfil del usuario actual.

    Campos actualizables:
    - name
    - email (debe ser único)
    - phone
    """
    return crud_user.update_profile(db, user=current_user, obj_in=profile_in)


@router.put("/me/password", response_model=MessageResponse)
def update_password(
    password_in: PasswordUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """
    Cambiar la contraseña del usuario actual.

    Requiere la contraseña actual.
    """
    if not verify_password(password_in.current_password, current_user.password_hash):
        raise BadRequestException("La contraseña actual es incorrecta")

    crud_user.update_password(db, user=current_user, new_password=password_in.password)
    return MessageResponse(message="Contraseña actualizada exitosamente")
