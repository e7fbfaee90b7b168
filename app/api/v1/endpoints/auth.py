"""
Endpoints de autenticación.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.deps import get_db, get_current_active_user
from app.models.user import User
from app.schemas.auth import LoginRequest, TokenResponse
from app.schemas.common import MessageResponse
from app.schemas.user import UserResponse
from app.services import auth_service

router = APIRouter()


@router.post("/login", response_model=TokenResponse)
def login(
    login_data: LoginRequest,
    db: Session = Depends(get_db)
):
    """
    Autenticar usuario y obtener token de acceso.

    Requiere:
    - Email
    - Contraseña

    Retorna:
    - access_token: Token de acceso
    - user: Datos del usuario autenticado
    """
    return auth_service.login_user(db, login_data)


@router.get("/me", response_model=UserResponse)
def get_me(current_user: User = Depends(get_current_active_user)):
    """Obtener el usuario autenticado."""
    return current_user


@router.post("/logout", response_model=MessageResponse)
def logout(current_user: User = Depends(get_current_active_user)):
    """
    Cerrar sesión.

    Los tokens no se guardan en servidor: el cliente debe descartar el suyo.
    """
    return MessageResponse(message="Sesión cerrada exitosamente")
