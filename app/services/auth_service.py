"""
Servicio de autenticación.
Maneja login y emisión de tokens de acceso.
"""
from sqlalchemy.orm import Session

from app.config import settings
from app.core.exceptions import UnauthorizedException
from app.core.security import create_access_token
from app.crud.user import user as crud_user
from app.schemas.auth import LoginRequest, TokenResponse
from app.schemas.user import UserResponse


def login_user(db: Session, login_data: LoginRequest) -> TokenResponse:
    """
    Autenticar usuario y generar el token de acceso.

    Args:
        db: Sesión de base de datos
        login_data: Credenciales de login

    Returns:
        Token de acceso y datos del usuario

    Raises:
        UnauthorizedException: Si las credenciales son inválidas o la cuenta está desactivada
    """
    user = crud_user.authenticate(
        db, email=login_data.email, password=login_data.password
    )

    if not user:
        raise UnauthorizedException("Email o contraseña incorrectos")

    if not user.is_active:
        raise UnauthorizedException("Tu cuenta está desactivada")

    user = crud_user.touch_last_login(db, user=user)

    access_token = create_access_token(user.id)

    return TokenResponse(
        access_token=access_token,
        expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        user=UserResponse.model_validate(user)
    )
