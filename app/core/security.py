"""
Hash de contraseñas (bcrypt) y tokens de acceso JWT del panel y la tienda.
"""
from datetime import datetime, timedelta
from typing import Any, Dict, Optional

from jose import jwt
from passlib.context import CryptContext

from app.config import settings

ACCESS_TOKEN_TYPE = "access"

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def create_access_token(user_id: int, expires_delta: Optional[timedelta] = None) -> str:
    """
    Emitir el token de acceso de un usuario.

    Args:
        user_id: ID del usuario (se guarda en "sub" como texto)
        expires_delta: Vigencia; por defecto ACCESS_TOKEN_EXPIRE_MINUTES

    Returns:
        Token JWT firmado con SECRET_KEY
    """
    lifetime = expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    claims = {
        "sub": str(user_id),
        "type": ACCESS_TOKEN_TYPE,
        "exp": datetime.utcnow() + lifetime,
    }
    return jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_token(token: str) -> Dict[str, Any]:
    """Decodificar un token; lanza JWTError si la firma o la vigencia fallan."""
    return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
