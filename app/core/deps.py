"""
Dependencias comunes de FastAPI.
"""
from typing import Generator, Optional
from fastapi import Depends, HTTPException, Query, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from jose import JWTError

from app.db.session import SessionLocal
from app.core.security import ACCESS_TOKEN_TYPE, decode_token
from app.schemas.listing import BlogFilterSpec, PageSpec, ProductFilterSpec, build_filter_spec

security = HTTPBearer()


def get_db() -> Generator:
    """
    Dependencia que proporciona una sesión de base de datos.

    Yields:
        Session: Sesión de SQLAlchemy
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


async def get_current_user_id(
    credentials: HTTPAuthorizationCredentials = Depends(security)
) -> int:
    """
    Obtener el ID del usuario actual desde el JWT.

    Args:
        credentials: Credenciales HTTP Bearer

    Returns:
        ID del usuario

    Raises:
        HTTPException: Si el token es inválido
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="No se pudieron validar las credenciales",
        headers={"WWW-Authenticate": "Bearer"},
    )

    try:
        payload = decode_token(credentials.credentials)

        user_id: Optional[str] = payload.get("sub")
        token_type: Optional[str] = payload.get("type")

        if user_id is None or token_type != ACCESS_TOKEN_TYPE:
            raise credentials_exception

        return int(user_id)

    except (JWTError, ValueError):
        raise credentials_exception


async def get_current_user(
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id)
):
    """
    Obtener el usuario actual completo desde la base de datos.

    Raises:
        HTTPException: Si el usuario no existe o fue eliminado
    """
    # Importar aquí para evitar importación circular
    from app.models.user import User

    user = db.query(User).filter(
        User.id == user_id,
        User.deleted_at.is_(None)
    ).first()

    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Usuario no encontrado",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return user


async def get_current_active_user(
    current_user = Depends(get_current_user)
):
    """
    Verificar que el usuario actual esté activo.

    Raises:
        HTTPException: Si el usuario está desactivado
    """
    if not current_user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Usuario inactivo"
        )

    return current_user


async def get_current_admin_user(
    current_user = Depends(get_current_active_user)
):
    """
    Verificar que el usuario actual tenga acceso al panel (administrador o agente).

    Returns:
        Usuario privilegiado

    Raises:
        HTTPException: Si el usuario no tiene permisos
    """
    if not current_user.is_admin():
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="No tiene permisos de administrador"
        )

    return current_user


# Los filtros llegan como texto para aceptar el valor "undefined" del frontend;
# FilterSpec se encarga de descartarlo y convertir los tipos.

def product_filters(
    search: Optional[str] = Query(None),
    category_id: Optional[str] = Query(None),
    status: Optional[str] = Query(None),
    featured: Optional[str] = Query(None),
    in_stock: Optional[str] = Query(None),
    sort_by: Optional[str] = Query(None),
    sort_order: Optional[str] = Query(None),
    per_page: Optional[str] = Query(None),
    page: Optional[str] = Query(None),
) -> ProductFilterSpec:
    """Filtros del listado de productos."""
    return build_filter_spec(
        ProductFilterSpec,
        search=search, category_id=category_id, status=status,
        featured=featured, in_stock=in_stock,
        sort_by=sort_by, sort_order=sort_order,
        per_page=per_page, page=page,
    )


def blog_filters(
    search: Optional[str] = Query(None),
    category_id: Optional[str] = Query(None),
    status: Optional[str] = Query(None),
    author_id: Optional[str] = Query(None),
    sort_by: Optional[str] = Query(None),
    sort_order: Optional[str] = Query(None),
    per_page: Optional[str] = Query(None),
    page: Optional[str] = Query(None),
) -> BlogFilterSpec:
    """Filtros del listado de blogs."""
    return build_filter_spec(
        BlogFilterSpec,
        search=search, category_id=category_id, status=status,
        author_id=author_id,
        sort_by=sort_by, sort_order=sort_order,
        per_page=per_page, page=page,
    )


def category_product_filters(
    search: Optional[str] = Query(None),
    status: Optional[str] = Query(None),
    featured: Optional[str] = Query(None),
    in_stock: Optional[str] = Query(None),
    sort_by: Optional[str] = Query(None),
    sort_order: Optional[str] = Query(None),
    per_page: Optional[str] = Query(None),
    page: Optional[str] = Query(None),
) -> ProductFilterSpec:
    """Filtros de los productos de una categoría (la categoría viene en la ruta)."""
    return build_filter_spec(
        ProductFilterSpec,
        search=search, status=status,
        featured=featured, in_stock=in_stock,
        sort_by=sort_by, sort_order=sort_order,
        per_page=per_page, page=page,
    )


def page_params(
    per_page: Optional[str] = Query(None),
    page: Optional[str] = Query(None),
) -> PageSpec:
    """Paginación simple para listados sin filtros."""
    return build_filter_spec(PageSpec, per_page=per_page, page=page)
