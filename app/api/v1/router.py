"""
Router principal de la API v1.
Incluye todos los endpoints de la aplicación.
"""
from fastapi import APIRouter

from app.api.v1.endpoints import (
    auth,
    users,
    categories,
    products,
    blogs,
    admin_categories,
    admin_products,
    admin_blogs,
    admin_users,
    images,
    dashboard,
)

api_router = APIRouter()

# ============================================================================
# AUTENTICACIÓN
# ============================================================================
api_router.include_router(
    auth.router,
    prefix="/auth",
    tags=["Autenticación"]
)

# ============================================================================
# USUARIOS
# ============================================================================
api_router.include_router(
    users.router,
    prefix="/users",
    tags=["Usuarios"]
)

# ============================================================================
# CATÁLOGO PÚBLICO
# ============================================================================
api_router.include_router(
    categories.router,
    prefix="/categories",
    tags=["Catálogo"]
)

api_router.include_router(
    products.router,
    prefix="/products",
    tags=["Catálogo"]
)

api_router.include_router(
    blogs.router,
    prefix="/blogs",
    tags=["Blog"]
)

# ============================================================================
# ADMINISTRACIÓN (Administradores y agentes)
# ============================================================================
api_router.include_router(
    dashboard.router,
    prefix="/admin/dashboard",
    tags=["Administración"]
)

api_router.include_router(
    admin_categories.router,
    prefix="/admin/categories",
    tags=["Administración - Categorías"]
)

api_router.include_router(
    admin_products.router,
    prefix="/admin/products",
    tags=["Administración - Productos"]
)

api_router.include_router(
    admin_blogs.router,
    prefix="/admin/blogs",
    tags=["Administración - Blogs"]
)

api_router.include_router(
    images.router,
    prefix="",  # Ya tiene el prefijo completo en las rutas
    tags=["Administración - Imágenes"]
)

api_router.include_router(
    admin_users.router,
    prefix="/admin/users",
    tags=["Administración - Usuarios"]
)
