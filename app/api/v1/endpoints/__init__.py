"""
Endpoints de la API v1.
"""
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

__all__ = [
    "auth",
    "users",
    "categories",
    "products",
    "blogs",
    "admin_categories",
    "admin_products",
    "admin_blogs",
    "admin_users",
    "images",
    "dashboard",
]
