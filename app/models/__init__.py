"""
Módulo de modelos ORM.
Importa todos los modelos para que SQLAlchemy los reconozca.
"""
from app.db.base import Base

# Usuarios
from app.models.user import User

# Catálogo
from app.models.category import Category
from app.models.product import Product
from app.models.product_image import ProductImage

# Blogs
from app.models.blog import Blog, blog_product
from app.models.blog_image import BlogImage

__all__ = [
    "Base",
    # Usuarios
    "User",
    # Catálogo
    "Category",
    "Product",
    "ProductImage",
    # Blogs
    "Blog",
    "blog_product",
    "BlogImage",
]
