"""
Schemas para blogs.
"""
from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime

from app.db.base import LifecycleState
from app.schemas.image import BlogImageResponse
from app.schemas.product import CategorySummary, ProductResponse


class AuthorSummary(BaseModel):
    """Autor (usuario) del blog."""

    id: int
    name: str
    email: str

    model_config = {"from_attributes": True}


class BlogBase(BaseModel):
    """Schema base de blog."""

    title: str = Field(..., min_length=1, max_length=255)
    excerpt: Optional[str] = None
    content: str = Field(..., min_length=1)
    category_id: Optional[int] = None
    featured_image: Optional[str] = None
    meta_title: Optional[str] = Field(None, max_length=255)
    meta_description: Optional[str] = None
    meta_keywords: Optional[str] = None
    is_published: bool = False
    published_at: Optional[datetime] = None
    product_ids: Optional[List[int]] = None


class BlogCreate(BlogBase):
    """Schema para crear blog."""
    pass


class BlogUpdate(BaseModel):
    """Schema para actualizar blog."""

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    excerpt: Optional[str] = None
    content: Optional[str] = Field(None, min_length=1)
    category_id: Optional[int] = None
    featured_image: Optional[str] = None
    meta_title: Optional[str] = Field(None, max_length=255)
    meta_description: Optional[str] = None
    meta_keywords: Optional[str] = None
    is_published: Optional[bool] = None
    published_at: Optional[datetime] = None
    product_ids: Optional[List[int]] = None


class BlogResponse(BaseModel):
    """Schema de respuesta de blog."""

    id: int
    title: str
    slug: str
    excerpt: Optional[str] = None
    content: str
    category_id: Optional[int] = None
    author_id: Optional[int] = None
    featured_image: Optional[str] = None
    meta_title: Optional[str] = None
    meta_description: Optional[str] = None
    meta_keywords: Optional[str] = None
    views: int
    is_published: bool
    published_at: Optional[datetime] = None
    lifecycle_state: LifecycleState

    # Relaciones
    category: Optional[CategorySummary] = None
    author: Optional[AuthorSummary] = None
    images: List[BlogImageResponse] = []
    products: List[ProductResponse] = []

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class BlogRanking(BaseModel):
    """Resumen de blog para estadísticas."""

    id: int
    title: str
    slug: str
    views: int
    is_published: bool
    author: str
    category: str
    published_at: Optional[datetime] = None
    created_at: Optional[datetime] = None


class BlogStatistics(BaseModel):
    """Estadísticas de blogs para el panel de administración."""

    total_blogs: int
    published_blogs: int
    draft_blogs: int
    total_views: int
    top_blogs: List[BlogRanking]
    recent_blogs: List[BlogRanking]
