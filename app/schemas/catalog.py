"""
Schemas para categorías del catálogo.
"""
from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime


class CategoryBase(BaseModel):
    """Schema base de categoria."""

    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    image: Optional[str] = Field(None, max_length=500)
    parent_id: Optional[int] = None
    sort_order: int = 0
    is_active: bool = True


class CategoryCreate(CategoryBase):
    """Schema para crear categoria."""
    pass


class CategoryUpdate(BaseModel):
    """Schema para actualizar categoria."""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    image: Optional[str] = Field(None, max_length=500)
    parent_id: Optional[int] = None
    sort_order: Optional[int] = None
    is_active: Optional[bool] = None


class CategoryResponse(BaseModel):
    """Schema de respuesta de categoria."""

    id: int
    name: str
    slug: str
    description: Optional[str] = None
    image: Optional[str] = None
    parent_id: Optional[int] = None
    sort_order: int
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class CategoryTreeResponse(CategoryResponse):
    """Categoria con sus subcategorias activas."""

    children: List[CategoryResponse] = Field(default=[], validation_alias="active_children")

    model_config = {"from_attributes": True, "populate_by_name": True}


class CategoryListResponse(BaseModel):
    """Listado de categorias."""

    categories: List[CategoryTreeResponse]
