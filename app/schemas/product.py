"""
Schemas para productos.
"""
from pydantic import BaseModel, Field
from typing import Optional, List, Any, Dict
from decimal import Decimal
from datetime import datetime

from app.db.base import LifecycleState
from app.schemas.image import ProductImageResponse


class CategorySummary(BaseModel):
    """Categoría embebida en otras respuestas."""

    id: int
    name: str
    slug: str

    model_config = {"from_attributes": True}


class AgentSummary(BaseModel):
    """Agente (usuario) que creó el producto."""

    id: int
    name: str
    email: str
    phone: Optional[str] = None

    model_config = {"from_attributes": True}


class ProductBase(BaseModel):
    """Schema base de producto."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    short_description: Optional[str] = None
    sku: str = Field(..., min_length=1, max_length=100)
    price: Decimal = Field(..., ge=0)
    sale_price: Optional[Decimal] = Field(None, ge=0)
    stock_quantity: int = Field(..., ge=0)
    min_stock_level: Optional[int] = Field(None, ge=0)
    weight: Optional[Decimal] = Field(None, ge=0)
    dimensions: Optional[Dict[str, Any]] = None
    category_id: int
    brand: Optional[str] = Field(None, max_length=255)
    tags: Optional[List[str]] = None
    is_featured: bool = False
    is_active: bool = True
    meta_title: Optional[str] = Field(None, max_length=255)
    meta_description: Optional[str] = None


class ProductCreate(ProductBase):
    """Schema para crear producto."""
    pass


class ProductUpdate(BaseModel):
    """Schema para actualizar producto (todos los campos opcionales)."""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, min_length=1)
    short_description: Optional[str] = None
    sku: Optional[str] = Field(None, min_length=1, max_length=100)
    price: Optional[Decimal] = Field(None, ge=0)
    sale_price: Optional[Decimal] = Field(None, ge=0)
    stock_quantity: Optional[int] = Field(None, ge=0)
    min_stock_level: Optional[int] = Field(None, ge=0)
    weight: Optional[Decimal] = Field(None, ge=0)
    dimensions: Optional[Dict[str, Any]] = None
    category_id: Optional[int] = None
    brand: Optional[str] = Field(None, max_length=255)
    tags: Optional[List[str]] = None
    is_featured: Optional[bool] = None
    is_active: Optional[bool] = None
    meta_title: Optional[str] = Field(None, max_length=255)
    meta_description: Optional[str] = None


class ProductResponse(BaseModel):
    """Schema de respuesta de producto."""

    id: int
    name: str
    slug: str
    description: str
    short_description: Optional[str] = None
    sku: str
    price: Decimal
    sale_price: Optional[Decimal] = None
    effective_price: Decimal
    stock_quantity: int
    min_stock_level: int
    weight: Optional[Decimal] = None
    dimensions: Optional[Dict[str, Any]] = None
    brand: Optional[str] = None
    tags: Optional[List[str]] = None
    category_id: Optional[int] = None
    agent_id: Optional[int] = None
    is_featured: bool
    is_active: bool
    is_on_sale: bool
    is_in_stock: bool
    is_low_stock: bool
    meta_title: Optional[str] = None
    meta_description: Optional[str] = None
    lifecycle_state: LifecycleState

    # Relaciones
    category: Optional[CategorySummary] = None
    agent: Optional[AgentSummary] = None
    images: List[ProductImageResponse] = []
    primary_image: Optional[ProductImageResponse] = None

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
