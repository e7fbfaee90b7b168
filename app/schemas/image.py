"""
Schemas para imágenes de productos y blogs.
"""
from pydantic import BaseModel, Field
from typing import Generic, List, Optional, TypeVar
from datetime import datetime


T = TypeVar("T")


class ProductImageResponse(BaseModel):
    """Schema de respuesta de imagen de producto."""

    id: int
    product_id: int
    path: str
    url: str
    filename: Optional[str] = None
    alt_text: Optional[str] = None
    sort_order: int
    is_primary: bool
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class ProductImageUpdate(BaseModel):
    """Schema para actualizar imagen de producto."""

    alt_text: Optional[str] = Field(None, max_length=255)
    sort_order: Optional[int] = Field(None, ge=0)
    is_primary: Optional[bool] = None


class BlogImageResponse(BaseModel):
    """Schema de respuesta de imagen de blog."""

    id: int
    blog_id: int
    image_path: str
    url: str
    alt_text: Optional[str] = None
    caption: Optional[str] = None
    sort_order: int
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class BlogImageUpdate(BaseModel):
    """Schema para actualizar imagen de blog."""

    alt_text: Optional[str] = Field(None, max_length=255)
    caption: Optional[str] = Field(None, max_length=255)
    sort_order: Optional[int] = Field(None, ge=0)


class UploadError(BaseModel):
    """Error de un archivo dentro de una subida múltiple."""

    index: int
    filename: str
    error: str


class BatchUploadResponse(BaseModel, Generic[T]):
    """Resultado de una subida múltiple (total o parcial)."""

    message: str
    uploaded_images: List[T]
    errors: List[UploadError] = []
    success_count: int
    error_count: int = 0
