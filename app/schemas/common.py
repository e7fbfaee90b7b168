"""
Schemas comunes reutilizables.
"""
from pydantic import BaseModel
from typing import Dict, Generic, TypeVar, List, Optional


T = TypeVar('T')


class PaginatedResponse(BaseModel, Generic[T]):
    """Schema de respuesta paginada."""

    items: List[T]
    total: int
    page: int
    per_page: int
    total_pages: int

    model_config = {"from_attributes": True}


class MessageResponse(BaseModel):
    """Schema de respuesta con mensaje simple."""

    message: str
    success: bool = True

    model_config = {"from_attributes": True}


class ErrorResponse(BaseModel):
    """Schema de respuesta de error."""

    detail: str
    errors: Optional[Dict[str, str]] = None

    model_config = {"from_attributes": True}
