"""
Schemas de filtros para los listados paginados.

Los clientes web envían a veces el texto literal "undefined" cuando un
filtro no tiene valor. Ese valor (y la cadena vacía) se tratan siempre
como "no enviado".
"""
from typing import Literal, Optional, Type, TypeVar

from pydantic import BaseModel, Field, ValidationError, field_validator

from app.core.exceptions import ValidationException


UNDEFINED = "undefined"

SpecType = TypeVar("SpecType", bound="PageSpec")


def is_supplied(value) -> bool:
    """Indica si un parámetro de filtro fue realmente enviado."""
    if value is None:
        return False
    if isinstance(value, str) and value.strip() in ("", UNDEFINED):
        return False
    return True


class PageSpec(BaseModel):
    """Paginación de un listado."""

    per_page: Optional[int] = Field(None, gt=0)
    page: int = Field(1, gt=0)

    model_config = {"frozen": True}

    @field_validator("*", mode="before")
    @classmethod
    def _drop_undefined(cls, value, info):
        if not is_supplied(value):
            # page no es opcional: se usa la primera página
            return 1 if info.field_name == "page" else None
        return value


class FilterSpec(PageSpec):
    """Filtros, orden y paginación de un listado."""

    search: Optional[str] = None
    category_id: Optional[int] = None
    status: Optional[bool] = None
    sort_by: Optional[str] = None
    sort_order: Optional[Literal["asc", "desc"]] = None

    @field_validator("sort_order", mode="before")
    @classmethod
    def _normalize_sort_order(cls, value):
        return value.lower() if isinstance(value, str) else value

    @field_validator("search")
    @classmethod
    def _strip_search(cls, value):
        return value.strip() if value else value


class ProductFilterSpec(FilterSpec):
    """Filtros adicionales del listado de productos."""

    featured: Optional[bool] = None
    in_stock: Optional[bool] = None


class BlogFilterSpec(FilterSpec):
    """Filtros adicionales del listado de blogs."""

    author_id: Optional[int] = None


def build_filter_spec(spec_class: Type[SpecType], **params) -> SpecType:
    """
    Construir un PageSpec o FilterSpec a partir de parámetros crudos de la petición.

    Raises:
        ValidationException: Con el detalle por campo si algún valor es inválido
    """
    try:
        return spec_class(**params)
    except ValidationError as e:
        errors = {
            ".".join(str(loc) for loc in error["loc"]): error["msg"]
            for error in e.errors()
        }
        raise ValidationException("Parámetros de listado inválidos", errors=errors)
