"""
Constructor de consultas para listados filtrados, ordenados y paginados.

Lo comparten los listados de productos y blogs (públicos y de administración).
Los filtros se aplican siempre en el mismo orden:

1. Visibilidad (activo / publicado) salvo para usuarios privilegiados
2. Búsqueda de texto en varios campos (OR), combinada con AND con el resto
3. Categoría exacta (sin expandir subcategorías)
4. Filtros booleanos exactos (estado, destacados, stock, autor...)
5. Orden solicitado o el orden por defecto del listado, desempate por id
6. Paginación
"""
import math
from dataclasses import dataclass
from typing import Any, Callable, Generic, List, Optional, Sequence, TypeVar

from sqlalchemy import or_
from sqlalchemy.orm import Query, Session

from app.core.exceptions import ValidationException
from app.schemas.listing import FilterSpec

ModelType = TypeVar("ModelType")


def escape_like(term: str) -> str:
    """Escapar comodines de LIKE para buscar el texto literal."""
    return (
        term.replace("\\", "\\\\")
        .replace("%", "\\%")
        .replace("_", "\\_")
    )


class Page(Generic[ModelType]):
    """Página de resultados con sus metadatos."""

    def __init__(self, items: List[ModelType], total: int, page: int, per_page: int):
        self.items = items
        self.total = total
        self.page = page
        self.per_page = per_page
        self.total_pages = math.ceil(total / per_page) if total else 0


def paginate(query: Query, *, page: int, per_page: int) -> Page:
    """
    Paginar una consulta.

    Args:
        query: Consulta ya filtrada y ordenada
        page: Número de página (desde 1)
        per_page: Tamaño de página (mayor que 0)

    Returns:
        Página con los elementos del rango [(page-1)*per_page, page*per_page)
    """
    total = query.order_by(None).count()
    items = query.offset((page - 1) * per_page).limit(per_page).all()
    return Page(items=items, total=total, page=page, per_page=per_page)


@dataclass(frozen=True)
class ListingConfig:
    """Configuración de un listado concreto."""

    model: Any
    search_fields: Sequence[str]
    sortable_fields: Sequence[str]
    default_sort_by: str
    default_per_page: int
    default_sort_order: str = "desc"
    status_field: Optional[str] = None
    visible_filter: Optional[Callable[[], Any]] = None
    extra_filters: Optional[Callable[[Query, FilterSpec], Query]] = None


class ListingQueryBuilder:
    """Traduce un FilterSpec en una página determinista de entidades."""

    def __init__(self, config: ListingConfig):
        self.config = config
        self.model = config.model

    def base_query(self, db: Session, include_deleted: bool = False) -> Query:
        query = db.query(self.model)
        if not include_deleted and hasattr(self.model, "deleted_at"):
            query = query.filter(self.model.deleted_at.is_(None))
        return query

    def apply_visibility(self, query: Query, include_inactive: bool) -> Query:
        if include_inactive or self.config.visible_filter is None:
            return query
        return query.filter(self.config.visible_filter())

    def apply_search(self, query: Query, search: Optional[str]) -> Query:
        if not search:
            return query
        pattern = f"%{escape_like(search)}%"
        return query.filter(or_(*[
            getattr(self.model, name).ilike(pattern, escape="\\")
            for name in self.config.search_fields
        ]))

    def apply_category(self, query: Query, category_id: Optional[int]) -> Query:
        if category_id is None:
            return query
        return query.filter(self.model.category_id == category_id)

    def apply_flags(self, query: Query, spec: FilterSpec) -> Query:
        if spec.status is not None and self.config.status_field:
            query = query.filter(getattr(self.model, self.config.status_field) == spec.status)
        if self.config.extra_filters is not None:
            query = self.config.extra_filters(query, spec)
        return query

    def apply_sort(self, query: Query, spec: FilterSpec) -> Query:
        sort_by = spec.sort_by or self.config.default_sort_by
        sort_order = spec.sort_order or self.config.default_sort_order

        if sort_by not in self.config.sortable_fields:
            allowed = ", ".join(self.config.sortable_fields)
            raise ValidationException.for_field(
                "sort_by", f"Campo de orden no permitido. Usar: {allowed}"
            )

        column = getattr(self.model, sort_by)
        ordering = column.desc() if sort_order == "desc" else column.asc()

        # Desempate estable por orden de inserción
        if sort_by == "id":
            return query.order_by(ordering)
        return query.order_by(ordering, self.model.id.asc())

    def build(
        self,
        db: Session,
        spec: FilterSpec,
        *,
        include_inactive: bool = False,
        include_deleted: bool = False
    ) -> Query:
        """
        Construir la consulta filtrada y ordenada (sin paginar).

        Args:
            db: Sesión de base de datos
            spec: Filtros de la petición
            include_inactive: Incluir entidades inactivas / no publicadas (solo admin)
            include_deleted: Incluir entidades eliminadas (soft delete)

        Returns:
            Query listo para paginar
        """
        query = self.base_query(db, include_deleted)
        query = self.apply_visibility(query, include_inactive)
        query = self.apply_search(query, spec.search)
        query = self.apply_category(query, spec.category_id)
        query = self.apply_flags(query, spec)
        return self.apply_sort(query, spec)

    def get_page(
        self,
        db: Session,
        spec: FilterSpec,
        *,
        include_inactive: bool = False,
        include_deleted: bool = False
    ) -> Page:
        """Construir la consulta y devolver la página solicitada."""
        query = self.build(
            db, spec,
            include_inactive=include_inactive,
            include_deleted=include_deleted
        )
        per_page = spec.per_page or self.config.default_per_page
        return paginate(query, page=spec.page, per_page=per_page)
