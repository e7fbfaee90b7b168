"""
CRUD para productos con soporte para Soft Delete.
"""
from typing import Optional
from slugify import slugify
from sqlalchemy.orm import Query, Session

from app.config import settings
from app.core.exceptions import ValidationException
from app.crud.base import CRUDBase
from app.crud.category import category as crud_category
from app.crud.listing import ListingConfig, ListingQueryBuilder, Page
from app.models.product import Product
from app.schemas.listing import ProductFilterSpec
from app.schemas.product import ProductCreate, ProductUpdate


SEARCH_FIELDS = ("name", "description", "short_description")
SORTABLE_FIELDS = (
    "id", "name", "sku", "price", "sale_price", "stock_quantity",
    "is_featured", "is_active", "created_at", "updated_at",
)

# Campos que se pueden vaciar explícitamente al actualizar
NULLABLE_FIELDS = {
    "short_description", "sale_price", "weight", "dimensions", "brand",
    "tags", "category_id", "meta_title", "meta_description",
}


def _product_flags(query: Query, spec: ProductFilterSpec) -> Query:
    """Filtros de destacados y stock (solo se aplican si vienen en True)."""
    if getattr(spec, "featured", None):
        query = query.filter(Product.is_featured.is_(True))
    if getattr(spec, "in_stock", None):
        query = query.filter(Product.stock_quantity > 0)
    return query


product_listing = ListingQueryBuilder(ListingConfig(
    model=Product,
    search_fields=SEARCH_FIELDS,
    sortable_fields=SORTABLE_FIELDS,
    default_sort_by="id",
    default_per_page=settings.PRODUCTS_PER_PAGE,
    status_field="is_active",
    visible_filter=lambda: Product.is_active.is_(True),
    extra_filters=_product_flags,
))


class CRUDProduct(CRUDBase[Product, ProductCreate, ProductUpdate]):
    """CRUD específico para productos."""

    conflict_message = "Ya existe un producto con el mismo SKU o slug"

    def _check_category(self, db: Session, category_id: Optional[int]) -> None:
        if category_id is not None and not crud_category.get(db, id=category_id):
            raise ValidationException.for_field(
                "category_id", "La categoría seleccionada no existe"
            )

    def get_page(
        self,
        db: Session,
        *,
        spec: ProductFilterSpec,
        include_inactive: bool = False,
        include_deleted: bool = False
    ) -> Page:
        """
        Listado paginado de productos.

        Args:
            db: Sesión de base de datos
            spec: Filtros, orden y paginación
            include_inactive: Incluir productos inactivos (rutas de administración)
            include_deleted: Incluir productos eliminados (soft delete)

        Returns:
            Página de productos
        """
        return product_listing.get_page(
            db, spec,
            include_inactive=include_inactive,
            include_deleted=include_deleted
        )

    def get_visible(
        self, db: Session, *, id: int, include_inactive: bool = False
    ) -> Optional[Product]:
        """Obtener un producto; los inactivos solo son visibles para admin."""
        product = self.get(db, id=id)
        if product and not product.is_active and not include_inactive:
            return None
        return product

    def create(self, db: Session, *, obj_in: ProductCreate, agent_id: Optional[int] = None) -> Product:
        """
        Crear producto generando el slug a partir del nombre.

        Args:
            db: Sesión de base de datos
            obj_in: Datos del producto
            agent_id: ID del usuario que crea el producto

        Returns:
            Producto creado
        """
        self._check_category(db, obj_in.category_id)

        data = obj_in.model_dump(exclude_none=True)
        db_obj = Product(**data, slug=slugify(obj_in.name), agent_id=agent_id)
        db.add(db_obj)
        return self._commit(db, db_obj)

    def update(self, db: Session, *, db_obj: Product, obj_in: ProductUpdate) -> Product:
        """Actualizar producto; el slug se recalcula si cambia el nombre."""
        update_data = {
            key: value
            for key, value in obj_in.model_dump(exclude_unset=True).items()
            if value is not None or key in NULLABLE_FIELDS
        }

        if "category_id" in update_data:
            self._check_category(db, update_data["category_id"])

        if update_data.get("name"):
            update_data["slug"] = slugify(update_data["name"])

        return super().update(db, db_obj=db_obj, obj_in=update_data)


# Instancia global del CRUD
product = CRUDProduct(Product)
