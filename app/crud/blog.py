"""
CRUD para blogs con soporte para Soft Delete.
"""
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from slugify import slugify
from sqlalchemy import and_, func
from sqlalchemy.orm import Query, Session

from app.config import settings
from app.core.exceptions import ValidationException
from app.crud.base import CRUDBase
from app.crud.category import category as crud_category
from app.crud.listing import ListingConfig, ListingQueryBuilder, Page
from app.models.blog import Blog, blog_product
from app.models.product import Product
from app.schemas.blog import BlogCreate, BlogUpdate
from app.schemas.listing import BlogFilterSpec


SEARCH_FIELDS = ("title", "content", "excerpt")
SORTABLE_FIELDS = ("id", "title", "views", "is_published", "published_at", "created_at", "updated_at")

# Campos que se pueden vaciar explícitamente al actualizar
NULLABLE_FIELDS = {
    "excerpt", "category_id", "featured_image", "meta_title",
    "meta_description", "meta_keywords", "published_at",
}


def published_filter():
    """Blogs publicados cuya fecha de publicación ya llegó."""
    return and_(
        Blog.is_published.is_(True),
        Blog.published_at.isnot(None),
        Blog.published_at <= datetime.utcnow(),
    )


def _author_filter(query: Query, spec: BlogFilterSpec) -> Query:
    author_id = getattr(spec, "author_id", None)
    if author_id is not None:
        query = query.filter(Blog.author_id == author_id)
    return query


# Listado público: solo publicados, más recientes primero
public_blog_listing = ListingQueryBuilder(ListingConfig(
    model=Blog,
    search_fields=SEARCH_FIELDS,
    sortable_fields=SORTABLE_FIELDS,
    default_sort_by="published_at",
    default_per_page=settings.PUBLIC_BLOGS_PER_PAGE,
    visible_filter=published_filter,
))

# Listado de administración: todos los blogs, id descendente
admin_blog_listing = ListingQueryBuilder(ListingConfig(
    model=Blog,
    search_fields=SEARCH_FIELDS,
    sortable_fields=SORTABLE_FIELDS,
    default_sort_by="id",
    default_per_page=settings.BLOGS_PER_PAGE,
    status_field="is_published",
    visible_filter=published_filter,
    extra_filters=_author_filter,
))


def _as_utc_naive(value: Optional[datetime]) -> Optional[datetime]:
    """Las fechas se guardan en UTC sin zona horaria."""
    if value is not None and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


class CRUDBlog(CRUDBase[Blog, BlogCreate, BlogUpdate]):
    """CRUD específico para blogs."""

    conflict_message = "Ya existe un blog con el mismo slug"

    def get_public_page(self, db: Session, *, spec: BlogFilterSpec) -> Page:
        """Listado público de blogs publicados."""
        return public_blog_listing.get_page(db, spec)

    def get_admin_page(
        self, db: Session, *, spec: BlogFilterSpec, include_deleted: bool = False
    ) -> Page:
        """Listado de administración (incluye borradores y programados)."""
        return admin_blog_listing.get_page(
            db, spec, include_inactive=True, include_deleted=include_deleted
        )

    def get_published_by_slug(self, db: Session, *, slug: str) -> Optional[Blog]:
        """
        Obtener un blog publicado por su slug.

        Args:
            db: Sesión de base de datos
            slug: Slug del blog

        Returns:
            Blog publicado o None si no existe, es borrador o está programado
        """
        return (
            self._base_query(db)
            .filter(Blog.slug == slug, published_filter())
            .first()
        )

    def increment_views(self, db: Session, *, blog: Blog) -> Blog:
        """
        Incrementar el contador de vistas de un blog.

        El incremento se resuelve en SQL (views = views + 1).
        """
        (
            db.query(Blog)
            .filter(Blog.id == blog.id)
            .update({Blog.views: Blog.views + 1}, synchronize_session=False)
        )
        db.commit()
        db.refresh(blog)
        return blog

    def _check_references(self, db: Session, data: Dict[str, Any]) -> None:
        category_id = data.get("category_id")
        if category_id is not None and not crud_category.get(db, id=category_id):
            raise ValidationException.for_field(
                "category_id", "La categoría seleccionada no existe"
            )

        product_ids = data.get("product_ids") or []
        if product_ids:
            found = {
                row.id for row in
                db.query(Product.id).filter(
                    Product.id.in_(product_ids),
                    Product.deleted_at.is_(None)
                ).all()
            }
            missing = [pid for pid in product_ids if pid not in found]
            if missing:
                raise ValidationException.for_field(
                    "product_ids", f"Productos inexistentes: {missing}"
                )

    def _sync_products(self, db: Session, blog_id: int, product_ids: List[int]) -> None:
        """Reemplazar los productos asociados respetando el orden recibido."""
        db.execute(blog_product.delete().where(blog_product.c.blog_id == blog_id))

        # Ignorar IDs repetidos conservando la primera aparición
        ordered_ids = list(dict.fromkeys(product_ids))
        if ordered_ids:
            db.execute(blog_product.insert(), [
                {"blog_id": blog_id, "product_id": product_id, "sort_order": index}
                for index, product_id in enumerate(ordered_ids)
            ])

    def create(self, db: Session, *, obj_in: BlogCreate, author_id: Optional[int] = None) -> Blog:
        """
        Crear blog con slug derivado del título.

        Si se publica sin fecha, published_at se fija al momento actual.

        Args:
            db: Sesión de base de datos
            obj_in: Datos del blog
            author_id: ID del usuario autor

        Returns:
            Blog creado
        """
        data = obj_in.model_dump()
        self._check_references(db, data)

        product_ids = data.pop("product_ids", None)
        data["published_at"] = _as_utc_naive(data.get("published_at"))
        if data.get("is_published") and not data.get("published_at"):
            data["published_at"] = datetime.utcnow()

        db_obj = Blog(**data, slug=slugify(obj_in.title), author_id=author_id)
        db.add(db_obj)

        if product_ids:
            db.flush()
            self._sync_products(db, db_obj.id, product_ids)

        return self._commit(db, db_obj)

    def update(self, db: Session, *, db_obj: Blog, obj_in: BlogUpdate) -> Blog:
        """
        Actualizar blog.

        - El slug se recalcula si cambia el título
        - published_at se fija solo la primera vez que se publica
        - product_ids (si viene, aunque sea null) reemplaza los productos asociados
        """
        update_data = {
            key: value
            for key, value in obj_in.model_dump(exclude_unset=True).items()
            if value is not None or key in NULLABLE_FIELDS or key == "product_ids"
        }
        self._check_references(db, update_data)

        sync_products = "product_ids" in update_data
        product_ids = update_data.pop("product_ids", None) or []

        if update_data.get("title"):
            update_data["slug"] = slugify(update_data["title"])

        if "published_at" in update_data:
            update_data["published_at"] = _as_utc_naive(update_data["published_at"])

        if update_data.get("is_published") and not db_obj.published_at and not update_data.get("published_at"):
            update_data["published_at"] = datetime.utcnow()

        for field, value in update_data.items():
            setattr(db_obj, field, value)

        if sync_products:
            self._sync_products(db, db_obj.id, product_ids)

        db.add(db_obj)
        db_obj = self._commit(db, db_obj)
        # Los productos son una relación de solo lectura: recargarla tras el sync
        db.expire(db_obj, ["products"])
        return db_obj

    def get_statistics(self, db: Session) -> Dict[str, Any]:
        """
        Estadísticas de blogs para el panel de administración.

        Returns:
            Totales, borradores, vistas, top 5 por vistas y 5 más recientes
        """
        base = self._base_query(db)

        def summarize(blog: Blog) -> Dict[str, Any]:
            return {
                "id": blog.id,
                "title": blog.title,
                "slug": blog.slug,
                "views": blog.views,
                "is_published": blog.is_published,
                "author": blog.author.name if blog.author else "Desconocido",
                "category": blog.category.name if blog.category else "Sin categoría",
                "published_at": blog.published_at,
                "created_at": blog.created_at,
            }

        top_blogs = (
            base.filter(published_filter())
            .order_by(Blog.views.desc(), Blog.id.asc())
            .limit(5)
            .all()
        )
        recent_blogs = base.order_by(Blog.id.desc()).limit(5).all()

        return {
            "total_blogs": base.count(),
            "published_blogs": base.filter(Blog.is_published.is_(True)).count(),
            "draft_blogs": base.filter(Blog.is_published.is_(False)).count(),
            "total_views": base.with_entities(func.coalesce(func.sum(Blog.views), 0)).scalar(),
            "top_blogs": [summarize(blog) for blog in top_blogs],
            "recent_blogs": [summarize(blog) for blog in recent_blogs],
        }


# Instancia global del CRUD
blog = CRUDBlog(Blog)
