"""
CRUD para categorías.
"""
from typing import List, Optional
from slugify import slugify
from sqlalchemy.orm import Session

from app.core.exceptions import ValidationException
from app.crud.base import CRUDBase
from app.models.category import Category
from app.schemas.catalog import CategoryCreate, CategoryUpdate


class CRUDCategory(CRUDBase[Category, CategoryCreate, CategoryUpdate]):
    """CRUD específico para categorías."""

    conflict_message = "Ya existe una categoría con esos datos"

    def get_active(
        self, db: Session, *, parent_only: bool = False
    ) -> List[Category]:
        """
        Obtener categorías activas ordenadas por sort_order y nombre.

        Args:
            db: Sesión de base de datos
            parent_only: Solo categorías raíz (sin padre)

        Returns:
            Lista de categorías activas
        """
        query = self._base_query(db).filter(Category.is_active.is_(True))

        if parent_only:
            query = query.filter(Category.parent_id.is_(None))

        return query.order_by(Category.sort_order, Category.name).all()

    def _check_parent(
        self, db: Session, parent_id: Optional[int], category_id: Optional[int] = None
    ) -> None:
        if parent_id is None:
            return
        if parent_id == category_id:
            raise ValidationException.for_field(
                "parent_id", "Una categoría no puede ser su propia categoría padre"
            )
        if not self.get(db, id=parent_id):
            raise ValidationException.for_field(
                "parent_id", f"La categoría padre con ID {parent_id} no existe"
            )

    def create(self, db: Session, *, obj_in: CategoryCreate) -> Category:
        """
        Crear nueva categoría con slug derivado del nombre.

        Raises:
            ValidationException: Si el padre no existe
        """
        self._check_parent(db, obj_in.parent_id)
        return super().create(db, obj_in={**obj_in.model_dump(), "slug": slugify(obj_in.name)})

    def update(self, db: Session, *, db_obj: Category, obj_in: CategoryUpdate) -> Category:
        """Actualizar categoría; el slug se recalcula si cambia el nombre."""
        update_data = obj_in.model_dump(exclude_unset=True)

        if "parent_id" in update_data:
            self._check_parent(db, update_data["parent_id"], db_obj.id)

        if update_data.get("name"):
            update_data["slug"] = slugify(update_data["name"])
        else:
            update_data.pop("name", None)

        for field in ("sort_order", "is_active"):
            if field in update_data and update_data[field] is None:
                update_data.pop(field)

        return super().update(db, db_obj=db_obj, obj_in=update_data)


# Instancia global del CRUD
category = CRUDCategory(Category)
