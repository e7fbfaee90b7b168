"""
Base declarativa de SQLAlchemy con soporte para Soft Delete.
Todos los modelos heredan de esta clase base.
"""
from datetime import datetime
from enum import Enum
from sqlalchemy import Column, DateTime
from sqlalchemy.orm import declarative_base


class LifecycleState(str, Enum):
    """Estados del ciclo de vida de una entidad con soft delete."""
    ACTIVE = "active"
    DELETED = "deleted"


class SoftDeleteMixin:
    """
    Mixin que agrega soporte para soft delete a los modelos.

    Agrega el campo deleted_at y métodos para manejar el borrado suave.
    Los modelos que hereden de este mixin tendrán:
    - Campo deleted_at para marcar eliminación
    - Método soft_delete() para eliminar suavemente
    - Método restore() para restaurar
    - Propiedades is_deleted y lifecycle_state para verificar estado
    """

    deleted_at = Column(DateTime(timezone=True), nullable=True, default=None, index=True)

    def soft_delete(self) -> None:
        """Marca el registro como eliminado (soft delete)."""
        self.deleted_at = datetime.utcnow()

    def restore(self) -> None:
        """Restaura un registro eliminado."""
        self.deleted_at = None

    @property
    def is_deleted(self) -> bool:
        """Verifica si el registro está eliminado."""
        return self.deleted_at is not None

    @property
    def lifecycle_state(self) -> LifecycleState:
        return LifecycleState.DELETED if self.is_deleted else LifecycleState.ACTIVE


# Base declarativa de SQLAlchemy
Base = declarative_base()
