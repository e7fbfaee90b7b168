"""
Modelo ORM para Usuarios.
"""
from sqlalchemy import Column, String, Integer, Boolean, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.db.base import Base, SoftDeleteMixin


# Roles con acceso al panel de administración
PRIVILEGED_ROLES = ("administrador", "agente")


class User(Base, SoftDeleteMixin):
    """Modelo de Usuarios del sistema con soporte para soft delete."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    phone = Column(String(30))
    password_hash = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default="cliente")
    is_active = Column(Boolean, nullable=False, default=True)
    last_login = Column(DateTime(timezone=True))
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
    # deleted_at viene del SoftDeleteMixin

    # Relationships
    products = relationship("Product", back_populates="agent", foreign_keys="Product.agent_id")
    blogs = relationship("Blog", back_populates="author", foreign_keys="Blog.author_id")

    def __repr__(self):
        return f"<User {self.email}>"

    def is_admin(self) -> bool:
        """Verificar si el usuario tiene acceso al panel de administración."""
        return self.role in PRIVILEGED_ROLES
