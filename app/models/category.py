"""
Modelo ORM para Categorías de productos y blogs con soporte para Soft Delete.
"""
from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.db.base import Base, SoftDeleteMixin


class Category(Base, SoftDeleteMixin):
    """Modelo de Categorías con soporte para soft delete."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    slug = Column(String(255), nullable=False, index=True)
    description = Column(Text)
    image = Column(String(500))
    parent_id = Column(Integer, ForeignKey("categories.id", ondelete="SET NULL"))
    sort_order = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
    # deleted_at viene del SoftDeleteMixin

    # Self-referential relationship
    parent = relationship("Category", remote_side=[id], back_populates="children")
    children = relationship(
        "Category",
        back_populates="parent",
        order_by=lambda: [Category.sort_order, Category.name]
    )

    # Relationships
    products = relationship("Product", back_populates="category")
    blogs = relationship("Blog", back_populates="category")

    def __repr__(self):
        return f"<Category {self.name}>"

    @property
    def active_children(self):
        """Subcategorías activas y no eliminadas."""
        return [
            child for child in self.children
            if child.is_active and not child.is_deleted
        ]
