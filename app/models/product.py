"""
Modelo ORM para Productos con soporte para Soft Delete.
"""
import re
from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey, Numeric, JSON, CheckConstraint
from sqlalchemy.orm import relationship, validates
from sqlalchemy.sql import func
from app.db.base import Base, SoftDeleteMixin


_HTML_TAG_RE = re.compile(r"<[^>]+>")


class Product(Base, SoftDeleteMixin):
    """Modelo de Productos del catálogo con soporte para soft delete."""

    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    slug = Column(String(255), nullable=False, unique=True, index=True)
    description = Column(Text, nullable=False)
    short_description = Column(Text)
    sku = Column(String(100), nullable=False, unique=True)
    price = Column(Numeric(10, 2), nullable=False)
    sale_price = Column(Numeric(10, 2))
    stock_quantity = Column(Integer, nullable=False, default=0)
    min_stock_level = Column(Integer, nullable=False, default=0)
    weight = Column(Numeric(10, 2))
    dimensions = Column(JSON)
    brand = Column(String(255))
    tags = Column(JSON)
    category_id = Column(Integer, ForeignKey("categories.id", ondelete="SET NULL"), index=True)
    agent_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), index=True)
    is_featured = Column(Boolean, nullable=False, default=False)
    is_active = Column(Boolean, nullable=False, default=True, index=True)
    meta_title = Column(String(255))
    meta_description = Column(Text)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
    # deleted_at viene del SoftDeleteMixin

    # Constraints
    __table_args__ = (
        CheckConstraint('price >= 0', name='check_price_positive'),
        CheckConstraint('stock_quantity >= 0', name='check_stock_positive'),
    )

    # Relationships
    category = relationship("Category", back_populates="products")
    agent = relationship("User", back_populates="products", foreign_keys=[agent_id])
    images = relationship(
        "ProductImage",
        back_populates="product",
        cascade="all, delete-orphan",
        order_by="ProductImage.sort_order"
    )

    def __repr__(self):
        return f"<Product {self.sku} {self.name}>"

    @validates("short_description")
    def _strip_short_description(self, key, value):
        # La descripción corta se guarda sin etiquetas HTML
        return _HTML_TAG_RE.sub("", value) if value else None

    @property
    def primary_image(self):
        """Imagen principal del producto (como máximo una)."""
        return next((image for image in self.images if image.is_primary), None)

    @property
    def effective_price(self):
        """Precio de oferta si existe, si no el precio regular."""
        return self.sale_price or self.price

    @property
    def is_on_sale(self) -> bool:
        return bool(self.sale_price) and self.sale_price < self.price

    @property
    def is_in_stock(self) -> bool:
        return (self.stock_quantity or 0) > 0

    @property
    def is_low_stock(self) -> bool:
        """Con stock, pero en o por debajo del mínimo."""
        return 0 < (self.stock_quantity or 0) <= (self.min_stock_level or 0)
