"""
Modelo ORM para Imágenes de Productos.
"""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Boolean
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.db.base import Base


class ProductImage(Base):
    """
    Imagen de un producto.

    Como máximo una imagen por producto tiene is_primary = True.
    """

    __tablename__ = "product_images"

    id = Column(Integer, primary_key=True, index=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True)
    path = Column(String(500), nullable=False)  # object_key en el storage
    url = Column(String(500), nullable=False)
    filename = Column(String(255))
    alt_text = Column(String(255))
    sort_order = Column(Integer, nullable=False, default=0)
    is_primary = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    product = relationship("Product", back_populates="images")

    def __repr__(self):
        return f"<ProductImage {self.id} for product {self.product_id}>"
