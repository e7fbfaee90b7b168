"""
Modelo ORM para Imágenes de Blogs.
"""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.db.base import Base


class BlogImage(Base):
    """Imagen de un blog. No maneja imagen principal."""

    __tablename__ = "blog_images"

    id = Column(Integer, primary_key=True, index=True)
    blog_id = Column(Integer, ForeignKey("blogs.id", ondelete="CASCADE"), nullable=False, index=True)
    image_path = Column(String(500), nullable=False)  # object_key en el storage
    url = Column(String(500), nullable=False)
    alt_text = Column(String(255))
    caption = Column(String(255))
    sort_order = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    blog = relationship("Blog", back_populates="images")

    def __repr__(self):
        return f"<BlogImage {self.id} for blog {self.blog_id}>"
