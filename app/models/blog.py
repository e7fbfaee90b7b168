"""
Modelo ORM para Blogs (artículos sobre energía solar) con soporte para Soft Delete.
"""
from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey, Table
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.db.base import Base, SoftDeleteMixin


# Tabla pivote blog <-> producto con orden de aparición
blog_product = Table(
    "blog_product",
    Base.metadata,
    Column("blog_id", Integer, ForeignKey("blogs.id", ondelete="CASCADE"), primary_key=True),
    Column("product_id", Integer, ForeignKey("products.id", ondelete="CASCADE"), primary_key=True),
    Column("sort_order", Integer, nullable=False, default=0),
    Column("created_at", DateTime(timezone=True), server_default=func.now()),
)


class Blog(Base, SoftDeleteMixin):
    """Modelo de Blogs con soporte para soft delete."""

    __tablename__ = "blogs"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    slug = Column(String(255), nullable=False, unique=True, index=True)
    excerpt = Column(Text)
    content = Column(Text, nullable=False)
    category_id = Column(Integer, ForeignKey("categories.id", ondelete="SET NULL"), index=True)
    author_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), index=True)
    featured_image = Column(String(500))
    meta_title = Column(String(255))
    meta_description = Column(Text)
    meta_keywords = Column(Text)
    views = Column(Integer, nullable=False, default=0)
    is_published = Column(Boolean, nullable=False, default=False, index=True)
    published_at = Column(DateTime(timezone=True), index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
    # deleted_at viene del SoftDeleteMixin

    # Relationships
    category = relationship("Category", back_populates="blogs")
    author = relationship("User", back_populates="blogs", foreign_keys=[author_id])
    images = relationship(
        "BlogImage",
        back_populates="blog",
        cascade="all, delete-orphan",
        order_by="BlogImage.sort_order"
    )
    products = relationship(
        "Product",
        secondary=blog_product,
        order_by=blog_product.c.sort_order,
        viewonly=True
    )

    def __repr__(self):
        return f"<Blog {self.slug}>"
