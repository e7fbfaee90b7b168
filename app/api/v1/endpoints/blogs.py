"""
Endpoints públicos de blogs.
"""
import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.deps import get_db, blog_filters
from app.core.exceptions import NotFoundException
from app.crud.blog import blog as crud_blog
from app.schemas.blog import BlogResponse
from app.schemas.common import PaginatedResponse
from app.schemas.listing import BlogFilterSpec

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=PaginatedResponse[BlogResponse])
def list_blogs(
    filters: BlogFilterSpec = Depends(blog_filters),
    db: Session = Depends(get_db)
):
    """
    Listar blogs publicados (más recientes primero).

    No incluye borradores ni publicaciones programadas a futuro.
    """
    return crud_blog.get_public_page(db, spec=filters)


@router.get("/{slug}", response_model=BlogResponse)
def get_blog(
    slug: str,
    db: Session = Depends(get_db)
):
    """
    Obtener un blog publicado por su slug.

    Cada consulta suma una vista al blog.
    """
    blog = crud_blog.get_published_by_slug(db, slug=slug)
    if not blog:
        raise NotFoundException("Blog no encontrado")

    blog = crud_blog.increment_views(db, blog=blog)
    logger.debug(f"Vista registrada para blog {blog.id} ({blog.views})")
    return blog
