"""
Endpoints de administración de blogs.
"""
import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.core.deps import get_db, get_current_admin_user, blog_filters
from app.core.exceptions import NotFoundException
from app.crud.blog import blog as crud_blog
from app.models.user import User
from app.schemas.blog import BlogCreate, BlogResponse, BlogStatistics, BlogUpdate
from app.schemas.common import MessageResponse, PaginatedResponse
from app.schemas.listing import BlogFilterSpec

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_blog_or_404(db: Session, blog_id: int):
    blog = crud_blog.get(db, id=blog_id)
    if not blog:
        raise NotFoundException("Blog no encontrado")
    return blog


@router.get("", response_model=PaginatedResponse[BlogResponse])
def list_blogs(
    include_deleted: bool = Query(False, description="Incluir blogs eliminados"),
    filters: BlogFilterSpec = Depends(blog_filters),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin_user)
):
    """
    Listar todos los blogs (publicados, borradores y programados).

    Filtros adicionales: status (publicado o no) y author_id.
    """
    return crud_blog.get_admin_page(db, spec=filters, include_deleted=include_deleted)


@router.get("/statistics", response_model=BlogStatistics)
def get_statistics(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin_user)
):
    """Totales, vistas y rankings de blogs."""
    return crud_blog.get_statistics(db)


@router.get("/{blog_id}", response_model=BlogResponse)
def get_blog(
    blog_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin_user)
):
    """Obtener un blog por ID. No suma vistas."""
    return _get_blog_or_404(db, blog_id)


@router.post("", response_model=BlogResponse, status_code=status.HTTP_201_CREATED)
def create_blog(
    blog_in: BlogCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin_user)
):
    """
    Crear un blog.

    - El slug se genera a partir del título
    - Si se publica sin fecha, published_at es el momento actual
    - product_ids asocia productos en el orden recibido
    """
    blog = crud_blog.create(db, obj_in=blog_in, author_id=current_user.id)
    logger.info(f"Blog {blog.id} creado por usuario {current_user.id}")
    return blog


@router.put("/{blog_id}", response_model=BlogResponse)
def update_blog(
    blog_id: int,
    blog_in: BlogUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin_user)
):
    """Actualizar un blog. El slug se recalcula si cambia el título."""
    blog = _get_blog_or_404(db, blog_id)
    return crud_blog.update(db, db_obj=blog, obj_in=blog_in)


@router.delete("/{blog_id}", response_model=MessageResponse)
def delete_blog(
    blog_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin_user)
):
    """Eliminar un blog (soft delete)."""
    if not crud_blog.soft_delete(db, id=blog_id):
        raise NotFoundException("Blog no encontrado")
    logger.info(f"Blog {blog_id} eliminado por usuario {current_user.id}")
    return MessageResponse(message="Blog eliminado exitosamente")


@router.post("/{blog_id}/restore", response_model=BlogResponse)
def restore_blog(
    blog_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin_user)
):
    """Restaurar un blog eliminado."""
    blog = crud_blog.restore(db, id=blog_id)
    if not blog:
        raise NotFoundException("Blog no encontrado")
    return blog
