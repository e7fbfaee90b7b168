"""
Endpoints para gestión de imágenes de productos y blogs (solo administración).
Soporta almacenamiento local (desarrollo) y Cloudflare R2 (producción).
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from app.config import settings
from app.core.deps import get_db, get_current_admin_user
from app.core.exceptions import ValidationException
from app.models.user import User
from app.schemas.common import MessageResponse
from app.schemas.image import (
    BatchUploadResponse,
    BlogImageResponse,
    BlogImageUpdate,
    ProductImageResponse,
    ProductImageUpdate,
    UploadError,
)
from app.services.image_collection_service import (
    BatchUploadResult,
    ImageUpload,
    OrderedImageCollection,
    blog_images,
    product_images,
)

router = APIRouter()


def _check_batch_size(files: List[UploadFile]) -> None:
    if not files:
        raise ValidationException.for_field("images", "Debe enviar al menos una imagen")
    if len(files) > settings.MAX_BATCH_UPLOAD:
        raise ValidationException.for_field(
            "images", f"Máximo {settings.MAX_BATCH_UPLOAD} imágenes por subida"
        )


def _aligned(values: Optional[List[str]], index: int) -> Optional[str]:
    """Valor del índice dado en una lista paralela opcional."""
    if values and index < len(values) and values[index] != "":
        return values[index]
    return None


async def _append_one(
    collection: OrderedImageCollection,
    db: Session,
    parent_id: int,
    upload: ImageUpload,
    is_primary: bool = False
):
    try:
        return await collection.append_one(
            db, parent_id=parent_id, upload=upload, is_primary=is_primary
        )
    except RuntimeError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e)
        )


def _batch_response(result: BatchUploadResult, item_schema) -> JSONResponse:
    """201 si todas las imágenes se subieron, 206 si hubo errores parciales."""
    body = BatchUploadResponse[item_schema](
        message=result.message,
        uploaded_images=[item_schema.model_validate(image) for image in result.uploaded],
        errors=[
            UploadError(index=error.index, filename=error.filename, error=error.error)
            for error in result.errors
        ],
        success_count=result.success_count,
        error_count=result.error_count,
    )
    return JSONResponse(
        status_code=status.HTTP_206_PARTIAL_CONTENT if result.is_partial else status.HTTP_201_CREATED,
        content=body.model_dump(mode="json")
    )


# ===========================================
# IMÁGENES DE PRODUCTOS
# ===========================================

@router.get("/admin/products/{product_id}/images", response_model=List[ProductImageResponse])
def list_product_images(
    product_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin_user)
):
    """Listar las imágenes de un producto ordenadas por sort_order."""
    product_images.get_parent(db, product_id)
    return product_images.list(db, product_id)


@router.post(
    "/admin/products/{product_id}/images",
    response_model=ProductImageResponse,
    status_code=status.HTTP_201_CREATED
)
async def upload_product_image(
    product_id: int,
    image: UploadFile = File(...),
    alt_text: Optional[str] = Form(None),
    is_primary: bool = Form(False),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin_user)
):
    """
    Subir una imagen a un producto.

    Formatos permitidos: JPG, JPEG, PNG, GIF, WEBP
    Tamaño máximo: 5MB

    Si is_primary es true, la nueva imagen pasa a ser la única principal.
    """
    product_images.get_parent(db, product_id)
    upload = await ImageUpload.from_upload_file(image, alt_text=alt_text)
    return await _append_one(product_images, db, product_id, upload, is_primary)


@router.post(
    "/admin/products/{product_id}/images/multiple",
    response_model=BatchUploadResponse[ProductImageResponse],
    status_code=status.HTTP_201_CREATED,
    responses={206: {"model": BatchUploadResponse[ProductImageResponse]}}
)
async def upload_product_images(
    product_id: int,
    images: List[UploadFile] = File(...),
    alt_texts: Optional[List[str]] = Form(None),
    set_first_as_primary: bool = Form(False),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin_user)
):
    """
    Subir varias imágenes a un producto (máximo 10).

    Cada imagen se procesa por separado: las inválidas se reportan en
    errors con su índice y el resto se guarda igualmente (HTTP 206).
    """
    product_images.get_parent(db, product_id)
    _check_batch_size(images)

    uploads = [
        await ImageUpload.from_upload_file(file, alt_text=_aligned(alt_texts, index))
        for index, file in enumerate(images)
    ]
    result = await product_images.append_many(
        db, parent_id=product_id, uploads=uploads,
        set_first_as_primary=set_first_as_primary
    )
    return _batch_response(result, ProductImageResponse)


@router.put("/admin/products/{product_id}/images/{image_id}", response_model=ProductImageResponse)
def update_product_image(
    product_id: int,
    image_id: int,
    image_in: ProductImageUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin_user)
):
    """
    Actualizar texto alternativo, orden o marca de principal.

    Marcar is_primary quita la marca al resto de imágenes del producto.
    """
    product_images.get_parent(db, product_id)
    return product_images.update(
        db, parent_id=product_id, image_id=image_id,
        data=image_in.model_dump(exclude_unset=True)
    )


@router.delete("/admin/products/{product_id}/images/{image_id}", response_model=MessageResponse)
async def delete_product_image(
    product_id: int,
    image_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin_user)
):
    """Eliminar una imagen de un producto y su archivo del storage."""
    product_images.get_parent(db, product_id)
    await product_images.delete(db, parent_id=product_id, image_id=image_id)
    return MessageResponse(message="Imagen eliminada exitosamente")


# ===========================================
# IMÁGENES DE BLOGS
# ===========================================

@router.get("/admin/blogs/{blog_id}/images", response_model=List[BlogImageResponse])
def list_blog_images(
    blog_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin_user)
):
    """Listar las imágenes de un blog ordenadas por sort_order."""
    blog_images.get_parent(db, blog_id)
    return blog_images.list(db, blog_id)


@router.post(
    "/admin/blogs/{blog_id}/images",
    response_model=BlogImageResponse,
    status_code=status.HTTP_201_CREATED
)
async def upload_blog_image(
    blog_id: int,
    image: UploadFile = File(...),
    alt_text: Optional[str] = Form(None),
    caption: Optional[str] = Form(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin_user)
):
    """Subir una imagen a un blog (se agrega al final)."""
    blog_images.get_parent(db, blog_id)
    upload = await ImageUpload.from_upload_file(image, alt_text=alt_text, caption=caption)
    return await _append_one(blog_images, db, blog_id, upload)


@router.post(
    "/admin/blogs/{blog_id}/images/multiple",
    response_model=BatchUploadResponse[BlogImageResponse],
    status_code=status.HTTP_201_CREATED,
    responses={206: {"model": BatchUploadResponse[BlogImageResponse]}}
)
async def upload_blog_images(
    blog_id: int,
    images: List[UploadFile] = File(...),
    alt_texts: Optional[List[str]] = Form(None),
    captions: Optional[List[str]] = Form(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin_user)
):
    """Subir varias imágenes a un blog (máximo 10, errores parciales con HTTP 206)."""
    blog_images.get_parent(db, blog_id)
    _check_batch_size(images)

    uploads = [
        await ImageUpload.from_upload_file(
            file,
            alt_text=_aligned(alt_texts, index),
            caption=_aligned(captions, index)
        )
        for index, file in enumerate(images)
    ]
    result = await blog_images.append_many(db, parent_id=blog_id, uploads=uploads)
    return _batch_response(result, BlogImageResponse)


@router.put("/admin/blogs/{blog_id}/images/{image_id}", response_model=BlogImageResponse)
def update_blog_image(
    blog_id: int,
    image_id: int,
    image_in: BlogImageUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin_user)
):
    """Actualizar texto alternativo, leyenda u orden de una imagen."""
    blog_images.get_parent(db, blog_id)
    return blog_images.update(
        db, parent_id=blog_id, image_id=image_id,
        data=image_in.model_dump(exclude_unset=True)
    )


@router.delete("/admin/blogs/{blog_id}/images/{image_id}", response_model=MessageResponse)
async def delete_blog_image(
    blog_id: int,
    image_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin_user)
):
    """Eliminar una imagen de un blog y su archivo del storage."""
    blog_images.get_parent(db, blog_id)
    await blog_images.delete(db, parent_id=blog_id, image_id=image_id)
    return MessageResponse(message="Imagen eliminada exitosamente")
