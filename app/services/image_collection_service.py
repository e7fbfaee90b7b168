"""
Servicio de colecciones ordenadas de imágenes (productos y blogs).

Cada imagen pertenece a un padre y tiene un sort_order. En productos además
como máximo una imagen es la principal (is_primary). Quitar la marca a las
hermanas y marcar la nueva se confirma siempre en un único commit.

Uso:
    from app.services.image_collection_service import product_images, ImageUpload

    image = await product_images.append_one(
        db, parent_id=product.id,
        upload=ImageUpload(filename="panel.jpg", content=data),
        is_primary=True
    )
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundException, ValidationException
from app.models.blog import Blog
from app.models.blog_image import BlogImage
from app.models.product import Product
from app.models.product_image import ProductImage
from app.services.storage_service import StorageFolder, StorageService, storage_service

logger = logging.getLogger(__name__)


@dataclass
class ImageUpload:
    """Archivo recibido junto con sus metadatos opcionales."""

    filename: str
    content: bytes
    alt_text: Optional[str] = None
    caption: Optional[str] = None

    @classmethod
    async def from_upload_file(
        cls, file, alt_text: Optional[str] = None, caption: Optional[str] = None
    ) -> "ImageUpload":
        """Leer un UploadFile de FastAPI."""
        return cls(
            filename=file.filename or "",
            content=await file.read(),
            alt_text=alt_text,
            caption=caption
        )


@dataclass
class UploadFailure:
    index: int
    filename: str
    error: str


@dataclass
class BatchUploadResult:
    """Resultado de una subida múltiple: imágenes creadas y fallos por índice."""

    uploaded: List[Any] = field(default_factory=list)
    errors: List[UploadFailure] = field(default_factory=list)

    @property
    def success_count(self) -> int:
        return len(self.uploaded)

    @property
    def error_count(self) -> int:
        return len(self.errors)

    @property
    def is_partial(self) -> bool:
        return self.error_count > 0

    @property
    def message(self) -> str:
        if not self.errors:
            return f"{self.success_count} imágenes subidas exitosamente"
        return (
            f"{self.success_count} imágenes subidas, "
            f"{self.error_count} con errores"
        )


class OrderedImageCollection:
    """
    Gestor de las imágenes de un tipo de padre.

    Las altas, modificaciones y bajas se hacen siempre sobre una imagen que
    pertenezca al padre indicado; en caso contrario se lanza NotFoundException.
    """

    def __init__(
        self,
        model,
        *,
        parent_model,
        parent_field: str,
        path_field: str,
        folder: StorageFolder,
        supports_primary: bool = False,
        metadata_fields: Sequence[str] = ("alt_text",),
        storage: Optional[StorageService] = None,
        parent_label: str = "Recurso"
    ):
        self.model = model
        self.parent_model = parent_model
        self.parent_field = parent_field
        self.path_field = path_field
        self.folder = folder
        self.supports_primary = supports_primary
        self.metadata_fields = tuple(metadata_fields)
        self.storage = storage or storage_service
        self.parent_label = parent_label

    @property
    def _parent_column(self):
        return getattr(self.model, self.parent_field)

    def get_parent(self, db: Session, parent_id: int):
        """
        Obtener el padre (no eliminado).

        Raises:
            NotFoundException: Si no existe o está eliminado
        """
        parent = db.query(self.parent_model).filter(
            self.parent_model.id == parent_id,
            self.parent_model.deleted_at.is_(None)
        ).first()
        if not parent:
            raise NotFoundException(f"{self.parent_label} no encontrado")
        return parent

    def list(self, db: Session, parent_id: int) -> List[Any]:
        """Imágenes del padre ordenadas por sort_order (desempate por id)."""
        return (
            db.query(self.model)
            .filter(self._parent_column == parent_id)
            .order_by(self.model.sort_order.asc(), self.model.id.asc())
            .all()
        )

    def get_for_parent(self, db: Session, parent_id: int, image_id: int):
        """
        Obtener una imagen verificando que pertenezca al padre.

        Raises:
            NotFoundException: Si la imagen no existe o es de otro padre
        """
        image = db.query(self.model).filter(
            self.model.id == image_id,
            self._parent_column == parent_id
        ).first()
        if not image:
            raise NotFoundException("Imagen no encontrada")
        return image

    def _next_sort_order(self, db: Session, parent_id: int) -> int:
        current = (
            db.query(func.max(self.model.sort_order))
            .filter(self._parent_column == parent_id)
            .scalar()
        )
        return 0 if current is None else current + 1

    def _clear_primary(self, db: Session, parent_id: int, exclude_id: Optional[int] = None) -> None:
        """Quitar la marca de principal a las imágenes del padre (sin commit)."""
        query = db.query(self.model).filter(
            self._parent_column == parent_id,
            self.model.is_primary.is_(True)
        )
        if exclude_id is not None:
            query = query.filter(self.model.id != exclude_id)
        query.update({"is_primary": False}, synchronize_session="fetch")

    def validate_upload(self, upload: ImageUpload) -> None:
        """
        Validar extensión y tamaño de la imagen.

        Raises:
            ValidationException: Error asociado al campo "image"
        """
        is_valid, error = self.storage.validate_image(upload.filename, len(upload.content))
        if not is_valid:
            raise ValidationException.for_field("image", error)

    async def _insert(
        self,
        db: Session,
        parent_id: int,
        upload: ImageUpload,
        *,
        sort_order: Optional[int],
        is_primary: bool
    ):
        """
        Guardar el archivo y crear el registro en una sola transacción.

        Si la escritura en base de datos falla se elimina el archivo guardado.
        """
        stored = await self.storage.upload_file(
            content=upload.content,
            folder=self.folder,
            filename=upload.filename
        )

        values: Dict[str, Any] = {
            self.parent_field: parent_id,
            self.path_field: stored["object_key"],
            "url": stored["url"],
        }
        for name in self.metadata_fields:
            values[name] = getattr(upload, name)
        if hasattr(self.model, "filename"):
            values["filename"] = upload.filename
        if self.supports_primary:
            values["is_primary"] = is_primary

        try:
            if is_primary:
                self._clear_primary(db, parent_id)
            if sort_order is None:
                sort_order = self._next_sort_order(db, parent_id)
            image = self.model(**values, sort_order=sort_order)
            db.add(image)
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            await self.storage.delete_file(stored["object_key"])
            raise

        db.refresh(image)
        return image

    async def append_one(
        self,
        db: Session,
        *,
        parent_id: int,
        upload: ImageUpload,
        is_primary: bool = False
    ):
        """
        Agregar una imagen al final de la colección.

        Args:
            db: Sesión de base de datos
            parent_id: ID del producto o blog
            upload: Archivo y metadatos
            is_primary: Marcarla como principal (solo productos)

        Returns:
            Imagen creada

        Raises:
            ValidationException: Si el archivo no es una imagen válida
        """
        self.validate_upload(upload)
        return await self._insert(
            db, parent_id, upload,
            sort_order=None,
            is_primary=is_primary and self.supports_primary
        )

    async def append_many(
        self,
        db: Session,
        *,
        parent_id: int,
        uploads: Sequence[ImageUpload],
        set_first_as_primary: bool = False
    ) -> BatchUploadResult:
        """
        Agregar varias imágenes, procesadas en orden e independientemente.

        El sort_order base se calcula una sola vez: la imagen k recibe base + k,
        de modo que un fallo deja un hueco en la numeración. Con
        set_first_as_primary las principales previas se desmarcan antes del
        lote, aunque la primera imagen falle.

        Returns:
            Resultado con las imágenes creadas y los errores por índice
        """
        result = BatchUploadResult()
        base_order = self._next_sort_order(db, parent_id)
        set_first_as_primary = set_first_as_primary and self.supports_primary

        if set_first_as_primary:
            self._clear_primary(db, parent_id)
            db.commit()

        for index, upload in enumerate(uploads):
            is_primary = set_first_as_primary and index == 0
            try:
                self.validate_upload(upload)
                image = await self._insert(
                    db, parent_id, upload,
                    sort_order=base_order + index,
                    is_primary=is_primary
                )
            except Exception as e:
                error = e.message if isinstance(e, ValidationException) else str(e)
                logger.warning(f"Imagen {index} ({upload.filename}) rechazada: {error}")
                result.errors.append(UploadFailure(index=index, filename=upload.filename, error=error))
                continue
            result.uploaded.append(image)

        return result

    def update(self, db: Session, *, parent_id: int, image_id: int, data: Dict[str, Any]):
        """
        Actualizar metadatos, orden o marca de principal de una imagen.

        Marcar is_primary quita la marca a las demás en el mismo commit.
        """
        image = self.get_for_parent(db, parent_id, image_id)

        allowed = set(self.metadata_fields) | {"sort_order"}
        if self.supports_primary:
            allowed.add("is_primary")

        for name, value in data.items():
            if name not in allowed:
                continue
            if value is None and name in ("sort_order", "is_primary"):
                continue
            setattr(image, name, value)

        if self.supports_primary and data.get("is_primary"):
            self._clear_primary(db, parent_id, exclude_id=image.id)

        db.add(image)
        db.commit()
        db.refresh(image)
        return image

    async def delete(self, db: Session, *, parent_id: int, image_id: int) -> None:
        """
        Eliminar una imagen y su archivo. Un archivo ya inexistente no es error.

        El resto de imágenes conserva su sort_order.
        """
        image = self.get_for_parent(db, parent_id, image_id)

        object_key = getattr(image, self.path_field)
        if await self.storage.exists(object_key):
            await self.storage.delete_file(object_key)
        else:
            logger.info(f"Archivo ya inexistente al eliminar imagen {image_id}: {object_key}")

        db.delete(image)
        db.commit()


product_images = OrderedImageCollection(
    ProductImage,
    parent_model=Product,
    parent_field="product_id",
    path_field="path",
    folder=StorageFolder.PRODUCTS,
    supports_primary=True,
    parent_label="Producto"
)

blog_images = OrderedImageCollection(
    BlogImage,
    parent_model=Blog,
    parent_field="blog_id",
    path_field="image_path",
    folder=StorageFolder.BLOGS,
    metadata_fields=("alt_text", "caption"),
    parent_label="Blog"
)
