"""
Servicio de almacenamiento de imágenes.
Soporta almacenamiento local (desarrollo) y Cloudflare R2 (producción).

Uso:
    from app.services.storage_service import storage_service, StorageFolder

    result = await storage_service.upload_file(
        content=file_bytes,
        folder=StorageFolder.PRODUCTS,
        filename="panel.jpg"
    )
    # result = {"url": "https://...", "object_key": "products/abc123.jpg", "size": 12345, ...}

    await storage_service.delete_file("products/abc123.jpg")
"""
import logging
import uuid
from enum import Enum
from pathlib import Path
from typing import Optional

import aioboto3
from botocore.exceptions import ClientError

from app.config import get_settings

logger = logging.getLogger(__name__)


class StorageFolder(str, Enum):
    """Carpetas disponibles para almacenamiento."""
    PRODUCTS = "products"
    BLOGS = "blogs"
    CATEGORIES = "categories"


class StorageService:
    """
    Almacén de archivos direccionado por object_key ("carpeta/nombre.ext").
    Soporta almacenamiento local y Cloudflare R2.
    """

    _instance = None

    ALLOWED_IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".gif", ".webp")

    CONTENT_TYPES = {
        ".jpg": "image/jpeg",
        ".jpeg": "image/jpeg",
        ".png": "image/png",
        ".gif": "image/gif",
        ".webp": "image/webp",
    }

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if self._initialized:
            return

        self._initialized = True
        settings = get_settings()

        self.r2_enabled = settings.R2_ENABLED
        self.upload_dir = Path(settings.UPLOAD_DIR)
        self.max_file_size = settings.MAX_FILE_SIZE
        self.api_base_url = settings.API_BASE_URL.rstrip("/")

        # Configuración R2
        self.r2_account_id = settings.R2_ACCOUNT_ID
        self.r2_access_key = settings.R2_ACCESS_KEY_ID
        self.r2_secret_key = settings.R2_SECRET_ACCESS_KEY
        self.r2_bucket = settings.R2_BUCKET_NAME
        self.r2_public_url = settings.R2_PUBLIC_URL.rstrip("/")
        self.r2_endpoint = f"https://{self.r2_account_id}.r2.cloudflarestorage.com"

        if not self.r2_enabled:
            self.upload_dir.mkdir(parents=True, exist_ok=True)

        mode = "R2" if self.r2_enabled else "Local"
        logger.info(f"StorageService inicializado en modo: {mode}")

    def is_configured(self) -> bool:
        """Verifica si el servicio está correctamente configurado."""
        if not self.r2_enabled:
            return True

        return bool(
            self.r2_account_id and
            self.r2_access_key and
            self.r2_secret_key and
            self.r2_bucket
        )

    def _get_extension(self, filename: str) -> str:
        return Path(filename or "").suffix.lower()

    def _generate_filename(self, original_filename: str) -> str:
        """Generar nombre único conservando la extensión original."""
        return f"{uuid.uuid4().hex}{self._get_extension(original_filename)}"

    def _r2_client(self):
        session = aioboto3.Session()
        return session.client(
            "s3",
            endpoint_url=self.r2_endpoint,
            aws_access_key_id=self.r2_access_key,
            aws_secret_access_key=self.r2_secret_key,
            region_name="auto"
        )

    def _local_path(self, object_key: str) -> Path:
        return self.upload_dir / object_key

    def validate_image(self, filename: str, size: int) -> tuple[bool, str]:
        """
        Validar extensión y tamaño de una imagen.

        Returns:
            (is_valid, error_message)
        """
        if self._get_extension(filename) not in self.ALLOWED_IMAGE_EXTENSIONS:
            allowed = ", ".join(ext.lstrip(".") for ext in self.ALLOWED_IMAGE_EXTENSIONS)
            return False, f"El archivo debe ser una imagen ({allowed})"

        if size > self.max_file_size:
            max_mb = self.max_file_size / (1024 * 1024)
            return False, f"Archivo muy grande. Máximo: {max_mb:.1f}MB"

        return True, ""

    async def upload_file(self, content: bytes, folder: StorageFolder, filename: str) -> dict:
        """
        Subir archivo al storage con un nombre único.

        Args:
            content: Contenido del archivo en bytes
            folder: Carpeta destino
            filename: Nombre original del archivo

        Returns:
            {
                "url": "https://cdn.example.com/products/abc123.jpg",
                "object_key": "products/abc123.jpg",
                "size": 123456,
                "filename": "abc123.jpg"
            }

        Raises:
            RuntimeError: Si el almacenamiento falla
        """
        object_key = f"{folder.value}/{self._generate_filename(filename)}"

        try:
            if self.r2_enabled:
                async with self._r2_client() as s3:
                    await s3.put_object(
                        Bucket=self.r2_bucket,
                        Key=object_key,
                        Body=content,
                        ContentType=self.CONTENT_TYPES.get(
                            self._get_extension(filename), "application/octet-stream"
                        )
                    )
            else:
                file_path = self._local_path(object_key)
                file_path.parent.mkdir(parents=True, exist_ok=True)
                file_path.write_bytes(content)
        except (ClientError, OSError) as e:
            logger.error(f"Error guardando {object_key}: {e}")
            raise RuntimeError(f"Error al guardar archivo: {e}")

        logger.info(f"Archivo guardado: {object_key}")
        return {
            "url": self.get_public_url(object_key),
            "object_key": object_key,
            "size": len(content),
            "filename": object_key.split("/")[-1]
        }

    async def exists(self, object_key: str) -> bool:
        """Indica si el objeto existe en el storage."""
        if not object_key:
            return False

        if not self.r2_enabled:
            return self._local_path(object_key).is_file()

        try:
            async with self._r2_client() as s3:
                await s3.head_object(Bucket=self.r2_bucket, Key=object_key)
            return True
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") in ("404", "NoSuchKey", "NotFound"):
                return False
            raise

    async def delete_file(self, object_key: str) -> bool:
        """
        Eliminar archivo del storage. Eliminar un archivo inexistente no es error.

        Args:
            object_key: Clave del objeto (ej: "products/abc123.jpg")

        Returns:
            True si el archivo existía y se eliminó
        """
        if not object_key:
            return False

        try:
            if self.r2_enabled:
                async with self._r2_client() as s3:
                    await s3.delete_object(Bucket=self.r2_bucket, Key=object_key)
            else:
                file_path = self._local_path(object_key)
                if not file_path.exists():
                    logger.warning(f"Archivo no encontrado: {object_key}")
                    return False
                file_path.unlink()
        except (ClientError, OSError) as e:
            logger.error(f"Error eliminando {object_key}: {e}")
            return False

        logger.info(f"Archivo eliminado: {object_key}")
        return True

    def get_public_url(self, object_key: str) -> str:
        """Obtener URL pública de un archivo."""
        if not object_key:
            return ""

        if self.r2_enabled:
            return f"{self.r2_public_url}/{object_key}"
        return f"{self.api_base_url}/uploads/{object_key}"


# Instancia Singleton del servicio
storage_service = StorageService()
