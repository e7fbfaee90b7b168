"""
Servicio de inicialización de la aplicación.
Crea datos iniciales necesarios al arrancar.
"""
import logging
import time
from pydantic import ValidationError
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.config import get_settings
from app.core.exceptions import StoreException
from app.crud.user import user as crud_user
from app.db.session import SessionLocal
from app.schemas.user import UserCreate

logger = logging.getLogger(__name__)


def wait_for_db(max_retries: int = 10, delay: int = 2) -> bool:
    """
    Esperar a que la base de datos esté lista.

    Args:
        max_retries: Número máximo de reintentos
        delay: Segundos entre reintentos

    Returns:
        True si la BD está lista, False si falló
    """
    for attempt in range(max_retries):
        try:
            with SessionLocal() as db:
                db.execute(text("SELECT 1 FROM users LIMIT 1"))
            return True
        except SQLAlchemyError as e:
            if attempt < max_retries - 1:
                logger.info(f"Esperando base de datos... intento {attempt + 1}/{max_retries}")
                time.sleep(delay)
            else:
                logger.error(f"Base de datos no disponible después de {max_retries} intentos: {e}")
    return False


def init_admin_user() -> bool:
    """
    Crear usuario administrador inicial si no existe.

    Usa las variables de entorno ADMIN_EMAIL y ADMIN_PASSWORD.

    Returns:
        True si se creó el usuario, False si ya existía o hubo error
    """
    settings = get_settings()

    if not settings.ADMIN_EMAIL or not settings.ADMIN_PASSWORD:
        logger.warning("ADMIN_EMAIL o ADMIN_PASSWORD no configurados")
        return False

    if not wait_for_db():
        return False

    db: Session = SessionLocal()

    try:
        if crud_user.get_by_email(db, email=settings.ADMIN_EMAIL, include_deleted=True):
            logger.info(f"Usuario administrador ya existe: {settings.ADMIN_EMAIL}")
            return False

        crud_user.create(db, obj_in=UserCreate(
            name="Administrador",
            email=settings.ADMIN_EMAIL,
            password=settings.ADMIN_PASSWORD,
            role="administrador",
        ))

        logger.info(f"Usuario administrador creado: {settings.ADMIN_EMAIL}")
        logger.warning("Cambia la contraseña del administrador después del primer login")
        return True

    except (SQLAlchemyError, StoreException, ValidationError) as e:
        db.rollback()
        logger.exception(f"Error al crear usuario administrador: {e}")
        return False

    finally:
        db.close()


def run_initialization():
    """
    Ejecutar todas las tareas de inicialización.
    Llamar desde el evento startup de FastAPI.
    """
    logger.info("Ejecutando inicialización...")
    init_admin_user()
    logger.info("Inicialización completada")
