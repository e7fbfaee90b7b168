"""
Excepciones personalizadas para la aplicación Solar Store.
"""
from typing import Dict, Optional


class StoreException(Exception):
    """Excepción base para todas las excepciones de Solar Store."""

    def __init__(self, message: str = "Error en la aplicación"):
        self.message = message
        super().__init__(self.message)


class NotFoundException(StoreException):
    """Excepción cuando un recurso no se encuentra."""

    def __init__(self, message: str = "Recurso no encontrado"):
        super().__init__(message)


class UnauthorizedException(StoreException):
    """Excepción cuando el usuario no está autenticado."""

    def __init__(self, message: str = "No autorizado"):
        super().__init__(message)


class ForbiddenException(StoreException):
    """Excepción cuando el usuario no tiene permisos."""

    def __init__(self, message: str = "Acceso prohibido"):
        super().__init__(message)


class BadRequestException(StoreException):
    """Excepción cuando la solicitud es inválida."""

    def __init__(self, message: str = "Solicitud inválida"):
        super().__init__(message)


class ConflictException(StoreException):
    """Excepción cuando hay un conflicto con el estado actual."""

    def __init__(self, message: str = "Conflicto con el recurso"):
        super().__init__(message)


class ValidationException(StoreException):
    """
    Excepción cuando falla la validación de datos.

    Los errores se reportan por campo: {"campo": "mensaje"}.
    """

    def __init__(
        self,
        message: str = "Error de validación",
        errors: Optional[Dict[str, str]] = None
    ):
        self.errors = errors or {}
        super().__init__(message)

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationException":
        """Crear excepción con un único campo inválido."""
        return cls(message, errors={field: message})
