"""
Schemas para usuarios.
"""
from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from datetime import datetime


class UserResponse(BaseModel):
    """Schema de respuesta de usuario."""

    id: int
    name: str
    email: EmailStr
    phone: Optional[str] = None
    role: str
    is_active: bool
    last_login: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class UserCreate(BaseModel):
    """Schema para crear usuario (usado al inicializar el administrador)."""

    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=8)
    phone: Optional[str] = Field(None, max_length=30)
    role: str = "cliente"


class ProfileUpdate(BaseModel):
    """Schema para actualizar el perfil propio."""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=30)


class PasswordUpdate(BaseModel):
    """Schema para cambiar la contraseña propia."""

    current_password: str = Field(..., min_length=1)
    password: str = Field(..., min_length=8)


class UserStatusUpdate(BaseModel):
    """Schema para activar/desactivar un usuario (solo admin)."""

    is_active: bool
