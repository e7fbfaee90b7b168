"""
CRUD para usuarios con soporte para Soft Delete.
"""
from datetime import datetime
from typing import Optional
from sqlalchemy.orm import Session

from app.config import settings
from app.core.exceptions import ConflictException
from app.core.security import get_password_hash, verify_password
from app.crud.base import CRUDBase
from app.crud.listing import Page, paginate
from app.models.user import User
from app.schemas.user import ProfileUpdate, UserCreate


class CRUDUser(CRUDBase[User, UserCreate, ProfileUpdate]):
    """CRUD específico para usuarios con soporte para soft delete."""

    conflict_message = "El email ya está registrado"

    def get_by_email(
        self, db: Session, *, email: str, include_deleted: bool = False
    ) -> Optional[User]:
        """
        Obtener usuario por email.
        Por defecto excluye usuarios eliminados (soft delete).

        Args:
            db: Sesión de base de datos
            email: Email del usuario
            include_deleted: Incluir usuarios eliminados

        Returns:
            Usuario encontrado o None
        """
        return self._base_query(db, include_deleted).filter(User.email == email).first()

    def create(self, db: Session, *, obj_in: UserCreate) -> User:
        """Crear usuario con hash de contraseña."""
        db_obj = User(
            name=obj_in.name,
            email=obj_in.email,
            phone=obj_in.phone,
            role=obj_in.role,
            password_hash=get_password_hash(obj_in.password),
        )
        db.add(db_obj)
        return self._commit(db, db_obj)

    def authenticate(self, db: Session, *, email: str, password: str) -> Optional[User]:
        """
        Autenticar usuario.
        Solo autentica usuarios no eliminados (soft delete).

        Args:
            db: Sesión de base de datos
            email: Email del usuario
            password: Contraseña en texto plano

        Returns:
            Usuario autenticado o None
        """
        user = self.get_by_email(db, email=email)
        if not user:
            return None
        if not verify_password(password, user.password_hash):
            return None
        return user

    def touch_last_login(self, db: Session, *, user: User) -> User:
        """Registrar la fecha del último inicio de sesión."""
        user.last_login = datetime.utcnow()
        db.add(user)
        return self._commit(db, user)

    def get_page(self, db: Session, *, page: int = 1, per_page: Optional[int] = None) -> Page:
        """Listado paginado de usuarios, los más recientes primero."""
        query = self._base_query(db).order_by(User.id.desc())
        return paginate(query, page=page, per_page=per_page or settings.USERS_PER_PAGE)

    def update_profile(self, db: Session, *, user: User, obj_in: ProfileUpdate) -> User:
        """
        Actualizar el perfil propio (nombre, email, teléfono).

        Raises:
            ConflictException: Si el nuevo email ya pertenece a otro usuario
        """
        update_data = obj_in.model_dump(exclude_unset=True)

        email = update_data.get("email")
        if email and email != user.email:
            existing = self.get_by_email(db, email=email, include_deleted=True)
            if existing and existing.id != user.id:
                raise ConflictException(self.conflict_message)

        # name y email no admiten null
        for field in ("name", "email"):
            if field in update_data and update_data[field] is None:
                update_data.pop(field)

        return self.update(db, db_obj=user, obj_in=update_data)

    def update_password(self, db: Session, *, user: User, new_password: str) -> User:
        """
        Actualizar contraseña de usuario.

        Args:
            db: Sesión de base de datos
            user: Usuario a actualizar
            new_password: Nueva contraseña

        Returns:
            Usuario actualizado
        """
        user.password_hash = get_password_hash(new_password)
        db.add(user)
        return self._commit(db, user)

    def set_active(self, db: Session, *, user: User, is_active: bool) -> User:
        """Activar o desactivar un usuario."""
        user.is_active = is_active
        db.add(user)
        return self._commit(db, user)


# Instancia global del CRUD
user = CRUDUser(User)
