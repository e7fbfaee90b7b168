"""
Fixtures comunes: base de datos SQLite en memoria, cliente HTTP y fábricas.
"""
import itertools
import os
import tempfile
from datetime import datetime, timedelta
from decimal import Decimal

# La configuración se lee al importar app.config
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ["R2_ENABLED"] = "false"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="solar-store-uploads-")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.deps import get_db
from app.core.security import create_access_token, get_password_hash
from app.crud.blog import blog as crud_blog
from app.crud.category import category as crud_category
from app.crud.product import product as crud_product
from app.db.base import Base
from app.main import app
from app.models.user import User
from app.schemas.blog import BlogCreate
from app.schemas.catalog import CategoryCreate
from app.schemas.product import ProductCreate

PASSWORD = "secret-password"
PASSWORD_HASH = get_password_hash(PASSWORD)

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64

_sequence = itertools.count(1)


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    # Sin context manager: no se ejecuta el evento de startup
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db):
    def _make(role="cliente", is_active=True, name=None, email=None):
        number = next(_sequence)
        user = User(
            name=name or f"Usuario {number}",
            email=email or f"user{number}@example.com",
            password_hash=PASSWORD_HASH,
            role=role,
            is_active=is_active,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user
    return _make


def auth_headers(user) -> dict:
    token = create_access_token(user.id)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_user(make_user):
    return make_user(role="administrador", name="Administrador")


@pytest.fixture
def admin_headers(admin_user):
    return auth_headers(admin_user)


@pytest.fixture
def make_category(db):
    def _make(name=None, **fields):
        return crud_category.create(
            db, obj_in=CategoryCreate(name=name or f"Categoría {next(_sequence)}", **fields)
        )
    return _make


@pytest.fixture
def category(make_category):
    return make_category(name="Paneles Solares")


@pytest.fixture
def make_product(db, category):
    def _make(name=None, **fields):
        number = next(_sequence)
        data = {
            "name": name or f"Panel {number}",
            "description": "Panel solar monocristalino",
            "sku": f"SKU-{number}",
            "price": Decimal("100.00"),
            "stock_quantity": 10,
            "category_id": category.id,
        }
        data.update(fields)
        return crud_product.create(db, obj_in=ProductCreate(**data))
    return _make


@pytest.fixture
def make_blog(db, admin_user):
    def _make(title=None, published=True, published_at=None, **fields):
        number = next(_sequence)
        if published and published_at is None:
            published_at = datetime.utcnow() - timedelta(days=1)
        data = {
            "title": title or f"Artículo {number}",
            "content": "Contenido sobre energía solar",
            "is_published": published,
            "published_at": published_at,
        }
        data.update(fields)
        return crud_blog.create(db, obj_in=BlogCreate(**data), author_id=admin_user.id)
    return _make


@pytest.fixture
def headers_for():
    return auth_headers


@pytest.fixture
def png():
    return PNG_BYTES


@pytest.fixture
def password():
    return PASSWORD
