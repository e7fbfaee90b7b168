"""
Tests de la creación del administrador inicial.
"""
import pytest

from app.config import settings
from app.models.user import User
from app.services import init_service


@pytest.fixture
def init_db(session_factory, monkeypatch):
    monkeypatch.setattr(init_service, "SessionLocal", session_factory)
    return session_factory


def test_creates_admin_once(init_db, db):
    assert init_service.init_admin_user() is True
    assert init_service.init_admin_user() is False

    admins = db.query(User).filter(User.email == settings.ADMIN_EMAIL).all()
    assert len(admins) == 1
    assert admins[0].role == "administrador"
    assert admins[0].is_admin()


def test_skips_without_credentials(init_db, monkeypatch):
    monkeypatch.setattr(settings, "ADMIN_PASSWORD", "")

    assert init_service.init_admin_user() is False
