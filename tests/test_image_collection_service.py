"""
Tests del servicio de colecciones ordenadas de imágenes.
"""
from pathlib import Path

import pytest
from sqlalchemy.exc import OperationalError

from app.core.exceptions import NotFoundException, ValidationException
from app.crud.product import product as crud_product
from app.services.image_collection_service import ImageUpload, blog_images, product_images
from app.services.storage_service import StorageFolder, storage_service

pytestmark = pytest.mark.anyio


def stored_files(folder: StorageFolder):
    path = Path(storage_service.upload_dir) / folder.value
    return set(path.iterdir()) if path.exists() else set()


@pytest.fixture
def product(make_product):
    return make_product()


async def test_append_many_reports_failures_by_index(db, product, png):
    uploads = [
        ImageUpload(filename="a.png", content=png),
        ImageUpload(filename="b.bmp", content=png),
        ImageUpload(filename="c.png", content=png),
        ImageUpload(filename="d.png", content=png),
    ]

    result = await product_images.append_many(db, parent_id=product.id, uploads=uploads)

    assert result.is_partial
    assert result.success_count == 3
    assert [(error.index, error.filename) for error in result.errors] == [(1, "b.bmp")]
    assert [image.sort_order for image in result.uploaded] == [0, 2, 3]
    assert "1 con errores" in result.message


async def test_append_many_without_failures(db, product, png):
    uploads = [ImageUpload(filename=f"{n}.jpg", content=png) for n in range(3)]

    result = await product_images.append_many(
        db, parent_id=product.id, uploads=uploads, set_first_as_primary=True
    )

    assert not result.is_partial
    assert [image.is_primary for image in result.uploaded] == [True, False, False]


async def test_database_failure_removes_stored_file(db, product, png, monkeypatch):
    before = stored_files(StorageFolder.PRODUCTS)

    def failing_commit():
        raise OperationalError("INSERT", {}, Exception("database is locked"))

    monkeypatch.setattr(db, "commit", failing_commit)

    with pytest.raises(OperationalError):
        await product_images.append_one(
            db, parent_id=product.id, upload=ImageUpload(filename="a.png", content=png)
        )

    assert stored_files(StorageFolder.PRODUCTS) == before


async def test_append_one_validates_before_storing(db, product):
    before = stored_files(StorageFolder.PRODUCTS)

    with pytest.raises(ValidationException) as exc_info:
        await product_images.append_one(
            db, parent_id=product.id, upload=ImageUpload(filename="doc.pdf", content=b"%PDF")
        )

    assert "image" in exc_info.value.errors
    assert stored_files(StorageFolder.PRODUCTS) == before


async def test_blog_images_ignore_primary_flag(db, make_blog, png):
    blog = make_blog()

    image = await blog_images.append_one(
        db, parent_id=blog.id,
        upload=ImageUpload(filename="a.png", content=png, caption="Leyenda"),
        is_primary=True
    )

    assert image.caption == "Leyenda"
    assert not hasattr(image, "is_primary")


async def test_delete_checks_ownership(db, make_product, product, png):
    other = make_product()
    image = await product_images.append_one(
        db, parent_id=other.id, upload=ImageUpload(filename="a.png", content=png)
    )

    with pytest.raises(NotFoundException):
        await product_images.delete(db, parent_id=product.id, image_id=image.id)


async def test_storage_exists_and_idempotent_delete(png):
    stored = await storage_service.upload_file(png, StorageFolder.CATEGORIES, "icono.png")

    assert await storage_service.exists(stored["object_key"])
    assert await storage_service.delete_file(stored["object_key"]) is True
    assert not await storage_service.exists(stored["object_key"])
    assert await storage_service.delete_file(stored["object_key"]) is False


async def test_get_parent_ignores_deleted(db, product):
    crud_product.soft_delete(db, id=product.id)

    with pytest.raises(NotFoundException):
        product_images.get_parent(db, product.id)
