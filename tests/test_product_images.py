"""
Tests de la galería de imágenes de productos.
"""
from pathlib import Path

import pytest

from app.models.product_image import ProductImage
from app.services.storage_service import storage_service


def upload(client, headers, product_id, content, filename="panel.png", **form):
    return client.post(
        f"/api/v1/admin/products/{product_id}/images",
        files={"image": (filename, content, "image/png")},
        data={key: str(value).lower() if isinstance(value, bool) else value for key, value in form.items()},
        headers=headers
    )


def primaries(db, product_id):
    db.expire_all()
    return [
        image.id for image in
        db.query(ProductImage).filter(
            ProductImage.product_id == product_id,
            ProductImage.is_primary.is_(True)
        ).all()
    ]


@pytest.fixture
def product(make_product):
    return make_product()


class TestAppendOne:
    def test_upload_appends_at_the_end(self, client, admin_headers, product, png):
        first = upload(client, admin_headers, product.id, png, alt_text="Frente")
        second = upload(client, admin_headers, product.id, png)

        assert first.status_code == 201
        assert first.json()["sort_order"] == 0
        assert first.json()["alt_text"] == "Frente"
        assert first.json()["path"].startswith("products/")
        assert first.json()["url"].endswith(first.json()["path"])
        assert second.json()["sort_order"] == 1
        assert (Path(storage_service.upload_dir) / first.json()["path"]).is_file()

    def test_new_primary_replaces_previous(self, client, db, admin_headers, product, png):
        a = upload(client, admin_headers, product.id, png, is_primary=True).json()
        b = upload(client, admin_headers, product.id, png).json()
        c = upload(client, admin_headers, product.id, png, is_primary=True).json()

        assert (a["sort_order"], b["sort_order"], c["sort_order"]) == (0, 1, 2)
        assert c["is_primary"] is True
        assert primaries(db, product.id) == [c["id"]]
        assert db.get(ProductImage, b["id"]).is_primary is False
        assert db.get(ProductImage, b["id"]).sort_order == 1

    def test_invalid_extension_is_a_field_error(self, client, admin_headers, product):
        response = upload(client, admin_headers, product.id, b"hola", filename="notas.txt")

        assert response.status_code == 422
        assert "image" in response.json()["errors"]

    def test_oversized_file_is_rejected(self, client, admin_headers, product):
        content = b"\x00" * (storage_service.max_file_size + 1)

        response = upload(client, admin_headers, product.id, content)

        assert response.status_code == 422
        assert "image" in response.json()["errors"]

    def test_unknown_product(self, client, admin_headers, png):
        response = upload(client, admin_headers, 999, png)

        assert response.status_code == 404

    def test_list_is_ordered(self, client, db, admin_headers, product, png):
        first = upload(client, admin_headers, product.id, png).json()
        second = upload(client, admin_headers, product.id, png).json()
        client.put(
            f"/api/v1/admin/products/{product.id}/images/{first['id']}",
            json={"sort_order": 5},
            headers=admin_headers
        )

        response = client.get(f"/api/v1/admin/products/{product.id}/images", headers=admin_headers)

        assert [image["id"] for image in response.json()] == [second["id"], first["id"]]


class TestAppendMany:
    def test_partial_failure_keeps_the_gap(self, client, admin_headers, product, png):
        upload(client, admin_headers, product.id, png)

        response = client.post(
            f"/api/v1/admin/products/{product.id}/images/multiple",
            files=[
                ("images", ("uno.png", png, "image/png")),
                ("images", ("notas.txt", b"texto", "text/plain")),
                ("images", ("tres.png", png, "image/png")),
            ],
            headers=admin_headers
        )

        assert response.status_code == 206
        data = response.json()
        assert data["success_count"] == 2
        assert data["error_count"] == 1
        assert data["errors"][0]["index"] == 1
        assert data["errors"][0]["filename"] == "notas.txt"
        assert [image["sort_order"] for image in data["uploaded_images"]] == [1, 3]

    def test_full_success_with_first_as_primary(self, client, db, admin_headers, product, png):
        previous = upload(client, admin_headers, product.id, png, is_primary=True).json()

        response = client.post(
            f"/api/v1/admin/products/{product.id}/images/multiple",
            files=[
                ("images", ("uno.png", png, "image/png")),
                ("images", ("dos.png", png, "image/png")),
            ],
            data={"alt_texts": ["Uno", "Dos"], "set_first_as_primary": "true"},
            headers=admin_headers
        )

        assert response.status_code == 201
        data = response.json()
        assert data["error_count"] == 0
        assert [image["alt_text"] for image in data["uploaded_images"]] == ["Uno", "Dos"]
        assert [image["sort_order"] for image in data["uploaded_images"]] == [1, 2]
        new_primary = data["uploaded_images"][0]["id"]
        assert primaries(db, product.id) == [new_primary]
        assert previous["id"] != new_primary

    def test_failed_first_item_still_clears_previous_primary(self, client, db, admin_headers, product, png):
        previous = upload(client, admin_headers, product.id, png, is_primary=True).json()

        response = client.post(
            f"/api/v1/admin/products/{product.id}/images/multiple",
            files=[
                ("images", ("malo.exe", b"MZ", "application/octet-stream")),
                ("images", ("dos.png", png, "image/png")),
            ],
            data={"set_first_as_primary": "true"},
            headers=admin_headers
        )

        assert response.status_code == 206
        assert primaries(db, product.id) == []
        assert db.get(ProductImage, previous["id"]).is_primary is False

    def test_too_many_files(self, client, admin_headers, product, png):
        files = [("images", (f"{n}.png", png, "image/png")) for n in range(11)]

        response = client.post(
            f"/api/v1/admin/products/{product.id}/images/multiple",
            files=files,
            headers=admin_headers
        )

        assert response.status_code == 422
        assert "images" in response.json()["errors"]


class TestUpdate:
    def test_set_primary_clears_siblings(self, client, db, admin_headers, product, png):
        first = upload(client, admin_headers, product.id, png, is_primary=True).json()
        second = upload(client, admin_headers, product.id, png).json()

        response = client.put(
            f"/api/v1/admin/products/{product.id}/images/{second['id']}",
            json={"is_primary": True, "alt_text": "Vista lateral"},
            headers=admin_headers
        )

        assert response.status_code == 200
        assert response.json()["alt_text"] == "Vista lateral"
        assert primaries(db, product.id) == [second["id"]]
        assert db.get(ProductImage, first["id"]).is_primary is False

    def test_image_of_another_product_is_not_found(self, client, admin_headers, make_product, product, png):
        other = make_product()
        image = upload(client, admin_headers, other.id, png).json()

        update = client.put(
            f"/api/v1/admin/products/{product.id}/images/{image['id']}",
            json={"alt_text": "x"},
            headers=admin_headers
        )
        delete = client.delete(
            f"/api/v1/admin/products/{product.id}/images/{image['id']}",
            headers=admin_headers
        )

        assert update.status_code == 404
        assert delete.status_code == 404

    def test_negative_sort_order_is_rejected(self, client, admin_headers, product, png):
        image = upload(client, admin_headers, product.id, png).json()

        response = client.put(
            f"/api/v1/admin/products/{product.id}/images/{image['id']}",
            json={"sort_order": -1},
            headers=admin_headers
        )

        assert response.status_code == 422


class TestDelete:
    def test_delete_removes_record_and_file(self, client, db, admin_headers, product, png):
        first = upload(client, admin_headers, product.id, png).json()
        second = upload(client, admin_headers, product.id, png).json()
        path = Path(storage_service.upload_dir) / first["path"]

        response = client.delete(
            f"/api/v1/admin/products/{product.id}/images/{first['id']}",
            headers=admin_headers
        )

        assert response.status_code == 200
        assert not path.exists()
        db.expire_all()
        assert db.get(ProductImage, first["id"]) is None
        # Sin renumeración
        assert db.get(ProductImage, second["id"]).sort_order == 1

    def test_missing_file_is_not_an_error(self, client, db, admin_headers, product, png):
        image = upload(client, admin_headers, product.id, png).json()
        (Path(storage_service.upload_dir) / image["path"]).unlink()

        response = client.delete(
            f"/api/v1/admin/products/{product.id}/images/{image['id']}",
            headers=admin_headers
        )

        assert response.status_code == 200
        db.expire_all()
        assert db.get(ProductImage, image["id"]) is None


class TestDeletedParent:
    def test_images_of_deleted_product_are_not_found(self, client, admin_headers, product, png):
        image = upload(client, admin_headers, product.id, png).json()
        client.delete(f"/api/v1/admin/products/{product.id}", headers=admin_headers)
        base = f"/api/v1/admin/products/{product.id}/images"

        assert client.get(base, headers=admin_headers).status_code == 404
        assert client.put(
            f"{base}/{image['id']}", json={"alt_text": "x"}, headers=admin_headers
        ).status_code == 404
        assert client.delete(f"{base}/{image['id']}", headers=admin_headers).status_code == 404
        assert (Path(storage_service.upload_dir) / image["path"]).is_file()
