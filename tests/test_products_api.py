"""
Tests de los endpoints de productos (públicos y de administración).
"""
from app.models.product import Product


class TestPublicProducts:
    def test_list_only_active_products(self, client, make_product):
        active = make_product()
        make_product(is_active=False)

        response = client.get("/api/v1/products")

        assert response.status_code == 200
        data = response.json()
        assert [item["id"] for item in data["items"]] == [active.id]
        assert data["total"] == 1
        assert data["page"] == 1
        assert data["per_page"] == 15
        assert data["total_pages"] == 1

    def test_undefined_params_behave_like_omission(self, client, make_product):
        for _ in range(3):
            make_product()

        plain = client.get("/api/v1/products").json()
        undefined = client.get(
            "/api/v1/products",
            params={"search": "undefined", "category_id": "undefined", "per_page": "undefined"}
        ).json()

        assert undefined == plain

    def test_unknown_sort_field_returns_field_error(self, client, make_product):
        make_product()

        response = client.get("/api/v1/products", params={"sort_by": "password_hash"})

        assert response.status_code == 422
        assert "sort_by" in response.json()["errors"]

    def test_invalid_page_returns_field_error(self, client):
        response = client.get("/api/v1/products", params={"page": "abc"})

        assert response.status_code == 422
        assert "page" in response.json()["errors"]

    def test_show_active_product(self, client, make_product):
        product = make_product(name="Inversor 5kW", short_description="<b>Potente</b> inversor")

        response = client.get(f"/api/v1/products/{product.id}")

        assert response.status_code == 200
        data = response.json()
        assert data["slug"] == "inversor-5kw"
        assert data["short_description"] == "Potente inversor"
        assert data["lifecycle_state"] == "active"
        assert data["category"]["name"] == "Paneles Solares"

    def test_show_inactive_product_is_not_found(self, client, make_product):
        product = make_product(is_active=False)

        response = client.get(f"/api/v1/products/{product.id}")

        assert response.status_code == 404


class TestAdminProducts:
    def test_requires_authentication(self, client):
        response = client.get("/api/v1/admin/products")

        assert response.status_code in (401, 403)

    def test_customers_are_forbidden(self, client, make_user, headers_for):
        customer = make_user(role="cliente")

        response = client.get("/api/v1/admin/products", headers=headers_for(customer))

        assert response.status_code == 403

    def test_agents_can_list_inactive_products(self, client, make_user, make_product, headers_for):
        agent = make_user(role="agente")
        inactive = make_product(is_active=False)

        response = client.get("/api/v1/admin/products", headers=headers_for(agent))

        assert response.status_code == 200
        assert [item["id"] for item in response.json()["items"]] == [inactive.id]

    def test_create_product(self, client, admin_headers, admin_user, category):
        payload = {
            "name": "Panel Solar 450W",
            "description": "Panel monocristalino de alta eficiencia",
            "sku": "PS-450",
            "price": "250.00",
            "stock_quantity": 20,
            "category_id": category.id,
            "tags": ["solar", "450w"],
        }

        response = client.post("/api/v1/admin/products", json=payload, headers=admin_headers)

        assert response.status_code == 201
        data = response.json()
        assert data["slug"] == "panel-solar-450w"
        assert data["agent_id"] == admin_user.id
        assert data["tags"] == ["solar", "450w"]
        assert data["images"] == []
        assert data["primary_image"] is None

    def test_create_with_missing_category_is_rejected(self, client, admin_headers):
        payload = {
            "name": "Panel",
            "description": "Panel",
            "sku": "PS-1",
            "price": "10.00",
            "stock_quantity": 1,
            "category_id": 999,
        }

        response = client.post("/api/v1/admin/products", json=payload, headers=admin_headers)

        assert response.status_code == 422
        assert "category_id" in response.json()["errors"]

    def test_duplicate_sku_is_a_conflict(self, client, admin_headers, make_product, category):
        existing = make_product()
        payload = {
            "name": "Otro panel",
            "description": "Panel",
            "sku": existing.sku,
            "price": "10.00",
            "stock_quantity": 1,
            "category_id": category.id,
        }

        response = client.post("/api/v1/admin/products", json=payload, headers=admin_headers)

        assert response.status_code == 409

    def test_rename_recomputes_slug(self, client, admin_headers, make_product):
        product = make_product(name="Batería 100Ah")

        response = client.put(
            f"/api/v1/admin/products/{product.id}",
            json={"name": "Batería Litio 200Ah", "stock_quantity": 3},
            headers=admin_headers
        )

        assert response.status_code == 200
        data = response.json()
        assert data["slug"] == "bateria-litio-200ah"
        assert data["stock_quantity"] == 3

    def test_update_missing_product(self, client, admin_headers):
        response = client.put(
            "/api/v1/admin/products/999", json={"name": "X"}, headers=admin_headers
        )

        assert response.status_code == 404

    def test_soft_delete_and_restore(self, client, db, admin_headers, make_product):
        product = make_product()

        deleted = client.delete(f"/api/v1/admin/products/{product.id}", headers=admin_headers)
        listed = client.get("/api/v1/admin/products", headers=admin_headers).json()
        with_deleted = client.get(
            "/api/v1/admin/products", params={"include_deleted": True}, headers=admin_headers
        ).json()

        assert deleted.status_code == 200
        assert listed["total"] == 0
        assert with_deleted["items"][0]["lifecycle_state"] == "deleted"
        assert client.get(f"/api/v1/products/{product.id}").status_code == 404

        restored = client.post(f"/api/v1/admin/products/{product.id}/restore", headers=admin_headers)

        assert restored.status_code == 200
        assert restored.json()["lifecycle_state"] == "active"
        db.expire_all()
        assert db.get(Product, product.id).deleted_at is None
