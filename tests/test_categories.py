"""Tests for the category endpoints."""

import pytest

INVALID_IDS = ["abc", "0", "-1", "1.5", "1e3"]


class TestCreateAndRead:
    def test_create_then_get_returns_same_record(self, client):
        created = client.post("/categories", json={"name": "Shoes"})

        assert created.status_code == 201
        assert created.json() == {"id": 1, "name": "Shoes"}

        fetched = client.get("/categories/1")
        assert fetched.status_code == 200
        assert fetched.json() == {"id": 1, "name": "Shoes"}

    def test_ids_are_assigned_by_the_store(self, client):
        first = client.post("/categories", json={"name": "Shoes"}).json()
        second = client.post("/categories", json={"name": "Hats"}).json()

        assert second["id"] != first["id"]

    def test_list_returns_all_categories(self, client):
        client.post("/categories", json={"name": "Shoes"})
        client.post("/categories", json={"name": "Hats"})

        response = client.get("/categories")

        assert response.status_code == 200
        assert sorted(c["name"] for c in response.json()) == ["Hats", "Shoes"]

    def test_list_is_empty_initially(self, client):
        assert client.get("/categories").json() == []

    @pytest.mark.parametrize("name", ["", "   ", None, 42, ["Shoes"]])
    def test_rejects_invalid_name(self, client, name):
        response = client.post("/categories", json={"name": name})

        assert response.status_code == 400
        assert response.json() == {"error": "Category name is required and must be a non-empty string."}

    def test_rejects_name_with_lone_surrogate(self, client):
        response = client.post(
            "/categories",
            content='{"name": "\\ud800"}',
            headers={"content-type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Category name is required and must be a non-empty string."}
        assert client.get("/categories").json() == []

    def test_rejects_missing_name(self, client):
        response = client.post("/categories", json={})

        assert response.status_code == 400
        assert response.json() == {"error": "Category name is required and must be a non-empty string."}

    def test_rejects_duplicate_name(self, client, category):
        response = client.post("/categories", json={"name": "Shoes"})

        assert response.status_code == 400
        assert response.json() == {"error": "Category already exists"}
        assert len(client.get("/categories").json()) == 1

    def test_get_unknown_category_is_404(self, client):
        response = client.get("/categories/999")

        assert response.status_code == 404
        assert response.json() == {"error": "Category not found"}

    def test_request_without_body_gets_field_message(self, client):
        response = client.post("/categories")

        assert response.status_code == 400
        assert response.json() == {"error": "Category name is required and must be a non-empty string."}

    def test_malformed_body_is_rejected(self, client):
        response = client.post("/categories", content="not json", headers={"content-type": "application/json"})

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid request body"}


class TestInvalidIds:
    @pytest.mark.parametrize("raw_id", INVALID_IDS)
    def test_get(self, client, raw_id):
        response = client.get(f"/categories/{raw_id}")

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid category ID"}

    @pytest.mark.parametrize("raw_id", INVALID_IDS)
    def test_update(self, client, raw_id):
        response = client.put(f"/categories/{raw_id}", json={"name": "Boots"})

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid category ID"}

    @pytest.mark.parametrize("raw_id", INVALID_IDS)
    def test_delete(self, client, raw_id):
        response = client.delete(f"/categories/{raw_id}")

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid category ID"}

    def test_invalid_id_is_checked_before_the_body(self, client):
        response = client.put("/categories/abc", json={"name": ""})

        assert response.json() == {"error": "Invalid category ID"}

    def test_repeated_failure_gives_identical_response(self, client):
        first = client.get("/categories/abc")
        second = client.get("/categories/abc")

        assert (first.status_code, first.json()) == (second.status_code, second.json())


class TestUpdate:
    def test_renames_category(self, client, category):
        response = client.put(f"/categories/{category['id']}", json={"name": "Boots"})

        assert response.status_code == 200
        assert response.json() == {"id": category["id"], "name": "Boots"}
        assert client.get(f"/categories/{category['id']}").json()["name"] == "Boots"

    def test_keeping_the_same_name_is_allowed(self, client, category):
        response = client.put(f"/categories/{category['id']}", json={"name": "Shoes"})

        assert response.status_code == 200

    def test_renaming_onto_another_category_is_rejected(self, client, category):
        other = client.post("/categories", json={"name": "Hats"}).json()

        response = client.put(f"/categories/{other['id']}", json={"name": "Shoes"})

        assert response.status_code == 400
        assert response.json() == {"error": "Category already exists"}
        assert client.get(f"/categories/{other['id']}").json()["name"] == "Hats"

    def test_rejects_empty_name(self, client, category):
        response = client.put(f"/categories/{category['id']}", json={"name": ""})

        assert response.status_code == 400
        assert response.json() == {"error": "Category name is required and must be a non-empty string."}

    def test_unknown_category_is_404(self, client):
        response = client.put("/categories/999", json={"name": "Boots"})

        assert response.status_code == 404
        assert response.json() == {"error": "Category not found"}


class TestDelete:
    def test_delete_then_get_is_404(self, client, category):
        response = client.delete(f"/categories/{category['id']}")

        assert response.status_code == 204
        assert response.content == b""
        assert "content-type" not in response.headers
        assert client.get(f"/categories/{category['id']}").status_code == 404

    def test_unknown_category_is_404(self, client):
        response = client.delete("/categories/999")

        assert response.status_code == 404
        assert response.json() == {"error": "Category not found"}

    def test_category_with_products_cannot_be_deleted(self, client, category, product):
        response = client.delete(f"/categories/{category['id']}")

        assert response.status_code == 400
        assert response.json() == {"error": "Category is referenced by existing products"}
        assert client.get(f"/products/{product['id']}").json()["category_id"] == category["id"]

    def test_category_can_be_deleted_once_its_products_are_gone(self, client, category, product):
        assert client.delete(f"/products/{product['id']}").status_code == 204

        assert client.delete(f"/categories/{category['id']}").status_code == 204
