"""
Tests for the owner-scoped category endpoints.
"""

import logging

import pytest


def create_category(client, headers, name="Food", color="#ff6b6b"):
    response = client.post("/api/categories", json={"name": name, "color": color}, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


class TestCreateCategory:
    """POST /api/categories"""

    def test_create_returns_the_row(self, client, alice):
        category = create_category(client, alice["headers"], name="  Food  ")
        assert category["name"] == "Food"
        assert category["color"] == "#ff6b6b"
        assert category["userId"] == alice["user"]["id"]
        assert {"id", "createdAt", "updatedAt"} <= set(category)

    @pytest.mark.parametrize("owner_key", ["userId", "user_id"])
    def test_owner_id_in_body_is_rejected(self, client, alice, owner_key):
        response = client.post(
            "/api/categories",
            json={"name": "Food", "color": "#ff6b6b", owner_key: 5},
            headers=alice["headers"],
        )
        assert response.status_code == 400
        assert response.json()["code"] == "USER_ID_NOT_ALLOWED"

    def test_owner_id_is_rejected_even_when_it_is_the_callers(self, client, alice):
        response = client.post(
            "/api/categories",
            json={"name": "Food", "color": "#ff6b6b", "userId": alice["user"]["id"]},
            headers=alice["headers"],
        )
        assert response.json()["code"] == "USER_ID_NOT_ALLOWED"

    @pytest.mark.parametrize(
        "payload, code",
        [
            ({"color": "#ff6b6b"}, "MISSING_NAME"),
            ({"name": "  ", "color": "#ff6b6b"}, "MISSING_NAME"),
            ({"name": "Food"}, "MISSING_COLOR"),
            ({"name": "Food", "color": "red"}, "INVALID_COLOR_FORMAT"),
            ({"name": "Food", "color": "#fff"}, "INVALID_COLOR_FORMAT"),
            ({"name": "Food", "color": "#gg6b6b"}, "INVALID_COLOR_FORMAT"),
        ],
    )
    def test_validation_codes(self, client, alice, payload, code):
        response = client.post("/api/categories", json=payload, headers=alice["headers"])
        assert response.status_code == 400
        assert response.json()["code"] == code

    def test_duplicate_name_for_same_owner(self, client, alice):
        create_category(client, alice["headers"])
        response = client.post(
            "/api/categories", json={"name": "Food", "color": "#000000"}, headers=alice["headers"]
        )
        assert response.status_code == 409
        assert response.json()["code"] == "DUPLICATE_CATEGORY_NAME"

    def test_long_name_is_stored_whole(self, client, alice):
        name = "Household " * 40
        category = create_category(client, alice["headers"], name=name)
        assert category["name"] == name.strip()

    def test_same_name_for_different_owners(self, client, alice, bob):
        create_category(client, alice["headers"])
        create_category(client, bob["headers"])


class TestListCategories:
    """GET /api/categories"""

    def test_newest_first_and_owner_scoped(self, client, alice, bob):
        for name in ("Food", "Rent", "Salary"):
            create_category(client, alice["headers"], name=name)
        create_category(client, bob["headers"], name="Bob's")

        response = client.get("/api/categories", headers=alice["headers"])
        assert response.status_code == 200
        assert [c["name"] for c in response.json()] == ["Salary", "Rent", "Food"]

    def test_search_is_case_insensitive_substring(self, client, alice):
        for name in ("Food", "Fast food", "Rent"):
            create_category(client, alice["headers"], name=name)
        response = client.get("/api/categories", params={"search": "FOO"}, headers=alice["headers"])
        assert sorted(c["name"] for c in response.json()) == ["Fast food", "Food"]

    def test_search_treats_wildcards_literally(self, client, alice):
        create_category(client, alice["headers"], name="100% fun")
        create_category(client, alice["headers"], name="Rent")
        response = client.get("/api/categories", params={"search": "%"}, headers=alice["headers"])
        assert [c["name"] for c in response.json()] == ["100% fun"]

    def test_pagination(self, client, alice):
        for i in range(5):
            create_category(client, alice["headers"], name=f"Cat {i}")
        response = client.get(
            "/api/categories", params={"limit": 2, "offset": 1}, headers=alice["headers"]
        )
        assert [c["name"] for c in response.json()] == ["Cat 3", "Cat 2"]

    def test_default_limit_is_ten(self, client, alice):
        for i in range(12):
            create_category(client, alice["headers"], name=f"Cat {i}")
        assert len(client.get("/api/categories", headers=alice["headers"]).json()) == 10

    def test_non_numeric_limit(self, client, alice):
        response = client.get("/api/categories", params={"limit": "lots"}, headers=alice["headers"])
        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_REQUEST"


class TestUpdateCategory:
    """PATCH /api/categories/{id}"""

    def test_partial_update(self, client, alice):
        category = create_category(client, alice["headers"])
        response = client.patch(
            f"/api/categories/{category['id']}", json={"color": "#00ff00"}, headers=alice["headers"]
        )
        assert response.status_code == 200
        body = response.json()
        assert body["color"] == "#00ff00"
        assert body["name"] == "Food"

    def test_rename_trims(self, client, alice):
        category = create_category(client, alice["headers"])
        body = client.patch(
            f"/api/categories/{category['id']}", json={"name": "  Groceries "}, headers=alice["headers"]
        ).json()
        assert body["name"] == "Groceries"

    def test_empty_patch_keeps_fields(self, client, alice):
        category = create_category(client, alice["headers"])
        response = client.patch(f"/api/categories/{category['id']}", json={}, headers=alice["headers"])
        assert response.status_code == 200
        body = response.json()
        for field in ("id", "userId", "name", "color", "createdAt"):
            assert body[field] == category[field]
        assert "updatedAt" in body

    def test_rename_to_own_name_is_allowed(self, client, alice):
        category = create_category(client, alice["headers"])
        response = client.patch(
            f"/api/categories/{category['id']}", json={"name": "Food"}, headers=alice["headers"]
        )
        assert response.status_code == 200

    def test_rename_to_sibling_name_conflicts(self, client, alice):
        create_category(client, alice["headers"], name="Food")
        rent = create_category(client, alice["headers"], name="Rent")
        response = client.patch(
            f"/api/categories/{rent['id']}", json={"name": "Food"}, headers=alice["headers"]
        )
        assert response.status_code == 409
        assert response.json()["code"] == "DUPLICATE_NAME"

    def test_duplicate_name_is_reported_before_bad_color(self, client, alice):
        create_category(client, alice["headers"], name="Food")
        rent = create_category(client, alice["headers"], name="Rent")
        response = client.patch(
            f"/api/categories/{rent['id']}",
            json={"name": "Food", "color": "not-a-colour"},
            headers=alice["headers"],
        )
        assert response.status_code == 409
        assert response.json()["code"] == "DUPLICATE_NAME"

    def test_bad_name_is_reported_before_bad_color(self, client, alice):
        category = create_category(client, alice["headers"])
        response = client.patch(
            f"/api/categories/{category['id']}",
            json={"name": " ", "color": "not-a-colour"},
            headers=alice["headers"],
        )
        assert response.json()["code"] == "INVALID_NAME"

    @pytest.mark.parametrize(
        "payload, code",
        [
            ({"name": ""}, "INVALID_NAME"),
            ({"name": 42}, "INVALID_NAME"),
            ({"color": "blue"}, "INVALID_COLOR"),
            ({"color": None}, "INVALID_COLOR"),
            ({"name": "X", "userId": 2}, "USER_ID_NOT_ALLOWED"),
        ],
    )
    def test_validation_codes(self, client, alice, payload, code):
        category = create_category(client, alice["headers"])
        response = client.patch(
            f"/api/categories/{category['id']}", json=payload, headers=alice["headers"]
        )
        assert response.status_code == 400
        assert response.json()["code"] == code

    def test_client_errors_are_not_logged_as_errors(self, client, alice, caplog):
        category = create_category(client, alice["headers"])
        with caplog.at_level(logging.DEBUG):
            client.patch(
                f"/api/categories/{category['id']}", json={"color": "blue"}, headers=alice["headers"]
            )
            client.get("/api/categories/999", headers=alice["headers"])
        assert not [r for r in caplog.records if r.levelno >= logging.ERROR]

    @pytest.mark.parametrize("raw_id", ["abc", "1.5", "-1", "0"])
    def test_invalid_id(self, client, alice, raw_id):
        response = client.patch(f"/api/categories/{raw_id}", json={}, headers=alice["headers"])
        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_ID"

    def test_missing_row(self, client, alice):
        response = client.patch("/api/categories/999", json={"name": "X"}, headers=alice["headers"])
        assert response.status_code == 404
        assert response.json()["code"] == "CATEGORY_NOT_FOUND"


class TestDeleteCategory:
    """DELETE /api/categories/{id}"""

    def test_delete_returns_snapshot(self, client, alice):
        category = create_category(client, alice["headers"])
        response = client.delete(f"/api/categories/{category['id']}", headers=alice["headers"])
        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Category deleted successfully"
        assert body["deletedCategory"] == category

        again = client.delete(f"/api/categories/{category['id']}", headers=alice["headers"])
        assert again.status_code == 404

    def test_delete_leaves_transactions_untouched(self, client, alice, coffee):
        category = create_category(client, alice["headers"])
        client.post("/api/transactions", json=coffee, headers=alice["headers"])
        client.delete(f"/api/categories/{category['id']}", headers=alice["headers"])

        transactions = client.get("/api/transactions", headers=alice["headers"]).json()
        assert [t["category"] for t in transactions] == ["Food"]

    def test_rename_does_not_rewrite_transactions(self, client, alice, coffee):
        category = create_category(client, alice["headers"])
        client.post("/api/transactions", json=coffee, headers=alice["headers"])
        client.patch(f"/api/categories/{category['id']}", json={"name": "Dining"}, headers=alice["headers"])

        transactions = client.get("/api/transactions", headers=alice["headers"]).json()
        assert transactions[0]["category"] == "Food"


class TestCategoryOwnership:
    """Another user's category behaves exactly like a missing one."""

    def test_other_user_sees_not_found(self, client, alice, bob):
        category = create_category(client, alice["headers"])
        path = f"/api/categories/{category['id']}"

        assert client.get("/api/categories", headers=bob["headers"]).json() == []
        for response in (
            client.get(path, headers=bob["headers"]),
            client.patch(path, json={"name": "Mine now"}, headers=bob["headers"]),
            client.delete(path, headers=bob["headers"]),
        ):
            assert response.status_code == 404
            assert response.json() == {"error": "Category not found", "code": "CATEGORY_NOT_FOUND"}

        assert client.get(path, headers=alice["headers"]).json() == category
