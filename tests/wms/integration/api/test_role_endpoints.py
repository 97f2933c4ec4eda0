"""Integration tests for role management endpoints."""

import pytest
from fastapi.testclient import TestClient

pytestmark = pytest.mark.integration


def _roles_by_slug(client: TestClient, prefix: str, headers: dict) -> dict:
    roles = client.get(f"{prefix}/roles", headers=headers).json()["data"]
    return {role["slug"]: role for role in roles}


class TestListRoles:
    """Tests for GET /api/v1/roles."""

    def test_seeded_roles_sorted_by_name(
        self,
        test_client: TestClient,
        api_v1_prefix: str,
        viewer_headers: dict,
    ):
        response = test_client.get(f"{api_v1_prefix}/roles", headers=viewer_headers)

        assert response.status_code == 200
        body = response.json()
        assert [role["name"] for role in body["data"]] == [
            "Admin",
            "Employee",
            "Manager",
            "Super Admin",
            "Supervisor",
            "Viewer",
        ]
        assert body["meta"]["pagination"]["total"] == 6
        assert body["message"] == "Retrieved 6 roles successfully"

    def test_filter_system_roles(
        self,
        test_client: TestClient,
        api_v1_prefix: str,
        admin_headers: dict,
    ):
        response = test_client.get(
            f"{api_v1_prefix}/roles",
            headers=admin_headers,
            params={"isSystemRole": "true", "sortBy": "slug", "sortOrder": "desc"},
        )

        assert [role["slug"] for role in response.json()["data"]] == ["super-admin", "admin"]

    def test_requires_authentication(self, test_client: TestClient, api_v1_prefix: str):
        assert test_client.get(f"{api_v1_prefix}/roles").status_code == 401


class TestRoleLifecycle:
    """Tests for create, update, status changes and delete."""

    def test_create_role(
        self,
        test_client: TestClient,
        api_v1_prefix: str,
        admin_headers: dict,
    ):
        response = test_client.post(
            f"{api_v1_prefix}/roles",
            headers=admin_headers,
            json={"name": "inventory clerk", "description": "Counts stock"},
        )

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["name"] == "Inventory Clerk"
        assert data["slug"] == "inventory-clerk"
        assert data["is_system_role"] is False

        fetched = test_client.get(
            f"{api_v1_prefix}/roles/{data['id']}",
            headers=admin_headers,
        )
        assert fetched.json()["data"]["description"] == "Counts stock"

    def test_create_duplicate(
        self,
        test_client: TestClient,
        api_v1_prefix: str,
        admin_headers: dict,
    ):
        response = test_client.post(
            f"{api_v1_prefix}/roles",
            headers=admin_headers,
            json={"name": "Manager"},
        )

        assert response.status_code == 409

    def test_create_reserved_slug(
        self,
        test_client: TestClient,
        api_v1_prefix: str,
        admin_headers: dict,
    ):
        response = test_client.post(
            f"{api_v1_prefix}/roles",
            headers=admin_headers,
            json={"name": "Guest"},
        )

        assert response.status_code == 400
        assert response.json()["message"] == "This role slug is reserved and cannot be used"

    def test_viewer_cannot_create(
        self,
        test_client: TestClient,
        api_v1_prefix: str,
        viewer_headers: dict,
    ):
        response = test_client.post(
            f"{api_v1_prefix}/roles",
            headers=viewer_headers,
            json={"name": "Sneaky"},
        )

        assert response.status_code == 403

    def test_update_role(
        self,
        test_client: TestClient,
        api_v1_prefix: str,
        admin_headers: dict,
    ):
        manager = _roles_by_slug(test_client, api_v1_prefix, admin_headers)["manager"]

        response = test_client.put(
            f"{api_v1_prefix}/roles/{manager['id']}",
            headers=admin_headers,
            json={"name": "Floor Manager"},
        )

        assert response.status_code == 200
        assert response.json()["data"]["name"] == "Floor Manager"
        assert response.json()["data"]["slug"] == "manager"

    def test_system_role_is_protected(
        self,
        test_client: TestClient,
        api_v1_prefix: str,
        admin_headers: dict,
    ):
        admin = _roles_by_slug(test_client, api_v1_prefix, admin_headers)["admin"]
        url = f"{api_v1_prefix}/roles/{admin['id']}"

        updated = test_client.put(url, headers=admin_headers, json={"description": "x"})
        deactivated = test_client.post(f"{url}/deactivate", headers=admin_headers)
        deleted = test_client.delete(url, headers=admin_headers)

        assert updated.status_code == 422
        assert deactivated.status_code == 422
        assert deleted.status_code == 422
        assert deleted.json()["message"] == "System roles cannot be deleted"

    def test_deactivate_and_activate(
        self,
        test_client: TestClient,
        api_v1_prefix: str,
        admin_headers: dict,
    ):
        employee = _roles_by_slug(test_client, api_v1_prefix, admin_headers)["employee"]
        url = f"{api_v1_prefix}/roles/{employee['id']}"

        response = test_client.post(f"{url}/deactivate", headers=admin_headers)
        assert response.json()["message"] == "Role deactivated successfully"
        assert response.json()["data"]["is_active"] is False

        inactive = test_client.get(
            f"{api_v1_prefix}/roles",
            headers=admin_headers,
            params={"isActive": "false"},
        ).json()["data"]
        assert [role["slug"] for role in inactive] == ["employee"]

        response = test_client.post(f"{url}/activate", headers=admin_headers)
        assert response.json()["message"] == "Role activated successfully"

    def test_delete_role(
        self,
        test_client: TestClient,
        api_v1_prefix: str,
        admin_headers: dict,
    ):
        employee = _roles_by_slug(test_client, api_v1_prefix, admin_headers)["employee"]
        url = f"{api_v1_prefix}/roles/{employee['id']}"

        response = test_client.delete(url, headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["message"] == "Role deleted successfully"
        assert test_client.get(url, headers=admin_headers).status_code == 404

    def test_get_malformed_id(
        self,
        test_client: TestClient,
        api_v1_prefix: str,
        admin_headers: dict,
    ):
        response = test_client.get(f"{api_v1_prefix}/roles/123", headers=admin_headers)

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid role ID format"
