"""
Authentication and authorization integration tests.

Verifies:
- Login/logout flows and their redirects
- Session cookie handling
- Role-based access to admin endpoints
- Account deletion rules
"""
from fastapi.testclient import TestClient

from tests.conftest import ADMIN, USER, OTHER_USER, login, login_as


class TestLoginFlow:
    """Test form login and logout."""

    def test_login_without_credentials_redirects_to_error(self, client: TestClient):
        response = client.post("/login", follow_redirects=False)

        assert response.status_code == 302
        assert response.headers["location"] == "/api/auth/user/onerror"

    def test_login_with_valid_credentials(self, client: TestClient):
        """Valid credentials answer 200 and set the session cookie."""
        response = login(client, ADMIN["username"], ADMIN["password"])

        assert response.status_code == 200
        assert "shop_session" in response.cookies
        body = response.json()
        assert body["status"] == "success"
        assert body["data"]["name"] == "admin"
        assert body["data"]["role"]["name"] == "ROLE_ADMIN"
        assert "password_hash" not in body["data"]

    def test_login_with_wrong_password_redirects_to_error(self, client: TestClient):
        response = login(client, ADMIN["username"], "WrongAdminPassword1")

        assert response.status_code == 302
        assert response.headers["location"] == "/api/auth/user/onerror"
        assert "shop_session" not in response.cookies

    def test_overlong_password_is_a_failed_login(self, client: TestClient):
        response = login(client, ADMIN["username"], "x" * 100)

        assert response.status_code == 302
        assert response.headers["location"] == "/api/auth/user/onerror"

    def test_login_error_endpoint_reports_failure(self, client: TestClient):
        """Following the error redirect ends on a 401 fail envelope."""
        response = client.post(
            "/login",
            data={"username": "nobody", "password": "whatever"}
        )

        assert response.status_code == 401
        assert response.json()["status"] == "fail"

    def test_username_is_case_insensitive(self, client: TestClient):
        response = login(client, "ADMIN", ADMIN["password"])

        assert response.status_code == 200

    def test_logout_redirects_to_signed_out(self, client: TestClient):
        response = client.get("/logout", follow_redirects=False)

        assert response.status_code == 302
        assert response.headers["location"] == "/api/auth/user/signedout"

    def test_logout_ends_session(self, admin_client: TestClient):
        assert admin_client.get("/api/auth/admin/roles").status_code == 200

        response = admin_client.get("/logout")
        assert response.status_code == 200
        assert response.json()["message"] == "Signed out"

        assert admin_client.get("/api/auth/admin/roles").status_code == 401


class TestUserCheck:
    """Test the current-user endpoint."""

    def test_guest(self, client: TestClient):
        body = client.get("/api/auth/user/check").json()

        assert body["status"] == "success"
        assert body["data"] is None

    def test_signed_in_user(self, user_client: TestClient):
        body = user_client.get("/api/auth/user/check").json()

        assert body["data"]["id"] == USER["id"]
        assert body["data"]["role"]["name"] == "ROLE_USER"

    def test_invalid_cookie_is_ignored(self, client: TestClient):
        body = client.get(
            "/api/auth/user/check",
            headers={"Cookie": "shop_session=not-a-session"}
        ).json()

        assert body["data"] is None


class TestRoleAccess:
    """Test admin-only role endpoints."""

    def test_admin_can_list_roles(self, admin_client: TestClient):
        response = admin_client.get("/api/auth/admin/roles")

        assert response.status_code == 200
        names = [role["name"] for role in response.json()["data"]]
        assert names == ["ROLE_ADMIN", "ROLE_USER"]

    def test_regular_user_is_forbidden(self, user_client: TestClient):
        response = user_client.get("/api/auth/admin/roles")

        assert response.status_code == 403
        assert response.json()["status"] == "fail"

    def test_anonymous_is_unauthorized(self, client: TestClient):
        response = client.get("/api/auth/admin/roles")

        assert response.status_code == 401

    def test_admin_lists_users_of_role(self, admin_client: TestClient):
        response = admin_client.get("/admin/roles/1/users")

        assert response.status_code == 200
        assert [user["name"] for user in response.json()["data"]] == ["admin"]

    def test_users_of_role_under_api_prefix(self, admin_client: TestClient):
        response = admin_client.get("/api/auth/admin/roles/2/users")

        assert response.status_code == 200
        assert [user["name"] for user in response.json()["data"]] == ["one", "two"]

    def test_users_of_unknown_role(self, admin_client: TestClient):
        response = admin_client.get("/api/auth/admin/roles/99/users")

        assert response.status_code == 404

    def test_admin_creates_role(self, admin_client: TestClient):
        response = admin_client.post("/api/auth/admin/roles", json={"name": "role_broker"})

        assert response.status_code == 201
        assert response.json()["data"]["name"] == "ROLE_BROKER"

        duplicate = admin_client.post("/api/auth/admin/roles", json={"name": "ROLE_BROKER"})
        assert duplicate.status_code == 409

    def test_blank_role_name_is_rejected(self, admin_client: TestClient):
        response = admin_client.post("/api/auth/admin/roles", json={"name": "   "})

        assert response.status_code == 422
        assert [r["name"] for r in admin_client.get("/api/auth/admin/roles").json()["data"]] == [
            "ROLE_ADMIN", "ROLE_USER"
        ]

    def test_admin_assigns_role(self, admin_client: TestClient):
        response = admin_client.patch(
            f"/api/auth/admin/users/{OTHER_USER['id']}/role",
            json={"role_id": 1}
        )

        assert response.status_code == 200
        assert response.json()["data"]["role"]["name"] == "ROLE_ADMIN"

    def test_admin_lists_all_users(self, admin_client: TestClient):
        response = admin_client.get("/api/auth/admin/users")

        assert response.status_code == 200
        assert len(response.json()["data"]) == 3


class TestRegistration:
    """Test self-registration."""

    def test_register_and_login(self, client: TestClient):
        response = client.post("/api/auth/user", json={"name": "three", "password": "UserPassword3"})

        assert response.status_code == 201
        assert response.json()["data"]["role"]["name"] == "ROLE_USER"
        assert login(client, "three", "UserPassword3").status_code == 200

    def test_duplicate_name(self, client: TestClient):
        response = client.post("/api/auth/user", json={"name": "one", "password": "whatever"})

        assert response.status_code == 409

    def test_short_password(self, client: TestClient):
        response = client.post("/api/auth/user", json={"name": "three", "password": "x"})

        assert response.status_code == 422
        assert response.json()["status"] == "fail"


    def test_password_beyond_bcrypt_limit(self, client: TestClient):
        response = client.post("/api/auth/user", json={"name": "three", "password": "x" * 73})

        assert response.status_code == 422
        assert response.json()["status"] == "fail"

    def test_multibyte_password_counts_bytes(self, client: TestClient):
        response = client.post("/api/auth/user", json={"name": "three", "password": "\u00e9" * 37})

        assert response.status_code == 422


class TestUserDeletion:
    """Test account deletion rules."""

    def test_anonymous_delete_is_unauthorized(self, client: TestClient):
        response = client.delete(f"/api/auth/user/{USER['id']}")

        assert response.status_code == 401

    def test_user_deletes_own_account(self, user_client: TestClient):
        response = user_client.delete(f"/api/auth/users/{USER['id']}")

        assert response.status_code == 204
        # The session went with the account
        assert user_client.get("/api/auth/user/check").json()["data"] is None

    def test_user_cannot_delete_someone_else(self, user_client: TestClient):
        response = user_client.delete(f"/api/auth/users/{OTHER_USER['id']}")

        assert response.status_code == 403

    def test_admin_deletes_any_account(self, client: TestClient):
        with login_as(client, ADMIN["username"], ADMIN["password"]):
            response = client.delete(f"/api/auth/user/{OTHER_USER['id']}")
            assert response.status_code == 204

        assert login(client, OTHER_USER["username"], OTHER_USER["password"]).status_code == 302

    def test_delete_unknown_user(self, admin_client: TestClient):
        response = admin_client.delete("/api/auth/users/99")

        assert response.status_code == 404

    def test_id_beyond_storage_range(self, admin_client: TestClient):
        response = admin_client.delete("/api/auth/users/99999999999999999999999")

        assert response.status_code == 422
