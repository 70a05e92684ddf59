# -*- coding: utf-8 -*-
"""
注册 / 登录 / Token 校验 API 集成测试
"""

from datetime import timedelta

import pytest
from fastapi.testclient import TestClient
from jose import jwt

from filedesk.core.security import ALGORITHM, create_access_token
from filedesk.services.user_service import UserService


TEST_SECRET_KEY = "test-secret-key-for-testing-only"


def user_count(client: TestClient) -> int:
    return UserService(client.app.state.db).count()


@pytest.mark.integration
class TestSignup:

    def test_signup_success(self, client: TestClient, user_payload):
        response = client.post("/signup", json=user_payload)

        assert response.status_code == 201
        assert response.json() == {"message": "Registration successful"}
        assert "token" not in response.json()
        assert user_count(client) == 1

    @pytest.mark.parametrize("field", ["fullname", "nidn", "username", "password"])
    def test_signup_empty_field(self, client: TestClient, user_payload, field):
        """测试字段为空时返回 400 且不写入数据"""
        user_payload[field] = ""

        response = client.post("/signup", json=user_payload)

        assert response.status_code == 400
        assert response.json()["message"] == "All fields are required"
        assert user_count(client) == 0

    def test_signup_absent_field(self, client: TestClient, user_payload):
        del user_payload["nidn"]

        response = client.post("/signup", json=user_payload)

        assert response.status_code == 400
        assert user_count(client) == 0

    def test_signup_duplicate_username(self, client: TestClient, user_payload):
        """测试重复注册"""
        first = client.post("/signup", json=user_payload)
        second = client.post("/signup", json={**user_payload, "fullname": "Other"})

        assert first.status_code == 201
        assert second.status_code == 409
        assert second.json() == {"message": "Username already taken"}
        assert user_count(client) == 1

    def test_signup_invalid_json(self, client: TestClient):
        response = client.post(
            "/signup",
            content="{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert "message" in response.json()

    def test_password_not_stored_in_plaintext(self, client: TestClient, registered_user):
        stored = UserService(client.app.state.db).find_by_username(registered_user["username"])

        assert stored.password != registered_user["password"]
        assert stored.password.startswith("$2b$")

    def test_signup_store_unavailable(self, client: TestClient, user_payload):
        """测试数据库不可用时返回通用 500 消息"""
        client.app.state.db.close()

        response = client.post("/signup", json=user_payload)

        assert response.status_code == 500
        assert response.json() == {"message": "Database unavailable"}


@pytest.mark.integration
class TestSignin:

    def test_signin_success(self, client: TestClient, registered_user):
        """测试登录成功，Token 内容与存储一致"""
        response = client.post(
            "/signin",
            json={"username": registered_user["username"], "password": registered_user["password"]},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Login successful"

        stored = UserService(client.app.state.db).find_by_username(registered_user["username"])
        claims = jwt.decode(body["token"], TEST_SECRET_KEY, algorithms=[ALGORITHM])
        assert claims["id"] == stored.id
        assert claims["username"] == stored.username

    def test_signin_wrong_password(self, client: TestClient, registered_user):
        response = client.post(
            "/signin",
            json={"username": registered_user["username"], "password": "wrong"},
        )

        assert response.status_code == 401
        assert response.json() == {"message": "Wrong password"}

    def test_signin_unknown_user(self, client: TestClient):
        response = client.post("/signin", json={"username": "ghost", "password": "x"})

        assert response.status_code == 404
        assert response.json() == {"message": "User not found"}

    def test_signin_missing_field(self, client: TestClient):
        response = client.post("/signin", json={"username": "siti"})

        assert response.status_code == 400
        assert response.json() == {"message": "Username and password are required"}


@pytest.mark.integration
class TestTokenVerifier:
    """Token 校验测试"""

    def test_no_authorization_header(self, client: TestClient):
        response = client.get("/api/list")

        assert response.status_code == 401
        assert "message" in response.json()

    def test_not_bearer_scheme(self, client: TestClient, auth_token):
        response = client.get("/api/list", headers={"Authorization": f"Basic {auth_token}"})

        assert response.status_code == 401

    def test_malformed_token(self, client: TestClient):
        response = client.get("/api/list", headers={"Authorization": "Bearer not-a-jwt"})

        assert response.status_code == 403
        assert response.json() == {"message": "Invalid token"}

    def test_expired_token(self, client: TestClient):
        token = create_access_token(
            {"id": "abc", "username": "siti"},
            TEST_SECRET_KEY,
            expires_delta=timedelta(seconds=-1),
        )

        response = client.get("/api/list", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 403

    def test_wrong_signature(self, client: TestClient):
        token = create_access_token({"id": "abc", "username": "siti"}, "some-other-secret")

        response = client.get("/api/list", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 403

    def test_token_missing_claims(self, client: TestClient):
        token = create_access_token({"username": "siti"}, TEST_SECRET_KEY)

        response = client.get("/api/list", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 403

    def test_valid_token(self, client: TestClient, auth_headers):
        response = client.get("/api/list", headers=auth_headers)

        assert response.status_code == 200

    def test_public_routes_need_no_token(self, client: TestClient):
        assert client.get("/").status_code == 200
        assert client.post("/signin", json={}).status_code == 400

    @pytest.mark.parametrize("method,url", [
        ("POST", "/api/folder"),
        ("POST", "/api/upload"),
        ("DELETE", "/api/delete"),
    ])
    def test_all_file_routes_protected(self, client: TestClient, method, url):
        response = client.request(method, url, json={})

        assert response.status_code == 401

    def test_unknown_api_path_checks_token_first(self, client: TestClient, auth_headers):
        """测试 /api 下不存在的路径：未认证 401，已认证 404"""
        assert client.get("/api/no-such-route").status_code == 401

        response = client.get("/api/no-such-route", headers=auth_headers)

        assert response.status_code == 404
        assert response.json() == {"message": "Endpoint not found"}
