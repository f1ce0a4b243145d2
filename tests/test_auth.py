"""
Tests for signup, login and the protected-resource check
"""
from datetime import datetime, timedelta, timezone
from unittest.mock import patch

import jwt
import pytest

from crowdfund.core.config import ALGORITHM
from crowdfund.core.security import create_access_token, verify_password
from crowdfund.models.user import User

from conftest import TEST_SECRET

USER = {"name": "Asha", "email": "asha@example.com", "password": "s3cret-pass"}


def signup(client, **overrides):
    return client.post("/api/auth/signup", json={**USER, **overrides})


def login(client, email=USER["email"], password=USER["password"]):
    return client.post("/api/auth/login", json={"email": email, "password": password})


class TestSignup:

    def test_signup_success(self, client, db_session):
        response = signup(client)

        assert response.status_code == 201
        assert response.json() == {"message": "Signup successful"}

        user = db_session.query(User).filter(User.email == USER["email"]).one()
        assert user.name == USER["name"]
        assert user.hashed_password != USER["password"]
        assert verify_password(USER["password"], user.hashed_password)

    @pytest.mark.parametrize("missing", ["name", "email", "password"])
    def test_signup_missing_field(self, client, missing):
        payload = {k: v for k, v in USER.items() if k != missing}
        response = client.post("/api/auth/signup", json=payload)

        assert response.status_code == 400
        assert response.json()["message"] == "All fields are required"

    def test_signup_empty_field(self, client):
        response = signup(client, password="")
        assert response.status_code == 400

    def test_signup_duplicate_email(self, client):
        assert signup(client).status_code == 201

        response = signup(client, name="Someone Else")
        assert response.status_code == 400
        assert response.json() == {"message": "User already exists"}

    def test_email_is_case_sensitive(self, client):
        assert signup(client).status_code == 201
        assert signup(client, email=USER["email"].upper()).status_code == 201

    def test_signup_never_returns_password(self, client):
        body = signup(client).text
        assert USER["password"] not in body


class TestLogin:

    def test_login_after_signup(self, client):
        signup(client)
        response = login(client)

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Login successful"
        assert body["token"]

    def test_token_carries_user_id_and_expiry(self, client, db_session):
        signup(client)
        token = login(client).json()["token"]

        claims = jwt.decode(token, TEST_SECRET, algorithms=[ALGORITHM])
        user = db_session.query(User).filter(User.email == USER["email"]).one()
        assert claims["id"] == user.id
        assert set(claims) == {"id", "exp"}

    def test_wrong_password_and_unknown_email_look_the_same(self, client):
        signup(client)
        wrong_password = login(client, password="not-it")
        unknown_email = login(client, email="nobody@example.com")

        assert wrong_password.status_code == unknown_email.status_code == 400
        assert wrong_password.json() == unknown_email.json() == {"message": "Invalid email or password"}

    @pytest.mark.parametrize("payload", [{"email": USER["email"]}, {"password": "x"}, {}])
    def test_login_missing_field(self, client, payload):
        response = client.post("/api/auth/login", json=payload)

        assert response.status_code == 400
        assert response.json()["message"] == "Both fields are required"


class TestProtected:

    def test_access_with_login_token(self, client, db_session):
        signup(client)
        token = login(client).json()["token"]

        response = client.get("/api/auth/protected", headers={"Authorization": token})

        user = db_session.query(User).filter(User.email == USER["email"]).one()
        assert response.status_code == 200
        assert response.json() == {"message": "Access granted", "userId": user.id, "subjectId": user.id}

    def test_missing_header(self, client):
        response = client.get("/api/auth/protected")

        assert response.status_code == 401
        assert response.json() == {"message": "Access denied"}

    def test_bearer_prefix_is_not_accepted(self, client):
        token = create_access_token({"id": 1}, TEST_SECRET)
        response = client.get("/api/auth/protected", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
        assert response.json() == {"message": "Invalid token"}

    def test_garbage_token(self, client):
        response = client.get("/api/auth/protected", headers={"Authorization": "not-a-jwt"})
        assert response.status_code == 401

    def test_token_signed_with_other_secret(self, client):
        token = create_access_token({"id": 1}, "another-secret")
        response = client.get("/api/auth/protected", headers={"Authorization": token})

        assert response.status_code == 401
        assert response.json() == {"message": "Invalid token"}

    def test_expired_token(self, client):
        token = create_access_token({"id": 1}, TEST_SECRET, expires_delta=timedelta(seconds=-1))
        response = client.get("/api/auth/protected", headers={"Authorization": token})

        assert response.status_code == 401
        assert response.json() == {"message": "Invalid token"}

    @pytest.mark.parametrize("minutes_ago, status_code", [(59, 200), (61, 401)])
    def test_login_token_lasts_one_hour(self, client, minutes_ago, status_code):
        signup(client)
        issued_at = datetime.now(timezone.utc) - timedelta(minutes=minutes_ago)
        with patch("crowdfund.core.security.datetime") as mock_datetime:
            mock_datetime.now.return_value = issued_at
            token = login(client).json()["token"]

        response = client.get("/api/auth/protected", headers={"Authorization": token})
        assert response.status_code == status_code

    def test_token_valid_within_window(self, client):
        token = create_access_token({"id": 7}, TEST_SECRET, expires_delta=timedelta(minutes=5))
        response = client.get("/api/auth/protected", headers={"Authorization": token})

        assert response.status_code == 200
        assert response.json()["userId"] == 7

    def test_token_without_id_claim(self, client):
        token = create_access_token({"sub": "someone"}, TEST_SECRET)
        response = client.get("/api/auth/protected", headers={"Authorization": token})
        assert response.status_code == 401
