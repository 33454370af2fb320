# tests/test_auth.py

import jwt
import pytest

from auth import security
from conftest import TEST_JWT_SECRET


def test_token_carries_role_and_type():
    token = security.build_access_token(subject="registrar", role="ADMIN")

    claims = security.decode_access_token(token)

    assert claims["sub"] == "registrar"
    assert claims["role"] == "admin"
    assert claims["type"] == "access"
    assert claims["exp"] > claims["iat"]


def test_unknown_role_cannot_be_minted():
    with pytest.raises(security.AuthSecurityError):
        security.build_access_token(subject="x", role="janitor")


def test_expired_token_is_rejected():
    token = security.build_access_token(subject="S1", role="student", expires_in_s=-30)

    with pytest.raises(security.AuthSecurityError, match="expired"):
        security.decode_access_token(token)


def test_token_signed_with_other_secret_is_rejected():
    token = jwt.encode({"sub": "S1", "role": "admin", "type": "access"}, "not-the-secret", algorithm="HS256")

    with pytest.raises(security.AuthSecurityError, match="Invalid"):
        security.decode_access_token(token)


def test_missing_token_is_401(client):
    response = client.get("/api/courses")

    assert response.status_code == 401
    assert response.json()["detail"] == "Not authorized, no token."


@pytest.mark.parametrize("header", ["Bearer", "Basic abc", "Bearer not-a-jwt"])
def test_malformed_authorization_is_401(client, header):
    response = client.get("/api/courses", headers={"Authorization": header})

    assert response.status_code == 401


def test_non_access_token_is_401(client):
    token = jwt.encode({"sub": "S1", "role": "admin", "type": "refresh"}, TEST_JWT_SECRET, algorithm="HS256")

    response = client.get("/api/courses", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401
    assert response.json()["detail"] == "Token is not an access token."


def test_students_can_read_but_not_write(client, student_headers):
    assert client.get("/api/courses", headers=student_headers).status_code == 200

    response = client.post("/api/courses", json={"code": "CS101", "title": "Intro"}, headers=student_headers)

    assert response.status_code == 403
    assert response.json()["detail"] == "Access denied: Admins only."


def test_me_reports_identity(client, admin_headers, student_headers):
    admin = client.get("/api/auth/me", headers=admin_headers).json()
    student = client.get("/api/auth/me", headers=student_headers).json()

    assert admin == {"subject": "registrar", "role": "admin", "is_admin": True}
    assert student == {"subject": "S1", "role": "student", "is_admin": False}


def test_health_needs_no_token(client):
    assert client.get("/health").json() == {"status": "ok"}
