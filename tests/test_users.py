"""
Tests for self-service account endpoints.

Tests:
- /api/users/me for every role
- /api/users/{id} restricted to the owner or an ADMIN
"""

from app.core.security import verify_password
from app.models.user import UserRole


class TestCurrentUser:
    """Test /api/users/me"""

    def test_get_me_requires_token(self, client):
        response = client.get("/api/users/me")

        assert response.status_code == 401

    def test_get_me(self, client, employer, auth_headers):
        response = client.get("/api/users/me", headers=auth_headers(employer))

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == employer.id
        assert data["role"] == "EMPLOYER"
        assert "hashed_password" not in data

    def test_update_me(self, client, db_session, job_seeker, auth_headers):
        response = client.put(
            "/api/users/me",
            json={"username": "Jane Q. Seeker", "password": "BrandNew123!"},
            headers=auth_headers(job_seeker)
        )

        assert response.status_code == 200
        assert response.json()["username"] == "Jane Q. Seeker"
        db_session.refresh(job_seeker)
        assert verify_password("BrandNew123!", job_seeker.hashed_password)
        assert job_seeker.email == "seeker@example.com"

    def test_update_me_cannot_change_role(self, client, db_session, job_seeker, auth_headers):
        response = client.put(
            "/api/users/me",
            json={"role": "ADMIN"},
            headers=auth_headers(job_seeker)
        )

        assert response.status_code == 200
        db_session.refresh(job_seeker)
        assert job_seeker.role == UserRole.USER

    def test_update_me_email_conflict(self, client, job_seeker, employer, auth_headers):
        response = client.put(
            "/api/users/me",
            json={"email": employer.email},
            headers=auth_headers(job_seeker)
        )

        assert response.status_code == 409

    def test_email_change_invalidates_old_token(self, client, job_seeker, auth_headers):
        headers = auth_headers(job_seeker)

        response = client.put("/api/users/me", json={"email": "new-seeker@example.com"}, headers=headers)
        assert response.status_code == 200

        assert client.get("/api/users/me", headers=headers).status_code == 401


class TestUserById:
    """Test /api/users/{id} owner-or-admin access"""

    def test_owner_can_read_own_account(self, client, job_seeker, auth_headers):
        response = client.get(f"/api/users/{job_seeker.id}", headers=auth_headers(job_seeker))

        assert response.status_code == 200
        assert response.json()["email"] == job_seeker.email

    def test_other_user_cannot_read_account(self, client, job_seeker, employer, auth_headers):
        response = client.get(f"/api/users/{job_seeker.id}", headers=auth_headers(employer))

        assert response.status_code == 403

    def test_admin_can_read_any_account(self, client, job_seeker, admin, auth_headers):
        response = client.get(f"/api/users/{job_seeker.id}", headers=auth_headers(admin))

        assert response.status_code == 200

    def test_owner_can_update_own_account(self, client, job_seeker, auth_headers):
        response = client.put(
            f"/api/users/{job_seeker.id}",
            json={"username": "Renamed"},
            headers=auth_headers(job_seeker)
        )

        assert response.status_code == 200
        assert response.json()["username"] == "Renamed"

    def test_other_user_cannot_update_account(self, client, db_session, job_seeker, employer, auth_headers):
        response = client.put(
            f"/api/users/{job_seeker.id}",
            json={"username": "Hijacked"},
            headers=auth_headers(employer)
        )

        assert response.status_code == 403
        db_session.refresh(job_seeker)
        assert job_seeker.username == "Jane Seeker"

    def test_admin_reading_missing_account(self, client, admin, auth_headers):
        response = client.get("/api/users/99999", headers=auth_headers(admin))

        assert response.status_code == 404
