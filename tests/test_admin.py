"""
Unit tests for admin endpoints.

Tests:
- User management (list, read, update, delete)
- Category management
- Rejection of non-admin callers
"""

import pytest

from app.core.security import verify_password
from app.models.application import Application
from app.models.category import Category
from app.models.job_post import JobPost
from app.models.user import User, UserRole
from app.services import user_service


class TestAdminAccess:
    """Test admin endpoint protection"""

    @pytest.mark.parametrize("method,path", [
        ("GET", "/api/admin/users"),
        ("GET", "/api/admin/users/1"),
        ("DELETE", "/api/admin/users/1"),
        ("POST", "/api/admin/categories"),
    ])
    def test_admin_endpoints_require_authentication(self, client, method, path):
        response = client.request(method, path)

        assert response.status_code == 401

    @pytest.mark.parametrize("role", [UserRole.USER, UserRole.EMPLOYER])
    def test_admin_endpoints_reject_non_admin_users(self, client, make_user, auth_headers, role):
        headers = auth_headers(make_user(role))

        for path in ["/api/admin/users", "/api/admin/users/1"]:
            response = client.get(path, headers=headers)
            assert response.status_code == 403, f"{role.value} should be rejected from {path}"
            assert "admin" in response.json()["detail"].lower()


class TestUserManagement:
    """Test admin user management"""

    def test_list_users(self, client, admin, employer, job_seeker, auth_headers):
        response = client.get("/api/admin/users?page=0&size=2", headers=auth_headers(admin))

        assert response.status_code == 200
        data = response.json()
        assert data["total_elements"] == 3
        assert data["total_pages"] == 2
        assert len(data["content"]) == 2

    def test_list_users_rejects_huge_page_number(self, client, admin, auth_headers):
        response = client.get("/api/admin/users?page=100000000000000000000", headers=auth_headers(admin))

        assert response.status_code == 400
        assert response.json()["error"] == "VALIDATION_FAILURE"

    def test_get_user(self, client, admin, employer, auth_headers):
        response = client.get(f"/api/admin/users/{employer.id}", headers=auth_headers(admin))

        assert response.status_code == 200
        assert response.json()["role"] == "EMPLOYER"

    def test_get_missing_user(self, client, admin, auth_headers):
        response = client.get("/api/admin/users/99999", headers=auth_headers(admin))

        assert response.status_code == 404

    def test_update_user_role(self, client, db_session, admin, job_seeker, auth_headers):
        response = client.put(
            f"/api/admin/users/{job_seeker.id}",
            json={"role": "EMPLOYER", "username": "Now Hiring"},
            headers=auth_headers(admin)
        )

        assert response.status_code == 200
        assert response.json()["role"] == "EMPLOYER"
        db_session.refresh(job_seeker)
        assert job_seeker.role == UserRole.EMPLOYER
        assert job_seeker.username == "Now Hiring"

    def test_role_change_applies_to_existing_token(self, client, admin, job_seeker, auth_headers, sample_job_data):
        seeker_headers = auth_headers(job_seeker)
        assert client.post("/api/jobs", json=sample_job_data, headers=seeker_headers).status_code == 403

        client.put(f"/api/admin/users/{job_seeker.id}", json={"role": "EMPLOYER"}, headers=auth_headers(admin))

        # The role is read from the account on every request, not from the token
        assert client.post("/api/jobs", json=sample_job_data, headers=seeker_headers).status_code == 201

    def test_delete_user_cascades(self, client, db_session, admin, employer, job_seeker, job_post, auth_headers):
        db_session.add(Application(job_seeker_id=job_seeker.id, job_post_id=job_post.id, status="PENDING"))
        db_session.commit()

        response = client.delete(f"/api/admin/users/{employer.id}", headers=auth_headers(admin))

        assert response.status_code == 204
        assert db_session.query(User).filter(User.email == "employer@example.com").first() is None
        assert db_session.query(JobPost).count() == 0
        assert db_session.query(Application).count() == 0

    def test_deleted_user_token_stops_working(self, client, admin, employer, auth_headers):
        employer_headers = auth_headers(employer)

        client.delete(f"/api/admin/users/{employer.id}", headers=auth_headers(admin))

        assert client.get("/api/users/me", headers=employer_headers).status_code == 401


class TestCategoryManagement:
    """Test admin category management and public listing"""

    def test_create_and_list_categories(self, client, db_session, admin, auth_headers):
        response = client.post(
            "/api/admin/categories",
            json={"name": "Engineering", "description": "Software roles"},
            headers=auth_headers(admin)
        )

        assert response.status_code == 201
        assert db_session.query(Category).count() == 1

        listing = client.get("/api/categories")
        assert listing.status_code == 200
        assert [c["name"] for c in listing.json()] == ["Engineering"]

    def test_duplicate_category(self, client, db_session, admin, auth_headers):
        db_session.add(Category(name="Design"))
        db_session.commit()

        response = client.post("/api/admin/categories", json={"name": "Design"}, headers=auth_headers(admin))

        assert response.status_code == 409

    def test_employer_cannot_create_category(self, client, employer, auth_headers):
        response = client.post("/api/admin/categories", json={"name": "Sales"}, headers=auth_headers(employer))

        assert response.status_code == 403


class TestAdminBootstrap:
    """Test creating or promoting the configured admin account"""

    def test_creates_admin_account(self, db_session):
        user = user_service.ensure_admin(db_session, "root@example.com", "RootPass123!")

        assert user.role == UserRole.ADMIN
        assert user.username == "root"
        assert verify_password("RootPass123!", user.hashed_password)

    def test_promotes_existing_account_and_keeps_password(self, db_session, job_seeker):
        user = user_service.ensure_admin(db_session, job_seeker.email, "OtherPass123!")

        assert user.id == job_seeker.id
        assert user.role == UserRole.ADMIN
        assert verify_password("TestPass123!", user.hashed_password)
        assert db_session.query(User).count() == 1

    def test_bootstrapped_admin_can_log_in(self, client, db_session):
        user_service.ensure_admin(db_session, "root@example.com", "RootPass123!")

        response = client.post("/api/auth/login", json={"email": "root@example.com", "password": "RootPass123!"})

        assert response.status_code == 200
        assert response.json()["user"]["role"] == "ADMIN"
