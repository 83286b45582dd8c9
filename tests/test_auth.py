"""
Tests for login and the student and admin school data routes.
"""
from fastapi import status


class TestLogin:
    """Test student and admin login."""

    def test_student_login_by_nisn(self, client):
        response = client.post("/api/auth/student", json={"nisn": "0012345678"})

        assert response.status_code == 200
        data = response.json()
        assert data["token_type"] == "bearer"
        assert data["user"]["role"] == "student"
        assert data["user"]["student"]["name"] == "Ahmad Rizky Pratama"

    def test_student_login_unknown_nisn(self, client):
        response = client.post("/api/auth/student", json={"nisn": "9999999999"})

        assert response.status_code == 400
        assert "NISN not found" in response.json()["detail"]

    def test_student_login_requires_ten_digits(self, client):
        response = client.post("/api/auth/student", json={"nisn": "12345"})

        assert response.status_code == 422

    def test_admin_login(self, client):
        response = client.post("/api/auth/admin", json={"username": "admin", "password": "admin123"})

        assert response.status_code == 200
        assert response.json()["user"]["admin"] == {"username": "admin", "name": "Administrator"}

    def test_admin_login_wrong_password(self, client):
        response = client.post("/api/auth/admin", json={"username": "admin", "password": "wrongpass"})

        assert response.status_code == 400
        assert "Invalid credentials" in response.json()["detail"]

    def test_admin_login_validation(self, client):
        response = client.post("/api/auth/admin", json={"username": "ad", "password": "123"})

        assert response.status_code == 422

    def test_me_with_login_token(self, client):
        token = client.post("/api/auth/student", json={"nisn": "0012345679"}).json()["access_token"]

        response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 200
        assert response.json()["student"]["id"] == "2"

    def test_me_unauthenticated(self, client):
        response = client.get("/api/auth/me")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert "Not authenticated" in response.json()["detail"]

    def test_me_invalid_token(self, client):
        response = client.get("/api/auth/me", headers={"Authorization": "Bearer invalid_token"})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert "Invalid token" in response.json()["detail"]


class TestStudentRoutes:
    """Test bills and history for the signed-in student."""

    def test_all_bills(self, client, student_headers):
        response = client.get("/api/students/me/bills", headers=student_headers)

        assert response.status_code == 200
        assert {b["id"] for b in response.json()} == {"bill-001", "bill-002", "bill-003", "bill-004"}

    def test_unpaid_bills_include_expired(self, client, student_headers):
        response = client.get("/api/students/me/bills?status=unpaid", headers=student_headers)

        assert {b["status"] for b in response.json()} == {"UNPAID", "EXPIRED"}
        assert len(response.json()) == 3

    def test_paid_bills(self, client, student_headers):
        response = client.get("/api/students/me/bills?status=paid", headers=student_headers)

        assert [b["id"] for b in response.json()] == ["bill-002"]

    def test_invalid_status_filter(self, client, student_headers):
        response = client.get("/api/students/me/bills?status=everything", headers=student_headers)

        assert response.status_code == 422

    def test_single_bill(self, client, student_headers):
        response = client.get("/api/students/me/bills/bill-003", headers=student_headers)

        assert response.status_code == 200
        assert response.json()["amount"] == 750000

    def test_other_students_bill_not_found(self, client, student_headers):
        response = client.get("/api/students/me/bills/bill-005", headers=student_headers)

        assert response.status_code == 404

    def test_history(self, client, student_headers):
        response = client.get("/api/students/me/history", headers=student_headers)

        assert [p["transaction_id"] for p in response.json()] == ["TXN-001-2026"]

    def test_admin_cannot_use_student_routes(self, client, admin_headers):
        response = client.get("/api/students/me/bills", headers=admin_headers)

        assert response.status_code == status.HTTP_403_FORBIDDEN


class TestAdminRoutes:
    """Test the admin console data."""

    def test_students(self, client, admin_headers):
        response = client.get("/api/admin/students", headers=admin_headers)

        assert response.status_code == 200
        assert len(response.json()) == 5

    def test_student_by_nisn(self, client, admin_headers):
        response = client.get("/api/admin/students/0012345680", headers=admin_headers)

        assert response.json()["name"] == "Muhammad Farhan"

    def test_student_by_nisn_not_found(self, client, admin_headers):
        response = client.get("/api/admin/students/0000000000", headers=admin_headers)

        assert response.status_code == 404

    def test_payments(self, client, admin_headers):
        response = client.get("/api/admin/payments", headers=admin_headers)

        assert len(response.json()) == 4

    def test_stats(self, client, admin_headers):
        response = client.get("/api/admin/stats", headers=admin_headers)

        data = response.json()
        assert data["total_students"] == 5
        assert data["total_bills"] == 5
        assert data["total_paid"] == 1
        assert data["total_unpaid"] == 3
        assert data["total_revenue"] == 1750000
        assert data["monthly_revenue"] == [{"month": "2026-01", "revenue": 1750000}]

    def test_student_forbidden(self, client, student_headers):
        response = client.get("/api/admin/stats", headers=student_headers)

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_unauthenticated(self, client):
        response = client.get("/api/admin/payments")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
