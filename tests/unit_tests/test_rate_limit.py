"""Tests for rate limiting behaviour."""

import pytest
from fastapi.testclient import TestClient

from guest_booking.main import app
from tests.mocks.models import MOCK_GUEST


class TestRateLimiting:
    """Verify that rate limiting kicks in for wizard creation and submission."""

    @pytest.fixture()
    def limited_client(self, _test_env):
        """
        TestClient with rate limiting **enabled** (unlike the default
        `client` fixture which disables it for convenience).
        """
        from guest_booking.rate_limit import limiter

        limiter.enabled = True
        # Reset in-memory state so previous tests don't pollute counts
        limiter.reset()

        with TestClient(app, raise_server_exceptions=False) as tc:
            yield tc

        limiter.enabled = False

    def test_wizard_creation_rate_limit(self, limited_client):
        """POST /api/wizards is limited to 10 requests/minute."""
        for i in range(10):
            resp = limited_client.post("/api/wizards", json={"booking_date": "2025-06-02"})
            assert resp.status_code == 201, f"Request {i + 1} should succeed"

        resp = limited_client.post("/api/wizards", json={"booking_date": "2025-06-02"})
        assert resp.status_code == 429
        assert "Rate limit exceeded" in resp.json()["detail"]

    def test_details_submission_rate_limit(self, limited_client):
        """POST /api/wizards/{id}/details is limited to 5 requests/minute."""
        wizard_id = limited_client.post("/api/wizards", json={"booking_date": "2025-06-02"}).json()["id"]

        for i in range(5):
            resp = limited_client.post(f"/api/wizards/{wizard_id}/details", json=MOCK_GUEST)
            assert resp.status_code != 429, f"Request {i + 1} should not be limited"

        resp = limited_client.post(f"/api/wizards/{wizard_id}/details", json=MOCK_GUEST)
        assert resp.status_code == 429

    def test_unlimited_when_disabled(self, client):
        for _ in range(15):
            assert client.post("/api/wizards").status_code == 201
