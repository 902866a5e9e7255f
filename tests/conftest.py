"""
Shared test fixtures.

Provides a FastAPI TestClient wired to:
  • an in-memory availability provider (no upstream HTTP)
  • an in-memory booking store
  • a fresh wizard registry per test

The `client` fixture runs the full lifespan so startup / shutdown are
exercised, with upstream registration stubbed out.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from guest_booking.main import app
from guest_booking.services.sessions import WizardRegistry
from guest_booking.services.wizard import WizardController
from tests.mocks.models import MOCK_DATE
from tests.mocks.services import FakeAvailabilityProvider, FakeBookingStore


# ── Fixtures ───────────────────────────────────────────────────────────────


@pytest.fixture()
def fake_provider() -> FakeAvailabilityProvider:
    return FakeAvailabilityProvider()


@pytest.fixture()
def fake_store() -> FakeBookingStore:
    return FakeBookingStore()


@pytest.fixture()
def wizard(fake_provider, fake_store) -> WizardController:
    """A wizard on the mock date with a frozen clock."""
    return WizardController(
        fake_provider,
        fake_store,
        booking_date=MOCK_DATE,
        clock=lambda: 0.0,
    )


@pytest.fixture()
def _test_env(monkeypatch, fake_provider, fake_store):
    """
    Internal fixture that swaps the session registry for one backed by
    the fakes and disables rate limiting.
    """
    test_registry = WizardRegistry(max_sessions=10)
    test_registry.provider = fake_provider
    test_registry.store = fake_store

    # Prevent the lifespan from creating a real upstream client
    test_registry.register_upstream = lambda: None  # type: ignore[assignment]

    # Patch everywhere `registry` was imported
    for mod_path in (
        "guest_booking.services.sessions",
        "guest_booking.dependencies",
        "guest_booking.main",
        "guest_booking.routers.wizards",
        "guest_booking.routers.health",
    ):
        monkeypatch.setattr(f"{mod_path}.registry", test_registry)

    # ── Disable rate limiting in tests ────────────────────────────────
    from guest_booking.rate_limit import limiter as _limiter
    monkeypatch.setattr(_limiter, "enabled", False)

    return test_registry


@pytest.fixture()
def mock_registry(_test_env) -> WizardRegistry:
    """Public alias for tests that reference the registry directly."""
    return _test_env


@pytest.fixture()
def client(_test_env: WizardRegistry) -> TestClient:
    with TestClient(app, raise_server_exceptions=False) as tc:
        yield tc
