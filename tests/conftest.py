"""Pytest fixtures for routing, ingestion and gateway tests."""

from datetime import datetime, timezone
from pathlib import Path

import pytest

from payment_factory.integrations.clients.mocks.gateway import MockGateway
from payment_factory.routing.classifier import RouteClassifier

SAMPLES_DIR = Path(__file__).parent.parent / "samples"

FIXED_NOW = datetime(2026, 1, 16, 10, 42, 15, tzinfo=timezone.utc)


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW


@pytest.fixture
def classifier():
    """Classifier over the built-in reference tables."""
    return RouteClassifier()


@pytest.fixture
def mock_gateway(fixed_clock):
    return MockGateway(clock=fixed_clock)


@pytest.fixture
def sample_pain001() -> bytes:
    return (SAMPLES_DIR / "pain001_batch.xml").read_bytes()


@pytest.fixture
def api_client(monkeypatch, mock_gateway):
    """TestClient over the app with an open API and a fixed-clock mock gateway."""
    from fastapi.testclient import TestClient

    from payment_factory.api.main import app

    monkeypatch.delenv("API_KEYS", raising=False)
    original = app.state.gateway
    app.state.gateway = mock_gateway
    try:
        with TestClient(app) as client:
            yield client
    finally:
        app.state.gateway = original
