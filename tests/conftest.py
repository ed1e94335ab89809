import os

# Must be set before the service modules read their settings.
os.environ.setdefault("OTEL_ENABLED", "false")
os.environ.setdefault("FLIPT_ENABLED", "false")
os.environ.setdefault("SEED_SAMPLE_BOOKINGS", "false")

from datetime import date, timedelta

import pytest
from fastapi.testclient import TestClient

from lifecycle import BookingLifecycle
from models import BookingInput
from store import BookingStore

TODAY = date(2026, 6, 15)


def make_input(**overrides) -> BookingInput:
    defaults = dict(
        hotel_name="Grand Hyatt",
        guest_name="Alice Smith",
        check_in_date=TODAY + timedelta(days=5),
        check_out_date=TODAY + timedelta(days=10),
    )
    defaults.update(overrides)
    return BookingInput(**defaults)


@pytest.fixture
def store():
    return BookingStore()


@pytest.fixture
def lifecycle(store):
    return BookingLifecycle(store, today=lambda: TODAY)


@pytest.fixture
def client():
    from main import app, get_lifecycle

    lifecycle = BookingLifecycle(BookingStore())
    app.dependency_overrides[get_lifecycle] = lambda: lifecycle
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
