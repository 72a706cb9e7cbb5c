# tests/conftest.py

from datetime import date

import pytest
from fastapi.testclient import TestClient

from flora.config import Settings
from flora.main import create_app
from flora.schemas.order import OrderFormData
from flora.services.store import InMemoryOrderStore


@pytest.fixture
def form_payload():
    """Заполненная форма самовывоза на сегодня (camelCase, как из браузера)."""
    return {
        "firstName": "Jane",
        "lastName": "Doe",
        "phone": "555-123-4567",
        "email": "jane@x.com",
        "orderDate": date.today().isoformat(),
        "pickupDeliveryDate": date.today().isoformat(),
        "freshArrangementVase": "roses",
        "cutFlowersWrapped": "",
        "dishGardenPlanters": "",
        "occasion": "birthday",
        "budget": "50.00",
        "specialRequests": "",
        "deliveryType": "pickup",
        "deliveryTime": "morning",
        "recipientName": "",
        "recipientAddress": "",
        "recipientPhone": "",
        "cardMessage": "Happy birthday!",
        "paymentType": "card",
    }


@pytest.fixture
def delivery_payload(form_payload):
    return {
        **form_payload,
        "deliveryType": "delivery",
        "budget": "40",
        "recipientName": "John Smith",
        "recipientAddress": "Downtown Plaza",
        "recipientPhone": "555-987-6543",
    }


@pytest.fixture
def make_form(form_payload):
    def _make(**overrides) -> OrderFormData:
        return OrderFormData.model_validate({**form_payload, **overrides})
    return _make


@pytest.fixture
def test_settings(tmp_path):
    return Settings(
        LOG_DIR=str(tmp_path / "log"),
        LOG_PRINT="0",
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'orders.db'}",
    )


@pytest.fixture
def memory_store():
    return InMemoryOrderStore()


@pytest.fixture
def client(test_settings, memory_store):
    app = create_app(test_settings, store=memory_store)
    with TestClient(app) as test_client:
        yield test_client
