"""Pytest fixtures for testing"""

import pytest
from datetime import date
from decimal import Decimal
from typing import Callable
from fastapi.testclient import TestClient
from finlar_gateway.api.main import create_app
from finlar_gateway.domain.models import CardBillingPolicy, PurchaseRecord


@pytest.fixture
def client() -> TestClient:
    """Create FastAPI test client"""
    app = create_app()
    return TestClient(app)


@pytest.fixture
def make_purchase() -> Callable[..., PurchaseRecord]:
    """Factory for purchase records with sensible defaults"""

    def _make(**overrides) -> PurchaseRecord:
        fields = {
            "id": "6f1b3c2a-0000-4000-8000-000000000001",
            "description": "Purchase",
            "amount": Decimal("100.00"),
            "purchase_date": date(2026, 3, 10),
            "category": "Groceries",
            "installment": None,
            "card_id": "card_main",
            "stored_billing_month": None,
            "house_id": "house_1",
            "created_by": "user_1",
        }
        fields.update(overrides)
        return PurchaseRecord(**fields)

    return _make


@pytest.fixture
def card_policies() -> dict[str, CardBillingPolicy]:
    """Card policies covering valid, invalid and missing closing days"""
    return {
        "card_main": CardBillingPolicy(card_id="card_main", closing_day=20),
        "card_early": CardBillingPolicy(card_id="card_early", closing_day=5),
        "card_zero": CardBillingPolicy(card_id="card_zero", closing_day=0),
        "card_29": CardBillingPolicy(card_id="card_29", closing_day=29),
        "card_missing": CardBillingPolicy(card_id="card_missing", closing_day=None),
    }
