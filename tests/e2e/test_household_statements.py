"""
E2E tests for the demo household against the mock storage API.

These tests require the mock storage server to be running and
STORAGE_API_BASE pointing at it:
    uvicorn mock.storage_server.main:app --port 8001

Demo household (storage_stub/*_house_demo.json):
- Notebook 1/3 bought after the closing day, billed from April
- Supermarket with a billing month already persisted
- Pharmacy on a card closing on the 5th
- Gym on a card with an invalid closing day (31) and a malformed marker
"""

import pytest
from decimal import Decimal
from fastapi.testclient import TestClient


@pytest.mark.integration
def test_april_statement(client: TestClient):
    """
    April: deferred notebook purchase plus the stored supermarket charge
    """
    response = client.get("/v1/houses/house_demo/statement", params={"month": "2026-04"})

    assert response.status_code == 200
    data = response.json()
    assert data["degraded"] is False
    assert [e["description"] for e in data["entries"]] == ["Notebook", "Supermarket"]
    assert data["entries"][0]["is_deferred"] is True
    assert Decimal(data["summary"]["total"]) == Decimal("812.35")


@pytest.mark.integration
def test_may_statement(client: TestClient):
    """
    May: second notebook installment (projected), pharmacy and gym
    """
    response = client.get("/v1/houses/house_demo/statement", params={"month": "2026-05"})

    assert response.status_code == 200
    data = response.json()
    entries = data["entries"]
    assert [e["description"] for e in entries] == ["Notebook", "Pharmacy", "Gym"]
    assert entries[0]["is_projection"] is True
    assert entries[0]["installment"] == "2/3"
    assert entries[2]["installment"] == "abc"
    assert entries[2]["is_projection"] is False
    assert data["summary"]["by_category"]["unclassified"]["count"] == 1
    assert Decimal(data["summary"]["total"]) == Decimal("748.80")


@pytest.mark.integration
def test_june_statement_only_projection(client: TestClient):
    """
    June: nothing stored yet, only the last notebook installment
    """
    response = client.get("/v1/houses/house_demo/statement", params={"month": "2026-06"})

    assert response.status_code == 200
    entries = response.json()["entries"]
    assert len(entries) == 1
    assert entries[0]["installment"] == "3/3"
    assert entries[0]["id"].endswith("#proj3")


@pytest.mark.integration
def test_unknown_house_is_degraded(client: TestClient):
    """
    Unknown house: storage 404s, statement is empty and flagged
    """
    response = client.get("/v1/houses/house_missing/statement", params={"month": "2026-04"})

    assert response.status_code == 200
    data = response.json()
    assert data["degraded"] is True
    assert data["entries"] == []
