"""Storage API HTTP client for fetching purchases and card policies"""

import httpx
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional
from finlar_gateway.domain.models import CardBillingPolicy, PurchaseRecord
from finlar_gateway.domain.exceptions import InvalidPurchaseDataError, StorageAPIError
from finlar_gateway.config import settings


def _optional_date(value: Optional[str]) -> Optional[date]:
    return date.fromisoformat(value[:10]) if value else None


def _optional_datetime(value: Optional[str]) -> Optional[datetime]:
    return datetime.fromisoformat(value) if value else None


def _optional_text(row: Dict[str, Any], field: str) -> Optional[str]:
    value = row.get(field)
    if value is not None and not isinstance(value, str):
        raise TypeError(f"{field} must be a string, got {type(value).__name__}")
    return value


def parse_purchase(row: Dict[str, Any]) -> PurchaseRecord:
    """
    Convert a storage row into a PurchaseRecord.

    Raises:
        InvalidPurchaseDataError: On missing fields, non-numeric or non-positive amounts,
            unparseable dates or non-text labels
    """
    try:
        amount = Decimal(str(row["amount"]))
        if not amount.is_finite():
            raise ValueError(f"non-finite amount {row['amount']!r}")
        if amount <= 0:
            raise ValueError(f"amount must be positive, got {amount}")
        if not isinstance(row["description"], str):
            raise TypeError("description must be a string")
        return PurchaseRecord(
            id=str(row["id"]),
            description=row["description"],
            amount=amount,
            purchase_date=date.fromisoformat(row["transaction_date"]),
            category=_optional_text(row, "category"),
            installment=_optional_text(row, "installment"),
            card_id=_optional_text(row, "card_id"),
            stored_billing_month=_optional_date(row.get("billing_month")),
            house_id=row.get("house_id"),
            created_by=row.get("created_by"),
            created_at=_optional_datetime(row.get("created_at")),
            updated_at=_optional_datetime(row.get("updated_at")),
        )
    except (KeyError, ValueError, TypeError, InvalidOperation) as e:
        raise InvalidPurchaseDataError(f"Invalid purchase row {row.get('id')!r}: {e}") from e


def parse_card(row: Dict[str, Any]) -> CardBillingPolicy:
    """Card rows keep whatever closing day storage holds; validation happens at resolution"""
    try:
        return CardBillingPolicy(card_id=str(row["id"]), closing_day=row.get("closing_day"))
    except KeyError as e:
        raise InvalidPurchaseDataError(f"Invalid card row: missing {e}") from e


class StorageClient:
    """Client for the household storage API"""

    def __init__(self, base_url: str | None = None, timeout: float | None = None):
        self.base_url = base_url or settings.storage_api_base
        self.timeout = timeout or settings.http_timeout_seconds

    async def _get(self, path: str) -> Dict[str, Any]:
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            try:
                response = await client.get(f"{self.base_url}{path}")
                response.raise_for_status()
                return response.json()

            except httpx.TimeoutException as e:
                raise StorageAPIError(f"Storage API timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise StorageAPIError(f"Storage API error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise StorageAPIError(f"Storage API unreachable: {e}") from e
            except ValueError as e:
                raise StorageAPIError(f"Invalid JSON from storage: {e}") from e

    async def get_purchases(self, house_id: str) -> List[PurchaseRecord]:
        """
        Fetch all purchases of a house, newest first.

        Raises:
            StorageAPIError: On timeout, HTTP errors, or invalid response
            InvalidPurchaseDataError: When a row violates the purchase contract
        """
        data = await self._get(f"/houses/{house_id}/transactions")
        return [parse_purchase(row) for row in data.get("transactions", [])]

    async def get_cards(self, house_id: str) -> List[CardBillingPolicy]:
        """Fetch the credit cards of a house with their closing days"""
        data = await self._get(f"/houses/{house_id}/cards")
        return [parse_card(row) for row in data.get("cards", [])]
