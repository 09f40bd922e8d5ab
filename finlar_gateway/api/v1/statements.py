"""GET /v1/houses/{house_id}/statement - one month's statement built from storage data"""

import asyncio
import logging
import time
from typing import List, Optional, Tuple
from fastapi import APIRouter, Depends, Query, Request

from finlar_gateway.api.v1.schemas import EnrichedPurchaseSchema, StatementResponse, SummarySchema
from finlar_gateway.api.dependencies import get_request_id, get_storage_client
from finlar_gateway.domain.aggregation import filter_billing_month, summarize_by_category
from finlar_gateway.domain.enrichment import enrich_transactions, policies_by_card
from finlar_gateway.domain.exceptions import DomainException
from finlar_gateway.domain.models import CardBillingPolicy, PurchaseRecord
from finlar_gateway.infrastructure.clients.storage import StorageClient
from finlar_gateway.infrastructure.observability.logging import log_enrichment
from finlar_gateway.infrastructure.observability.metrics import (
    record_enrichment,
    storage_fetch_failures_counter,
)
from finlar_gateway.utils.date_utils import month_label, parse_month_key

router = APIRouter()


async def fetch_house_data(
    storage_client: StorageClient,
    house_id: str,
    request_id: str,
) -> Tuple[List[PurchaseRecord], List[CardBillingPolicy], bool]:
    """
    Fetch purchases and cards concurrently.

    A failed fetch is replaced by an empty collection and reported through
    the returned `degraded` flag instead of failing the request.
    """
    purchases, cards = await asyncio.gather(
        storage_client.get_purchases(house_id),
        storage_client.get_cards(house_id),
        return_exceptions=True,
    )

    degraded = False
    if isinstance(purchases, BaseException):
        if not isinstance(purchases, DomainException):
            raise purchases
        storage_fetch_failures_counter.labels(resource="transactions").inc()
        logging.error(f"Purchase fetch failed: {purchases}", extra={"request_id": request_id, "house_id": house_id})
        purchases, degraded = [], True

    if isinstance(cards, BaseException):
        if not isinstance(cards, DomainException):
            raise cards
        storage_fetch_failures_counter.labels(resource="cards").inc()
        logging.error(f"Card fetch failed: {cards}", extra={"request_id": request_id, "house_id": house_id})
        cards, degraded = [], True

    return purchases, cards, degraded


@router.get("/houses/{house_id}/statement", response_model=StatementResponse)
async def get_statement(
    house_id: str,
    request: Request,
    month: str = Query(..., pattern=r"^\d{4}-(0[1-9]|1[0-2])$", description="Billing month as YYYY-MM"),
    card_id: Optional[str] = Query(None, description="Restrict the statement to one card"),
    storage_client: StorageClient = Depends(get_storage_client),
):
    """
    Build the statement of one billing month.

    Flow:
    1. Fetch purchases and cards from storage concurrently
    2. Enrich purchases with billing months and projected installments
    3. Keep the entries attributed to `month`
    4. Summarize them by category
    """
    start_time = time.time()
    request_id = get_request_id(request)

    purchases, cards, degraded = await fetch_house_data(storage_client, house_id, request_id)
    if card_id is not None:
        purchases = [purchase for purchase in purchases if purchase.card_id == card_id]

    entries = enrich_transactions(purchases, policies_by_card(cards))
    billing_month = parse_month_key(month)
    statement_entries = filter_billing_month(entries, billing_month)

    duration_ms = (time.time() - start_time) * 1000
    record_enrichment("storage", entries)
    log_enrichment(
        request_id,
        len(purchases),
        sum(1 for entry in entries if entry.is_projection),
        sum(1 for entry in entries if entry.is_deferred),
        duration_ms,
        house_id=house_id,
    )

    return StatementResponse(
        house_id=house_id,
        month=month,
        label=month_label(billing_month),
        entries=[EnrichedPurchaseSchema.from_domain(entry) for entry in statement_entries],
        summary=SummarySchema.from_domain(summarize_by_category(statement_entries)),
        degraded=degraded,
    )
