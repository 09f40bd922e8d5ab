"""POST /v1/enrich, /v1/summary, /v1/invoices - billing views over caller-supplied purchases"""

import time
from fastapi import APIRouter, Request

from finlar_gateway.api.v1.schemas import (
    EnrichRequest,
    EnrichResponse,
    EnrichedPurchaseSchema,
    InvoiceSchema,
    InvoicesRequest,
    InvoicesResponse,
    SummaryRequest,
    SummarySchema,
)
from finlar_gateway.api.dependencies import get_request_id
from finlar_gateway.domain.aggregation import group_invoices, summarize_by_category
from finlar_gateway.domain.enrichment import enrich_transactions, policies_by_card
from finlar_gateway.infrastructure.observability.logging import log_enrichment
from finlar_gateway.infrastructure.observability.metrics import record_enrichment

router = APIRouter()


@router.post("/enrich", response_model=EnrichResponse)
def enrich(request_body: EnrichRequest, request: Request):
    """
    Attribute purchases to billing months and append projected installments.

    Projected entries carry synthetic ids and must not be written back.
    The summary only covers the stored purchases.
    """
    start_time = time.time()
    request_id = get_request_id(request)

    records = [purchase.to_domain() for purchase in request_body.purchases]
    policies = policies_by_card(card.to_domain() for card in request_body.cards)
    entries = enrich_transactions(records, policies)

    projection_count = sum(1 for entry in entries if entry.is_projection)
    deferred_count = sum(1 for entry in entries if entry.is_deferred)

    duration_ms = (time.time() - start_time) * 1000
    record_enrichment("request", entries)
    log_enrichment(request_id, len(records), projection_count, deferred_count, duration_ms)

    return EnrichResponse(
        entries=[EnrichedPurchaseSchema.from_domain(entry) for entry in entries],
        projection_count=projection_count,
        summary=SummarySchema.from_domain(summarize_by_category(records)),
    )


@router.post("/summary", response_model=SummarySchema)
def summarize(request_body: SummaryRequest):
    """Totals per category for the given purchases"""
    records = [purchase.to_domain() for purchase in request_body.purchases]
    return SummarySchema.from_domain(summarize_by_category(records))


@router.post("/invoices", response_model=InvoicesResponse)
def list_invoices(request_body: InvoicesRequest):
    """
    One invoice per billing month, newest first.

    Invoices include projected installments, so future statements show
    the charges already committed to them.
    """
    records = [purchase.to_domain() for purchase in request_body.purchases]
    policies = policies_by_card(card.to_domain() for card in request_body.cards)
    entries = enrich_transactions(records, policies)
    record_enrichment("request", entries)

    invoices = group_invoices(entries, today=request_body.today)
    return InvoicesResponse(invoices=[InvoiceSchema.from_domain(invoice) for invoice in invoices])
