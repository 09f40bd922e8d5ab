"""Prometheus metrics for monitoring enrichment volume and storage health"""

from typing import Iterable
from prometheus_client import Counter, Histogram
from finlar_gateway.domain.models import EnrichedPurchase

# Enrichment metrics
enrichment_counter = Counter(
    "finlar_enrichment_total",
    "Total enrichment passes",
    ["source"],  # request | storage
)

enriched_entries_counter = Counter(
    "finlar_enriched_entries_total",
    "Entries produced by enrichment",
    ["kind"],  # real | projection
)

deferred_purchases_counter = Counter(
    "finlar_deferred_purchases_total",
    "Purchases moved to the next statement by the closing day",
)

# Storage API metrics
storage_fetch_failures_counter = Counter(
    "storage_fetch_failures_total",
    "Failed storage API calls",
    ["resource"],  # transactions | cards
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_enrichment(source: str, entries: Iterable[EnrichedPurchase]) -> None:
    """Record counts of real, projected and deferred entries from one pass"""
    enrichment_counter.labels(source=source).inc()

    for entry in entries:
        kind = "projection" if entry.is_projection else "real"
        enriched_entries_counter.labels(kind=kind).inc()
        if entry.is_deferred:
            deferred_purchases_counter.inc()
