"""Transaction enrichment - billing attribution plus installment projections"""

from typing import Dict, Iterable, List, Mapping, Optional

from finlar_gateway.domain.billing_cycle import (
    deferred_message,
    get_billing_month,
    resolve_closing_day,
)
from finlar_gateway.domain.installments import generate_installment_projections
from finlar_gateway.domain.models import CardBillingPolicy, EnrichedPurchase, PurchaseRecord


def policies_by_card(cards: Iterable[CardBillingPolicy]) -> Dict[str, CardBillingPolicy]:
    """Index card policies by card id"""
    return {card.card_id: card for card in cards}


def enrich_purchase(
    record: PurchaseRecord,
    policies: Mapping[str, CardBillingPolicy],
    default_closing_day: Optional[int] = None,
) -> List[EnrichedPurchase]:
    """
    Expand one stored purchase into its real entry followed by its projections.

    A billing month already persisted with the purchase is authoritative: it
    is used verbatim and the entry is never flagged as deferred, so changing
    a card's closing day later does not move historical charges.
    """
    policy = policies.get(record.card_id) if record.card_id else None
    closing_day = resolve_closing_day(policy, default=default_closing_day)

    if record.stored_billing_month is not None:
        billing_month = record.stored_billing_month
        real = EnrichedPurchase(record=record, billing_month=billing_month)
    else:
        billing_info = get_billing_month(record.purchase_date, closing_day)
        billing_month = billing_info.billing_month
        real = EnrichedPurchase(
            record=record,
            billing_month=billing_month,
            is_deferred=billing_info.is_deferred,
            deferred_message=deferred_message(billing_info, closing_day),
        )

    return [real, *generate_installment_projections(record, billing_month)]


def enrich_transactions(
    records: Iterable[PurchaseRecord],
    policies: Mapping[str, CardBillingPolicy],
    default_closing_day: Optional[int] = None,
) -> List[EnrichedPurchase]:
    """
    Main entry point: enrich every purchase, keeping input order.

    Each record's projections immediately follow it. The pass is pure, so
    running it twice on the same input yields identical collections.
    """
    enriched: List[EnrichedPurchase] = []
    for record in records:
        enriched.extend(enrich_purchase(record, policies, default_closing_day))
    return enriched
