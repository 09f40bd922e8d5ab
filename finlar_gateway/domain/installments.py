"""Installment projection - synthetic future occurrences of split purchases"""

import logging
import re
from dataclasses import replace
from datetime import date
from typing import List, Optional

from finlar_gateway.domain.models import EnrichedPurchase, InstallmentMarker, PurchaseRecord
from finlar_gateway.utils.date_utils import add_months

INSTALLMENT_PATTERN = re.compile(r"(\d+)/(\d+)", re.ASCII)

# '#' never appears in storage-assigned ids (UUIDs), so synthetic ids cannot collide
PROJECTION_SEPARATOR = "#proj"


def parse_installment_marker(marker: Optional[str]) -> Optional[InstallmentMarker]:
    """
    Parse a "<current>/<total>" label.

    Returns None for anything that is not a well-formed installment: no
    marker, extra characters, non-positive numbers, or current > total.
    """
    if not marker:
        return None

    match = INSTALLMENT_PATTERN.fullmatch(marker)
    if match is None:
        logging.debug("Ignoring malformed installment marker", extra={"installment": marker})
        return None

    current, total = int(match.group(1)), int(match.group(2))
    if current <= 0 or total <= 0 or current > total:
        logging.debug("Ignoring out of range installment marker", extra={"installment": marker})
        return None

    return InstallmentMarker(current=current, total=total)


def projection_id(parent_id: str, index: int) -> str:
    """Deterministic id of the projected installment `index` of `parent_id`"""
    return f"{parent_id}{PROJECTION_SEPARATOR}{index}"


def is_projection_id(purchase_id: str) -> bool:
    return PROJECTION_SEPARATOR in purchase_id


def parent_id_of(purchase_id: str) -> str:
    """Storage id behind a (possibly projected) purchase id"""
    return purchase_id.split(PROJECTION_SEPARATOR, 1)[0]


def generate_installment_projections(
    record: PurchaseRecord,
    base_billing_month: date,
) -> List[EnrichedPurchase]:
    """
    Generate the not-yet-stored installments that follow `record`.

    Projections are spaced one calendar month apart starting from the
    billing month of the stored installment, never from its purchase date.

    Example:
        installment "2/6" billed 2026-03 ->
        3/6 in 2026-04, 4/6 in 2026-05, 5/6 in 2026-06, 6/6 in 2026-07
    """
    marker = parse_installment_marker(record.installment)
    if marker is None or not marker.remaining:
        return []

    # The last installment must still fall on a representable date
    try:
        add_months(base_billing_month, marker.remaining)
    except (ValueError, OverflowError):
        logging.debug(
            "Installment schedule runs past the calendar, skipping projections",
            extra={"installment": record.installment, "purchase_id": record.id},
        )
        return []

    projections = []
    for i in range(marker.current + 1, marker.total + 1):
        months_ahead = i - marker.current
        projected = replace(
            record,
            id=projection_id(record.id, i),
            installment=f"{i}/{marker.total}",
        )
        projections.append(
            EnrichedPurchase(
                record=projected,
                billing_month=add_months(base_billing_month, months_ahead),
                is_projection=True,
                is_deferred=False,
                deferred_message=None,
            )
        )

    return projections


def recurring_billing_months(base_billing_month: date, months: int) -> List[date]:
    """Billing months of a recurring expense whose first occurrence bills in `base_billing_month`"""
    if months < 1:
        return []
    return [add_months(base_billing_month, i) for i in range(months)]
