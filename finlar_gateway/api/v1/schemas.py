"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, Field
from datetime import date, datetime
from decimal import Decimal
from typing import Dict, List, Optional

from finlar_gateway.domain.models import (
    CardBillingPolicy,
    EnrichedPurchase,
    Invoice,
    PurchaseRecord,
    TransactionSummary,
)
from finlar_gateway.utils.date_utils import month_key


class PurchaseIn(BaseModel):
    """A stored purchase as handed over by the caller"""

    id: str = Field(..., min_length=1, description="Storage-assigned purchase identifier")
    description: str = ""
    amount: Decimal = Field(..., gt=0, allow_inf_nan=False, description="Charge amount")
    transaction_date: date
    category: Optional[str] = None
    installment: Optional[str] = Field(None, description='Installment marker, e.g. "2/6"')
    card_id: Optional[str] = None
    billing_month: Optional[date] = Field(None, description="Billing month already persisted by storage")
    house_id: Optional[str] = None
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_domain(self) -> PurchaseRecord:
        return PurchaseRecord(
            id=self.id,
            description=self.description,
            amount=self.amount,
            purchase_date=self.transaction_date,
            category=self.category,
            installment=self.installment,
            card_id=self.card_id,
            stored_billing_month=self.billing_month,
            house_id=self.house_id,
            created_by=self.created_by,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )


class CardIn(BaseModel):
    """Card billing policy; out-of-range closing days fall back to the default"""

    card_id: str = Field(..., min_length=1)
    closing_day: Optional[int] = None

    def to_domain(self) -> CardBillingPolicy:
        return CardBillingPolicy(card_id=self.card_id, closing_day=self.closing_day)


class EnrichRequest(BaseModel):
    """Request body for POST /v1/enrich"""

    purchases: List[PurchaseIn]
    cards: List[CardIn] = []


class SummaryRequest(BaseModel):
    """Request body for POST /v1/summary"""

    purchases: List[PurchaseIn]


class InvoicesRequest(BaseModel):
    """Request body for POST /v1/invoices"""

    purchases: List[PurchaseIn]
    cards: List[CardIn] = []
    today: date = Field(..., description="Reference date deciding the current statement")


class EnrichedPurchaseSchema(BaseModel):
    """A real or projected purchase attributed to a billing month"""

    id: str
    description: str
    amount: Decimal
    transaction_date: date
    category: Optional[str] = None
    installment: Optional[str] = None
    card_id: Optional[str] = None
    house_id: Optional[str] = None
    billing_month: date
    billing_key: str
    is_projection: bool
    is_deferred: bool
    deferred_message: Optional[str] = None

    @classmethod
    def from_domain(cls, entry: EnrichedPurchase) -> "EnrichedPurchaseSchema":
        record = entry.record
        return cls(
            id=record.id,
            description=record.description,
            amount=record.amount,
            transaction_date=record.purchase_date,
            category=record.category,
            installment=record.installment,
            card_id=record.card_id,
            house_id=record.house_id,
            billing_month=entry.billing_month,
            billing_key=month_key(entry.billing_month),
            is_projection=entry.is_projection,
            is_deferred=entry.is_deferred,
            deferred_message=entry.deferred_message,
        )


class CategoryTotalsSchema(BaseModel):
    """Total and count for one category"""

    total: Decimal
    count: int


class SummarySchema(BaseModel):
    """Category breakdown"""

    total: Decimal
    count: int
    by_category: Dict[str, CategoryTotalsSchema]

    @classmethod
    def from_domain(cls, summary: TransactionSummary) -> "SummarySchema":
        return cls(
            total=summary.total,
            count=summary.count,
            by_category={
                label: CategoryTotalsSchema(total=totals.total, count=totals.count)
                for label, totals in summary.by_category.items()
            },
        )


class EnrichResponse(BaseModel):
    """Response for POST /v1/enrich"""

    entries: List[EnrichedPurchaseSchema]
    projection_count: int
    summary: SummarySchema = Field(..., description="Totals over stored purchases only")


class InvoiceSchema(BaseModel):
    """One billing month of charges"""

    key: str
    label: str
    billing_month: date
    total: Decimal
    count: int
    status: str

    @classmethod
    def from_domain(cls, invoice: Invoice) -> "InvoiceSchema":
        return cls(
            key=invoice.key,
            label=invoice.label,
            billing_month=invoice.billing_month,
            total=invoice.total,
            count=invoice.count,
            status=invoice.status,
        )


class InvoicesResponse(BaseModel):
    """Response for POST /v1/invoices"""

    invoices: List[InvoiceSchema]


class StatementResponse(BaseModel):
    """Response for GET /v1/houses/{house_id}/statement"""

    house_id: str
    month: str
    label: str
    entries: List[EnrichedPurchaseSchema]
    summary: SummarySchema
    degraded: bool = Field(False, description="True when storage data could not be fetched")
