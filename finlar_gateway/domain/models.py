"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Dict, Optional


@dataclass(frozen=True)
class PurchaseRecord:
    """One charge as stored by the storage layer (read-only input)"""

    id: str
    description: str
    amount: Decimal
    purchase_date: date
    category: Optional[str] = None
    installment: Optional[str] = None  # "<current>/<total>"
    card_id: Optional[str] = None
    stored_billing_month: Optional[date] = None
    house_id: Optional[str] = None
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class CardBillingPolicy:
    """Statement policy of a credit card"""

    card_id: str
    closing_day: Optional[int] = None


@dataclass(frozen=True)
class InstallmentMarker:
    """Parsed "<current>/<total>" installment label"""

    current: int
    total: int

    @property
    def remaining(self) -> int:
        return max(0, self.total - self.current)


@dataclass(frozen=True)
class BillingInfo:
    """Statement attribution of a single purchase"""

    billing_month: date
    billing_label: str
    is_deferred: bool


@dataclass(frozen=True)
class EnrichedPurchase:
    """A purchase occurrence attributed to a billing month"""

    record: PurchaseRecord
    billing_month: date
    is_projection: bool = False
    is_deferred: bool = False
    deferred_message: Optional[str] = None

    # Convenience accessors so aggregation treats raw and enriched entries alike
    @property
    def id(self) -> str:
        return self.record.id

    @property
    def amount(self) -> Decimal:
        return self.record.amount

    @property
    def category(self) -> Optional[str]:
        return self.record.category

    @property
    def installment(self) -> Optional[str]:
        return self.record.installment


@dataclass
class CategoryTotals:
    """Running total for one category"""

    total: Decimal = Decimal("0")
    count: int = 0


@dataclass
class TransactionSummary:
    """Category breakdown of a set of purchases"""

    total: Decimal = Decimal("0")
    count: int = 0
    by_category: Dict[str, CategoryTotals] = field(default_factory=dict)


@dataclass(frozen=True)
class Invoice:
    """All charges attributed to one billing month of a card"""

    key: str  # YYYY-MM
    label: str
    billing_month: date
    total: Decimal
    count: int
    status: str  # "current" | "future" | "closed"
