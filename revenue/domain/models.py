"""Domain models representing gateway, catalog and ledger state.

These are pure domain objects with no API input rules.
Django ORM models are in revenue/models.py (persistence layer).
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from revenue.domain.value_objects import PromoCodeKey


class Category(Enum):
    """Revenue category inferred from a transaction memo."""

    DONATION = "donation"
    TICKET = "ticket"
    PASS = "pass"
    BLOCK = "block"
    FESTIVAL_PASS = "festival_pass"
    MOVIE = "movie"
    SUBSCRIPTION = "subscription"
    SAVINGS_DEPOSIT = "savings_deposit"
    OTHER = "other"
    UNKNOWN = "unknown"


class AccessType(Enum):
    """What a purchase request is buying."""

    SUBSCRIPTION = "subscription"
    PASS = "pass"
    BLOCK = "block"
    MOVIE = "movie"
    FESTIVAL_PASS = "festival_pass"
    WATCH_PARTY_TICKET = "watch_party_ticket"
    DONATION = "donation"
    SAVINGS_DEPOSIT = "savings_deposit"


class PromoType(Enum):
    ONE_TIME_ACCESS = "one_time_access"
    DISCOUNT = "discount"


class PromoState(Enum):
    UNUSED = "unused"
    ACTIVE = "active"
    EXHAUSTED = "exhausted"


class PayoutStatus(Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(frozen=True)
class RawPayment:
    """A transaction as reported by the payment gateway. Never mutated."""

    id: str
    created_at: datetime
    amount: int
    memo: str | None = None


@dataclass(frozen=True)
class Classification:
    """Result of classifying one memo."""

    category: Category
    entity_key: str | None = None


@dataclass(frozen=True)
class ClassifiedTransaction:
    """A payment amount tagged with its category and entity."""

    category: Category
    entity_key: str | None
    amount: int


@dataclass(frozen=True)
class Movie:
    """Catalog entry for a film."""

    key: str
    title: str
    director: str = ""
    sale_price: int | None = None
    watch_party_price: int | None = None

    @property
    def directors(self) -> tuple[str, ...]:
        return tuple(name.strip() for name in self.director.split(",") if name.strip())

    def is_directed_by(self, name: str) -> bool:
        """Case-insensitive match of a name against whole director credits."""
        target = name.strip().lower()
        if not target:
            return False
        return target in (credit.lower() for credit in self.directors)


@dataclass(frozen=True)
class FestivalBlock:
    """Catalog entry for a festival block."""

    key: str
    title: str


@dataclass(frozen=True)
class PromoCode:
    """Persisted promo code. Only its usage counter is ever mutated here."""

    code: PromoCodeKey
    type: PromoType
    max_uses: int
    used_count: int = 0
    discount_value: int | None = None
    expires_at: datetime | None = None
    item_id: str | None = None

    def __post_init__(self) -> None:
        if self.max_uses < 0 or self.used_count < 0:
            raise ValueError("Promo usage counters cannot be negative")
        if self.type is PromoType.DISCOUNT:
            if self.discount_value is None or not 0 <= self.discount_value <= 100:
                raise ValueError("Discount codes need a percentage between 0 and 100")

    @property
    def state(self) -> PromoState:
        if self.used_count >= self.max_uses:
            return PromoState.EXHAUSTED
        if self.used_count == 0:
            return PromoState.UNUSED
        return PromoState.ACTIVE

    @property
    def remaining_uses(self) -> int:
        return max(0, self.max_uses - self.used_count)

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at is not None and self.expires_at < now


@dataclass(frozen=True)
class PayoutRecord:
    """Historical payout written by the payout approval workflow."""

    recipient: str
    amount: int
    timestamp: datetime
    status: PayoutStatus

    @property
    def is_final(self) -> bool:
        return self.status is PayoutStatus.COMPLETED


@dataclass(frozen=True)
class PriceQuote:
    """Authoritative amount for a requested access type."""

    access_type: AccessType
    amount: int
    title: str | None = None
    director: str | None = None


@dataclass(frozen=True)
class ChargeResult:
    """Outcome of a charge submission."""

    amount: int
    idempotency_key: str
    payment_id: str | None = None
    status: str | None = None
    skipped: bool = False


@dataclass(frozen=True)
class PurchaseResult:
    """Outcome of the whole purchase flow."""

    quote: PriceQuote
    charged_amount: int
    charge: ChargeResult
    memo: str
    promo_code: PromoCodeKey | None = None
    promo_committed: bool = False

    @property
    def is_free(self) -> bool:
        return self.charged_amount == 0
