from revenue.domain.aggregation import RevenueAggregator, RevenueBucket, RevenueSummary, Sector
from revenue.domain.classifier import NoteClassifier, build_memo, classify
from revenue.domain.models import (
    AccessType,
    Category,
    ChargeResult,
    Classification,
    ClassifiedTransaction,
    FestivalBlock,
    Movie,
    PayoutRecord,
    PayoutStatus,
    PriceQuote,
    PromoCode,
    PromoState,
    PromoType,
    PurchaseResult,
    RawPayment,
)
from revenue.domain.splits import Split, SplitCalculator
from revenue.domain.value_objects import Money, PartnerShare, PromoCodeKey

__all__ = [
    "AccessType",
    "Category",
    "ChargeResult",
    "Classification",
    "ClassifiedTransaction",
    "FestivalBlock",
    "Movie",
    "PayoutRecord",
    "PayoutStatus",
    "PriceQuote",
    "PromoCode",
    "PromoState",
    "PromoType",
    "PurchaseResult",
    "RawPayment",
    "NoteClassifier",
    "build_memo",
    "classify",
    "RevenueAggregator",
    "RevenueBucket",
    "RevenueSummary",
    "Sector",
    "Split",
    "SplitCalculator",
    "Money",
    "PartnerShare",
    "PromoCodeKey",
]
