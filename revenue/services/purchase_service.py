"""Purchase flow: price, promo, charge, usage commit."""

import logging
from dataclasses import dataclass

from revenue.domain import AccessType, Money, PromoCodeKey, PurchaseResult, build_memo
from revenue.services.charge_submitter import ChargeSubmitter, new_idempotency_key
from revenue.services.pricing import PricingResolver
from revenue.services.promo_engine import PromoEngine

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PurchaseRequest:
    source_id: str
    access_type: str | AccessType
    item_id: str | None = None
    amount: int | None = None
    title: str | None = None
    director: str | None = None
    promo_code: str | None = None
    idempotency_key: str | None = None


class PurchaseService:
    """Resolves the price, applies an optional promo code and charges.

    Promo usage is committed only after the charge succeeds, or right away
    for a full waiver which has no charge step. A failed charge leaves the
    code untouched.
    """

    def __init__(
        self,
        pricing: PricingResolver,
        promos: PromoEngine,
        charges: ChargeSubmitter,
    ) -> None:
        self._pricing = pricing
        self._promos = promos
        self._charges = charges

    def purchase(self, request: PurchaseRequest) -> PurchaseResult:
        """Run one purchase attempt.

        Raises:
            UnknownAccessTypeError, AmountTooLowError, ItemNotFoundError:
                For invalid purchase input.
            PromoCodeNotFoundError, QuotaExceededError, PromoCodeExpiredError,
            PromoCodeNotApplicableError: When the promo code cannot be used.
                Retrying without the code charges the full price.
            GatewayError: If the charge fails. Nothing is committed.
        """
        quote = self._pricing.resolve_price(
            request.access_type,
            item_id=request.item_id,
            amount=request.amount,
            title=request.title,
            director=request.director,
        )

        amount = quote.amount
        promo_key: PromoCodeKey | None = None
        if request.promo_code:
            promo = self._promos.check_quota(request.promo_code, item_id=request.item_id)
            promo_key = promo.code
            amount = self._promos.apply_discount(promo, quote.amount)

        memo = build_memo(quote.access_type, quote.title, quote.director)
        idempotency_key = request.idempotency_key or new_idempotency_key()
        logger.info(
            "Purchase %s: %s for %s (list %s)",
            idempotency_key,
            quote.access_type.value,
            Money(amount),
            Money(quote.amount),
        )

        charge = self._charges.submit(
            amount=amount,
            idempotency_key=idempotency_key,
            memo=memo,
            source_id=request.source_id,
        )

        committed = False
        if promo_key is not None:
            committed = self._promos.commit_usage(promo_key)

        return PurchaseResult(
            quote=quote,
            charged_amount=amount,
            charge=charge,
            memo=memo,
            promo_code=promo_key,
            promo_committed=committed,
        )
