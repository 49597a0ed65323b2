"""Promo code quota checks, discounts and usage accounting.

Usage is committed with a conditional increment in the store, so the counter
never exceeds ``max_uses``. The check and the increment are separate calls:
two purchasers racing for the last use can both pass the check and both be
charged, and only one of them will be counted. No in-process lock is taken,
since it could not span several server instances.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from django.utils import timezone

from revenue.domain import PromoCode, PromoCodeKey, PromoState, PromoType
from revenue.domain.errors import (
    PromoCodeExpiredError,
    PromoCodeNotApplicableError,
    PromoCodeNotFoundError,
    QuotaExceededError,
)
from revenue.stores.interfaces import PromoCodeStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PromoQuote:
    promo: PromoCode
    original_amount: int
    final_amount: int

    @property
    def is_free(self) -> bool:
        return self.final_amount == 0


class PromoEngine:
    def __init__(
        self,
        store: PromoCodeStore,
        now: Callable[[], datetime] = timezone.now,
    ) -> None:
        self._store = store
        self._now = now

    def check_quota(self, code: str | PromoCodeKey, item_id: str | None = None) -> PromoCode:
        """Return the promo code if it can still be used.

        Raises:
            PromoCodeNotFoundError: If the code does not exist.
            QuotaExceededError: If every use has been consumed.
            PromoCodeExpiredError: If the code is past its expiry.
            PromoCodeNotApplicableError: If the code is tied to another item.
        """
        key = code if isinstance(code, PromoCodeKey) else _parse_key(code)
        promo = self._store.get(key)
        if promo is None:
            raise PromoCodeNotFoundError()
        if promo.state is PromoState.EXHAUSTED:
            raise QuotaExceededError()
        if promo.is_expired(self._now()):
            raise PromoCodeExpiredError()
        if promo.item_id and promo.item_id != item_id:
            raise PromoCodeNotApplicableError()
        return promo

    def apply_discount(self, promo: PromoCode, amount: int) -> int:
        if promo.type is PromoType.ONE_TIME_ACCESS:
            return 0
        # floor to the minor unit
        return amount * (100 - (promo.discount_value or 0)) // 100

    def quote(
        self,
        code: str | PromoCodeKey,
        amount: int,
        item_id: str | None = None,
    ) -> PromoQuote:
        promo = self.check_quota(code, item_id=item_id)
        return PromoQuote(
            promo=promo,
            original_amount=amount,
            final_amount=self.apply_discount(promo, amount),
        )

    def commit_usage(self, code: str | PromoCodeKey) -> bool:
        """Record one use. Call only after a successful charge or a waiver."""
        key = code if isinstance(code, PromoCodeKey) else _parse_key(code)
        committed = self._store.increment_usage(key)
        if not committed:
            logger.warning("Promo code %s was already exhausted at commit", key)
        return committed


def _parse_key(code: str) -> PromoCodeKey:
    try:
        return PromoCodeKey.from_string(code)
    except ValueError:
        raise PromoCodeNotFoundError() from None
