"""Paginated retrieval of the gateway's payment feed."""

import logging
from dataclasses import dataclass
from datetime import datetime

from revenue.domain import RawPayment
from revenue.domain.errors import GatewayError, GatewayUnreachableError
from revenue.gateways.interfaces import PaymentGateway

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FeedResult:
    """Payments retrieved from the feed.

    ``complete`` is False when a page after the first failed; the payments
    from earlier pages are still returned.
    """

    payments: tuple[RawPayment, ...]
    complete: bool = True


class PaymentFeedFetcher:
    """Follows the gateway's continuation cursor until it runs out."""

    def __init__(self, gateway: PaymentGateway, max_pages: int = 1000) -> None:
        self._gateway = gateway
        self._max_pages = max_pages

    def fetch_all(self, since: datetime, location_id: str | None = None) -> FeedResult:
        """Return every payment created at or after ``since``.

        Raises:
            GatewayUnreachableError: If the first page cannot be retrieved.
        """
        try:
            page = self._gateway.list_payments(since, location_id=location_id)
        except GatewayError as exc:
            raise GatewayUnreachableError(exc.message) from exc

        payments: list[RawPayment] = list(page.payments)
        complete = True
        pages = 1
        while page.cursor:
            if pages >= self._max_pages:
                logger.warning("Payment feed stopped after %d pages", pages)
                complete = False
                break
            try:
                page = self._gateway.list_payments(
                    since, location_id=location_id, cursor=page.cursor
                )
            except GatewayError as exc:
                logger.warning(
                    "Payment feed truncated after %d pages (%d payments): %s",
                    pages,
                    len(payments),
                    exc.message,
                )
                complete = False
                break
            payments.extend(page.payments)
            pages += 1

        return FeedResult(
            payments=tuple(p for p in payments if p.created_at >= since),
            complete=complete,
        )
