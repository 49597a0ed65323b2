"""Idempotent charge submission."""

import logging
import uuid

from revenue.domain import ChargeResult
from revenue.gateways.interfaces import PaymentGateway

logger = logging.getLogger(__name__)


def new_idempotency_key() -> str:
    """One key per logical purchase attempt. Retries reuse it."""
    return str(uuid.uuid4())


class ChargeSubmitter:
    def __init__(self, gateway: PaymentGateway, location_id: str | None = None) -> None:
        self._gateway = gateway
        self._location_id = location_id

    def submit(
        self,
        amount: int,
        idempotency_key: str,
        memo: str,
        source_id: str,
    ) -> ChargeResult:
        """Charge ``amount``. A zero amount is a waiver and never reaches
        the gateway.

        Raises:
            GatewayError: If the gateway rejects or fails the charge.
        """
        if amount == 0:
            logger.info("Charge %s waived, gateway skipped", idempotency_key)
            return ChargeResult(amount=0, idempotency_key=idempotency_key, skipped=True)

        created = self._gateway.create_payment(
            source_id=source_id,
            amount=amount,
            idempotency_key=idempotency_key,
            memo=memo,
            location_id=self._location_id,
        )
        logger.info(
            "Charge %s accepted: payment %s (%s)",
            idempotency_key,
            created.payment_id,
            created.status,
        )
        return ChargeResult(
            amount=amount,
            idempotency_key=idempotency_key,
            payment_id=created.payment_id,
            status=created.status,
        )
