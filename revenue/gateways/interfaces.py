"""Payment gateway interface.

Gateways translate the provider's wire format into domain models and raise
``GatewayError`` for any failed call, including timeouts.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime

from revenue.domain import RawPayment


@dataclass(frozen=True)
class PaymentPage:
    payments: tuple[RawPayment, ...]
    cursor: str | None = None


@dataclass(frozen=True)
class CreatedPayment:
    payment_id: str
    status: str


class PaymentGateway(ABC):
    @abstractmethod
    def list_payments(
        self,
        begin_time: datetime,
        location_id: str | None = None,
        cursor: str | None = None,
    ) -> PaymentPage:
        """Return one page of payments created at or after ``begin_time``."""
        ...

    @abstractmethod
    def create_payment(
        self,
        source_id: str,
        amount: int,
        idempotency_key: str,
        memo: str,
        location_id: str | None = None,
    ) -> CreatedPayment:
        """Charge ``amount`` minor units. Retrying with the same
        ``idempotency_key`` must not charge twice."""
        ...
