"""Square REST implementation of the payment gateway."""

import logging
from datetime import datetime, timezone

import requests
from django.utils.dateparse import parse_datetime

from revenue.conf import RevenueSettings
from revenue.domain import RawPayment
from revenue.domain.errors import GatewayError
from revenue.gateways.interfaces import CreatedPayment, PaymentGateway, PaymentPage

logger = logging.getLogger(__name__)

CURRENCY = "USD"


def _format_time(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def parse_payment(payload: dict) -> RawPayment:
    """Build a RawPayment from a Square payment object."""
    try:
        created_at = parse_datetime(payload.get("created_at") or "")
    except ValueError:
        created_at = None
    if created_at is None:
        raise GatewayError("Payment without a valid created_at")
    try:
        amount = int((payload.get("amount_money") or {}).get("amount", 0))
    except (TypeError, ValueError):
        raise GatewayError("Payment without a valid amount") from None
    return RawPayment(
        id=str(payload.get("id", "")),
        created_at=created_at,
        amount=amount,
        memo=payload.get("note"),
    )


def _error_detail(response: requests.Response, default: str) -> str:
    try:
        errors = response.json().get("errors") or []
    except ValueError:
        return default
    if errors and isinstance(errors[0], dict):
        return errors[0].get("detail") or default
    return default


class SquareGateway(PaymentGateway):
    """Talks to the Square Payments API.

    The base URL comes from the configured environment (production or
    sandbox). Every request carries a bounded timeout.
    """

    def __init__(
        self,
        config: RevenueSettings,
        session: requests.Session | None = None,
    ) -> None:
        self._config = config
        self._session = session or requests.Session()

    @property
    def _headers(self) -> dict[str, str]:
        return {
            "Square-Version": self._config.api_version,
            "Authorization": f"Bearer {self._config.access_token}",
            "Content-Type": "application/json",
        }

    def _request(self, method: str, path: str, **kwargs) -> requests.Response:
        if not self._config.access_token:
            raise GatewayError("Square payments are not configured")
        url = f"{self._config.base_url}{path}"
        try:
            return self._session.request(
                method,
                url,
                headers=self._headers,
                timeout=self._config.timeout_seconds,
                **kwargs,
            )
        except requests.RequestException as exc:
            logger.warning("Square %s %s failed: %s", method, path, exc.__class__.__name__)
            raise GatewayError("Payment gateway request failed") from exc

    def list_payments(
        self,
        begin_time: datetime,
        location_id: str | None = None,
        cursor: str | None = None,
    ) -> PaymentPage:
        params = {"begin_time": _format_time(begin_time)}
        location_id = location_id or self._config.location_id
        if location_id:
            params["location_id"] = location_id
        if cursor:
            params["cursor"] = cursor

        response = self._request("GET", "/v2/payments", params=params)
        if not response.ok:
            raise GatewayError(
                _error_detail(response, "Failed to fetch payments from Square")
            )
        try:
            data = response.json()
        except ValueError as exc:
            raise GatewayError("Malformed payments response") from exc
        payments = []
        for payload in data.get("payments") or []:
            try:
                payments.append(parse_payment(payload))
            except GatewayError as exc:
                logger.warning("Skipping payment %s: %s", payload.get("id"), exc.message)
        return PaymentPage(payments=tuple(payments), cursor=data.get("cursor") or None)

    def create_payment(
        self,
        source_id: str,
        amount: int,
        idempotency_key: str,
        memo: str,
        location_id: str | None = None,
    ) -> CreatedPayment:
        body = {
            "source_id": source_id,
            "idempotency_key": idempotency_key,
            "location_id": location_id or self._config.location_id,
            "amount_money": {"amount": amount, "currency": CURRENCY},
            "note": memo,
        }
        response = self._request("POST", "/v2/payments", json=body)
        if not response.ok:
            raise GatewayError(_error_detail(response, "Payment failed"))
        try:
            payment = response.json().get("payment") or {}
        except ValueError as exc:
            raise GatewayError("Malformed payment response") from exc
        return CreatedPayment(
            payment_id=str(payment.get("id", "")),
            status=str(payment.get("status", "")),
        )
