"""App settings, read from ``settings.REVENUE``."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from django.conf import settings
from django.utils.dateparse import parse_datetime

from revenue.domain.aggregation import Sector
from revenue.domain.models import AccessType
from revenue.domain.value_objects import PartnerShare

PRODUCTION = "production"
SANDBOX = "sandbox"

SQUARE_BASE_URLS = {
    PRODUCTION: "https://connect.squareup.com",
    SANDBOX: "https://connect.squareupsandbox.com",
}

DEFAULT_PRICE_TABLE = {
    AccessType.SUBSCRIPTION: 499,
    AccessType.PASS: 5000,
    AccessType.BLOCK: 1000,
    AccessType.MOVIE: 500,
    AccessType.FESTIVAL_PASS: 1500,
}

DEFAULT_LEDGER_EPOCH = "2025-05-24T00:00:00Z"


@dataclass(frozen=True)
class RevenueSettings:
    environment: str = SANDBOX
    access_token: str = ""
    location_id: str | None = None
    api_version: str = "2024-05-15"
    timeout_seconds: float = 10.0
    ledger_epoch: datetime = field(
        default_factory=lambda: parse_datetime(DEFAULT_LEDGER_EPOCH)
    )
    partner_share: PartnerShare = PartnerShare(Decimal("0.70"))
    sector_shares: dict[Sector, PartnerShare] = field(default_factory=dict)
    price_table: dict[AccessType, int] = field(
        default_factory=lambda: dict(DEFAULT_PRICE_TABLE)
    )
    min_open_amount: int = 100
    festival_recipient: str = "Playhouse West"

    @property
    def base_url(self) -> str:
        return SQUARE_BASE_URLS.get(self.environment, SQUARE_BASE_URLS[SANDBOX])


def _parse_epoch(value: str | datetime) -> datetime:
    if isinstance(value, datetime):
        return value
    parsed = parse_datetime(value)
    if parsed is None:
        raise ValueError(f"Invalid LEDGER_EPOCH: {value!r}")
    return parsed


def get_revenue_settings() -> RevenueSettings:
    """Build ``RevenueSettings`` from the Django settings module."""
    raw = getattr(settings, "REVENUE", {})
    price_table = dict(DEFAULT_PRICE_TABLE)
    for name, amount in raw.get("PRICE_TABLE", {}).items():
        price_table[AccessType(name)] = int(amount)
    return RevenueSettings(
        environment=raw.get("ENVIRONMENT", SANDBOX),
        access_token=raw.get("SQUARE_ACCESS_TOKEN", ""),
        location_id=raw.get("SQUARE_LOCATION_ID") or None,
        api_version=raw.get("SQUARE_API_VERSION", "2024-05-15"),
        timeout_seconds=float(raw.get("GATEWAY_TIMEOUT_SECONDS", 10.0)),
        ledger_epoch=_parse_epoch(raw.get("LEDGER_EPOCH", DEFAULT_LEDGER_EPOCH)),
        partner_share=PartnerShare.from_value(raw.get("PARTNER_SHARE", "0.70")),
        sector_shares={
            Sector(name): PartnerShare.from_value(share)
            for name, share in raw.get("SECTOR_PARTNER_SHARES", {}).items()
        },
        price_table=price_table,
        min_open_amount=int(raw.get("MIN_OPEN_AMOUNT", 100)),
        festival_recipient=raw.get("FESTIVAL_RECIPIENT", "Playhouse West"),
    )
