"""Wiring of services to the Django stores and the configured gateway."""

from revenue.conf import get_revenue_settings
from revenue.domain.splits import SplitCalculator
from revenue.gateways.interfaces import PaymentGateway
from revenue.gateways.square import SquareGateway
from revenue.services.analytics_service import AnalyticsService
from revenue.services.charge_submitter import ChargeSubmitter
from revenue.services.feed_fetcher import PaymentFeedFetcher
from revenue.services.payout_ledger import PayoutLedger
from revenue.services.pricing import PricingResolver
from revenue.services.promo_engine import PromoEngine
from revenue.services.purchase_service import PurchaseService
from revenue.stores.django_store import (
    DjangoAudienceStore,
    DjangoCatalogStore,
    DjangoPayoutStore,
    DjangoPromoCodeStore,
)


def build_gateway() -> PaymentGateway:
    return SquareGateway(get_revenue_settings())


def build_analytics_service(gateway: PaymentGateway | None = None) -> AnalyticsService:
    config = get_revenue_settings()
    return AnalyticsService(
        feed=PaymentFeedFetcher(gateway or build_gateway()),
        catalog=DjangoCatalogStore(),
        audience=DjangoAudienceStore(),
        ledger=PayoutLedger(DjangoPayoutStore()),
        splits=SplitCalculator(
            partner_share=config.partner_share,
            sector_shares=config.sector_shares,
        ),
        epoch=config.ledger_epoch,
        location_id=config.location_id,
        festival_recipient=config.festival_recipient,
    )


def build_promo_engine() -> PromoEngine:
    return PromoEngine(DjangoPromoCodeStore())


def build_purchase_service(gateway: PaymentGateway | None = None) -> PurchaseService:
    config = get_revenue_settings()
    return PurchaseService(
        pricing=PricingResolver(
            DjangoCatalogStore(),
            price_table=config.price_table,
            min_open_amount=config.min_open_amount,
        ),
        promos=build_promo_engine(),
        charges=ChargeSubmitter(gateway or build_gateway(), location_id=config.location_id),
    )
