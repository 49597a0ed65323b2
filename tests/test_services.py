"""Unit tests for the pricing, promo and charge services.

These test error handling and domain error mapping against in-memory stores.
Run with: pytest tests/test_services.py -v
"""

from datetime import datetime, timedelta, timezone

import pytest

from revenue.conf import DEFAULT_PRICE_TABLE
from revenue.domain import AccessType, FestivalBlock, Movie, PromoCode, PromoCodeKey, PromoType
from revenue.domain.errors import (
    AmountTooLowError,
    ErrorCode,
    GatewayError,
    ItemNotFoundError,
    PromoCodeExpiredError,
    PromoCodeNotApplicableError,
    PromoCodeNotFoundError,
    QuotaExceededError,
    UnknownAccessTypeError,
)
from revenue.services.charge_submitter import ChargeSubmitter
from revenue.services.pricing import PricingResolver
from revenue.services.promo_engine import PromoEngine
from revenue.services.purchase_service import PurchaseRequest, PurchaseService
from tests.fakes import FakeGateway, InMemoryCatalogStore, InMemoryPromoCodeStore

NOW = datetime(2025, 7, 1, 12, 0, tzinfo=timezone.utc)

NIGHT_DRIVE = Movie(
    key="night-drive",
    title="Night Drive",
    director="Ana Reyes",
    sale_price=799,
    watch_party_price=500,
)


def promo(code="FEST25", **kwargs) -> PromoCode:
    defaults = {"type": PromoType.DISCOUNT, "discount_value": 25, "max_uses": 5}
    defaults.update(kwargs)
    return PromoCode(code=PromoCodeKey(code), **defaults)


@pytest.fixture
def stocked_catalog() -> InMemoryCatalogStore:
    return InMemoryCatalogStore(
        movies=[NIGHT_DRIVE, Movie(key="plain", title="Plain Film")],
        blocks=[FestivalBlock(key="block-a", title="Shorts A")],
    )


@pytest.fixture
def resolver(stocked_catalog) -> PricingResolver:
    return PricingResolver(stocked_catalog, DEFAULT_PRICE_TABLE, min_open_amount=100)


@pytest.fixture
def engine(promo_store) -> PromoEngine:
    return PromoEngine(promo_store, now=lambda: NOW)


class TestPricingResolver:
    """Tests for PricingResolver.resolve_price."""

    def test_static_price_from_table(self, resolver):
        quote = resolver.resolve_price("pass")
        assert (quote.access_type, quote.amount) == (AccessType.PASS, 5000)

    def test_unknown_access_type(self, resolver):
        with pytest.raises(UnknownAccessTypeError):
            resolver.resolve_price("lifetime")

    def test_type_without_price_is_unknown(self, stocked_catalog):
        resolver = PricingResolver(stocked_catalog, {AccessType.PASS: 5000})
        with pytest.raises(UnknownAccessTypeError):
            resolver.resolve_price("subscription")

    def test_donation_uses_client_amount(self, resolver):
        quote = resolver.resolve_price(
            "donation", item_id="night-drive", amount=2500, title="ignored"
        )
        assert quote.amount == 2500
        assert (quote.title, quote.director) == ("Night Drive", "Ana Reyes")

    def test_donation_for_unlisted_film_keeps_client_title(self, resolver):
        quote = resolver.resolve_price(
            "donation", item_id="gone", amount=300, title="Old Film", director="Sam Lee"
        )
        assert (quote.title, quote.director) == ("Old Film", "Sam Lee")

    @pytest.mark.parametrize("amount", [None, 0, 99])
    def test_open_amount_below_minimum(self, resolver, amount):
        with pytest.raises(AmountTooLowError) as exc_info:
            resolver.resolve_price("savings_deposit", amount=amount)
        assert exc_info.value.code is ErrorCode.AMOUNT_TOO_LOW

    def test_client_amount_ignored_for_fixed_price(self, resolver):
        assert resolver.resolve_price("subscription", amount=1).amount == 499

    def test_watch_party_ticket_priced_from_catalog(self, resolver):
        quote = resolver.resolve_price("watch_party_ticket", item_id="night-drive")
        assert quote.amount == 500
        assert quote.title == "Night Drive"

    @pytest.mark.parametrize("item_id", [None, "plain", "missing"])
    def test_watch_party_ticket_needs_priced_film(self, resolver, item_id):
        with pytest.raises(ItemNotFoundError):
            resolver.resolve_price("watch_party_ticket", item_id=item_id)

    def test_movie_sale_price_from_catalog(self, resolver):
        assert resolver.resolve_price("movie", item_id="night-drive").amount == 799

    def test_movie_without_sale_price_falls_back_to_table(self, resolver):
        assert resolver.resolve_price("movie", item_id="plain").amount == 500

    def test_missing_movie(self, resolver):
        with pytest.raises(ItemNotFoundError):
            resolver.resolve_price("movie", item_id="missing")

    def test_block_title_from_catalog(self, resolver):
        quote = resolver.resolve_price("block", item_id="block-a")
        assert (quote.amount, quote.title) == (1000, "Shorts A")


class TestPromoEngine:
    """Tests for PromoEngine quota checks and discounts."""

    def test_check_quota_is_case_insensitive(self, engine, promo_store):
        promo_store.add(promo())
        assert engine.check_quota(" fest25 ").code == PromoCodeKey("FEST25")

    @pytest.mark.parametrize("code", ["NOPE", "   "])
    def test_unknown_code(self, engine, code):
        with pytest.raises(PromoCodeNotFoundError):
            engine.check_quota(code)

    def test_exhausted_code(self, engine, promo_store):
        promo_store.add(promo(max_uses=1, used_count=1))
        with pytest.raises(QuotaExceededError):
            engine.check_quota("FEST25")

    def test_expired_code(self, engine, promo_store):
        promo_store.add(promo(expires_at=NOW - timedelta(minutes=1)))
        with pytest.raises(PromoCodeExpiredError):
            engine.check_quota("FEST25")

    def test_item_restricted_code(self, engine, promo_store):
        promo_store.add(promo(item_id="night-drive"))
        with pytest.raises(PromoCodeNotApplicableError):
            engine.check_quota("FEST25", item_id="other")
        assert engine.check_quota("FEST25", item_id="night-drive")

    def test_discount_is_floored(self, engine):
        assert engine.apply_discount(promo(discount_value=25), 999) == 749

    def test_one_time_access_is_free(self, engine):
        free = promo(type=PromoType.ONE_TIME_ACCESS, discount_value=None)
        assert engine.apply_discount(free, 5000) == 0

    def test_full_discount_is_free(self, engine):
        assert engine.apply_discount(promo(discount_value=100), 5000) == 0

    def test_quote(self, engine, promo_store):
        promo_store.add(promo())
        quote = engine.quote("fest25", 1000)
        assert (quote.original_amount, quote.final_amount, quote.is_free) == (1000, 750, False)

    def test_commit_usage_stops_at_max_uses(self, engine, promo_store):
        promo_store.add(promo(max_uses=1))
        assert engine.commit_usage("FEST25") is True
        assert engine.commit_usage("FEST25") is False
        assert promo_store.get(PromoCodeKey("FEST25")).used_count == 1


class TestChargeSubmitter:
    """Tests for ChargeSubmitter."""

    def test_submits_charge(self, gateway):
        result = ChargeSubmitter(gateway).submit(499, "key-1", "memo", "cnon:card")
        assert result.payment_id == "pay_1"
        assert not result.skipped
        assert gateway.charged_amounts == [499]

    def test_zero_amount_skips_gateway(self, gateway):
        result = ChargeSubmitter(gateway).submit(0, "key-1", "memo", "cnon:card")
        assert result.skipped
        assert result.payment_id is None
        assert gateway.calls_per_key == {}

    def test_retry_with_same_key_charges_once(self, gateway):
        submitter = ChargeSubmitter(gateway)
        first = submitter.submit(499, "key-1", "memo", "cnon:card")
        second = submitter.submit(499, "key-1", "memo", "cnon:card")
        assert first.payment_id == second.payment_id
        assert gateway.calls_per_key["key-1"] == 2
        assert gateway.charged_amounts == [499]

    def test_gateway_failure_propagates(self):
        gateway = FakeGateway(charge_error="Card declined")
        with pytest.raises(GatewayError) as exc_info:
            ChargeSubmitter(gateway).submit(499, "key-1", "memo", "cnon:card")
        assert exc_info.value.message == "Card declined"


class TestPurchaseService:
    """Tests for the purchase flow."""

    @pytest.fixture
    def service(self, resolver, engine, gateway) -> PurchaseService:
        return PurchaseService(resolver, engine, ChargeSubmitter(gateway))

    def test_full_price_purchase(self, service, gateway):
        result = service.purchase(
            PurchaseRequest(source_id="cnon:card", access_type="movie", item_id="night-drive")
        )
        assert result.charged_amount == 799
        assert result.memo == 'Crate TV - Purchase Film: "Night Drive"'
        assert gateway.memos == [result.memo]
        assert result.promo_code is None

    def test_discount_commits_usage_after_charge(self, service, gateway, promo_store):
        promo_store.add(promo())
        result = service.purchase(
            PurchaseRequest(source_id="cnon:card", access_type="pass", promo_code="fest25")
        )
        assert result.charged_amount == 3750
        assert gateway.charged_amounts == [3750]
        assert result.promo_committed
        assert promo_store.get(PromoCodeKey("FEST25")).used_count == 1

    def test_one_time_access_skips_gateway_and_commits(self, service, gateway, promo_store):
        promo_store.add(promo(code="FREEPASS", type=PromoType.ONE_TIME_ACCESS, discount_value=None))
        result = service.purchase(
            PurchaseRequest(source_id="cnon:card", access_type="pass", promo_code="FREEPASS")
        )
        assert result.is_free
        assert result.charge.skipped
        assert gateway.calls_per_key == {}
        assert promo_store.get(PromoCodeKey("FREEPASS")).used_count == 1

    def test_exhausted_code_rejected_before_charge(self, service, gateway, promo_store):
        """Retrying without the code is the caller's choice; nothing is charged here."""
        promo_store.add(promo(max_uses=1, used_count=1))
        request = PurchaseRequest(source_id="cnon:card", access_type="pass", promo_code="FEST25")
        with pytest.raises(QuotaExceededError):
            service.purchase(request)
        assert gateway.calls_per_key == {}

        retry = PurchaseRequest(source_id="cnon:card", access_type="pass")
        assert service.purchase(retry).charged_amount == 5000

    def test_failed_charge_does_not_commit_usage(self, resolver, engine, promo_store):
        promo_store.add(promo())
        service = PurchaseService(
            resolver, engine, ChargeSubmitter(FakeGateway(charge_error="Card declined"))
        )
        with pytest.raises(GatewayError):
            service.purchase(
                PurchaseRequest(source_id="cnon:card", access_type="pass", promo_code="FEST25")
            )
        assert promo_store.get(PromoCodeKey("FEST25")).used_count == 0

    def test_idempotency_key_is_reused(self, service, gateway):
        request = PurchaseRequest(
            source_id="cnon:card", access_type="subscription", idempotency_key="attempt-1"
        )
        first = service.purchase(request)
        second = service.purchase(request)
        assert first.charge.payment_id == second.charge.payment_id
        assert gateway.charged_amounts == [499]

    def test_donation_memo_names_film_and_director(self, service, gateway):
        result = service.purchase(
            PurchaseRequest(
                source_id="cnon:card",
                access_type="donation",
                item_id="night-drive",
                amount=1000,
            )
        )
        assert result.memo == 'Support for film: "Night Drive" by Ana Reyes'
