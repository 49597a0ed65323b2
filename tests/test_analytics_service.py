"""Unit tests for AnalyticsService.

Run with: pytest tests/test_analytics_service.py -v
"""

from datetime import timedelta

import pytest

from revenue.domain import Movie, PayoutRecord, PayoutStatus, SplitCalculator
from revenue.services.analytics_service import FEED_INCOMPLETE, GATEWAY_SOURCE, AnalyticsService
from revenue.services.feed_fetcher import PaymentFeedFetcher
from revenue.services.payout_ledger import PayoutLedger
from tests.fakes import (
    FakeGateway,
    InMemoryAudienceStore,
    InMemoryCatalogStore,
    InMemoryPayoutStore,
)

MOVIES = [
    Movie(key="night-drive", title="Night Drive", director="Ana Reyes"),
    Movie(key="low-tide", title="Low Tide", director="Tom Hale, Ana Reyes"),
    Movie(key="other", title="Other Film", director="Sam Lee"),
]


@pytest.fixture
def feed_pages(make_payment):
    return [
        [
            make_payment('Support for film: "Night Drive" by Ana Reyes', 1000),
            make_payment('Watch Party Ticket: "Night Drive"', 500),
            make_payment("Crate TV Film Festival - All-Access Pass", 5000),
        ],
        [
            make_payment('Crate TV Film Festival - Unlock Block: "Shorts A"', 1000),
            make_payment("Coffee", 200),
            make_payment("Deposit to Crate TV Bill Savings Pot", 3000),
            make_payment("Crate TV Premium Subscription", 499),
        ],
    ]


@pytest.fixture
def payouts(epoch) -> InMemoryPayoutStore:
    later = epoch + timedelta(days=10)
    return InMemoryPayoutStore(
        [
            PayoutRecord("Ana Reyes", 300, later, PayoutStatus.COMPLETED),
            PayoutRecord("Ana Reyes", 5000, later, PayoutStatus.FAILED),
            PayoutRecord("Playhouse West", 1000, later, PayoutStatus.COMPLETED),
            PayoutRecord("Playhouse West", 9000, epoch - timedelta(days=1), PayoutStatus.COMPLETED),
        ]
    )


def build_service(gateway, payouts, epoch) -> AnalyticsService:
    return AnalyticsService(
        feed=PaymentFeedFetcher(gateway),
        catalog=InMemoryCatalogStore(movies=MOVIES),
        audience=InMemoryAudienceStore(views={"night-drive": 42, "low-tide": 7}, users=12),
        ledger=PayoutLedger(payouts),
        splits=SplitCalculator(),
        epoch=epoch,
    )


class TestPlatformReport:
    """Tests for AnalyticsService.platform_report."""

    def test_totals(self, feed_pages, payouts, epoch):
        report = build_service(FakeGateway(pages=feed_pages), payouts, epoch).platform_report()

        assert report.total_revenue == 8199
        assert report.total_donations == 1000
        assert report.total_tickets == 500
        assert report.total_sales == 499
        assert report.total_festival_revenue == 6500
        assert report.other_revenue == 200
        assert report.savings_pot_total == 3000
        assert report.total_paid_out == 1300
        assert report.total_users == 12
        assert report.feed_complete
        assert report.errors == ()

    def test_platform_revenue_is_sum_of_platform_cuts(self, feed_pages, payouts, epoch):
        report = build_service(FakeGateway(pages=feed_pages), payouts, epoch).platform_report()
        # 300 donation cut + 1950 sector cuts + 499 sales + 200 other
        assert report.platform_revenue == 2949

    def test_film_rows(self, feed_pages, payouts, epoch):
        report = build_service(FakeGateway(pages=feed_pages), payouts, epoch).platform_report()
        films = {f.key: f for f in report.films}

        night_drive = films["night-drive"]
        assert (night_drive.gross_donations, night_drive.gross_tickets) == (1000, 500)
        assert (night_drive.net_earnings, night_drive.platform_cut) == (1050, 450)
        assert night_drive.views == 42
        assert films["other"].net_earnings == 0

    def test_sectors_and_blocks(self, feed_pages, payouts, epoch):
        report = build_service(FakeGateway(pages=feed_pages), payouts, epoch).platform_report()
        sectors = {s.sector: s for s in report.sectors}

        assert sectors["passes"].gross == 5000
        assert sectors["blocks"].units == 1
        assert sectors["parties"].net_earnings == 350
        assert [(b.title, b.revenue) for b in report.blocks] == [("Shorts A", 1000)]

    def test_unreachable_gateway_still_reports_store_data(self, payouts, epoch):
        gateway = FakeGateway(failing_pages={0})
        report = build_service(gateway, payouts, epoch).platform_report()

        assert report.total_revenue == 0
        assert not report.feed_complete
        assert [(e.source, e.code) for e in report.errors] == [
            (GATEWAY_SOURCE, "GATEWAY_UNREACHABLE")
        ]
        assert report.total_users == 12
        assert report.view_counts == {"night-drive": 42, "low-tide": 7}
        assert len(report.films) == 3

    def test_truncated_feed_is_flagged(self, feed_pages, payouts, epoch):
        gateway = FakeGateway(pages=feed_pages, failing_pages={1})
        report = build_service(gateway, payouts, epoch).platform_report()

        assert report.total_revenue == 6500
        assert not report.feed_complete
        assert [e.code for e in report.errors] == [FEED_INCOMPLETE]


class TestFilmmakerReport:
    """Tests for AnalyticsService.filmmaker_report."""

    def test_balance_for_director(self, feed_pages, payouts, epoch):
        report = build_service(FakeGateway(pages=feed_pages), payouts, epoch).filmmaker_report(
            " Ana Reyes "
        )

        assert report.director_name == "Ana Reyes"
        assert [f.key for f in report.films] == ["night-drive", "low-tide"]
        assert report.gross == 1500
        assert report.total_earnings == 1050
        assert report.total_paid_out == 300
        assert report.balance == 750

    def test_unknown_director_has_no_films(self, feed_pages, payouts, epoch):
        report = build_service(FakeGateway(pages=feed_pages), payouts, epoch).filmmaker_report(
            "Nobody"
        )
        assert report.films == ()
        assert report.balance == 0

    @pytest.mark.parametrize("name", ["Ana", "a", "Reyes"])
    def test_name_fragment_matches_no_films(self, feed_pages, payouts, epoch, name):
        report = build_service(FakeGateway(pages=feed_pages), payouts, epoch).filmmaker_report(
            name
        )
        assert report.films == ()
        assert (report.gross, report.total_earnings) == (0, 0)


class TestFestivalReport:
    """Tests for AnalyticsService.festival_report."""

    def test_default_recipient(self, feed_pages, payouts, epoch):
        report = build_service(FakeGateway(pages=feed_pages), payouts, epoch).festival_report()

        assert report.recipient == "Playhouse West"
        assert report.gross == 6500
        assert report.total_earnings == 4550
        assert report.total_paid_out == 1000
        assert report.balance == 3550

    def test_overpaid_recipient_balance_is_zero(self, feed_pages, epoch):
        store = InMemoryPayoutStore(
            [PayoutRecord("Playhouse West", 99999, epoch, PayoutStatus.COMPLETED)]
        )
        report = build_service(FakeGateway(pages=feed_pages), store, epoch).festival_report()
        assert report.balance == 0
