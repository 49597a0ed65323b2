"""Revenue analytics: platform, filmmaker and festival reports.

Services:
- Depend only on interfaces (stores, gateway)
- Tolerate a failing payment feed and report it per source
- Let document store failures propagate
"""

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from datetime import datetime

from revenue.domain import Category, Movie, NoteClassifier, RevenueAggregator, RevenueSummary, Sector
from revenue.domain.aggregation import SECTOR_LABELS
from revenue.domain.errors import GatewayUnreachableError
from revenue.domain.reports import (
    BlockSales,
    FestivalReport,
    FilmEarnings,
    FilmmakerReport,
    PlatformReport,
    SectorEarnings,
    SourceError,
)
from revenue.domain.splits import SplitCalculator
from revenue.services.feed_fetcher import FeedResult, PaymentFeedFetcher
from revenue.services.payout_ledger import PayoutLedger
from revenue.stores.interfaces import AudienceStore, CatalogStore

logger = logging.getLogger(__name__)

GATEWAY_SOURCE = "gateway"
FEED_INCOMPLETE = "FEED_INCOMPLETE"

EARNING_CATEGORIES = (Category.DONATION, Category.TICKET)


class AnalyticsService:
    """Joins the payment feed with catalog and payout data.

    The feed is fetched on a worker thread while the store reads run on the
    calling thread; aggregation starts once both are done.
    """

    def __init__(
        self,
        feed: PaymentFeedFetcher,
        catalog: CatalogStore,
        audience: AudienceStore,
        ledger: PayoutLedger,
        splits: SplitCalculator,
        epoch: datetime,
        location_id: str | None = None,
        festival_recipient: str = "Playhouse West",
        classifier: NoteClassifier | None = None,
        aggregator: RevenueAggregator | None = None,
    ) -> None:
        self._feed = feed
        self._catalog = catalog
        self._audience = audience
        self._ledger = ledger
        self._splits = splits
        self._epoch = epoch
        self._location_id = location_id
        self._festival_recipient = festival_recipient
        self._classifier = classifier or NoteClassifier()
        self._aggregator = aggregator or RevenueAggregator()

    def platform_report(self) -> PlatformReport:
        with ThreadPoolExecutor(max_workers=1) as pool:
            pending = self._start_feed(pool)
            movies = self._catalog.list_movies()
            view_counts = self._audience.view_counts()
            total_users = self._audience.count_users()
            total_paid_out = self._ledger.total_paid_out(since=self._epoch)
            summary, complete, errors = self._finish_feed(pending)

        sectors = self._sector_rows(summary)
        donations = self._splits.split(summary.donations_total)
        platform_revenue = (
            donations.platform_cut
            + sum(row.platform_cut for row in sectors)
            + summary.direct_sales_total
            + summary.festival_pass_total
            + summary.other_total
        )

        return PlatformReport(
            total_revenue=summary.grand_total,
            platform_revenue=platform_revenue,
            total_donations=summary.donations_total,
            total_tickets=summary.tickets_total,
            total_sales=summary.direct_sales_total,
            total_festival_revenue=summary.festival_sector_total,
            festival_pass_revenue=summary.festival_pass_total,
            other_revenue=summary.other_total,
            savings_pot_total=summary.savings_deposits_total,
            total_paid_out=total_paid_out,
            total_users=total_users,
            feed_complete=complete,
            films=tuple(self._film_row(m, summary, view_counts) for m in movies),
            blocks=tuple(
                BlockSales(title=b.key, units=b.units, revenue=b.gross)
                for b in sorted(summary.blocks.values(), key=lambda b: b.key)
            ),
            sectors=sectors,
            view_counts=view_counts,
            errors=errors,
        )

    def filmmaker_report(self, director_name: str) -> FilmmakerReport:
        name = director_name.strip()
        with ThreadPoolExecutor(max_workers=1) as pool:
            pending = self._start_feed(pool)
            movies = [m for m in self._catalog.list_movies() if m.is_directed_by(name)]
            view_counts = self._audience.view_counts()
            summary, complete, errors = self._finish_feed(pending)

        films = sorted(
            (self._film_row(m, summary, view_counts) for m in movies),
            key=lambda f: f.views,
            reverse=True,
        )
        earnings = sum(f.net_earnings for f in films)
        statement = self._ledger.statement(earnings, recipient=name, since=self._epoch)

        return FilmmakerReport(
            director_name=name,
            gross=sum(f.gross_donations + f.gross_tickets for f in films),
            total_earnings=earnings,
            total_paid_out=statement.total_paid_out,
            balance=statement.balance,
            feed_complete=complete,
            films=tuple(films),
            errors=errors,
        )

    def festival_report(self, recipient: str | None = None) -> FestivalReport:
        recipient = (recipient or self._festival_recipient).strip()
        with ThreadPoolExecutor(max_workers=1) as pool:
            pending = self._start_feed(pool)
            summary, complete, errors = self._finish_feed(pending)

        sectors = self._sector_rows(summary)
        earnings = sum(row.net_earnings for row in sectors)
        statement = self._ledger.statement(earnings, recipient=recipient, since=self._epoch)

        return FestivalReport(
            recipient=recipient,
            gross=summary.festival_sector_total,
            total_earnings=earnings,
            total_paid_out=statement.total_paid_out,
            balance=statement.balance,
            feed_complete=complete,
            sectors=sectors,
            errors=errors,
        )

    def summarize(self, feed: FeedResult) -> RevenueSummary:
        return self._aggregator.aggregate(
            self._classifier.classify_payment(p) for p in feed.payments
        )

    def _start_feed(self, pool: ThreadPoolExecutor) -> Future[FeedResult]:
        return pool.submit(self._feed.fetch_all, self._epoch, self._location_id)

    def _finish_feed(
        self, pending: Future[FeedResult]
    ) -> tuple[RevenueSummary, bool, tuple[SourceError, ...]]:
        try:
            feed = pending.result()
        except GatewayUnreachableError as exc:
            logger.error("Payment feed unavailable: %s", exc.message)
            error = SourceError(GATEWAY_SOURCE, exc.code.value, exc.message)
            return self.summarize(FeedResult(payments=())), False, (error,)

        errors: tuple[SourceError, ...] = ()
        if not feed.complete:
            errors = (
                SourceError(
                    GATEWAY_SOURCE,
                    FEED_INCOMPLETE,
                    "Payment feed was truncated; totals may be incomplete",
                ),
            )
        return self.summarize(feed), feed.complete, errors

    def _film_row(
        self,
        movie: Movie,
        summary: RevenueSummary,
        view_counts: dict[str, int],
    ) -> FilmEarnings:
        bucket = summary.films.get(movie.title)
        if bucket is None:
            return FilmEarnings(title=movie.title, key=movie.key, views=view_counts.get(movie.key, 0))
        split = self._splits.split(bucket.gross_for(*EARNING_CATEGORIES))
        return FilmEarnings(
            title=movie.title,
            key=movie.key,
            views=view_counts.get(movie.key, 0),
            gross_donations=bucket.gross_for(Category.DONATION),
            gross_tickets=bucket.gross_for(Category.TICKET),
            gross_sales=bucket.gross_for(Category.MOVIE),
            net_earnings=split.net,
            platform_cut=split.platform_cut,
        )

    def _sector_rows(self, summary: RevenueSummary) -> tuple[SectorEarnings, ...]:
        rows = []
        for sector in Sector:
            bucket = summary.sector(sector)
            split = self._splits.split_sector(sector, bucket.gross)
            rows.append(
                SectorEarnings(
                    sector=sector.value,
                    label=SECTOR_LABELS[sector],
                    units=bucket.units,
                    gross=bucket.gross,
                    net_earnings=split.net,
                    platform_cut=split.platform_cut,
                )
            )
        return tuple(rows)
