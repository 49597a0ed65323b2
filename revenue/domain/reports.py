"""Analytics result types.

Each report is an explicit record with named sections. ``errors`` lists the
data sources that failed while the rest of the report was still computed.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class SourceError:
    """Failure descriptor for one data source of a report."""

    source: str
    code: str
    message: str


@dataclass(frozen=True)
class FilmEarnings:
    title: str
    key: str | None = None
    views: int = 0
    gross_donations: int = 0
    gross_tickets: int = 0
    gross_sales: int = 0
    net_earnings: int = 0
    platform_cut: int = 0


@dataclass(frozen=True)
class BlockSales:
    title: str
    units: int
    revenue: int


@dataclass(frozen=True)
class SectorEarnings:
    sector: str
    label: str
    units: int
    gross: int
    net_earnings: int
    platform_cut: int


@dataclass(frozen=True)
class PlatformReport:
    """Platform-wide revenue, splits and payouts."""

    total_revenue: int
    platform_revenue: int
    total_donations: int
    total_tickets: int
    total_sales: int
    total_festival_revenue: int
    festival_pass_revenue: int
    other_revenue: int
    savings_pot_total: int
    total_paid_out: int
    total_users: int
    feed_complete: bool
    films: tuple[FilmEarnings, ...] = ()
    blocks: tuple[BlockSales, ...] = ()
    sectors: tuple[SectorEarnings, ...] = ()
    view_counts: dict[str, int] = field(default_factory=dict)
    errors: tuple[SourceError, ...] = ()


@dataclass(frozen=True)
class FilmmakerReport:
    """Earnings and balance for one director."""

    director_name: str
    gross: int
    total_earnings: int
    total_paid_out: int
    balance: int
    feed_complete: bool
    films: tuple[FilmEarnings, ...] = ()
    errors: tuple[SourceError, ...] = ()


@dataclass(frozen=True)
class FestivalReport:
    """Sector earnings and balance for the festival partner."""

    recipient: str
    gross: int
    total_earnings: int
    total_paid_out: int
    balance: int
    feed_complete: bool
    sectors: tuple[SectorEarnings, ...] = ()
    errors: tuple[SourceError, ...] = ()
