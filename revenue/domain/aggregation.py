"""Folding classified transactions into per-entity and per-category sums.

Only integer addition is involved, so the summary is independent of the
order in which the gateway returned the payments.
"""

from collections import Counter, defaultdict
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

from revenue.domain.models import Category, ClassifiedTransaction


class Sector(Enum):
    """Festival-wide revenue categories not tied to one film."""

    PASSES = "passes"
    BLOCKS = "blocks"
    PARTIES = "parties"


SECTOR_LABELS = {
    Sector.PASSES: "All-Access Passes",
    Sector.BLOCKS: "Block Access",
    Sector.PARTIES: "Watch Parties",
}

SECTOR_BY_CATEGORY = {
    Category.PASS: Sector.PASSES,
    Category.BLOCK: Sector.BLOCKS,
    Category.TICKET: Sector.PARTIES,
}

FILM_CATEGORIES = frozenset({Category.DONATION, Category.TICKET, Category.MOVIE})
BLOCK_CATEGORIES = frozenset({Category.BLOCK})
DIRECT_SALES_CATEGORIES = frozenset({Category.MOVIE, Category.SUBSCRIPTION})
UNATTRIBUTED_CATEGORIES = frozenset({Category.OTHER, Category.UNKNOWN})


@dataclass(frozen=True)
class RevenueBucket:
    """Gross amounts and unit counts for one entity or sector."""

    key: str
    gross_by_category: Mapping[Category, int] = field(default_factory=dict)
    units_by_category: Mapping[Category, int] = field(default_factory=dict)

    @property
    def gross(self) -> int:
        return sum(self.gross_by_category.values())

    @property
    def units(self) -> int:
        return sum(self.units_by_category.values())

    def gross_for(self, *categories: Category) -> int:
        return sum(self.gross_by_category.get(c, 0) for c in categories)

    def units_for(self, *categories: Category) -> int:
        return sum(self.units_by_category.get(c, 0) for c in categories)


@dataclass(frozen=True)
class RevenueSummary:
    """Aggregated view of one payment feed."""

    films: Mapping[str, RevenueBucket]
    blocks: Mapping[str, RevenueBucket]
    sectors: Mapping[Sector, RevenueBucket]
    totals: Mapping[Category, int]
    units: Mapping[Category, int]

    def total(self, *categories: Category) -> int:
        return sum(self.totals.get(c, 0) for c in categories)

    @property
    def donations_total(self) -> int:
        return self.total(Category.DONATION)

    @property
    def tickets_total(self) -> int:
        return self.total(Category.TICKET)

    @property
    def festival_sector_total(self) -> int:
        return self.total(*SECTOR_BY_CATEGORY)

    @property
    def direct_sales_total(self) -> int:
        return self.total(*DIRECT_SALES_CATEGORIES)

    @property
    def festival_pass_total(self) -> int:
        return self.total(Category.FESTIVAL_PASS)

    @property
    def other_total(self) -> int:
        return self.total(*UNATTRIBUTED_CATEGORIES)

    @property
    def savings_deposits_total(self) -> int:
        return self.total(Category.SAVINGS_DEPOSIT)

    @property
    def grand_total(self) -> int:
        """All revenue. Savings-pot deposits are held funds, not revenue."""
        return sum(
            amount
            for category, amount in self.totals.items()
            if category is not Category.SAVINGS_DEPOSIT
        )

    @property
    def transaction_count(self) -> int:
        return sum(self.units.values())

    def sector(self, sector: Sector) -> RevenueBucket:
        return self.sectors.get(sector) or RevenueBucket(key=sector.value)


class _BucketBuilder:
    def __init__(self) -> None:
        self.gross: Counter[Category] = Counter()
        self.units: Counter[Category] = Counter()

    def add(self, tx: ClassifiedTransaction) -> None:
        self.gross[tx.category] += tx.amount
        self.units[tx.category] += 1

    def build(self, key: str) -> RevenueBucket:
        return RevenueBucket(
            key=key,
            gross_by_category=MappingProxyType(dict(self.gross)),
            units_by_category=MappingProxyType(dict(self.units)),
        )


class RevenueAggregator:
    """Builds a ``RevenueSummary`` from classified transactions."""

    def aggregate(self, transactions: Iterable[ClassifiedTransaction]) -> RevenueSummary:
        films: defaultdict[str, _BucketBuilder] = defaultdict(_BucketBuilder)
        blocks: defaultdict[str, _BucketBuilder] = defaultdict(_BucketBuilder)
        sectors: defaultdict[Sector, _BucketBuilder] = defaultdict(_BucketBuilder)
        totals: Counter[Category] = Counter()
        units: Counter[Category] = Counter()

        for tx in transactions:
            totals[tx.category] += tx.amount
            units[tx.category] += 1
            if tx.entity_key is not None:
                if tx.category in FILM_CATEGORIES:
                    films[tx.entity_key].add(tx)
                elif tx.category in BLOCK_CATEGORIES:
                    blocks[tx.entity_key].add(tx)
            sector = SECTOR_BY_CATEGORY.get(tx.category)
            if sector is not None:
                sectors[sector].add(tx)

        return RevenueSummary(
            films=MappingProxyType({k: b.build(k) for k, b in films.items()}),
            blocks=MappingProxyType({k: b.build(k) for k, b in blocks.items()}),
            sectors=MappingProxyType({s: b.build(s.value) for s, b in sectors.items()}),
            totals=MappingProxyType(dict(totals)),
            units=MappingProxyType(dict(units)),
        )
