"""Partner/platform revenue splits in integer minor units."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from decimal import ROUND_DOWN, Decimal

from revenue.domain.aggregation import Sector
from revenue.domain.value_objects import PartnerShare

DEFAULT_PARTNER_SHARE = PartnerShare(Decimal("0.70"))


@dataclass(frozen=True)
class Split:
    """Result of splitting a gross amount. ``net + platform_cut == gross``."""

    gross: int
    net: int
    platform_cut: int


@dataclass(frozen=True)
class SplitCalculator:
    """Applies the partner share to gross sums.

    The partner's net is truncated toward zero and the platform keeps the
    remainder, so the two halves always add back up to the gross.
    """

    partner_share: PartnerShare = DEFAULT_PARTNER_SHARE
    sector_shares: Mapping[Sector, PartnerShare] = field(default_factory=dict)

    def split(self, gross: int, share: PartnerShare | None = None) -> Split:
        ratio = (share or self.partner_share).ratio
        net = int((Decimal(gross) * ratio).to_integral_value(rounding=ROUND_DOWN))
        return Split(gross=gross, net=net, platform_cut=gross - net)

    def split_sector(self, sector: Sector, gross: int) -> Split:
        return self.split(gross, self.sector_shares.get(sector))
