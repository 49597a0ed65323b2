"""Outstanding balance against historical payouts."""

from dataclasses import dataclass
from datetime import datetime

from revenue.stores.interfaces import PayoutStore


@dataclass(frozen=True)
class PayoutStatement:
    total_earnings: int
    total_paid_out: int

    @property
    def balance(self) -> int:
        return max(0, self.total_earnings - self.total_paid_out)


class PayoutLedger:
    """Reads payout history and computes what is still owed.

    Only completed payouts reduce a balance; pending or failed attempts do
    not. Recipient matching is exact and case-sensitive.
    """

    def __init__(self, store: PayoutStore) -> None:
        self._store = store

    def total_paid_out(
        self,
        recipient: str | None = None,
        since: datetime | None = None,
    ) -> int:
        records = self._store.list_payouts(recipient=recipient, since=since)
        return sum(
            record.amount
            for record in records
            if record.is_final and (recipient is None or record.recipient == recipient)
        )

    def statement(
        self,
        total_net_earnings: int,
        recipient: str | None = None,
        since: datetime | None = None,
    ) -> PayoutStatement:
        return PayoutStatement(
            total_earnings=total_net_earnings,
            total_paid_out=self.total_paid_out(recipient=recipient, since=since),
        )

    def outstanding_balance(
        self,
        total_net_earnings: int,
        recipient: str | None = None,
        since: datetime | None = None,
    ) -> int:
        """Return ``max(0, earnings - paid out)``. Never negative."""
        return self.statement(total_net_earnings, recipient, since).balance
