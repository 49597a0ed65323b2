"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod
from datetime import datetime

from revenue.domain import FestivalBlock, Movie, PayoutRecord, PromoCode, PromoCodeKey


class CatalogStore(ABC):
    """Read-only access to the content catalog."""

    @abstractmethod
    def list_movies(self) -> list[Movie]:
        """Return all catalog movies."""
        ...

    @abstractmethod
    def get_movie(self, key: str) -> Movie | None:
        """Return a movie by key, or None if not found."""
        ...

    @abstractmethod
    def get_block(self, key: str) -> FestivalBlock | None:
        """Return a festival block by key, or None if not found."""
        ...


class AudienceStore(ABC):
    """View counters and user totals shown alongside revenue."""

    @abstractmethod
    def view_counts(self) -> dict[str, int]:
        """Return view counts keyed by movie key."""
        ...

    @abstractmethod
    def count_users(self) -> int:
        ...


class PromoCodeStore(ABC):
    """Promo code lookup and usage accounting."""

    @abstractmethod
    def get(self, code: PromoCodeKey) -> PromoCode | None:
        """Return a promo code, or None if not found."""
        ...

    @abstractmethod
    def increment_usage(self, code: PromoCodeKey) -> bool:
        """Atomically add one use if the code still has uses left.

        Returns False when the code is missing or already exhausted.
        """
        ...


class PayoutStore(ABC):
    """Read access to the payout history."""

    @abstractmethod
    def list_payouts(
        self,
        recipient: str | None = None,
        since: datetime | None = None,
    ) -> list[PayoutRecord]:
        """Return payouts, optionally for one recipient (exact match) and
        processed at or after ``since``. Newest first."""
        ...
