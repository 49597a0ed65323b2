"""Authoritative price resolution.

Prices for fixed items come from the server-side table and prices for
catalog-backed items come from the catalog at request time. Amounts sent by
the client are only accepted for open-amount types (donations and savings
deposits), and only above the configured minimum.
"""

from collections.abc import Mapping

from revenue.domain import AccessType, PriceQuote
from revenue.domain.errors import AmountTooLowError, ItemNotFoundError, UnknownAccessTypeError
from revenue.stores.interfaces import CatalogStore

OPEN_AMOUNT_TYPES = frozenset({AccessType.DONATION, AccessType.SAVINGS_DEPOSIT})


def parse_access_type(value: str | AccessType) -> AccessType:
    if isinstance(value, AccessType):
        return value
    try:
        return AccessType(value)
    except ValueError:
        raise UnknownAccessTypeError(str(value)) from None


class PricingResolver:
    def __init__(
        self,
        catalog: CatalogStore,
        price_table: Mapping[AccessType, int],
        min_open_amount: int = 100,
    ) -> None:
        self._catalog = catalog
        self._price_table = dict(price_table)
        self._min_open_amount = min_open_amount

    def resolve_price(
        self,
        access_type: str | AccessType,
        item_id: str | None = None,
        amount: int | None = None,
        title: str | None = None,
        director: str | None = None,
    ) -> PriceQuote:
        """Return the amount to charge for ``access_type``.

        ``title`` and ``director`` are display fallbacks used only when the
        catalog has no entry for ``item_id``.

        Raises:
            UnknownAccessTypeError: If the type has no pricing rule.
            AmountTooLowError: If an open amount is below the minimum.
            ItemNotFoundError: If a catalog-priced item does not exist.
        """
        access_type = parse_access_type(access_type)

        if access_type in OPEN_AMOUNT_TYPES:
            return self._open_amount(access_type, item_id, amount, title, director)
        if access_type is AccessType.WATCH_PARTY_TICKET:
            return self._watch_party_ticket(item_id)
        if access_type is AccessType.MOVIE and item_id:
            return self._movie(item_id)
        if access_type is AccessType.BLOCK and item_id:
            block = self._catalog.get_block(item_id)
            title = block.title if block else (title or item_id)

        if access_type not in self._price_table:
            raise UnknownAccessTypeError(access_type.value)
        return PriceQuote(
            access_type=access_type,
            amount=self._price_table[access_type],
            title=title,
        )

    def _open_amount(
        self,
        access_type: AccessType,
        item_id: str | None,
        amount: int | None,
        title: str | None,
        director: str | None,
    ) -> PriceQuote:
        if amount is None or amount < self._min_open_amount:
            raise AmountTooLowError(self._min_open_amount)
        if item_id:
            movie = self._catalog.get_movie(item_id)
            if movie is not None:
                title, director = movie.title, movie.director or director
        return PriceQuote(
            access_type=access_type,
            amount=amount,
            title=title,
            director=director,
        )

    def _watch_party_ticket(self, item_id: str | None) -> PriceQuote:
        movie = self._catalog.get_movie(item_id) if item_id else None
        if movie is None or movie.watch_party_price is None:
            raise ItemNotFoundError(item_id)
        return PriceQuote(
            access_type=AccessType.WATCH_PARTY_TICKET,
            amount=movie.watch_party_price,
            title=movie.title,
            director=movie.director or None,
        )

    def _movie(self, item_id: str) -> PriceQuote:
        movie = self._catalog.get_movie(item_id)
        if movie is None:
            raise ItemNotFoundError(item_id)
        amount = movie.sale_price
        if amount is None:
            amount = self._price_table[AccessType.MOVIE]
        return PriceQuote(
            access_type=AccessType.MOVIE,
            amount=amount,
            title=movie.title,
            director=movie.director or None,
        )
