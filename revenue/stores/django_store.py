"""Django ORM implementations of the revenue stores."""

import functools
import logging
from datetime import datetime

from django.contrib.auth import get_user_model
from django.db import DatabaseError
from django.db.models import F

from revenue import models as orm
from revenue.domain import (
    FestivalBlock,
    Movie,
    PayoutRecord,
    PayoutStatus,
    PromoCode,
    PromoCodeKey,
    PromoType,
)
from revenue.domain.errors import PromoCodeNotFoundError, StoreUnavailableError
from revenue.stores.interfaces import AudienceStore, CatalogStore, PayoutStore, PromoCodeStore

logger = logging.getLogger(__name__)


def _store_call(method):
    """Map database failures to StoreUnavailableError."""

    @functools.wraps(method)
    def wrapper(*args, **kwargs):
        try:
            return method(*args, **kwargs)
        except DatabaseError as exc:
            logger.exception("Store call %s failed", method.__qualname__)
            raise StoreUnavailableError() from exc

    return wrapper


def _to_movie(row: orm.Movie) -> Movie:
    return Movie(
        key=row.key,
        title=row.title,
        director=row.director,
        sale_price=row.sale_price,
        watch_party_price=row.watch_party_price,
    )


def _to_promo(row: orm.PromoCode) -> PromoCode:
    """Map a row to a domain promo code.

    Rows that predate the table constraints can hold invalid values; those
    codes are treated as unusable rather than failing the request.
    """
    try:
        return PromoCode(
            code=PromoCodeKey.from_string(row.code),
            type=PromoType(row.type),
            discount_value=row.discount_value,
            max_uses=row.max_uses,
            used_count=row.used_count,
            expires_at=row.expires_at,
            item_id=row.item_id or None,
        )
    except ValueError:
        logger.error("Promo code row %s holds invalid values", row.pk)
        raise PromoCodeNotFoundError() from None


def _to_payout(row: orm.PayoutRecord) -> PayoutRecord:
    return PayoutRecord(
        recipient=row.recipient,
        amount=row.amount,
        timestamp=row.processed_at,
        status=PayoutStatus(row.status),
    )


class DjangoCatalogStore(CatalogStore):
    @_store_call
    def list_movies(self) -> list[Movie]:
        return [_to_movie(row) for row in orm.Movie.objects.all()]

    @_store_call
    def get_movie(self, key: str) -> Movie | None:
        row = orm.Movie.objects.filter(key=key).first()
        return _to_movie(row) if row else None

    @_store_call
    def get_block(self, key: str) -> FestivalBlock | None:
        row = orm.FestivalBlock.objects.filter(key=key).first()
        return FestivalBlock(key=row.key, title=row.title) if row else None


class DjangoAudienceStore(AudienceStore):
    @_store_call
    def view_counts(self) -> dict[str, int]:
        return dict(orm.ViewCount.objects.values_list("movie_key", "count"))

    @_store_call
    def count_users(self) -> int:
        return get_user_model().objects.count()


class DjangoPromoCodeStore(PromoCodeStore):
    @_store_call
    def get(self, code: PromoCodeKey) -> PromoCode | None:
        row = orm.PromoCode.objects.filter(code=code.value).first()
        return _to_promo(row) if row else None

    @_store_call
    def increment_usage(self, code: PromoCodeKey) -> bool:
        updated = orm.PromoCode.objects.filter(
            code=code.value, used_count__lt=F("max_uses")
        ).update(used_count=F("used_count") + 1)
        return updated == 1


class DjangoPayoutStore(PayoutStore):
    @_store_call
    def list_payouts(
        self,
        recipient: str | None = None,
        since: datetime | None = None,
    ) -> list[PayoutRecord]:
        rows = orm.PayoutRecord.objects.all()
        if recipient is not None:
            rows = rows.filter(recipient=recipient)
        if since is not None:
            rows = rows.filter(processed_at__gte=since)
        return [_to_payout(row) for row in rows]
