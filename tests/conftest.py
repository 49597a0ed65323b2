"""Pytest configuration and shared fixtures."""

import itertools
from datetime import datetime, timedelta

import pytest
from rest_framework.test import APIClient

from revenue.domain import RawPayment
from tests.fakes import (
    EPOCH,
    FakeGateway,
    InMemoryAudienceStore,
    InMemoryCatalogStore,
    InMemoryPayoutStore,
    InMemoryPromoCodeStore,
)


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture
def epoch() -> datetime:
    return EPOCH


@pytest.fixture
def make_payment():
    ids = itertools.count(1)

    def factory(memo, amount, created_at=None) -> RawPayment:
        return RawPayment(
            id=f"p{next(ids)}",
            created_at=created_at or EPOCH + timedelta(days=1),
            amount=amount,
            memo=memo,
        )

    return factory


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def catalog() -> InMemoryCatalogStore:
    return InMemoryCatalogStore()


@pytest.fixture
def audience() -> InMemoryAudienceStore:
    return InMemoryAudienceStore()


@pytest.fixture
def promo_store() -> InMemoryPromoCodeStore:
    return InMemoryPromoCodeStore()


@pytest.fixture
def payout_store() -> InMemoryPayoutStore:
    return InMemoryPayoutStore()
