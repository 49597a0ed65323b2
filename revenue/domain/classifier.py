"""Memo classification.

The gateway only preserves a free-text note per payment, so the purchase
intent is recovered by matching that note against an ordered list of rules.
The first matching rule wins; a memo that matches nothing is ``other`` and an
empty memo is ``unknown``. Classification never raises.

``build_memo`` is the writing side of the same format: every memo this
service attaches to a charge classifies back to the category it was built for.
"""

import re
from collections.abc import Callable, Sequence
from typing import NamedTuple

from revenue.domain.models import (
    AccessType,
    Category,
    Classification,
    ClassifiedTransaction,
    RawPayment,
)

Extractor = Callable[[re.Match[str]], str | None]


class Rule(NamedTuple):
    pattern: re.Pattern[str]
    category: Category
    extract: Extractor


def _clean_title(raw: str | None) -> str | None:
    if raw is None:
        return None
    title = raw.strip()
    if len(title) >= 2 and title.startswith('"') and title.endswith('"'):
        title = title[1:-1].strip()
    return title or None


def _title(match: re.Match[str]) -> str | None:
    return _clean_title(match.group("title"))


def _no_entity(match: re.Match[str]) -> None:
    return None


DEFAULT_RULES: tuple[Rule, ...] = (
    # donation pledge for a named film
    Rule(
        re.compile(r'Support for film: "(?P<title>.*?)"(?: by (?P<director>.*))?$'),
        Category.DONATION,
        _title,
    ),
    # watch party / live screening ticket
    Rule(re.compile(r"Watch Party Ticket: (?P<title>.*)"), Category.TICKET, _title),
    Rule(re.compile(r"Live Screening Pass: (?P<title>.*)"), Category.TICKET, _title),
    # passes
    Rule(re.compile(r"Premium Subscription"), Category.SUBSCRIPTION, _no_entity),
    Rule(
        re.compile(r"Crate Fest\b.*(?:Pass|All-Access)"),
        Category.FESTIVAL_PASS,
        _no_entity,
    ),
    Rule(re.compile(r"All-Access Pass"), Category.PASS, _no_entity),
    # block unlock
    Rule(re.compile(r"Unlock Block: (?P<title>.*)"), Category.BLOCK, _title),
    # direct movie purchase or rental
    Rule(re.compile(r"(?:Purchase|Rent) Film: (?P<title>.*)"), Category.MOVIE, _title),
    Rule(
        re.compile(r"^Deposit to Crate TV Bill Savings Pot"),
        Category.SAVINGS_DEPOSIT,
        _no_entity,
    ),
)


class NoteClassifier:
    """Maps a memo to a category and an optional entity key."""

    def __init__(self, rules: Sequence[Rule] = DEFAULT_RULES) -> None:
        self._rules = tuple(rules)

    def classify(self, memo: str | None) -> Classification:
        if memo is None or not memo.strip():
            return Classification(category=Category.UNKNOWN)
        for rule in self._rules:
            match = rule.pattern.search(memo)
            if match is not None:
                return Classification(
                    category=rule.category, entity_key=rule.extract(match)
                )
        return Classification(category=Category.OTHER)

    def classify_payment(self, payment: RawPayment) -> ClassifiedTransaction:
        result = self.classify(payment.memo)
        return ClassifiedTransaction(
            category=result.category,
            entity_key=result.entity_key,
            amount=payment.amount,
        )


_default_classifier = NoteClassifier()


def classify(memo: str | None) -> Classification:
    """Classify a memo with the default rule set."""
    return _default_classifier.classify(memo)


def build_memo(
    access_type: AccessType,
    title: str | None = None,
    director: str | None = None,
) -> str:
    """Return the gateway note recorded for a purchase of ``access_type``."""
    if access_type is AccessType.DONATION:
        memo = f'Support for film: "{title or ""}"'
        return f"{memo} by {director}" if director else memo
    if access_type is AccessType.WATCH_PARTY_TICKET:
        return f'Watch Party Ticket: "{title or ""}"'
    if access_type is AccessType.SUBSCRIPTION:
        return "Crate TV Premium Subscription"
    if access_type is AccessType.PASS:
        return "Crate TV Film Festival - All-Access Pass"
    if access_type is AccessType.BLOCK:
        return f'Crate TV Film Festival - Unlock Block: "{title or ""}"'
    if access_type is AccessType.MOVIE:
        return f'Crate TV - Purchase Film: "{title or ""}"'
    if access_type is AccessType.FESTIVAL_PASS:
        return "Crate Fest All-Access Activation"
    if access_type is AccessType.SAVINGS_DEPOSIT:
        return "Deposit to Crate TV Bill Savings Pot"
    return "Crate TV Purchase"
