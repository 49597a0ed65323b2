"""Unit tests for memo classification.

Run with: pytest tests/test_classifier.py -v
"""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from revenue.domain import AccessType, Category, NoteClassifier, RawPayment, build_memo, classify


class TestClassify:
    """Tests for classify on known memo formats."""

    @pytest.mark.parametrize(
        "memo, category, entity",
        [
            ('Support for film: "Night Drive" by Ana Reyes', Category.DONATION, "Night Drive"),
            ('Support for film: "Night Drive"', Category.DONATION, "Night Drive"),
            ('Support for film: "Nightfall" by Jane "JD" Doe', Category.DONATION, "Nightfall"),
            ('Support for film: "The "Big" One"', Category.DONATION, 'The "Big" One'),
            ('Watch Party Ticket: "Night Drive"', Category.TICKET, "Night Drive"),
            ("Live Screening Pass: Night Drive", Category.TICKET, "Night Drive"),
            ("Crate TV Premium Subscription", Category.SUBSCRIPTION, None),
            ("Crate TV Film Festival - All-Access Pass", Category.PASS, None),
            ("Crate Fest All-Access Activation", Category.FESTIVAL_PASS, None),
            ('Crate TV Film Festival - Unlock Block: "Shorts A"', Category.BLOCK, "Shorts A"),
            ('Crate TV - Purchase Film: "Night Drive"', Category.MOVIE, "Night Drive"),
            ('Crate TV - Rent Film: "Night Drive"', Category.MOVIE, "Night Drive"),
            ("Deposit to Crate TV Bill Savings Pot", Category.SAVINGS_DEPOSIT, None),
        ],
    )
    def test_known_formats(self, memo, category, entity):
        result = classify(memo)
        assert result.category is category
        assert result.entity_key == entity

    def test_unmatched_memo_is_other(self):
        """A memo nothing recognizes is other, with no entity."""
        result = classify("Coffee")
        assert result.category is Category.OTHER
        assert result.entity_key is None

    @pytest.mark.parametrize("memo", [None, "", "   "])
    def test_missing_memo_is_unknown(self, memo):
        assert classify(memo).category is Category.UNKNOWN

    def test_first_matching_rule_wins(self):
        """A donation memo mentioning a ticket is still a donation."""
        result = classify('Support for film: "Watch Party Ticket: X"')
        assert result.category is Category.DONATION
        assert result.entity_key == "Watch Party Ticket: X"

    def test_empty_title_has_no_entity(self):
        result = classify('Watch Party Ticket: ""')
        assert result.category is Category.TICKET
        assert result.entity_key is None


class TestClassifyPayment:
    """Tests for tagging a payment with its classification."""

    def test_keeps_amount(self, make_payment):
        payment: RawPayment = make_payment('Support for film: "Night Drive"', 1000)
        tx = NoteClassifier().classify_payment(payment)
        assert (tx.category, tx.entity_key, tx.amount) == (Category.DONATION, "Night Drive", 1000)


class TestClassifierProperties:
    """Property tests: classification is total and deterministic."""

    @given(st.one_of(st.none(), st.text()))
    def test_never_raises(self, memo):
        result = classify(memo)
        assert isinstance(result.category, Category)

    @given(st.text())
    def test_deterministic(self, memo):
        assert classify(memo) == classify(memo)

    @given(
        st.sampled_from(list(AccessType)),
        st.text(
            alphabet=st.characters(categories=("L", "N"), include_characters=" "),
            min_size=1,
            max_size=30,
        ).map(str.strip).filter(bool),
    )
    def test_built_memo_classifies_back(self, access_type, title):
        """Every memo written for a charge maps back to its own category."""
        expected = {
            AccessType.DONATION: Category.DONATION,
            AccessType.WATCH_PARTY_TICKET: Category.TICKET,
            AccessType.SUBSCRIPTION: Category.SUBSCRIPTION,
            AccessType.PASS: Category.PASS,
            AccessType.BLOCK: Category.BLOCK,
            AccessType.MOVIE: Category.MOVIE,
            AccessType.FESTIVAL_PASS: Category.FESTIVAL_PASS,
            AccessType.SAVINGS_DEPOSIT: Category.SAVINGS_DEPOSIT,
        }[access_type]
        assert classify(build_memo(access_type, title, "Ana Reyes")).category is expected
