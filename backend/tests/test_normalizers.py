"""Text and field normalizer tests: tokenizer, Jaccard, canonical labels."""

import os
import sys

# Ensure the backend package is importable
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from zar_insights.constants import PAYMENT_METHOD_RULES, REFERRAL_DESTINATION_RULES
from zar_insights.services.field_normalizer import (
    is_digital_method,
    normalize_payment_method,
    normalize_referral_destination,
    normalize_shop_type,
)
from zar_insights.services.text_normalizer import (
    jaccard_similarity,
    normalize_whitespace,
    round_half_up,
    tokenize_for_match,
)


# ===================================================================== #
#  Text normalizer                                                        #
# ===================================================================== #

class TestWhitespace:
    def test_collapses_runs_and_trims(self):
        assert normalize_whitespace("  General \t\n store  ") == "General store"

    def test_empty(self):
        assert normalize_whitespace("") == ""


class TestTokenizer:
    def test_drops_stopwords_short_tokens_and_numbers(self):
        tokens = tokenize_for_match("The Dollar, the DOLLAR! 500 rupees ok")
        assert tokens == ["dollar", "dollar", "rupees"]

    def test_urdu_fillers_are_stopwords(self):
        assert tokenize_for_match("Alhamdulillah, business mashallah") == ["business"]

    def test_alphanumeric_tokens_kept(self):
        assert tokenize_for_match("usd100 notes") == ["usd100", "notes"]

    def test_empty_text(self):
        assert tokenize_for_match("") == []


class TestJaccard:
    def test_partial_overlap(self):
        assert jaccard_similarity(["a", "b"], ["b", "c"]) == pytest.approx(1 / 3)

    def test_identical_sets(self):
        assert jaccard_similarity(["x", "y", "x"], ["y", "x"]) == 1.0

    def test_either_side_empty_is_zero(self):
        assert jaccard_similarity([], ["a"]) == 0.0
        assert jaccard_similarity(["a"], []) == 0.0

    def test_symmetric_and_bounded(self):
        a = tokenize_for_match("customers ask about dollar exchange daily")
        b = tokenize_for_match("dollar exchange happens near the market")
        score = jaccard_similarity(a, b)
        assert score == jaccard_similarity(b, a)
        assert 0.0 <= score <= 1.0


class TestRoundHalfUp:
    @pytest.mark.parametrize("value,expected", [
        (0.5, 1), (2.5, 3), (49.5, 50), (1.49, 1), (66.666, 67), (0.0, 0),
    ])
    def test_half_rounds_up(self, value, expected):
        assert round_half_up(value) == expected


# ===================================================================== #
#  Field normalizer                                                       #
# ===================================================================== #

class TestPaymentMethod:
    @pytest.mark.parametrize("raw,expected", [
        ("Cash only", "Cash"),
        ("JazzCash", "JazzCash"),
        ("EasyPaisa account", "EasyPaisa"),
        ("Bank Transfer", "Bank transfer"),
        ("RAAST", "Raast"),
        ("SadaPay", "SadaPay"),
        ("NayaPay", "NayaPay"),
        ("dpay", "DPay"),
        ("Debit card", "Card"),
        ("Other", "Other"),
    ])
    def test_canonical_rails(self, raw, expected):
        assert normalize_payment_method(raw) == expected

    def test_empty_is_unknown(self):
        assert normalize_payment_method("   ") == "Unknown"

    def test_unmatched_keeps_normalized_original(self):
        assert normalize_payment_method("  Crypto   wallet ") == "Crypto wallet"

    def test_every_rule_reachable(self):
        for keyword, canonical in PAYMENT_METHOD_RULES:
            assert normalize_payment_method(keyword) == canonical

    def test_digital_flag(self):
        assert is_digital_method("EasyPaisa")
        assert not is_digital_method("Cash")
        assert not is_digital_method("Unknown")


class TestShopType:
    def test_typo_corrections(self):
        assert normalize_shop_type("General  Sore") == "General store"
        assert normalize_shop_type("Boutique shop") == "Boutique"

    def test_empty_is_unknown(self):
        assert normalize_shop_type("") == "Unknown"

    def test_otherwise_trimmed_original(self):
        assert normalize_shop_type("  Pharmacy ") == "Pharmacy"


class TestReferralDestination:
    @pytest.mark.parametrize("raw,expected", [
        ("Western Union office", "Western Union"),
        ("local money changer", "Money changer"),
        ("Currency exchange shop", "Money changer"),
        ("Meezan bank", "Bank"),
        ("a friend", "Friend"),
        ("JazzCash agent", "Agent"),
        ("I don't know", "Don't know"),
        ("do not know", "Don't know"),
        ("other", "Other"),
    ])
    def test_canonical_destinations(self, raw, expected):
        assert normalize_referral_destination(raw) == expected

    def test_empty_is_blank(self):
        assert normalize_referral_destination("  ") == ""

    def test_other_must_be_exact(self):
        assert normalize_referral_destination("Other  place") == "Other place"

    def test_money_changer_rule_precedes_exchange(self):
        keywords = [k for k, _ in REFERRAL_DESTINATION_RULES]
        assert keywords.index("money changer") < keywords.index("exchange")
