"""Theme/bucket extractor and transcript matcher tests."""

import os
import sys

# Ensure the backend package is importable
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from zar_insights.schemas.interview_schema import Interview, TranscriptDocument
from zar_insights.services.theme_extractor import (
    bucket_why_not_handle_fx,
    extract_referral_destinations_from_transcript,
    extract_respondent_lines,
    extract_theme_lines,
    fraud_pattern_buckets_from_text,
    respondent_only_text,
)
from zar_insights.services.transcript_matcher import (
    match_transcripts_to_interviews,
    score_pairs,
)


# ===================================================================== #
#  Respondent filter                                                      #
# ===================================================================== #

class TestRespondentLines:
    def test_keeps_only_respondent_speakers(self):
        text = "Interviewer: hello\r\nShopkeeper: yes we do\n\n owner : fine\nPharmacist: ok"
        assert extract_respondent_lines(text) == [
            "Shopkeeper: yes we do",
            "owner : fine",
            "Pharmacist: ok",
        ]

    def test_unlabelled_transcript_returned_unchanged(self):
        text = "We sell medicine.\nCustomers ask about dollars."
        assert respondent_only_text(text) == text

    def test_labelled_transcript_joined_with_newlines(self):
        text = "Interviewer: q\nShop owner: a\nInterviewer: q2\nShop owner: b"
        assert respondent_only_text(text) == "Shop owner: a\nShop owner: b"


# ===================================================================== #
#  Why-not-FX buckets (single label)                                      #
# ===================================================================== #

class TestWhyNotHandleFx:
    def test_blank_is_unknown(self):
        assert bucket_why_not_handle_fx("   ") == "Unknown"

    def test_knowledge_gap(self):
        assert bucket_why_not_handle_fx("We have NO IDEA about the rules") == "Knowledge gap"

    def test_fraud_and_trust(self):
        assert bucket_why_not_handle_fx("Fear of being cheated") == "Fraud & trust"

    def test_legal(self):
        assert bucket_why_not_handle_fx("Government does not allow it") == "Legal & compliance"

    def test_liquidity(self):
        assert bucket_why_not_handle_fx("Not enough cash kept in the shop") == "Liquidity & float"

    def test_operational(self):
        assert bucket_why_not_handle_fx("Too busy with customers") == "Operational overhead"

    def test_first_match_wins(self):
        # Mentions both a knowledge gap and legal approval.
        assert bucket_why_not_handle_fx("not aware whether it needs approval") == "Knowledge gap"

    def test_unmatched_is_other(self):
        assert bucket_why_not_handle_fx("just because") == "Other"


# ===================================================================== #
#  Fraud pattern buckets (multi label)                                    #
# ===================================================================== #

class TestFraudPatterns:
    def test_multiple_labels_in_table_order(self):
        text = "Customer showed a fake screenshot and the payment was reversed. Scam!"
        assert fraud_pattern_buckets_from_text(text) == [
            "Reversal / clawback",
            "Fake proof / screenshots",
            "General fraud fear",
        ]

    def test_operational_patterns(self):
        text = "The SMS came late and the network was down. Raast failed once."
        assert fraud_pattern_buckets_from_text(text) == [
            "Delayed confirmation",
            "Network reliability",
            "Raast issues",
        ]

    def test_no_match(self):
        assert fraud_pattern_buckets_from_text("Business is good") == []


# ===================================================================== #
#  Theme lines                                                            #
# ===================================================================== #

class TestThemeLines:
    def test_caps_at_three_lines(self):
        text = "\n".join(f"Shopkeeper: customer {n} asked about dollar rates" for n in range(5))
        lines = extract_theme_lines(text, "fx_demand")
        assert len(lines) == 3
        assert lines[0] == "Shopkeeper: customer 0 asked about dollar rates"

    def test_short_lines_ignored(self):
        assert extract_theme_lines("Owner: usd", "fx_demand") == []

    def test_long_lines_truncated(self):
        line = "Shopkeeper: dollar " + "x" * 300
        [quote] = extract_theme_lines(line, "fx_demand")
        assert len(quote) == 258
        assert quote.endswith("…")
        assert quote.startswith("Shopkeeper: dollar")

    def test_only_respondent_speech_used(self):
        text = "Interviewer: do people ask for dollars?\nShopkeeper: we sell sugar and flour"
        assert extract_theme_lines(text, "fx_demand") == []

    def test_word_boundaries(self):
        # "message" is a fraud keyword, "messages" is not a whole-word match.
        assert extract_theme_lines("Owner: the messages were fine today", "fraud") == []
        assert extract_theme_lines("Owner: the message never arrived", "fraud") == [
            "Owner: the message never arrived"
        ]


class TestTranscriptReferrals:
    def test_respondent_mentions_only(self):
        text = (
            "Shopkeeper: I send them to Western Union or the bank.\n"
            "Customer: where is the money changer?"
        )
        assert extract_referral_destinations_from_transcript(text) == ["Western Union", "Bank"]

    def test_exchange_phrases_collapse_to_money_changer(self):
        text = "Owner: there is a money changer nearby and a currency exchange in the market"
        assert extract_referral_destinations_from_transcript(text) == ["Money changer"]


# ===================================================================== #
#  Transcript matcher                                                     #
# ===================================================================== #

def _interview(interview_id, transcript):
    return Interview(id=interview_id, transcript=transcript)


def _doc(doc_id, text):
    return TranscriptDocument(id=doc_id, file_name=f"{doc_id}.txt", text=text)


PHARMACY = "pharmacy medicine customers dollar exchange western union prescription"
GROCERY = "grocery flour sugar easypaisa jazzcash network delay biscuits"


class TestTranscriptMatcher:
    def test_pairs_by_vocabulary(self):
        interviews = [_interview("1", PHARMACY), _interview("2", GROCERY)]
        docs = [_doc("grocery", GROCERY + " rice"), _doc("pharmacy", PHARMACY + " syrup")]
        matches = match_transcripts_to_interviews(docs, interviews)
        assert matches["1"].id == "pharmacy"
        assert matches["2"].id == "grocery"

    def test_higher_score_wins_competition(self):
        interviews = [_interview("1", PHARMACY)]
        docs = [
            _doc("partial", "pharmacy medicine customers dollar"),
            _doc("exact", PHARMACY),
        ]
        matches = match_transcripts_to_interviews(docs, interviews)
        assert list(matches) == ["1"]
        assert matches["1"].id == "exact"

    def test_below_floor_is_unmatched(self):
        interviews = [_interview("1", PHARMACY)]
        docs = [_doc("unrelated", "cricket match stadium tickets weather")]
        assert match_transcripts_to_interviews(docs, interviews) == {}

    def test_empty_interview_transcript_never_matched(self):
        interviews = [_interview("1", "")]
        assert match_transcripts_to_interviews([_doc("a", PHARMACY)], interviews) == {}

    def test_injective(self):
        interviews = [
            _interview("1", PHARMACY),
            _interview("2", PHARMACY + " syrup"),
            _interview("3", GROCERY),
        ]
        docs = [_doc("a", PHARMACY), _doc("b", PHARMACY), _doc("c", GROCERY), _doc("d", GROCERY)]
        matches = match_transcripts_to_interviews(docs, interviews)
        doc_ids = [doc.id for doc in matches.values()]
        assert len(doc_ids) == len(set(doc_ids))
        assert len(matches) <= min(len(docs), len(interviews))

    def test_score_pairs_sorted_descending(self):
        interviews = [_interview("1", PHARMACY), _interview("2", GROCERY)]
        docs = [_doc("a", PHARMACY), _doc("b", GROCERY)]
        scores = [score for _, _, score in score_pairs(docs, interviews)]
        assert scores == sorted(scores, reverse=True)
        assert len(scores) == 4
