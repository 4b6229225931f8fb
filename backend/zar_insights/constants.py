"""Centralized taxonomy tables shared across the founder-insights pipeline.

This module is the SINGLE SOURCE OF TRUTH for every keyword list, regex
and fixed label the heuristics use. Reused by:
  - Field normalizer
  - Theme & bucket extractors
  - Segmentation engine / funnel / pilot scorer
  - Validation scorecard

Every classifier table is ORDERED: the first matching entry wins unless
the consumer documents multi-label behaviour. Extend a taxonomy by adding
rows here, never by adding branches to the services.
"""

from __future__ import annotations

import re

TAXONOMY_VERSION = "2025.1"

# ── Tokenizer ───────────────────────────────────────────────────────────
# Articles, pronouns and a few filler/exclamation words common in the
# Urdu-English transcripts.

STOPWORDS: frozenset[str] = frozenset({
    "the", "a", "an", "and", "or", "to", "of", "in", "for", "on", "with",
    "at", "as", "is", "are", "was", "were", "be", "been", "it", "this",
    "that", "we", "i", "you", "they", "he", "she", "our", "their", "your",
    "my", "yes", "no", "okay", "alhamdulillah", "mashallah",
})

MIN_TOKEN_LENGTH = 3

# Pairs scoring below this are never assigned by the transcript matcher.
MATCH_SCORE_FLOOR = 0.02

# ── Field normalization (substring → canonical) ─────────────────────────

# "jazzcash" must be tested before its substring "cash".
PAYMENT_METHOD_RULES: tuple[tuple[str, str], ...] = (
    ("jazzcash", "JazzCash"),
    ("cash", "Cash"),
    ("easypaisa", "EasyPaisa"),
    ("bank", "Bank transfer"),
    ("raast", "Raast"),
    ("sadapay", "SadaPay"),
    ("nayapay", "NayaPay"),
    ("dpay", "DPay"),
    ("card", "Card"),
    ("other", "Other"),
)

# Exact (lowercased) spellings seen in the survey sheet.
SHOP_TYPE_CORRECTIONS: tuple[tuple[str, str], ...] = (
    ("general sore", "General store"),
    ("boutique shop", "Boutique"),
)

# "money changer" must be tested before the generic "exchange".
REFERRAL_DESTINATION_RULES: tuple[tuple[str, str], ...] = (
    ("western union", "Western Union"),
    ("money changer", "Money changer"),
    ("exchange", "Money changer"),
    ("bank", "Bank"),
    ("friend", "Friend"),
    ("agent", "Agent"),
    ("do not know", "Don't know"),
    ("don't know", "Don't know"),
)
REFERRAL_EXACT_RULES: tuple[tuple[str, str], ...] = (
    ("other", "Other"),
)

UNKNOWN = "Unknown"
UNKNOWN_SHOP = "Unknown shop"
UNKNOWN_LOCATION = "Unknown location"

# Digital payment rails counted by the funnel and the pilot scorer.
DIGITAL_RAIL_KEYWORDS: tuple[str, ...] = (
    "easypaisa", "jazzcash", "bank", "sadapay", "nayapay", "raast",
)

# ── Respondent-only filter ──────────────────────────────────────────────

RESPONDENT_LINE_RE = re.compile(
    r"^(shopkeeper|shop owner|pharmacist|owner)\s*:", re.IGNORECASE
)

# ── Why merchants don't handle FX (single label, ordered) ───────────────

WHY_NOT_FX_UNKNOWN = "Unknown"
WHY_NOT_FX_OTHER = "Other"
WHY_NOT_FX_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"lack of knowledge|no idea|don't have any idea|do not know|not aware|guidelines"), "Knowledge gap"),
    (re.compile(r"fraud|scam|fear|trust|risk|security"), "Fraud & trust"),
    (re.compile(r"legal|government|police|approval|license|allowed"), "Legal & compliance"),
    (re.compile(r"cash|balance|capital|liquidity|float"), "Liquidity & float"),
    (re.compile(r"busy|time|manage|process"), "Operational overhead"),
)
KNOWLEDGE_GAP_BUCKET = "Knowledge gap"
LEGAL_BUCKET = "Legal & compliance"

# ── Fraud patterns (multi label) ────────────────────────────────────────

FRAUD_PATTERN_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"revers|disappear|vanish|time limit"), "Reversal / clawback"),
    (re.compile(r"screenshot|show(ed)? .*payment|proof"), "Fake proof / screenshots"),
    (re.compile(r"message.*late|sms.*late|delayed"), "Delayed confirmation"),
    (re.compile(r"network|service.*not work"), "Network reliability"),
    (re.compile(r"biometric"), "Biometric / KYC friction"),
    (re.compile(r"raast"), "Raast issues"),
    (re.compile(r"fraud|scam"), "General fraud fear"),
)

# ── Evidence themes ─────────────────────────────────────────────────────

THEME_PATTERNS: dict[str, re.Pattern[str]] = {
    "fx_demand": re.compile(r"\b(dollar|usd|foreign money|foreign currency|currency exchange|exchange)\b", re.IGNORECASE),
    "fx_referral": re.compile(r"\b(western union|money changer|exchange shop|bank)\b", re.IGNORECASE),
    "customer_support": re.compile(r"\b(help|transfer|send|receive)\b", re.IGNORECASE),
    "fraud": re.compile(r"\b(fraud|scam|cheat|revers|screenshot|message)\b", re.IGNORECASE),
    "trust": re.compile(r"\b(trust|safe|secure|sure|fear)\b", re.IGNORECASE),
    "compliance": re.compile(r"\b(legal|government|approval|license|allowed|police)\b", re.IGNORECASE),
    "payments": re.compile(r"\b(easypaisa|jazzcash|bank transfer|raast|sadapay|nayapay|card)\b", re.IGNORECASE),
}

# Order in which the dashboard collects evidence per interview.
EVIDENCE_THEME_ORDER: tuple[str, ...] = (
    "fx_demand", "fx_referral", "fraud", "trust",
    "customer_support", "compliance", "payments",
)

THEME_LINE_MIN_LENGTH = 12
THEME_LINES_PER_THEME = 3
QUOTE_MAX_LENGTH = 260
QUOTE_ELLIPSIS = "…"

# ── Referral destinations mentioned in transcripts ──────────────────────
# Each row is tested independently against the lowercased respondent text.

TRANSCRIPT_REFERRAL_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"western\s+union"), "Western Union"),
    (re.compile(r"money\s+changer"), "Money changer"),
    (re.compile(r"currency\s+exchange|exchange\s+money|exchange\s+shop|local\s+exchange"), "Money changer"),
    (re.compile(r"\bbank(s)?\b"), "Bank"),
    (re.compile(r"\bfriend\b"), "Friend"),
    (re.compile(r"\bagent\b"), "Agent"),
    (re.compile(r"do not know|don't know"), "Don't know"),
)

# ── Segment signals ─────────────────────────────────────────────────────

FRAUD_CONCERN_RE = re.compile(r"fraud|scam|fear|trust|risk|security", re.IGNORECASE)
FX_DEMAND_RE = re.compile(r"\b(dollar|usd|foreign money|foreign currency|currency exchange)\b", re.IGNORECASE)
HELPS_CUSTOMERS_RE = re.compile(r"\b(help|transfer|send|receive)\b", re.IGNORECASE)
CASH_ONLY_RE = re.compile(r"cash only", re.IGNORECASE)

SEGMENT_ORDER: tuple[str, ...] = (
    "ready_now", "promising_but_cautious", "digital_no_fx_yet", "cash_first",
)

SEGMENT_META: dict[str, dict[str, str]] = {
    "ready_now": {
        "label": "Ready now",
        "description": "Already helps customers and shows FX demand; best for first pilots.",
        "color": "var(--status-success)",
    },
    "promising_but_cautious": {
        "label": "Promising, but cautious",
        "description": "Shows demand, but trust/fraud concerns likely block activation.",
        "color": "var(--status-warning)",
    },
    "digital_no_fx_yet": {
        "label": "Digital, no FX yet",
        "description": "Accepts digital payments, but hasn’t seen FX demand (or didn’t mention it).",
        "color": "var(--accent-terra)",
    },
    "cash_first": {
        "label": "Cash-first",
        "description": "Prefers cash or avoids digital due to trust or reliability concerns.",
        "color": "var(--accent-slate)",
    },
}

MAX_DASHBOARD_PILOT_CANDIDATES = 8
MAX_PILOT_REASONS = 3

# ── Conversion funnel ───────────────────────────────────────────────────

FUNNEL_STAGE_NAMES: tuple[str, ...] = (
    "All Interviews", "Digital Active", "FX Demand", "Willing to Help", "Pilot Ready",
)
FUNNEL_DROP_OFF_REASONS: dict[str, str] = {
    "Digital Active": "Cash-only or no digital payments",
    "FX Demand": "No customer inquiries about foreign currency",
    "Willing to Help": "Not actively helping customers with transfers",
    "Pilot Ready": "Fraud concerns or trust barriers",
}

# ── Pilot candidate scoring ─────────────────────────────────────────────

PILOT_WEIGHTS: dict[str, int] = {
    "fx_demand": 30,
    "helps_customers": 20,
    "multiple_rails": 20,
    "single_rail": 10,
    "no_fraud_story": 15,
    "currently_refers": 15,
}
PILOT_MIN_SCORE = 30
TRUST_CONCERN_RE = re.compile(r"fraud|scam|fear|trust|risk|security", re.IGNORECASE)

APPROACH_FALLBACK = "Standard pitch: introduce ZAR and its benefits."
RISK_FALLBACK = "Low risk profile - standard onboarding should suffice."

# ── Validation scorecard ────────────────────────────────────────────────

SIGNAL_THRESHOLDS: tuple[tuple[int, str], ...] = (
    (70, "strong"),
    (45, "moderate"),
    (20, "weak"),
)
SIGNAL_FLOOR = "absent"

CONFIDENCE_THRESHOLDS: tuple[tuple[int, str], ...] = (
    (15, "high"),
    (10, "medium"),
)
CONFIDENCE_FLOOR = "low"

PILOT_TARGET_COUNT = 3
NEUTRAL_SCORE = 50

VERDICT_RATIONALES: dict[str, str] = {
    "persevere": "Strong demand signal with actionable path to pilots. Proceed with experiments.",
    "investigate": "Mixed signals. Run targeted experiments to validate specific hypotheses.",
    "pivot": "Demand exists but execution barriers are significant. Explore alternative models.",
    "kill": "Insufficient demand signal. Consider adjacent opportunities.",
}

# ── Willingness factors ─────────────────────────────────────────────────

WILLINGNESS_FACTOR_RULES: tuple[dict, ...] = (
    {
        "factor": "Government approval",
        "patterns": (r"government", r"approval", r"legal", r"authorized", r"official"),
        "actionability": "high",
        "suggested_action": "Create official-looking documentation, certificates, or partnership announcements",
    },
    {
        "factor": "Social proof",
        "patterns": (r"seeing others", r"other shops", r"everyone", r"many people", r"popular"),
        "actionability": "high",
        "suggested_action": "Showcase early adopters, create referral program, share success stories",
    },
    {
        "factor": "Established reputation",
        "patterns": (r"long time", r"established", r"reputation", r"trusted brand", r"years in"),
        "actionability": "medium",
        "suggested_action": "Highlight company background, team credentials, investor backing",
    },
    {
        "factor": "Clear process",
        "patterns": (r"clear rules", r"process", r"simple", r"easy to use", r"straightforward"),
        "actionability": "high",
        "suggested_action": "Create step-by-step guides, training materials, visual workflows",
    },
    {
        "factor": "Personal recommendation",
        "patterns": (r"recommendation", r"friend", r"trusted person", r"someone i know", r"referred"),
        "actionability": "medium",
        "suggested_action": "Build referral incentives, partner with community leaders",
    },
)

# ── Founder narrative (fixed experiments) ───────────────────────────────

RECOMMENDED_EXPERIMENTS: tuple[dict[str, str], ...] = (
    {
        "title": "Pilot: merchant-assisted FX handoff (referral → conversion)",
        "successMetric": "Referral-to-completion rate for FX requests; time-to-complete; merchant NPS.",
        "whyNow": "Merchants already refer customers; product can capture this demand and reduce leakage.",
    },
    {
        "title": "Anti-fraud kit: proof-of-payment + reversal protection",
        "successMetric": "Reduction in “fake proof / delayed confirmation” complaints; measured trust lift in follow-ups.",
        "whyNow": "Trust is the primary barrier; solving it unlocks both payments and FX flows.",
    },
    {
        "title": "Enable ‘help customers’ as a feature (guided steps + receipts)",
        "successMetric": "Share of merchants willing to assist; completion time; error rate; support contact rate.",
        "whyNow": "Help requests are already happening informally; formalizing reduces friction and risk.",
    },
)

# ── Survey table column headers (markdown export) ───────────────────────

SURVEY_COLUMNS: dict[str, str] = {
    "timestamp": "Timestamp",
    "interviewer": "Interviewer Name",
    "date_of_interview": "Date of Interview",
    "time_of_interview": "Time of Interview",
    "shop_type": "Shop Type",
    "location": "Location / Area",
    "owner_age": "Estimated Owner Age",
    "customers_per_day": "Estimated Customers Per Day",
    "busiest_time": "Busiest Time of Day",
    "payment_methods": "Payment Methods Accepted",
    "mobile_payment_timeline": "When did they start using mobile payments?",
    "concerns_before_starting": "Concerns mentioned before starting mobile payments",
    "current_problems": "Current problems with mobile payments (if any)",
    "customer_asked_for_help": "Has a customer ever asked for help sending or receiving money?",
    "help_request_details": "If yes, what exactly did the customer ask?",
    "dollar_inquiry": "Has a customer ever asked about dollars or foreign money?",
    "dollar_response": "What did the shopkeeper do the last time this happened?",
    "currency_exchange_referral": "Where do they send customers for currency exchange today?",
    "why_refer_elsewhere": "Why do they send customers there instead of handling it themselves?",
    "fraud_story": "Did they mention a real fraud story?",
    "fraud_details": "If yes, describe what happened",
    "money_lost": "Approximate money lost (if mentioned)",
    "avoidance_behaviors": "What do they actively avoid now because of fraud?",
    "last_new_service": "Last new service or item they added",
    "service_influencer": "Who influenced that decision?",
    "trust_factors": "What makes a new service feel safe to them?",
    "exact_phrases": "Exact phrases they used about money, trust, or fraud",
    "surprising_observations": "Anything surprising or strongly emotional?",
    "audio_file": "Upload Audio Recording",
    "transcript": "Upload English Transcript",
    "photo_file": "Photo of shop for Proof",
}

YES_VALUES: frozenset[str] = frozenset({"yes", "y", "true", "1"})
LIST_SPLIT_RE = re.compile(r"\s*(?:,|;|\bor\b|\band\b)\s*", re.IGNORECASE)
