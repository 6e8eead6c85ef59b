"""
Static lexicons shared by the detectors.

All tables are module-level immutable constants (frozensets, tuples and
precompiled regexes) so every analysis reads the same data without
rebuilding it per call.
"""

import re

# ============================================================================
# Base detector lexicons
# ============================================================================

# Order matters: matched terms are reported in this order.
PHISHING_KEYWORDS = (
    "urgent",
    "immediate",
    "verify account",
    "suspended",
    "click here",
    "limited time",
    "act now",
    "confirm identity",
    "security alert",
    "update payment",
    "expired",
    "locked account",
    "win",
    "congratulations",
    "free money",
    "tax refund",
    "inheritance",
    "lottery",
    "prince",
)

URL_SHORTENERS = frozenset({
    "bit.ly",
    "tinyurl.com",
    "goo.gl",
    "t.co",
})

URGENCY_WORDS = ("urgent", "immediate", "asap", "now", "today", "expires")

TRUSTED_DOMAINS = frozenset({
    "gmail.com",
    "outlook.com",
    "yahoo.com",
    "hotmail.com",
    "apple.com",
    "microsoft.com",
    "google.com",
    "amazon.com",
    "paypal.com",
    "linkedin.com",
    "facebook.com",
})

KNOWN_SUSPICIOUS_DOMAINS = frozenset({
    "urgent-security-alert.com",
    "security-team-alert.com",
    "account-verification.net",
    "payment-update.org",
})

SUSPICIOUS_DOMAIN_PATTERNS = (
    re.compile(r"security.*alert", re.IGNORECASE),
    re.compile(r"urgent.*team", re.IGNORECASE),
    re.compile(r"account.*verify", re.IGNORECASE),
    re.compile(r"payment.*update", re.IGNORECASE),
    re.compile(r"(?:microsoft|apple|google|amazon|paypal).*(?:security|support)", re.IGNORECASE),
)

# Short or digit-heavy domains look freshly registered.
MIN_DOMAIN_LENGTH = 8
_NUMERIC_RUN_RE = re.compile(r"\d{3,}")

LINK_RE = re.compile(r"https?://\S+", re.IGNORECASE)
ATTACHMENT_RE = re.compile(r"attachment|download|file", re.IGNORECASE)

# ============================================================================
# Grammar / linguistic heuristics
# ============================================================================

REPEATED_WHITESPACE_RE = re.compile(r"\s{2,}")
REPEATED_PUNCTUATION_RE = re.compile(r"[.!?]{2,}")
SHOUTING_RE = re.compile(r"[A-Z]{4,}")
TERMINAL_PUNCTUATION_RE = re.compile(r"[.!?]$")
MISSPELLING_RE = re.compile(r"\b(?:recieve|seperate|occured|definately)\b", re.IGNORECASE)

TRANSLATION_ARTIFACT_PATTERNS = (
    re.compile(r"\b(?:kindly|please to|do the needful)\b", re.IGNORECASE),
    re.compile(r"\b(?:revert back|prepone|good name)\b", re.IGNORECASE),
)

# ============================================================================
# Enhanced pattern families
# ============================================================================

PHISHING_PATTERNS = (
    re.compile(r"verify.*account.*immediately", re.IGNORECASE),
    re.compile(r"suspended.*24.*hours", re.IGNORECASE),
    re.compile(r"click.*here.*now", re.IGNORECASE),
    re.compile(r"limited.*time.*offer", re.IGNORECASE),
    re.compile(r"confirm.*identity.*urgent", re.IGNORECASE),
    re.compile(r"security.*alert.*action", re.IGNORECASE),
    re.compile(r"update.*payment.*expire", re.IGNORECASE),
    re.compile(r"congratulations.*winner", re.IGNORECASE),
)

SOCIAL_ENGINEERING_PATTERNS = (
    re.compile(r"dear.*valued.*customer", re.IGNORECASE),
    re.compile(r"act.*now.*or.*lose", re.IGNORECASE),
    re.compile(r"final.*notice", re.IGNORECASE),
    re.compile(r"immediate.*action.*required", re.IGNORECASE),
    re.compile(r"don't.*miss.*out", re.IGNORECASE),
    re.compile(r"exclusive.*offer.*you", re.IGNORECASE),
)

ADVANCED_THREAT_PATTERNS = (
    re.compile(r"\b(?:bit\.ly|tinyurl(?:\.\w+)+|goo\.gl|t\.co)\b", re.IGNORECASE),
    re.compile(r"\b\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3}\b"),
    re.compile(r"urgent.*security.*team", re.IGNORECASE),
    re.compile(r"microsoft.*apple.*google.*security", re.IGNORECASE),
    re.compile(r"tax.*refund.*irs", re.IGNORECASE),
    re.compile(r"inheritance.*million.*dollars", re.IGNORECASE),
)

SENTIMENT_URGENT_WORDS = ("urgent", "immediate", "now", "asap", "quickly", "fast", "hurry")
SENTIMENT_MANIPULATIVE_WORDS = ("limited", "exclusive", "special", "secret", "guaranteed", "free", "win")
SENTIMENT_FEAR_WORDS = ("suspended", "blocked", "terminated", "expired", "lose", "miss")


def is_numeric_heavy(domain: str) -> bool:
    return bool(_NUMERIC_RUN_RE.search(domain))
