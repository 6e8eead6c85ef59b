"""
Local (rule-based) spam scoring.

This module implements the base detector suite: lightweight, explainable
heuristics that run fully offline. Each detector is an independent pure
function over (content, subject, sender, domain) returning a score delta and
its indicators; the suite is reduced into one score by `scoring.aggregate`.
"""

from dataclasses import dataclass
from typing import Callable, List, Tuple

from ..schemas import ContentAnalysis, Indicator, SenderAnalysis
from .lexicon import (
    ATTACHMENT_RE,
    LINK_RE,
    MISSPELLING_RE,
    PHISHING_KEYWORDS,
    REPEATED_PUNCTUATION_RE,
    REPEATED_WHITESPACE_RE,
    SHOUTING_RE,
    TERMINAL_PUNCTUATION_RE,
    URL_SHORTENERS,
    URGENCY_WORDS,
)
from .reputation import extract_domain, resolve_domain
from .scoring import BASE_THRESHOLDS, EMPTY_OUTPUT, DetectorOutput, aggregate, risk_level_for

Detector = Callable[..., DetectorOutput]

# ============================================================================
# Rule Weights
# ============================================================================

RULE_WEIGHTS = {
    "phishing_keyword": 15,     # per matched keyword
    "shortened_url": 25,        # flat, however many links
    "urgency": 10,              # per urgency word
    "suspicious_sender": 30,
    "unverified_sender": 15,
    "grammar": 10,
}

GRAMMAR_ISSUE_THRESHOLD = 3


# ============================================================================
# Helper Functions
# ============================================================================

def match_phishing_keywords(content: str, subject: str) -> List[str]:
    low_content, low_subject = content.lower(), subject.lower()
    return [k for k in PHISHING_KEYWORDS if k in low_content or k in low_subject]


def match_urgency_words(content: str, subject: str) -> List[str]:
    low_content, low_subject = content.lower(), subject.lower()
    return [w for w in URGENCY_WORDS if w in low_content or w in low_subject]


def find_links(content: str) -> List[str]:
    return LINK_RE.findall(content)


def _link_host(link: str) -> str:
    host = link.split("://", 1)[-1]
    for sep in "/?#":
        host = host.split(sep, 1)[0]
    # Drop credentials and ports.
    return host.rsplit("@", 1)[-1].split(":")[0].lower()


def is_shortened(link: str) -> bool:
    host = _link_host(link)
    return any(host == s or host.endswith("." + s) for s in URL_SHORTENERS)


def count_grammar_issues(content: str, check_terminal: bool = True) -> int:
    """Number of distinct grammar heuristics that fire (each counts once)."""
    checks = [
        REPEATED_WHITESPACE_RE.search(content),
        REPEATED_PUNCTUATION_RE.search(content),
        SHOUTING_RE.search(content),
        MISSPELLING_RE.search(content),
    ]
    if check_terminal:
        checks.append(not TERMINAL_PUNCTUATION_RE.search(content.strip()))
    return sum(1 for hit in checks if hit)


def _keyword_severity(count: int) -> str:
    if count > 3:
        return "high"
    if count > 1:
        return "medium"
    return "low"


# ============================================================================
# Detectors
# ============================================================================

def detect_phishing_keywords(*, content: str, subject: str, sender: str, domain: str) -> DetectorOutput:
    words = match_phishing_keywords(content, subject)
    if not words:
        return EMPTY_OUTPUT
    indicator = Indicator(
        type="phishing",
        severity=_keyword_severity(len(words)),
        description="Phishing keywords detected",
        details=f"Found suspicious words: {', '.join(words)}",
    )
    return DetectorOutput(RULE_WEIGHTS["phishing_keyword"] * len(words), (indicator,))


def detect_suspicious_links(*, content: str, subject: str, sender: str, domain: str) -> DetectorOutput:
    shortened = [link for link in find_links(content) if is_shortened(link)]
    if not shortened:
        return EMPTY_OUTPUT
    indicator = Indicator(
        type="suspicious_links",
        severity="high",
        description="Suspicious shortened URLs detected",
        details=f"Found {len(shortened)} suspicious link(s)",
    )
    return DetectorOutput(RULE_WEIGHTS["shortened_url"], (indicator,))


def detect_urgency(*, content: str, subject: str, sender: str, domain: str) -> DetectorOutput:
    words = match_urgency_words(content, subject)
    if not words:
        return EMPTY_OUTPUT
    indicator = Indicator(
        type="urgency",
        severity="high" if len(words) > 2 else "medium",
        description="High urgency language detected",
        details=f"Contains {len(words)} urgency indicator(s)",
    )
    return DetectorOutput(RULE_WEIGHTS["urgency"] * len(words), (indicator,))


def detect_sender_reputation(*, content: str, subject: str, sender: str, domain: str) -> DetectorOutput:
    rep = resolve_domain(sender)
    if rep.verified:
        return EMPTY_OUTPUT
    suspicious = rep.reputation == "suspicious"
    indicator = Indicator(
        type="sender",
        severity="high" if suspicious else "medium",
        description="Unverified sender",
        details=f"Sender domain {domain} has {rep.reputation} reputation",
    )
    weight = RULE_WEIGHTS["suspicious_sender"] if suspicious else RULE_WEIGHTS["unverified_sender"]
    return DetectorOutput(weight, (indicator,))


def detect_grammar(*, content: str, subject: str, sender: str, domain: str) -> DetectorOutput:
    issues = count_grammar_issues(content)
    if issues <= GRAMMAR_ISSUE_THRESHOLD:
        return EMPTY_OUTPUT
    indicator = Indicator(
        type="grammar",
        severity="medium",
        description="Poor grammar and spelling",
        details=f"Detected {issues} potential grammar/spelling issues",
    )
    return DetectorOutput(RULE_WEIGHTS["grammar"], (indicator,))


# Evaluation order fixes the order of indicators in the result.
BASE_DETECTORS: Tuple[Detector, ...] = (
    detect_phishing_keywords,
    detect_suspicious_links,
    detect_urgency,
    detect_sender_reputation,
    detect_grammar,
)


@dataclass(frozen=True)
class Decision:
    score: int
    risk_level: str
    indicators: List[Indicator]
    sender_analysis: SenderAnalysis
    content_analysis: ContentAnalysis


def analyze_content(content: str, subject: str) -> ContentAnalysis:
    return ContentAnalysis(
        suspicious_words=match_phishing_keywords(content, subject),
        urgency_level=len(match_urgency_words(content, subject)),
        link_count=len(find_links(content)),
        attachment_count=len(ATTACHMENT_RE.findall(content)),
    )


def score_email(*, sender: str, subject: str, content: str,
                detectors: Tuple[Detector, ...] = BASE_DETECTORS) -> Decision:
    """
    Score an email with the base detector suite.

    Args:
        sender: Sender address or display string with email
        subject: Email subject
        content: Plain-text body
        detectors: Optional override for BASE_DETECTORS

    Returns:
        Decision with clamped score, base-pipeline risk tier, indicators and
        the sender/content summaries
    """
    sender, subject, content = sender or "", subject or "", content or ""
    domain = extract_domain(sender)

    score, indicators = aggregate(
        d(content=content, subject=subject, sender=sender, domain=domain) for d in detectors
    )

    return Decision(
        score=score,
        risk_level=risk_level_for(score, BASE_THRESHOLDS),
        indicators=indicators,
        sender_analysis=resolve_domain(sender).as_sender_analysis(),
        content_analysis=analyze_content(content, subject),
    )
