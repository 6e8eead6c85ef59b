"""
Enhanced analysis: a second heuristic pass that reasons like a reviewer.

Pattern families, sentiment, linguistic cues and domain risk are layered on
top of the local score to produce a confidence, a verdict and a short
reasoning. Nothing here is a trained model. The only network access is the
optional MX lookup; its failures propagate so the orchestrator can fall back
to the local result.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Tuple

from ..config import Settings, get_settings
from ..pipeline.deterministic import Decision, count_grammar_issues
from ..pipeline.lexicon import (
    ADVANCED_THREAT_PATTERNS,
    PHISHING_PATTERNS,
    SENTIMENT_FEAR_WORDS,
    SENTIMENT_MANIPULATIVE_WORDS,
    SENTIMENT_URGENT_WORDS,
    SOCIAL_ENGINEERING_PATTERNS,
    TRANSLATION_ARTIFACT_PATTERNS,
)
from ..pipeline.reputation import has_mx_record, resolve_domain
from ..pipeline.scoring import (
    ENHANCED_THRESHOLDS,
    combined_score,
    enhanced_confidence,
    is_spam,
    risk_level_for,
)
from ..schemas import AnalysisResult, EmailIn, EnhancedVerdict, Indicator

logger = logging.getLogger(__name__)

ENHANCED_WEIGHTS = {
    "phishing_patterns": 15,
    "social_engineering": 12,
    "advanced_threat": 20,
    "manipulative": 10,
    "pressure": 8,
    "grammar": 5,
    "translation": 7,
    "missing_mx": 10,
}

LINGUISTIC_GRAMMAR_THRESHOLD = 2

# (delta, human readable factor)
RiskFactor = Tuple[int, str]


@dataclass(frozen=True)
class PatternProfile:
    has_phishing_patterns: bool
    has_social_engineering: bool
    has_advanced_threats: bool


@dataclass(frozen=True)
class SentimentProfile:
    is_manipulative: bool
    is_urgent: bool
    uses_fear: bool
    sentiment_score: int


@dataclass(frozen=True)
class LinguisticProfile:
    has_grammar_issues: bool
    has_translation_artifacts: bool
    grammar_score: int
    translation_score: int


# ---- Enhanced detectors ----

def detect_advanced_patterns(subject: str, content: str) -> PatternProfile:
    full_text = f"{subject} {content}"
    return PatternProfile(
        has_phishing_patterns=any(p.search(full_text) for p in PHISHING_PATTERNS),
        has_social_engineering=any(p.search(full_text) for p in SOCIAL_ENGINEERING_PATTERNS),
        has_advanced_threats=any(p.search(full_text) for p in ADVANCED_THREAT_PATTERNS),
    )


def analyze_sentiment(content: str) -> SentimentProfile:
    low = content.lower()
    urgent = sum(1 for w in SENTIMENT_URGENT_WORDS if w in low)
    manipulative = sum(1 for w in SENTIMENT_MANIPULATIVE_WORDS if w in low)
    fear = sum(1 for w in SENTIMENT_FEAR_WORDS if w in low)
    return SentimentProfile(
        is_manipulative=manipulative >= 2,
        is_urgent=urgent >= 2,
        uses_fear=fear >= 1,
        sentiment_score=urgent + manipulative + fear,
    )


def analyze_linguistic_features(content: str) -> LinguisticProfile:
    grammar = count_grammar_issues(content, check_terminal=False)
    translation = sum(len(p.findall(content)) for p in TRANSLATION_ARTIFACT_PATTERNS)
    return LinguisticProfile(
        has_grammar_issues=grammar > LINGUISTIC_GRAMMAR_THRESHOLD,
        has_translation_artifacts=translation > 0,
        grammar_score=grammar,
        translation_score=translation,
    )


def assess_domain_risk(sender: str, settings: Settings) -> List[RiskFactor]:
    """
    Domain reputation risk, plus the MX check when DNS checks are enabled.
    Raises DomainLookupError when DNS cannot answer.
    """
    rep = resolve_domain(sender)
    factors: List[RiskFactor] = []
    if rep.is_suspicious:
        factors.append((rep.risk_score, f"Domain reputation: {rep.reason}"))
    if settings.enable_dns_checks and rep.domain and not rep.verified:
        if not has_mx_record(rep.domain, settings.dns_timeout_seconds):
            factors.append((ENHANCED_WEIGHTS["missing_mx"], "Sender domain publishes no MX record"))
    return factors


# ---- Verdict helpers ----

def _collect_risk_factors(email: EmailIn, settings: Settings) -> Tuple[List[RiskFactor], List[str], PatternProfile]:
    patterns = detect_advanced_patterns(email.subject, email.content)
    sentiment = analyze_sentiment(email.content)
    linguistic = analyze_linguistic_features(email.content)

    factors: List[RiskFactor] = []
    categories: List[str] = []

    if patterns.has_phishing_patterns:
        factors.append((ENHANCED_WEIGHTS["phishing_patterns"], "Advanced phishing patterns detected"))
        categories.append("phishing")
    if patterns.has_social_engineering:
        factors.append((ENHANCED_WEIGHTS["social_engineering"], "Social engineering tactics identified"))
        categories.append("social_engineering")
    if patterns.has_advanced_threats:
        factors.append((ENHANCED_WEIGHTS["advanced_threat"], "Sophisticated threat indicators found"))
        categories.append("advanced_threat")

    if sentiment.is_manipulative:
        factors.append((ENHANCED_WEIGHTS["manipulative"], "Manipulative language patterns"))
    if sentiment.is_urgent:
        factors.append((ENHANCED_WEIGHTS["pressure"], "High-pressure psychological tactics"))
    if sentiment.uses_fear:
        logger.debug(f"Fear language present (sentiment_score={sentiment.sentiment_score})")

    if linguistic.has_grammar_issues:
        factors.append((ENHANCED_WEIGHTS["grammar"], "Suspicious grammar patterns"))
    if linguistic.has_translation_artifacts:
        factors.append((ENHANCED_WEIGHTS["translation"], "Possible machine translation artifacts"))

    factors.extend(assess_domain_risk(email.sender, settings))
    return factors, categories, patterns


def generate_reasoning(spam: bool, confidence: int, risk_factors: List[str], patterns: PatternProfile) -> str:
    if not spam:
        return (
            f"AI analysis indicates legitimate email with {confidence}% confidence. "
            "No significant threat patterns detected. Content appears to follow normal "
            "communication patterns without suspicious indicators."
        )
    primary = risk_factors[:3]
    if patterns.has_phishing_patterns:
        family = "phishing attacks"
    elif patterns.has_social_engineering:
        family = "social engineering"
    else:
        family = "spam campaigns"
    return (
        f"AI analysis detected {len(primary)} critical risk factors with {confidence}% confidence. "
        f"Primary concerns: {', '.join(primary)}. "
        f"The email exhibits patterns consistent with {family}."
    )


def _verdict_severity(confidence: int) -> str:
    if confidence > 80:
        return "high"
    if confidence > 60:
        return "medium"
    return "low"


# ---- Public API ----

def analyze_enhanced(email: EmailIn, base: Decision, settings: Settings | None = None) -> EnhancedVerdict:
    """Run the enhanced detectors on top of the local score and return the verdict."""
    settings = settings or get_settings()
    factors, categories, patterns = _collect_risk_factors(email, settings)

    confidence = enhanced_confidence(base.score, (delta for delta, _ in factors))
    spam = is_spam(confidence)
    if not spam:
        categories.append("legitimate")

    risk_factors = [factor for _, factor in factors]
    return EnhancedVerdict(
        is_spam=spam,
        confidence=confidence,
        reasoning=generate_reasoning(spam, confidence, risk_factors, patterns),
        categories=categories,
        risk_factors=risk_factors,
    )


def build_enhanced_result(base: Decision, verdict: EnhancedVerdict) -> AnalysisResult:
    """
    Merge the enhanced verdict into the local decision.

    Indicators keep the local ones first, then one summary indicator when the
    verdict is spam, then one indicator per risk factor.
    """
    indicators: List[Indicator] = list(base.indicators)
    if verdict.is_spam:
        indicators.append(
            Indicator(
                type="ai_detection",
                severity=_verdict_severity(verdict.confidence),
                description="AI-powered threat detection",
                details=verdict.reasoning,
            )
        )
    for factor in verdict.risk_factors:
        indicators.append(
            Indicator(type="ai_detection", severity="medium", description="AI Risk Factor", details=factor)
        )

    score = combined_score(base.score, verdict.confidence)
    return AnalysisResult(
        spam_score=score,
        risk_level=risk_level_for(score, ENHANCED_THRESHOLDS),
        indicators=indicators,
        sender_analysis=base.sender_analysis,
        content_analysis=base.content_analysis,
        analysis_method="ai",
        confidence=verdict.confidence,
    )


def analyze_email(email: EmailIn, base: Decision, settings: Settings | None = None) -> AnalysisResult:
    """Enhanced analysis of one email. Exceptions propagate to the caller."""
    verdict = analyze_enhanced(email, base, settings)
    logger.debug(
        f"Enhanced verdict: spam={verdict.is_spam} confidence={verdict.confidence} "
        f"categories={verdict.categories}"
    )
    return build_enhanced_result(base, verdict)
