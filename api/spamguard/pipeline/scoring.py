"""
Score aggregation and risk tiers.

Detector outputs are reduced into one score; the score is clamped and mapped
to a risk tier. The local and enhanced pipelines use different tier
thresholds and existing callers rely on both, so they are kept separate.
"""

from dataclasses import dataclass, field
from functools import reduce
from typing import Iterable, List, Tuple

from ..schemas import Indicator

MAX_SCORE = 100

# (suspicious_at, dangerous_at)
BASE_THRESHOLDS: Tuple[int, int] = (30, 60)
ENHANCED_THRESHOLDS: Tuple[int, int] = (40, 70)

# Enhanced confidence never claims certainty.
ENHANCED_CONFIDENCE_CAP = 95
SPAM_CONFIDENCE_THRESHOLD = 50

# Confidence reported by the local method; reflects the method, not the score.
LOCAL_CONFIDENCE = 75


@dataclass(frozen=True)
class DetectorOutput:
    score: int = 0
    indicators: Tuple[Indicator, ...] = field(default_factory=tuple)


EMPTY_OUTPUT = DetectorOutput()


def clamp_score(score: int, upper: int = MAX_SCORE) -> int:
    return max(0, min(int(score), upper))


def _merge(acc: DetectorOutput, out: DetectorOutput) -> DetectorOutput:
    return DetectorOutput(score=acc.score + out.score, indicators=acc.indicators + out.indicators)


def aggregate(outputs: Iterable[DetectorOutput]) -> Tuple[int, List[Indicator]]:
    """Sum detector deltas (clamped to 0..100) and concatenate indicators in order."""
    total = reduce(_merge, outputs, EMPTY_OUTPUT)
    return clamp_score(total.score), list(total.indicators)


def risk_level_for(score: int, thresholds: Tuple[int, int] = BASE_THRESHOLDS) -> str:
    suspicious_at, dangerous_at = thresholds
    if score >= dangerous_at:
        return "dangerous"
    if score >= suspicious_at:
        return "suspicious"
    return "safe"


def enhanced_confidence(base_score: int, deltas: Iterable[int]) -> int:
    """Base score plus every enhanced delta, capped at 95."""
    return clamp_score(base_score + sum(deltas), ENHANCED_CONFIDENCE_CAP)


def is_spam(confidence: int) -> bool:
    return confidence > SPAM_CONFIDENCE_THRESHOLD


def combined_score(base_score: int, confidence: int) -> int:
    """Displayed score of the enhanced pipeline: the larger of both views."""
    return clamp_score(max(base_score, confidence))
