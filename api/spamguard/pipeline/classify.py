"""
Analysis orchestration.

This module wires the local scorer and the optional enhanced pass into one
entry point returning an `AnalysisResult`. The enhanced pass may fail (a
detector raising, DNS unreachable); that never reaches the caller, the local
result is returned instead.
"""

import logging
from typing import Any, Dict

from ..ai_service.service import analyze_email
from ..config import Settings, get_settings
from ..schemas import AnalysisResult, EmailIn
from .deterministic import Decision, score_email
from .scoring import LOCAL_CONFIDENCE

logger = logging.getLogger(__name__)


# ============================================================================
# Public API
# ============================================================================

def local_result(decision: Decision) -> AnalysisResult:
    return AnalysisResult(
        spam_score=decision.score,
        risk_level=decision.risk_level,
        indicators=decision.indicators,
        sender_analysis=decision.sender_analysis,
        content_analysis=decision.content_analysis,
        analysis_method="local",
        confidence=LOCAL_CONFIDENCE,
    )


def classify_email(payload: Dict[str, Any] | EmailIn, method: str = "local",
                   settings: Settings | None = None) -> AnalysisResult:
    """
    Orchestrate local scoring -> optional enhanced pass.

    Expects keys: sender, subject, content. `method` is "local" or "ai".
    """
    if method not in ("local", "ai"):
        raise ValueError(f"Unknown analysis method: {method!r}")
    email = payload if isinstance(payload, EmailIn) else EmailIn.model_validate(payload)

    decision = score_email(sender=email.sender, subject=email.subject, content=email.content)
    if method == "local":
        return local_result(decision)

    try:
        return analyze_email(email, decision, settings or get_settings())
    except Exception:
        logger.warning("Enhanced analysis failed; falling back to local analysis", exc_info=True)
        # Fresh local run; partial enhanced state is discarded.
        return local_result(score_email(sender=email.sender, subject=email.subject, content=email.content))
