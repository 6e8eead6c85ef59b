from fastapi import APIRouter

from ..pipeline.classify import classify_email
from ..schemas import AnalysisResult, EmailIn


router = APIRouter()


@router.post("/analyze", response_model=AnalysisResult)
def analyze(payload: EmailIn) -> AnalysisResult:
    """
    Local + enhanced heuristic analysis.

    Pipeline:
    1. **Local:** base detector suite (keywords, links, urgency, sender, grammar)
    2. **Patterns:** phishing / social-engineering / advanced-threat regex families
    3. **Sentiment:** manipulative and high-pressure wording
    4. **Linguistic:** grammar and machine-translation artifacts
    5. **Domain risk:** reputation tables, optional MX lookup (SPAMGUARD_ENABLE_DNS_CHECKS)

    Returns the same shape as `/scan` with:
    - `spamScore`: max(local score, enhanced confidence)
    - `riskLevel`: safe (<40) | suspicious (<70) | dangerous
    - `indicators`: local indicators, then `ai_detection` findings
    - `analysisMethod`: "ai", or "local" when the enhanced pass failed
    - `confidence`: enhanced confidence (capped at 95), 75 after a fallback

    Example response (truncated):
    ```json
    {
      "spamScore": 100,
      "riskLevel": "dangerous",
      "analysisMethod": "ai",
      "confidence": 95
    }
    ```
    """
    return classify_email(payload, method="ai")
