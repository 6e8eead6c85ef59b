from fastapi import APIRouter, HTTPException

from ..pipeline.classify import classify_email
from ..pipeline.eml import EmlFormatError, parse_eml, require_fields
from ..schemas import AnalysisResult, EmailIn, EmlIn, ParsedEmail

router = APIRouter()


@router.post("", response_model=AnalysisResult)
def scan(payload: EmailIn) -> AnalysisResult:
    """
    Local rule-based spam analysis.

    Runs the base detector suite only; no network access.

    Detection features:
    - Phishing keyword lexicon (subject + body)
    - Shortened URLs (bit.ly, tinyurl.com, goo.gl, t.co)
    - Urgency language
    - Sender domain reputation
    - Grammar / spelling heuristics

    Returns:
    - `spamScore`: 0-100
    - `riskLevel`: safe (<30) | suspicious (<60) | dangerous
    - `indicators`: findings in detector order
    - `confidence`: always 75 for local analysis

    Example request:
    ```json
    {
      "sender": "alert@urgent-security-alert.com",
      "subject": "Urgent: Verify your account",
      "content": "Click here to verify: http://bit.ly/xyz123"
    }
    ```
    """
    return classify_email(payload, method="local")


@router.post("/eml/parse", response_model=ParsedEmail)
def parse(payload: EmlIn) -> ParsedEmail:
    """Extract sender/subject/content from raw .eml text (e.g. to prefill a form)."""
    return _parse_or_422(payload.raw)


@router.post("/eml", response_model=AnalysisResult)
def scan_eml(payload: EmlIn) -> AnalysisResult:
    """Parse raw .eml text and analyze it with the requested method."""
    parsed = _parse_or_422(payload.raw)
    return classify_email(
        EmailIn(sender=parsed.sender, subject=parsed.subject, content=parsed.content),
        method=payload.method,
    )


def _parse_or_422(raw: str) -> ParsedEmail:
    try:
        return require_fields(parse_eml(raw))
    except EmlFormatError as exc:
        raise HTTPException(status_code=422, detail={"error": str(exc), "missing": exc.missing}) from exc
