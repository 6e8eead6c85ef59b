from typing import Dict, List, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


IndicatorType = Literal[
    "phishing",
    "suspicious_links",
    "urgency",
    "sender",
    "grammar",
    "attachment",
    "ai_detection",
]
Severity = Literal["low", "medium", "high"]
Reputation = Literal["good", "unknown", "suspicious"]
RiskLevel = Literal["safe", "suspicious", "dangerous"]
AnalysisMethod = Literal["local", "ai"]


class _CamelModel(BaseModel):
    # JSON uses camelCase keys; Python code uses snake_case attributes.
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class EmailIn(_CamelModel):
    """
    Email payload for the scan endpoints and the orchestrator.
    - sender: address or display string ("Name <user@domain>"); not validated,
      malformed senders are scored as suspicious instead of rejected
    - subject/content: plain text, HTML already stripped upstream
    """

    sender: str = ""
    subject: str = ""
    content: str = ""


class EmlIn(_CamelModel):
    """Raw RFC-822 text as read from a .eml file."""

    raw: str
    method: AnalysisMethod = "local"


class Indicator(_CamelModel):
    """One finding from a detector. Never mutated after creation."""

    type: IndicatorType
    severity: Severity
    description: str
    details: str


class SenderAnalysis(_CamelModel):
    domain: str
    reputation: Reputation
    verified: bool


class ContentAnalysis(_CamelModel):
    suspicious_words: List[str] = Field(default_factory=list)
    urgency_level: int = Field(default=0, ge=0)
    link_count: int = Field(default=0, ge=0)
    attachment_count: int = Field(default=0, ge=0)


class AnalysisResult(_CamelModel):
    """
    Output of the classifier, local or enhanced.
    spam_score: 0-100, clamped
    risk_level: safe | suspicious | dangerous (thresholds depend on method)
    confidence: 75 for local analysis, computed for the enhanced pass
    """

    spam_score: int = Field(ge=0, le=100)
    risk_level: RiskLevel
    indicators: List[Indicator]
    sender_analysis: SenderAnalysis
    content_analysis: ContentAnalysis
    analysis_method: AnalysisMethod
    confidence: int = Field(ge=0, le=100)


class EnhancedVerdict(_CamelModel):
    """Intermediate verdict of the enhanced heuristic pass."""

    is_spam: bool
    confidence: int = Field(ge=0, le=100)
    reasoning: str
    categories: List[str]
    risk_factors: List[str]


class ParsedEmail(_CamelModel):
    """Fields extracted from a raw .eml message."""

    sender: str
    subject: str
    content: str
    headers: Dict[str, str]
