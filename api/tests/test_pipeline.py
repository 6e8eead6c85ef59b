import json

import pytest

import spamguard.ai_service.service as svc
import spamguard.pipeline.classify as classify_mod
from spamguard.config import Settings
from spamguard.pipeline.classify import classify_email
from spamguard.pipeline.eml import parse_eml
from spamguard.pipeline.reputation import DomainLookupError


OFFLINE = Settings(enable_dns_checks=False)
PHISH = {
    "sender": "noreply@urgent-security-alert.com",
    "subject": "Action required",
    "content": "URGENT: verify account immediately, click here now, account suspended 24 hours",
}
NEUTRAL = {"sender": "friend@gmail.com", "subject": "Lunch", "content": "See you at noon."}


def test_local_confidence_is_constant():
    for payload in (PHISH, NEUTRAL, {"sender": "", "subject": "", "content": ""}):
        out = classify_email(payload)
        assert out.analysis_method == "local"
        assert out.confidence == 75
        assert 0 <= out.spam_score <= 100


def test_phishing_template_dangerous_under_both_methods():
    assert classify_email(PHISH, method="local").risk_level == "dangerous"
    out = classify_email(PHISH, method="ai", settings=OFFLINE)
    assert out.risk_level == "dangerous"
    assert out.analysis_method == "ai"


def test_enhanced_confidence_varies_with_content():
    high = classify_email(PHISH, method="ai", settings=OFFLINE).confidence
    low = classify_email(NEUTRAL, method="ai", settings=OFFLINE).confidence
    assert high != low
    assert 0 <= low < high <= 100


def test_detector_failure_falls_back_to_local(monkeypatch):
    def broken(content):
        raise RuntimeError("detector exploded")

    monkeypatch.setattr(svc, "analyze_sentiment", broken)
    out = classify_email(PHISH, method="ai", settings=OFFLINE)
    assert out.analysis_method == "local"
    assert out.confidence == 75
    assert out == classify_email(PHISH, method="local")
    assert all(i.type != "ai_detection" for i in out.indicators)


def test_dns_outage_falls_back_to_local(monkeypatch):
    def unreachable(domain, timeout):
        raise DomainLookupError("no nameservers")

    monkeypatch.setattr(svc, "has_mx_record", unreachable)
    out = classify_email(
        {"sender": "bob@example.org", "subject": "Notes", "content": "See you at noon."},
        method="ai",
        settings=Settings(enable_dns_checks=True),
    )
    assert out.analysis_method == "local"
    assert out.confidence == 75


def test_fallback_is_logged(monkeypatch, caplog):
    def broken(email, base, settings):
        raise RuntimeError("boom")

    monkeypatch.setattr(classify_mod, "analyze_email", broken)
    with caplog.at_level("WARNING", logger="spamguard.pipeline.classify"):
        out = classify_email(NEUTRAL, method="ai", settings=OFFLINE)
    assert out.analysis_method == "local"
    assert "falling back to local" in caplog.text


def test_unknown_method_is_rejected():
    with pytest.raises(ValueError):
        classify_email(NEUTRAL, method="ml")


def test_results_are_repeatable_and_serializable():
    for method in ("local", "ai"):
        first = classify_email(PHISH, method=method, settings=OFFLINE)
        second = classify_email(PHISH, method=method, settings=OFFLINE)
        assert first == second

        data = json.loads(first.model_dump_json(by_alias=True))
        assert set(data) == {
            "spamScore",
            "riskLevel",
            "indicators",
            "senderAnalysis",
            "contentAnalysis",
            "analysisMethod",
            "confidence",
        }
        assert set(data["contentAnalysis"]) == {
            "suspiciousWords",
            "urgencyLevel",
            "linkCount",
            "attachmentCount",
        }


def test_minimal_eml_round_trip_is_safe():
    parsed = parse_eml("From: a@b.com\nSubject: Hi\n\nHello world")
    assert parsed.sender == "a@b.com"
    assert parsed.subject == "Hi"

    out = classify_email({"sender": parsed.sender, "subject": parsed.subject, "content": parsed.content})
    assert out.risk_level == "safe"
    assert out.sender_analysis.domain == "b.com"
