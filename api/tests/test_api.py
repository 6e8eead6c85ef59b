from fastapi.testclient import TestClient

from spamguard.main import app


client = TestClient(app)

PHISH = {
    "sender": "noreply@urgent-security-alert.com",
    "subject": "Action required",
    "content": "URGENT: verify account immediately, click here now, account suspended 24 hours",
}


def test_health():
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_scan_returns_camel_case_result():
    resp = client.post("/scan", json={"sender": "friend@gmail.com", "subject": "Lunch", "content": "See you at noon."})
    assert resp.status_code == 200
    body = resp.json()
    assert body["spamScore"] == 0
    assert body["riskLevel"] == "safe"
    assert body["analysisMethod"] == "local"
    assert body["confidence"] == 75
    assert body["senderAnalysis"] == {"domain": "gmail.com", "reputation": "good", "verified": True}
    assert body["contentAnalysis"]["suspiciousWords"] == []


def test_ai_analyze_flags_phishing():
    resp = client.post("/ai/analyze", json=PHISH)
    assert resp.status_code == 200
    body = resp.json()
    assert body["riskLevel"] == "dangerous"
    assert body["analysisMethod"] in {"ai", "local"}
    assert any(i["type"] == "phishing" for i in body["indicators"])


def test_scan_eml_round_trip_and_parse():
    raw = "From: a@b.com\nSubject: Hi\n\nHello world"
    resp = client.post("/scan/eml", json={"raw": raw})
    assert resp.status_code == 200
    assert resp.json()["riskLevel"] == "safe"

    resp = client.post("/scan/eml/parse", json={"raw": raw})
    assert resp.status_code == 200
    assert resp.json()["sender"] == "a@b.com"
    assert resp.json()["subject"] == "Hi"


def test_scan_eml_rejects_non_email_text():
    resp = client.post("/scan/eml", json={"raw": "shopping list: eggs"})
    assert resp.status_code == 422
    assert resp.json()["detail"]["missing"] == ["sender", "content"]


def test_unknown_method_is_rejected():
    resp = client.post("/scan/eml", json={"raw": "From: a@b.com\n\nhi", "method": "ml"})
    assert resp.status_code == 422
