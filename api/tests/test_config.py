from spamguard.config import Settings


def test_defaults(monkeypatch):
    for name in ("SPAMGUARD_DEFAULT_METHOD", "SPAMGUARD_ENABLE_DNS_CHECKS", "SPAMGUARD_DNS_TIMEOUT_SECONDS", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    assert Settings.from_env() == Settings()


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("SPAMGUARD_DEFAULT_METHOD", "AI")
    monkeypatch.setenv("SPAMGUARD_ENABLE_DNS_CHECKS", "yes")
    monkeypatch.setenv("SPAMGUARD_DNS_TIMEOUT_SECONDS", "0.5")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    s = Settings.from_env()
    assert s.default_method == "ai"
    assert s.enable_dns_checks is True
    assert s.dns_timeout_seconds == 0.5
    assert s.log_level == "DEBUG"


def test_invalid_values_fall_back(monkeypatch):
    monkeypatch.setenv("SPAMGUARD_DEFAULT_METHOD", "ml")
    monkeypatch.setenv("SPAMGUARD_DNS_TIMEOUT_SECONDS", "soon")
    monkeypatch.setenv("LOG_LEVEL", "verbose")
    s = Settings.from_env()
    assert s.default_method == "local"
    assert s.dns_timeout_seconds == 2.0
    assert s.log_level == "INFO"
