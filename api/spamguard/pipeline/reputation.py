"""
Sender domain reputation.

Classifies the sender's domain as good / unknown / suspicious from static
tables only. The optional MX lookup is the single network-backed check in
the project; it is used by the enhanced pass and always runs with an
explicit timeout.
"""

import logging
import re
from dataclasses import dataclass

import dns.exception
import dns.resolver

from ..schemas import SenderAnalysis
from .lexicon import (
    KNOWN_SUSPICIOUS_DOMAINS,
    MIN_DOMAIN_LENGTH,
    SUSPICIOUS_DOMAIN_PATTERNS,
    TRUSTED_DOMAINS,
    is_numeric_heavy,
)

logger = logging.getLogger(__name__)

_DOMAIN_RE = re.compile(r"@([^>]+)")

# Risk contributed to the enhanced pass, by reason.
KNOWN_SUSPICIOUS_RISK = 25
PATTERN_RISK = 15
STRUCTURE_RISK = 10


class DomainLookupError(RuntimeError):
    """DNS could not answer (timeout, no nameservers, resolver failure)."""


@dataclass(frozen=True)
class DomainReputation:
    domain: str
    reputation: str
    verified: bool
    risk_score: int
    reason: str

    @property
    def is_suspicious(self) -> bool:
        return self.risk_score > 0

    def as_sender_analysis(self) -> SenderAnalysis:
        return SenderAnalysis(domain=self.domain, reputation=self.reputation, verified=self.verified)


def extract_domain(sender: str) -> str:
    """Return the lower-cased domain of a sender string; "" when there is no '@'."""
    match = _DOMAIN_RE.search(sender or "")
    if not match:
        return ""
    return match.group(1).strip().lower()


def resolve_domain(sender: str) -> DomainReputation:
    """
    Classify the sender's domain. Pure function of `sender`; never raises.

    Priority: trusted set, missing domain, known-suspicious set, suspicious
    name patterns, dotless or self-described "suspicious" domains, then
    short or digit-heavy structure. Short or digit-heavy structure alone
    adds risk but leaves the reputation at "unknown".
    """
    domain = extract_domain(sender)

    if domain in TRUSTED_DOMAINS:
        return DomainReputation(domain, "good", True, 0, "trusted domain")
    if not domain:
        return DomainReputation(domain, "suspicious", False, STRUCTURE_RISK, "suspicious domain structure")
    if domain in KNOWN_SUSPICIOUS_DOMAINS:
        return DomainReputation(domain, "suspicious", False, KNOWN_SUSPICIOUS_RISK, "known suspicious domain")
    if any(p.search(domain) for p in SUSPICIOUS_DOMAIN_PATTERNS):
        return DomainReputation(domain, "suspicious", False, PATTERN_RISK, "suspicious domain pattern")
    if "." not in domain or "suspicious" in domain:
        return DomainReputation(domain, "suspicious", False, STRUCTURE_RISK, "suspicious domain structure")
    if len(domain) < MIN_DOMAIN_LENGTH or is_numeric_heavy(domain):
        return DomainReputation(domain, "unknown", False, STRUCTURE_RISK, "suspicious domain structure")
    return DomainReputation(domain, "unknown", False, 0, "unknown domain")


def has_mx_record(domain: str, timeout_seconds: float) -> bool:
    """
    Return True if the domain publishes MX records.

    NXDOMAIN / NoAnswer are answers ("no MX"); every other resolver failure
    raises DomainLookupError so callers can degrade instead of guessing.
    """
    try:
        answers = dns.resolver.resolve(domain, "MX", lifetime=timeout_seconds)
        return len(answers) > 0
    except (dns.resolver.NXDOMAIN, dns.resolver.NoAnswer):
        return False
    except dns.exception.DNSException as exc:
        logger.debug(f"MX lookup for {domain} failed: {exc!r}")
        raise DomainLookupError(f"MX lookup failed for {domain}") from exc
