"""
Minimal .eml record extraction.

Line-oriented: headers up to the first blank line, continuation lines folded
into the previous header, header names lower-cased. The body is decoded from
quoted-printable and stripped of HTML tags. Parsing never raises; callers that
need a complete record use `require_fields`.
"""

import html
import quopri
import re
from typing import Dict, List, Optional

from ..schemas import ParsedEmail

_ANGLE_ADDR_RE = re.compile(r"<([^>]+)>")
_BARE_ADDR_RE = re.compile(r"([a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,})")
_TAG_RE = re.compile(r"<[^>]*>")
_WS_RE = re.compile(r"\s+")

EML_CONTENT_TYPE = "message/rfc822"


class EmlFormatError(ValueError):
    """Raw text is not an email, or lacks fields needed for analysis."""

    def __init__(self, missing: List[str]):
        self.missing = missing
        super().__init__(f"Invalid email file: missing {', '.join(missing)}")


def _split_headers(lines: List[str]) -> tuple[Dict[str, str], List[str]]:
    headers: Dict[str, str] = {}
    current: Optional[str] = None
    for index, line in enumerate(lines):
        if not line.strip():
            return headers, lines[index + 1:]
        if line[:1] in (" ", "\t"):
            if current:
                headers[current] += " " + line.strip()
            continue
        name, sep, value = line.partition(":")
        if sep and name.strip():
            current = name.strip().lower()
            headers[current] = value.strip()
    # No blank line: everything was header block.
    return headers, []


def decode_body(body: str) -> str:
    """Undo quoted-printable, drop HTML tags and collapse whitespace."""
    decoded = quopri.decodestring(body.encode("utf-8")).decode("utf-8", errors="replace")
    text = _TAG_RE.sub(" ", decoded)
    return _WS_RE.sub(" ", html.unescape(text)).strip()


def extract_email_address(from_field: str) -> str:
    """Bare address from `Name <addr>` or a raw match; the trimmed field otherwise."""
    match = _ANGLE_ADDR_RE.search(from_field)
    if match:
        return match.group(1).strip()
    match = _BARE_ADDR_RE.search(from_field)
    if match:
        return match.group(1)
    return from_field.strip()


def parse_eml(raw: str) -> ParsedEmail:
    """Extract sender, subject, plain-text content and headers. Never raises."""
    lines = (raw or "").replace("\r\n", "\n").replace("\r", "\n").split("\n")
    headers, body_lines = _split_headers(lines)
    sender = headers.get("from") or headers.get("sender") or ""
    return ParsedEmail(
        sender=extract_email_address(sender),
        subject=headers.get("subject", ""),
        content=decode_body("\n".join(body_lines)),
        headers=headers,
    )


def require_fields(parsed: ParsedEmail) -> ParsedEmail:
    """Raise EmlFormatError unless the record has headers, a sender and a body."""
    if not parsed.headers:
        raise EmlFormatError(["headers"])
    missing = [name for name in ("sender", "content") if not getattr(parsed, name)]
    if missing:
        raise EmlFormatError(missing)
    return parsed


def is_eml_file(filename: str, content_type: str = "") -> bool:
    return filename.lower().endswith(".eml") or content_type == EML_CONTENT_TYPE
