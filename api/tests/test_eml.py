import pytest

from spamguard.pipeline.eml import (
    EmlFormatError,
    extract_email_address,
    is_eml_file,
    parse_eml,
    require_fields,
)


def test_headers_are_folded_and_lower_cased():
    raw = (
        "From: Alice Example <alice@example.com>\n"
        "Subject: Quarterly\n"
        "\treport\n"
        "X-Mailer: test\n"
        "\n"
        "Numbers attached."
    )
    parsed = parse_eml(raw)
    assert parsed.sender == "alice@example.com"
    assert parsed.subject == "Quarterly report"
    assert parsed.headers["x-mailer"] == "test"
    assert parsed.content == "Numbers attached."


def test_body_is_decoded_and_stripped():
    raw = "From: a@b.com\r\nSubject: Menu\r\n\r\nCaf=C3=A9 is open=\r\nnow.<br><b>Bold</b> &amp; more\r\n"
    parsed = parse_eml(raw)
    assert parsed.content == "Café is opennow. Bold & more"


def test_sender_header_fallback_and_bare_addresses():
    parsed = parse_eml("Sender: bob@example.com (Bob)\nSubject: x\n\nbody")
    assert parsed.sender == "bob@example.com"
    assert extract_email_address("Carol <carol@example.com>") == "carol@example.com"
    assert extract_email_address("  not an address ") == "not an address"


def test_malformed_input_never_raises():
    parsed = parse_eml("just some text without headers")
    assert parsed.sender == ""
    assert parsed.subject == ""
    assert parsed.content == ""
    assert parsed.headers == {}
    assert parse_eml("").headers == {}


def test_require_fields_reports_what_is_missing():
    with pytest.raises(EmlFormatError) as exc:
        require_fields(parse_eml("just some text"))
    assert exc.value.missing == ["headers"]

    with pytest.raises(EmlFormatError) as exc:
        require_fields(parse_eml("From: a@b.com\nSubject: empty\n\n"))
    assert exc.value.missing == ["content"]

    parsed = require_fields(parse_eml("From: a@b.com\nSubject: Hi\n\nHello world"))
    assert parsed.content == "Hello world"


def test_is_eml_file():
    assert is_eml_file("Invoice.EML")
    assert is_eml_file("blob.bin", "message/rfc822")
    assert not is_eml_file("notes.txt", "text/plain")
