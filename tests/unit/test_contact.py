"""
Tests for vCard export.

- Envelope: one BEGIN, one END, CRLF everywhere
- Properties omitted when empty; FN falls back to a placeholder
- Element overrides reach the contact file
"""

from __future__ import annotations

import re

import pytest

from src.components.binding import resolve
from src.components.contact import (
    FormatContactInput,
    contact_filename,
    ensure_envelope,
    escape_value,
    format_contact,
    run,
    structured_name,
    uri_value,
)
from src.core.entities import BusinessCard
from tests.factories import make_card, make_template

ENVELOPE = re.compile(r"^BEGIN:VCARD\r\n[\s\S]*\r\nEND:VCARD\r\n$")


class TestEnvelope:
    def test_full_card(self, card: BusinessCard) -> None:
        payload = format_contact(card)
        assert ENVELOPE.match(payload.text)
        assert payload.text.count("END:VCARD\r\n") == 1
        assert payload.text.count("BEGIN:VCARD") == 1

    def test_empty_card(self) -> None:
        payload = format_contact(BusinessCard(id="c-empty"))
        assert ENVELOPE.match(payload.text)
        assert "FN:Unnamed Card" in payload.lines

    def test_no_bare_newlines(self) -> None:
        text = format_contact(make_card(address="1 Road\nBangkok")).text
        assert "\n" not in text.replace("\r\n", "")

    @pytest.mark.parametrize(
        "raw",
        [
            "BEGIN:VCARD\r\nVERSION:3.0\r\nFN:A",
            "BEGIN:VCARD\nFN:A\nEND:VCARD\nEND:VCARD\n",
            "FN:A\r\nEND:VCARD\r\nEND:VCARD\r\n",
        ],
    )
    def test_repairs_truncated_or_doubled(self, raw: str) -> None:
        text = ensure_envelope(raw)
        assert ENVELOPE.match(text)
        assert text.count("END:VCARD") == 1
        assert text.count("BEGIN:VCARD") == 1
        assert "VERSION:3.0\r\n" in text


class TestProperties:
    def test_lines_in_order(self, card: BusinessCard) -> None:
        lines = format_contact(card).lines
        assert lines[:4] == [
            "BEGIN:VCARD",
            "VERSION:3.0",
            "FN:Anan Srisuk",
            "N:Srisuk;Anan;;;",
        ]
        assert "ORG:Acme" in lines
        assert "TITLE:Engineer" in lines
        assert "TEL;TYPE=WORK:+66 2 000 0000" in lines
        assert "EMAIL:anan@example.com" in lines
        assert lines[-1] == "END:VCARD"

    def test_missing_properties_omitted(self) -> None:
        lines = format_contact(make_card(company=None, jobTitle=None, phone=None)).lines
        assert not any(line.startswith(("ORG:", "TITLE:", "TEL")) for line in lines)

    def test_work_phone_preferred(self) -> None:
        lines = format_contact(make_card(workPhone="02-111", personalPhone="089-222")).lines
        assert "TEL;TYPE=WORK:02-111" in lines
        assert "TEL;TYPE=CELL:089-222" in lines

    def test_one_url_per_social_link(self) -> None:
        card = make_card(
            socialLinks={
                "website": "https://anan.dev",
                "linkedin": "https://linkedin.com/in/anan",
                "github": "https://github.com/anan",
            }
        )
        urls = [line for line in format_contact(card).lines if line.startswith("URL:")]
        assert urls == [
            "URL:https://anan.dev",
            "URL:https://linkedin.com/in/anan",
            "URL:https://github.com/anan",
        ]

    def test_notes(self) -> None:
        lines = format_contact(make_card(department="R&D", socialLinks={"line": "anan.s"})).lines
        assert "NOTE:Department: R&D" in lines
        assert "NOTE:Line ID: anan.s" in lines

    def test_address(self) -> None:
        lines = format_contact(make_card(address="1 Road, Bangkok")).lines
        assert "ADR;TYPE=WORK:;;1 Road\\, Bangkok;;;;" in lines

    def test_name_en_fallback(self) -> None:
        lines = format_contact(make_card(name="", nameEn="Anan S")).lines
        assert "FN:Anan S" in lines


class TestOverrides:
    def test_field_value_override_wins(self) -> None:
        template = make_template(
            elements=[{"id": "t1", "type": "text", "field": "jobTitle"}]
        )
        card = make_card(fieldValues={"t1": "Principal Engineer"})
        lines = format_contact(card, resolve(template, card)).lines
        assert "TITLE:Principal Engineer" in lines

    def test_static_content_not_used(self) -> None:
        template = make_template(
            elements=[{"id": "t1", "type": "text", "field": "jobTitle", "content": "Title"}]
        )
        card = make_card()
        lines = format_contact(card, resolve(template, card)).lines
        assert "TITLE:Engineer" in lines


class TestHelpers:
    def test_escape(self) -> None:
        assert escape_value("a,b;c\\d") == "a\\,b\\;c\\\\d"
        assert escape_value("line1\r\nline2") == "line1\\nline2"

    def test_uri_not_text_escaped(self) -> None:
        assert uri_value("https://x.test/a,b;c") == "https://x.test/a,b;c"
        assert uri_value("https://x.test/a\r\nb") == "https://x.test/ab"

    def test_url_line_keeps_commas(self) -> None:
        card = make_card(socialLinks={"website": "https://x.test/a,b;c"})
        assert "URL:https://x.test/a,b;c" in format_contact(card).lines

    def test_structured_name(self) -> None:
        assert structured_name("Anan Srisuk") == "Srisuk;Anan;;;"
        assert structured_name("Cher") == "Cher;;;;"
        assert structured_name("") == ";;;;"

    def test_filename(self) -> None:
        assert contact_filename("Anan Srisuk") == "Anan_Srisuk.vcf"
        assert contact_filename("a/b") == "ab.vcf"
        assert contact_filename("  ") == "Unnamed_Card.vcf"

    def test_payload_metadata(self, card: BusinessCard) -> None:
        payload = run(FormatContactInput(card=card))
        assert payload.mime_type == "text/vcard"
        assert payload.filename == "Anan_Srisuk.vcf"
