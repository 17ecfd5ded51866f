"""
Contact component - vCard export.

Serializes a card into a vCard 3.0 payload for address-book apps.

Invariants:
- Payload begins with exactly one BEGIN:VCARD and ends with exactly one
  END:VCARD, every line terminated by CRLF, even for malformed input.
- Properties without a value are omitted; FN is mandatory and falls back to
  a placeholder name.
- Values are escaped (backslash, comma, semicolon, newline).
"""

from __future__ import annotations

import re

from src.components.binding.models import RenderTree
from src.components.fields import FIELD_REGISTRY, FieldKey, lookup_field, read_card_field
from src.core.entities import BusinessCard

from .models import ContactPayload, FormatContactInput

CRLF = "\r\n"
BEGIN = "BEGIN:VCARD"
END = "END:VCARD"
VERSION = "VERSION:3.0"
DEFAULT_PLACEHOLDER_NAME = "Unnamed Card"

# Social links emitted as URL lines, website first
URL_FIELDS: tuple[FieldKey, ...] = (
    FieldKey.WEBSITE,
    FieldKey.LINKEDIN,
    FieldKey.TWITTER,
    FieldKey.FACEBOOK,
    FieldKey.INSTAGRAM,
    FieldKey.TIKTOK,
    FieldKey.YOUTUBE,
    FieldKey.GITHUB,
)

_LINE_BREAKS = re.compile(r"\r\n|\r|\n")


def escape_value(value: str) -> str:
    """Escape a property value per vCard 3.0 text rules."""
    value = value.replace("\\", "\\\\")
    value = value.replace(";", "\\;").replace(",", "\\,")
    return _LINE_BREAKS.sub("\\\\n", value.strip())


def uri_value(value: str) -> str:
    """URI values are not text-escaped; only line breaks are removed."""
    return _LINE_BREAKS.sub("", value.strip())


def structured_name(name: str) -> str:
    """N property: family;given;additional;prefix;suffix."""
    parts = name.split()
    if not parts:
        return ";;;;"
    family = parts[-1]
    given = " ".join(parts[:-1])
    return f"{escape_value(family)};{escape_value(given)};;;"


def contact_values(card: BusinessCard, render_tree: RenderTree | None = None) -> dict[FieldKey, str]:
    """
    Collect contact values by registry key.

    Plain card attributes come first; when a RenderTree is given, per-card
    element overrides bound to a field replace them so the contact file
    matches what is printed on the card.
    """
    values = {key: read_card_field(card, spec) for key, spec in FIELD_REGISTRY.items()}

    if render_tree is not None:
        for element in render_tree.elements:
            if element.source != "field_value":
                continue
            spec = lookup_field(element.field)
            if spec is not None and element.resolved_content.strip():
                values[spec.key] = element.resolved_content

    return {k: v.strip() for k, v in values.items() if v and v.strip()}


def build_lines(values: dict[FieldKey, str], placeholder_name: str) -> list[str]:
    name = values.get(FieldKey.NAME) or values.get(FieldKey.NAME_EN) or placeholder_name
    lines = [
        BEGIN,
        VERSION,
        f"FN:{escape_value(name)}",
        f"N:{structured_name(name)}",
    ]

    def add(prop: str, key: FieldKey) -> None:
        if key in values:
            lines.append(f"{prop}:{escape_value(values[key])}")

    add("ORG", FieldKey.COMPANY)
    add("TITLE", FieldKey.JOB_TITLE)

    work_phone = values.get(FieldKey.WORK_PHONE) or values.get(FieldKey.PHONE)
    if work_phone:
        lines.append(f"TEL;TYPE=WORK:{escape_value(work_phone)}")
    add("TEL;TYPE=CELL", FieldKey.PERSONAL_PHONE)

    add("EMAIL", FieldKey.EMAIL)
    add("EMAIL;TYPE=WORK", FieldKey.WORK_EMAIL)
    add("EMAIL;TYPE=HOME", FieldKey.PERSONAL_EMAIL)

    if FieldKey.ADDRESS in values:
        lines.append(f"ADR;TYPE=WORK:;;{escape_value(values[FieldKey.ADDRESS])};;;;")

    for key in URL_FIELDS:
        if key in values:
            lines.append(f"URL:{uri_value(values[key])}")

    if FieldKey.DEPARTMENT in values:
        lines.append(f"NOTE:Department: {escape_value(values[FieldKey.DEPARTMENT])}")
    if FieldKey.LINE in values:
        lines.append(f"NOTE:Line ID: {escape_value(values[FieldKey.LINE])}")

    lines.append(END)
    return lines


def ensure_envelope(text: str) -> str:
    """
    Normalize a vCard body to CRLF with exactly one BEGIN and one END marker.

    Tolerates truncated or duplicated markers and mixed line endings.
    """
    body: list[str] = []
    for line in _LINE_BREAKS.split(text):
        stripped = line.strip()
        if not stripped:
            continue
        upper = stripped.upper()
        if upper in (BEGIN, END):
            continue
        body.append(stripped)

    if not any(line.upper().startswith("VERSION:") for line in body):
        body.insert(0, VERSION)

    return CRLF.join([BEGIN, *body, END]) + CRLF


def contact_filename(name: str, placeholder_name: str = DEFAULT_PLACEHOLDER_NAME) -> str:
    base = re.sub(r"[\\/:*?\"<>|]", "", name.strip()) or placeholder_name
    return re.sub(r"\s+", "_", base) + ".vcf"


def format_contact(
    card: BusinessCard,
    render_tree: RenderTree | None = None,
    *,
    placeholder_name: str = DEFAULT_PLACEHOLDER_NAME,
) -> ContactPayload:
    """
    Serialize a card to a vCard payload.

    Args:
        card: Card to export
        render_tree: Optional resolved tree; element overrides win over attributes
        placeholder_name: FN used when the card has no name

    Returns:
        ContactPayload with CRLF-terminated text and a download filename
    """
    values = contact_values(card, render_tree)
    text = ensure_envelope(CRLF.join(build_lines(values, placeholder_name)))
    name = values.get(FieldKey.NAME) or placeholder_name
    return ContactPayload(text=text, filename=contact_filename(name, placeholder_name))


def run(
    inp: FormatContactInput,
    *,
    placeholder_name: str = DEFAULT_PLACEHOLDER_NAME,
) -> ContactPayload:
    """Component entry point."""
    return format_contact(inp.card, inp.render_tree, placeholder_name=placeholder_name)
