"""
Fields component - Semantic field registry.

Defines the closed set of contact attributes a template element can bind to,
how each one reads from a BusinessCard, and how raw per-card field_values
are classified before binding.

Invariants:
- Unknown field keys and unknown element ids are tolerated (schema drift),
  never raised.
- Editor aliases (workPosition, workName, bare social names) normalize to
  registry keys.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any
from urllib.parse import urlparse

from src.core.entities import BusinessCard

from .models import FieldKey, FieldSpec, FieldValues, FieldValueType, MalformedFieldValue

logger = logging.getLogger(__name__)


def _spec(key: FieldKey, value_type: FieldValueType, card_path: str, label: str) -> FieldSpec:
    return FieldSpec(key=key, value_type=value_type, card_path=card_path, label=label)


FIELD_REGISTRY: dict[FieldKey, FieldSpec] = {
    s.key: s
    for s in (
        _spec(FieldKey.NAME, "text", "name", "Name"),
        _spec(FieldKey.NAME_EN, "text", "name_en", "Name (English)"),
        _spec(FieldKey.JOB_TITLE, "text", "job_title", "Job Title"),
        _spec(FieldKey.COMPANY, "text", "company", "Company"),
        _spec(FieldKey.DEPARTMENT, "text", "department", "Department"),
        _spec(FieldKey.PHONE, "phone", "phone", "Phone"),
        _spec(FieldKey.WORK_PHONE, "phone", "work_phone", "Work Phone"),
        _spec(FieldKey.PERSONAL_PHONE, "phone", "personal_phone", "Mobile"),
        _spec(FieldKey.EMAIL, "email", "email", "Email"),
        _spec(FieldKey.WORK_EMAIL, "email", "work_email", "Work Email"),
        _spec(FieldKey.PERSONAL_EMAIL, "email", "personal_email", "Personal Email"),
        _spec(FieldKey.ADDRESS, "multiline", "address", "Address"),
        _spec(FieldKey.COMPANY_LOGO, "url", "company_logo_url", "Company Logo"),
        _spec(FieldKey.PROFILE_IMAGE, "url", "profile_image_url", "Profile Image"),
        _spec(FieldKey.WEBSITE, "url", "social_links.website", "Website"),
        _spec(FieldKey.LINKEDIN, "url", "social_links.linkedin", "LinkedIn"),
        _spec(FieldKey.TWITTER, "url", "social_links.twitter", "Twitter"),
        _spec(FieldKey.FACEBOOK, "url", "social_links.facebook", "Facebook"),
        _spec(FieldKey.INSTAGRAM, "url", "social_links.instagram", "Instagram"),
        _spec(FieldKey.LINE, "text", "social_links.line", "Line ID"),
        _spec(FieldKey.TIKTOK, "url", "social_links.tiktok", "TikTok"),
        _spec(FieldKey.YOUTUBE, "url", "social_links.youtube", "YouTube"),
        _spec(FieldKey.GITHUB, "url", "social_links.github", "GitHub"),
    )
}

# Keys used by the template editor that predate the registry
FIELD_ALIASES: dict[str, FieldKey] = {
    "workPosition": FieldKey.JOB_TITLE,
    "position": FieldKey.JOB_TITLE,
    "workName": FieldKey.COMPANY,
    "workDepartment": FieldKey.DEPARTMENT,
    "dept": FieldKey.DEPARTMENT,
    "mobile": FieldKey.PERSONAL_PHONE,
    "homeEmail": FieldKey.PERSONAL_EMAIL,
    "homeAddress": FieldKey.ADDRESS,
    "workWebsite": FieldKey.WEBSITE,
    "website": FieldKey.WEBSITE,
    "homepage": FieldKey.WEBSITE,
    "linkedin": FieldKey.LINKEDIN,
    "twitter": FieldKey.TWITTER,
    "facebook": FieldKey.FACEBOOK,
    "instagram": FieldKey.INSTAGRAM,
    "line": FieldKey.LINE,
    "lineId": FieldKey.LINE,
    "lineID": FieldKey.LINE,
    "tiktok": FieldKey.TIKTOK,
    "youtube": FieldKey.YOUTUBE,
    "github": FieldKey.GITHUB,
}

URL_SCHEMES = frozenset({"http", "https", "data"})


def lookup_field(raw: str | None) -> FieldSpec | None:
    """
    Resolve a raw element field key to its registry entry.

    Returns None for empty or unknown keys.
    """
    if not raw:
        return None
    try:
        key = FieldKey(raw)
    except ValueError:
        alias = FIELD_ALIASES.get(raw)
        if alias is None:
            return None
        key = alias
    return FIELD_REGISTRY[key]


def read_card_field(card: BusinessCard, spec: FieldSpec) -> str:
    """Read the current value at a field's card path. Missing values read as ''."""
    value: Any = card
    for part in spec.card_path.split("."):
        value = getattr(value, part, None)
        if value is None:
            return ""
    return value if isinstance(value, str) else str(value)


def is_url_value(value: str) -> bool:
    """True for absolute http(s)/data URLs and site-relative paths."""
    if not value:
        return False
    if value.startswith("/") and not value.startswith("//"):
        return True
    parsed = urlparse(value)
    if parsed.scheme not in URL_SCHEMES:
        return False
    return parsed.scheme == "data" or bool(parsed.netloc)


def validate_value(spec: FieldSpec, value: str) -> bool:
    """Check a resolved value against its field type. Empty always passes."""
    if not value:
        return True
    if spec.value_type == "url":
        return is_url_value(value)
    return True


def classify_field_values(
    raw: Mapping[str, Any] | None,
    element_ids: Iterable[str],
) -> FieldValues:
    """
    Split a card's raw field_values by usability for the bound template.

    Unknown element ids are preserved in their own bucket; non-string values
    are reported as malformed and treated as empty.
    """
    if not raw:
        return FieldValues()

    ids = set(element_ids)
    known: dict[str, str] = {}
    unknown: dict[str, Any] = {}
    malformed: list[MalformedFieldValue] = []

    for element_id, value in raw.items():
        if element_id not in ids:
            unknown[element_id] = value
            continue
        if value is None:
            continue
        if not isinstance(value, str):
            malformed.append(
                MalformedFieldValue(
                    element_id=element_id,
                    reason="value is not a string",
                    raw_type=type(value).__name__,
                )
            )
            logger.warning(
                "Ignoring malformed field value for element %s (%s)",
                element_id,
                type(value).__name__,
            )
            continue
        known[element_id] = value

    if unknown:
        logger.debug("Card field_values reference unknown elements: %s", sorted(unknown))

    return FieldValues(known=known, unknown=unknown, malformed=tuple(malformed))
