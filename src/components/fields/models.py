"""
Field registry models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Literal

FieldValueType = Literal["text", "multiline", "phone", "email", "url"]


class FieldKey(str, Enum):
    """Closed set of semantic contact attributes an element can bind to."""

    NAME = "name"
    NAME_EN = "nameEn"
    JOB_TITLE = "jobTitle"
    COMPANY = "company"
    DEPARTMENT = "department"
    PHONE = "phone"
    WORK_PHONE = "workPhone"
    PERSONAL_PHONE = "personalPhone"
    EMAIL = "email"
    WORK_EMAIL = "workEmail"
    PERSONAL_EMAIL = "personalEmail"
    ADDRESS = "address"
    COMPANY_LOGO = "companyLogo"
    PROFILE_IMAGE = "profileImage"
    WEBSITE = "socialLinks.website"
    LINKEDIN = "socialLinks.linkedin"
    TWITTER = "socialLinks.twitter"
    FACEBOOK = "socialLinks.facebook"
    INSTAGRAM = "socialLinks.instagram"
    LINE = "socialLinks.line"
    TIKTOK = "socialLinks.tiktok"
    YOUTUBE = "socialLinks.youtube"
    GITHUB = "socialLinks.github"


@dataclass(frozen=True)
class FieldSpec:
    """Registry entry: how a semantic key reads from a card."""

    key: FieldKey
    value_type: FieldValueType
    card_path: str
    label: str


@dataclass(frozen=True)
class MalformedFieldValue:
    """A field_values entry that could not be used. Reported, never raised."""

    element_id: str
    reason: str
    raw_type: str = ""


@dataclass(frozen=True)
class FieldValues:
    """
    Per-card element overrides, split by how they may be used.

    - known: element id -> literal string, only for ids in the bound template
    - unknown: entries for ids the template does not have (kept, not read)
    - malformed: entries whose value is not a string
    """

    known: dict[str, str] = field(default_factory=dict)
    unknown: dict[str, Any] = field(default_factory=dict)
    malformed: tuple[MalformedFieldValue, ...] = ()

    def value_for(self, element_id: str) -> str:
        return self.known.get(element_id, "")
