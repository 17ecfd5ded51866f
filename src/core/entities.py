"""
Domain entities for the card engine.

Templates and business cards arrive from the store as loosely-typed rows
(camelCase from the editor, snake_case from the database). These models
accept both spellings and normalize them into one shape:

- Template / Element / ElementStyle / PaperSpec: layout authored once,
  referenced by many cards (read-only from a card's perspective).
- BusinessCard: owner-edited contact attributes plus per-card overrides
  (field_values, custom_theme, paper_card_settings).
- CardView: append-only view record.

Invariants:
- Element ids are unique within a Template.
- A Card references its Template by id only; template data is never embedded.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, Literal
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator

LengthUnit = Literal["mm", "in", "px", "pt"]
Orientation = Literal["portrait", "landscape"]
ElementType = Literal["text", "textarea", "picture"]
TextAlign = Literal["left", "center", "right"]


class _Entity(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")


# --- Template side ---


class Border(_Entity):
    width: float = 0
    color: str = "#000000"
    radius: float = 0


class ElementStyle(_Entity):
    """Template-authored style of one element. Every field is optional."""

    font_size: float | None = Field(default=None, alias="fontSize")
    font_family: str | None = Field(default=None, alias="fontFamily")
    font_weight: str | None = Field(default=None, alias="fontWeight")
    font_style: str | None = Field(default=None, alias="fontStyle")
    color: str | None = None
    text_align: TextAlign | None = Field(default=None, alias="textAlign")
    background_color: str | None = Field(default=None, alias="backgroundColor")
    background_opacity: float | None = Field(default=None, alias="backgroundOpacity")
    border: Border | None = None
    padding: float | None = None
    opacity: float | None = None
    rotation: float | None = None

    @field_validator("font_weight", mode="before")
    @classmethod
    def _weight_as_str(cls, v: Any) -> Any:
        # Editor stores numeric weights (700) and keywords ("bold") interchangeably
        if isinstance(v, int | float):
            return str(int(v))
        return v


class Element(_Entity):
    """One positioned, styled unit of a template."""

    id: str
    type: ElementType = "text"
    field: str | None = None
    x: float = 0
    y: float = 0
    width: float = 0
    height: float = 0
    style: ElementStyle = Field(default_factory=ElementStyle)
    content: str | None = None
    image_url: str | None = Field(default=None, alias="imageUrl")

    @field_validator("field", "content", "image_url", mode="before")
    @classmethod
    def _blank_to_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v


class Background(_Entity):
    type: Literal["color", "image", "gradient"] = "color"
    color: str | None = "#ffffff"
    image: str | None = None
    gradient_colors: tuple[str, ...] = Field(default=(), alias="gradientColors")


class PaperSpec(_Entity):
    """
    Template paper definition.

    ``unit`` applies to the paper size and to every element geometry.
    """

    size: str = "Business Card"
    width: float = 90
    height: float = 55
    unit: LengthUnit = "mm"
    orientation: Orientation = "landscape"
    background: Background = Field(default_factory=Background)


class Template(_Entity):
    id: str
    name: str = ""
    paper: PaperSpec = Field(default_factory=PaperSpec)
    elements: tuple[Element, ...] = ()

    @field_validator("elements")
    @classmethod
    def _unique_element_ids(cls, v: tuple[Element, ...]) -> tuple[Element, ...]:
        seen: set[str] = set()
        for element in v:
            if element.id in seen:
                raise ValueError(f"Duplicate element id in template: {element.id}")
            seen.add(element.id)
        return v


# --- Card side ---


class SocialLinks(_Entity):
    """Social profile links. Unknown networks are kept but never interpreted."""

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="allow")

    website: str | None = None
    linkedin: str | None = None
    twitter: str | None = None
    facebook: str | None = None
    instagram: str | None = None
    line: str | None = None
    tiktok: str | None = None
    youtube: str | None = None
    github: str | None = None


class ThemeColors(_Entity):
    primary: str | None = None
    secondary: str | None = None
    background: str | None = None
    text: str | None = None
    accent: str | None = None


class ThemeFonts(_Entity):
    primary: str | None = None
    secondary: str | None = None


class ThemeLayout(_Entity):
    type: str | None = None
    logo_position: str | None = Field(default=None, alias="logoPosition")
    text_alignment: TextAlign | None = Field(default=None, alias="textAlignment")


class ThemeBorder(_Entity):
    enabled: bool = False
    color: str = "#000000"
    width: float = 0
    radius: float = 0


class ThemeEffects(_Entity):
    border: ThemeBorder | None = None


class CustomTheme(_Entity):
    """Partial, card-wide style override. Unset parts fall through."""

    name: str | None = None
    colors: ThemeColors = Field(default_factory=ThemeColors)
    fonts: ThemeFonts = Field(default_factory=ThemeFonts)
    layout: ThemeLayout = Field(default_factory=ThemeLayout)
    effects: ThemeEffects = Field(default_factory=ThemeEffects)


class PaperSize(_Entity):
    name: str | None = None
    width: float = 210
    height: float = 297
    unit: LengthUnit = "mm"


class PrintSettings(_Entity):
    """Bleed and safe area are expressed in the paper size unit."""

    bleed: float = 0
    safe_area: float = Field(default=0, alias="safeArea")
    resolution: int = 300


class Margins(_Entity):
    top: float = 0
    right: float = 0
    bottom: float = 0
    left: float = 0


class PaperLayout(_Entity):
    orientation: Orientation = "portrait"
    margins: Margins = Field(default_factory=Margins)


class PaperCardSettings(_Entity):
    size: PaperSize = Field(default_factory=PaperSize)
    print_settings: PrintSettings = Field(default_factory=PrintSettings, alias="printSettings")
    layout: PaperLayout = Field(default_factory=PaperLayout)


class BusinessCard(_Entity):
    """
    A user's card.

    ``field_values`` maps element id to a literal override and is kept as the
    raw map from the store; the fields component classifies it at resolution
    time.
    """

    id: str
    user_id: str | None = Field(default=None, alias="userId")
    name: str = ""
    name_en: str | None = Field(default=None, alias="nameEn")
    job_title: str | None = Field(default=None, alias="jobTitle")
    company: str | None = None
    department: str | None = None
    phone: str | None = None
    work_phone: str | None = Field(default=None, alias="workPhone")
    personal_phone: str | None = Field(default=None, alias="personalPhone")
    email: str | None = None
    work_email: str | None = Field(default=None, alias="workEmail")
    personal_email: str | None = Field(default=None, alias="personalEmail")
    address: str | None = None
    social_links: SocialLinks = Field(default_factory=SocialLinks, alias="socialLinks")
    company_logo_url: str | None = Field(default=None, alias="companyLogoUrl")
    profile_image_url: str | None = Field(default=None, alias="profileImageUrl")
    template_id: str | None = Field(default=None, alias="templateId")
    field_values: dict[str, Any] = Field(default_factory=dict, alias="fieldValues")
    custom_theme: CustomTheme | None = Field(default=None, alias="customTheme")
    paper_card_settings: PaperCardSettings | None = Field(
        default=None, alias="paperCardSettings"
    )
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @field_validator("social_links", mode="before")
    @classmethod
    def _null_links(cls, v: Any) -> Any:
        return {} if v is None else v

    @field_validator("field_values", mode="before")
    @classmethod
    def _null_values(cls, v: Any) -> Any:
        return {} if v is None else v


class CardView(_Entity):
    """Append-only record of one public view."""

    id: str = Field(default_factory=lambda: str(uuid4()))
    card_id: str
    viewer_ip: str = "unknown"
    device_info: str = "Unknown Device"
    card_name: str | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
