"""
Binding component models.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from src.components.fields.models import MalformedFieldValue
from src.components.theme.models import EffectiveStyle, PageBackground
from src.core.entities import BusinessCard, ElementType, LengthUnit, Template

ContentSource = Literal["field_value", "content", "field", "empty"]


@dataclass(frozen=True)
class Geometry:
    """Element box in the template's length unit."""

    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class ResolvedElement:
    id: str
    type: ElementType
    geometry: Geometry
    effective_style: EffectiveStyle
    resolved_content: str
    field: str | None = None
    source: ContentSource = "empty"


@dataclass(frozen=True)
class RenderTree:
    """
    Render-ready result of binding a card to a template.

    Elements keep template order (first = bottom of the z-order).
    """

    template_id: str
    card_id: str
    unit: LengthUnit
    paper_width: float
    paper_height: float
    background: PageBackground
    elements: tuple[ResolvedElement, ...]
    warnings: tuple[MalformedFieldValue, ...] = ()

    def element(self, element_id: str) -> ResolvedElement | None:
        for el in self.elements:
            if el.id == element_id:
                return el
        return None


@dataclass(frozen=True)
class NoLayout:
    """Explicit 'no layout' result. Callers render a fallback."""

    card_id: str
    reason: Literal["no_template", "template_unavailable", "template_mismatch"]
    message: str = "Layout unavailable"


# --- Input / Output ---


@dataclass(frozen=True)
class ResolveInput:
    card: BusinessCard
    template: Template | None


@dataclass(frozen=True)
class ResolveOutput:
    render_tree: RenderTree | None
    no_layout: NoLayout | None = None

    @property
    def success(self) -> bool:
        return self.render_tree is not None
