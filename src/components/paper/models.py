"""
Paper component models.

All geometry on these models is in points (1/72 in).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from src.components.binding.models import RenderTree
from src.core.entities import ElementType, Orientation, PaperCardSettings

ViolationCode = Literal["OUTSIDE_PAGE", "BLEED_INTERSECTION", "OUTSIDE_SAFE_AREA"]


@dataclass(frozen=True)
class Box:
    """Axis-aligned rectangle in points."""

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def contains(self, other: Box) -> bool:
        return (
            other.x >= self.x
            and other.y >= self.y
            and other.right <= self.right
            and other.bottom <= self.bottom
        )

    def intersects(self, other: Box) -> bool:
        return (
            other.x < self.right
            and other.right > self.x
            and other.y < self.bottom
            and other.bottom > self.y
        )

    def inset(self, amount: float) -> Box:
        return Box(
            x=self.x + amount,
            y=self.y + amount,
            width=max(self.width - 2 * amount, 0.0),
            height=max(self.height - 2 * amount, 0.0),
        )


@dataclass(frozen=True)
class PrintSafetyViolation:
    """Element placement problem. Reported alongside a valid layout, never raised."""

    element_id: str
    code: ViolationCode
    message: str


@dataclass(frozen=True)
class PrintElement:
    id: str
    type: ElementType
    box: Box
    content: str
    raster_width_px: int | None = None
    raster_height_px: int | None = None


@dataclass(frozen=True)
class PrintLayout:
    """Print-ready, unit-normalized page."""

    card_id: str
    template_id: str
    orientation: Orientation
    page: Box
    bleed_pt: float
    safe_area_pt: float
    printable_width_pt: float
    printable_height_pt: float
    dpi: int
    elements: tuple[PrintElement, ...]
    violations: tuple[PrintSafetyViolation, ...] = ()

    @property
    def is_print_safe(self) -> bool:
        return not self.violations


# --- Input / Output ---


@dataclass(frozen=True)
class ComputePrintLayoutInput:
    render_tree: RenderTree
    settings: PaperCardSettings | None = None


@dataclass(frozen=True)
class ComputePrintLayoutOutput:
    layout: PrintLayout
    violations: list[PrintSafetyViolation] = field(default_factory=list)
    success: bool = True
