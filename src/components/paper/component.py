"""
Paper component - Print layout for physical cards.

Converts a RenderTree plus PaperCardSettings into absolute page coordinates
in points and reports print-safety problems.

Invariants:
- Units convert with fixed factors: mm 2.8346, in 72, px 0.75, pt 1.
- printable area = page - 2 * bleed - 2 * safe area (per axis, floored at 0).
- Orientation swaps the page width/height when the declared size has the
  other shape; element geometry is never rotated.
- Resolution (dpi) only sizes picture rasters; point geometry ignores it.
- Violations are collected, never raised.
"""

from __future__ import annotations

import logging

from src.components.binding.models import RenderTree, ResolvedElement
from src.core.entities import LengthUnit, Orientation, PaperCardSettings

from .models import (
    Box,
    ComputePrintLayoutInput,
    ComputePrintLayoutOutput,
    PrintElement,
    PrintLayout,
    PrintSafetyViolation,
)

logger = logging.getLogger(__name__)

POINTS_PER_UNIT: dict[str, float] = {
    "mm": 2.8346,
    "in": 72.0,
    "px": 0.75,
    "pt": 1.0,
}

# Named sizes in millimetres, as declared (before orientation)
NAMED_PAPER_SIZES_MM: dict[str, tuple[float, float]] = {
    "A4": (210.0, 297.0),
    "A5": (148.0, 210.0),
    "Business Card": (90.0, 55.0),
    "Business Card (L)": (180.0, 110.0),
}

DEFAULT_PAPER_SETTINGS = PaperCardSettings()


def supported_units() -> tuple[str, ...]:
    return tuple(POINTS_PER_UNIT)


def to_points(value: float, unit: LengthUnit | str) -> float:
    """Convert a length to points."""
    try:
        return value * POINTS_PER_UNIT[unit]
    except KeyError:
        raise ValueError(f"Unsupported length unit: {unit}") from None


def from_points(value: float, unit: LengthUnit | str) -> float:
    """Convert points back to a length unit."""
    try:
        return value / POINTS_PER_UNIT[unit]
    except KeyError:
        raise ValueError(f"Unsupported length unit: {unit}") from None


def page_size_points(settings: PaperCardSettings) -> tuple[float, float]:
    """Page width/height in points after applying orientation."""
    size = settings.size
    if size.name and size.name in NAMED_PAPER_SIZES_MM:
        w_mm, h_mm = NAMED_PAPER_SIZES_MM[size.name]
        width, height = to_points(w_mm, "mm"), to_points(h_mm, "mm")
    else:
        width, height = to_points(size.width, size.unit), to_points(size.height, size.unit)
    return orient(width, height, settings.layout.orientation)


def orient(width: float, height: float, orientation: Orientation) -> tuple[float, float]:
    if orientation == "landscape" and width < height:
        return height, width
    if orientation == "portrait" and width > height:
        return height, width
    return width, height


def element_box(element: ResolvedElement, unit: LengthUnit, settings: PaperCardSettings) -> Box:
    """Absolute element box in points, offset by the page margins."""
    margins = settings.layout.margins
    margin_unit = settings.size.unit
    g = element.geometry
    return Box(
        x=to_points(margins.left, margin_unit) + to_points(g.x, unit),
        y=to_points(margins.top, margin_unit) + to_points(g.y, unit),
        width=to_points(g.width, unit),
        height=to_points(g.height, unit),
    )


def check_print_safety(
    element_id: str,
    box: Box,
    page: Box,
    bleed_pt: float,
    safe_area_pt: float,
) -> PrintSafetyViolation | None:
    """
    Classify one element box against the page bands.

    Only the most severe problem is reported:
    OUTSIDE_PAGE > BLEED_INTERSECTION > OUTSIDE_SAFE_AREA.
    """
    if not page.intersects(box):
        return PrintSafetyViolation(
            element_id=element_id,
            code="OUTSIDE_PAGE",
            message=f"Element {element_id} lies entirely outside the page",
        )

    trim = page.inset(bleed_pt)
    if bleed_pt > 0 and not trim.contains(box):
        return PrintSafetyViolation(
            element_id=element_id,
            code="BLEED_INTERSECTION",
            message=f"Element {element_id} intersects the {bleed_pt:.2f}pt bleed",
        )

    safe = trim.inset(safe_area_pt)
    if not safe.contains(box):
        return PrintSafetyViolation(
            element_id=element_id,
            code="OUTSIDE_SAFE_AREA",
            message=f"Element {element_id} extends outside the safe area",
        )
    return None


def raster_size(box: Box, dpi: int) -> tuple[int, int]:
    """Pixel size of a picture rasterized at the given resolution."""
    return round(box.width / 72.0 * dpi), round(box.height / 72.0 * dpi)


def compute_print_layout(
    render_tree: RenderTree,
    settings: PaperCardSettings | None = None,
    *,
    default_settings: PaperCardSettings = DEFAULT_PAPER_SETTINGS,
) -> PrintLayout:
    """
    Build a print layout for a resolved card.

    Args:
        render_tree: Resolved card (geometry in render_tree.unit)
        settings: Card paper settings; default_settings when absent
        default_settings: Fallback (A4 portrait, no bleed, no safe area)

    Returns:
        PrintLayout with absolute boxes and any print-safety violations
    """
    settings = settings or default_settings
    unit = settings.size.unit

    page_w, page_h = page_size_points(settings)
    page = Box(x=0.0, y=0.0, width=page_w, height=page_h)
    bleed_pt = to_points(settings.print_settings.bleed, unit)
    safe_pt = to_points(settings.print_settings.safe_area, unit)
    dpi = settings.print_settings.resolution

    printable_w = max(page_w - 2 * bleed_pt - 2 * safe_pt, 0.0)
    printable_h = max(page_h - 2 * bleed_pt - 2 * safe_pt, 0.0)

    elements: list[PrintElement] = []
    violations: list[PrintSafetyViolation] = []

    for element in render_tree.elements:
        box = element_box(element, render_tree.unit, settings)

        raster_w = raster_h = None
        if element.type == "picture":
            raster_w, raster_h = raster_size(box, dpi)

        elements.append(
            PrintElement(
                id=element.id,
                type=element.type,
                box=box,
                content=element.resolved_content,
                raster_width_px=raster_w,
                raster_height_px=raster_h,
            )
        )

        violation = check_print_safety(element.id, box, page, bleed_pt, safe_pt)
        if violation is not None:
            violations.append(violation)

    if violations:
        logger.info(
            "Print layout for card %s has %d safety violation(s)",
            render_tree.card_id,
            len(violations),
        )

    return PrintLayout(
        card_id=render_tree.card_id,
        template_id=render_tree.template_id,
        orientation=settings.layout.orientation,
        page=page,
        bleed_pt=bleed_pt,
        safe_area_pt=safe_pt,
        printable_width_pt=printable_w,
        printable_height_pt=printable_h,
        dpi=dpi,
        elements=tuple(elements),
        violations=tuple(violations),
    )


def run(
    inp: ComputePrintLayoutInput,
    *,
    default_settings: PaperCardSettings = DEFAULT_PAPER_SETTINGS,
) -> ComputePrintLayoutOutput:
    """Component entry point."""
    layout = compute_print_layout(
        inp.render_tree,
        inp.settings,
        default_settings=default_settings,
    )
    return ComputePrintLayoutOutput(layout=layout, violations=list(layout.violations))
