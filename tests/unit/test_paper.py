"""
Tests for print layout computation.

- Fixed unit factors (mm 2.8346, in 72, px 0.75, pt 1)
- A4 portrait default when a card has no paper settings
- Bleed / safe-area classification
"""

from __future__ import annotations

import pytest

from src.components.binding import resolve
from src.components.paper import (
    DEFAULT_PAPER_SETTINGS,
    Box,
    ComputePrintLayoutInput,
    check_print_safety,
    compute_print_layout,
    from_points,
    orient,
    page_size_points,
    raster_size,
    run,
    to_points,
)
from src.core.entities import PaperCardSettings
from tests.factories import make_card, make_template


def _settings(**data) -> PaperCardSettings:
    return PaperCardSettings.model_validate(data)


def _tree(elements: list[dict], unit: str = "mm"):
    paper = {"size": "Custom", "width": 90, "height": 55, "unit": unit}
    return resolve(make_template(paper=paper, elements=elements), make_card())


BUSINESS_CARD = {
    "size": {"name": "Business Card", "width": 90, "height": 55, "unit": "mm"},
    "layout": {"orientation": "landscape"},
}


class TestUnits:
    @pytest.mark.parametrize(
        "unit,expected",
        [("mm", 2.8346), ("in", 72.0), ("px", 0.75), ("pt", 1.0)],
    )
    def test_factors(self, unit: str, expected: float) -> None:
        assert to_points(1, unit) == pytest.approx(expected)

    def test_back_to_unit(self) -> None:
        assert from_points(to_points(90, "mm"), "mm") == pytest.approx(90)

    def test_unknown_unit(self) -> None:
        with pytest.raises(ValueError, match="Unsupported length unit"):
            to_points(1, "cubit")

    def test_mm_and_pt_templates_agree(self) -> None:
        width_pt = 90 * 2.8346
        in_mm = compute_print_layout(_tree([{"id": "a", "x": 0, "y": 0, "width": 90, "height": 10}]))
        in_pt = compute_print_layout(
            _tree([{"id": "a", "x": 0, "y": 0, "width": width_pt, "height": 28.346}], unit="pt")
        )
        assert in_mm.elements[0].box.width == pytest.approx(in_pt.elements[0].box.width, abs=0.01)
        assert in_mm.elements[0].box.height == pytest.approx(
            in_pt.elements[0].box.height, abs=0.01
        )


class TestPageSize:
    def test_default_is_a4_portrait(self) -> None:
        w, h = page_size_points(DEFAULT_PAPER_SETTINGS)
        assert w == pytest.approx(210 * 2.8346)
        assert h == pytest.approx(297 * 2.8346)

    def test_landscape_swaps(self) -> None:
        w, h = page_size_points(_settings(size={"name": "A4"}, layout={"orientation": "landscape"}))
        assert w > h

    def test_custom_size_in_inches(self) -> None:
        settings = _settings(
            size={"name": None, "width": 3.5, "height": 2, "unit": "in"},
            layout={"orientation": "landscape"},
        )
        w, h = page_size_points(settings)
        assert (w, h) == pytest.approx((252.0, 144.0))

    def test_orient_keeps_matching_shape(self) -> None:
        assert orient(100, 50, "landscape") == (100, 50)
        assert orient(100, 50, "portrait") == (50, 100)


class TestDefaultLayout:
    def test_no_settings_no_violations(self, template, card) -> None:
        layout = compute_print_layout(resolve(template, card))
        assert layout.orientation == "portrait"
        assert layout.dpi == 300
        assert layout.violations == ()
        assert layout.is_print_safe
        assert layout.printable_width_pt == pytest.approx(layout.page.width)

    def test_element_order_kept(self, template, card) -> None:
        layout = compute_print_layout(resolve(template, card))
        assert [e.id for e in layout.elements] == ["el-name", "el-title", "el-logo"]

    def test_picture_raster_size(self, template, card) -> None:
        layout = compute_print_layout(resolve(template, card))
        logo = layout.elements[2]
        assert (logo.raster_width_px, logo.raster_height_px) == (177, 177)
        assert layout.elements[0].raster_width_px is None

    def test_margins_offset_elements(self) -> None:
        tree = _tree([{"id": "a", "x": 0, "y": 0, "width": 10, "height": 10}])
        layout = compute_print_layout(
            tree, _settings(layout={"margins": {"top": 10, "left": 5}})
        )
        assert layout.elements[0].box.x == pytest.approx(to_points(5, "mm"))
        assert layout.elements[0].box.y == pytest.approx(to_points(10, "mm"))


class TestPrintSafety:
    """Bleed and safe area bands."""

    def _layout(self, x: float, y: float = 20, width: float = 10):
        settings = _settings(
            **BUSINESS_CARD, printSettings={"bleed": 3, "safeArea": 2, "resolution": 300}
        )
        tree = _tree([{"id": "a", "x": x, "y": y, "width": width, "height": 10}])
        return compute_print_layout(tree, settings)

    def test_inside_safe_area(self) -> None:
        assert self._layout(x=10).violations == ()

    def test_bleed_intersection(self) -> None:
        (violation,) = self._layout(x=1).violations
        assert violation.code == "BLEED_INTERSECTION"
        assert violation.element_id == "a"

    def test_outside_safe_area(self) -> None:
        (violation,) = self._layout(x=4).violations
        assert violation.code == "OUTSIDE_SAFE_AREA"

    def test_outside_page(self) -> None:
        (violation,) = self._layout(x=200).violations
        assert violation.code == "OUTSIDE_PAGE"

    def test_printable_area(self) -> None:
        layout = self._layout(x=10)
        assert layout.printable_width_pt == pytest.approx((90 - 10) * 2.8346)
        assert layout.printable_height_pt == pytest.approx((55 - 10) * 2.8346)

    def test_printable_area_floors_at_zero(self) -> None:
        settings = _settings(**BUSINESS_CARD, printSettings={"bleed": 30, "safeArea": 10})
        layout = compute_print_layout(_tree([]), settings)
        assert layout.printable_height_pt == 0.0

    def test_only_most_severe_reported(self) -> None:
        page = Box(0, 0, 100, 100)
        violation = check_print_safety("a", Box(-5, -5, 10, 10), page, 3, 2)
        assert violation is not None
        assert violation.code == "BLEED_INTERSECTION"


class TestRaster:
    def test_one_inch_at_300dpi(self) -> None:
        assert raster_size(Box(0, 0, 72, 36), 300) == (300, 150)


class TestRun:
    def test_violations_mirrored(self) -> None:
        tree = _tree([{"id": "a", "x": 200, "y": 0, "width": 10, "height": 10}])
        out = run(ComputePrintLayoutInput(render_tree=tree, settings=_settings(**BUSINESS_CARD)))
        assert out.success
        assert [v.code for v in out.violations] == ["OUTSIDE_PAGE"]
