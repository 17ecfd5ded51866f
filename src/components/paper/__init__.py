"""
Paper component - Print layout for physical cards.
"""

from .component import (
    DEFAULT_PAPER_SETTINGS,
    NAMED_PAPER_SIZES_MM,
    POINTS_PER_UNIT,
    check_print_safety,
    compute_print_layout,
    element_box,
    from_points,
    orient,
    page_size_points,
    raster_size,
    run,
    supported_units,
    to_points,
)
from .models import (
    Box,
    ComputePrintLayoutInput,
    ComputePrintLayoutOutput,
    PrintElement,
    PrintLayout,
    PrintSafetyViolation,
    ViolationCode,
)

__all__ = [
    # Component
    "run",
    "compute_print_layout",
    "check_print_safety",
    "element_box",
    "page_size_points",
    "orient",
    "raster_size",
    # Units
    "POINTS_PER_UNIT",
    "supported_units",
    "to_points",
    "from_points",
    # Constants
    "DEFAULT_PAPER_SETTINGS",
    "NAMED_PAPER_SIZES_MM",
    # Models
    "Box",
    "ComputePrintLayoutInput",
    "ComputePrintLayoutOutput",
    "PrintElement",
    "PrintLayout",
    "PrintSafetyViolation",
    "ViolationCode",
]
