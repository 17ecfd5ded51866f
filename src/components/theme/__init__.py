"""
Theme component - Effective style computation.
"""

from .component import apply_theme, base_style, merge_style, page_background
from .models import EffectiveBorder, EffectiveStyle, PageBackground

__all__ = [
    "apply_theme",
    "base_style",
    "merge_style",
    "page_background",
    "EffectiveBorder",
    "EffectiveStyle",
    "PageBackground",
]
