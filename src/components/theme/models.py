"""
Theme component models.
"""

from __future__ import annotations

from dataclasses import dataclass

from src.core.entities import TextAlign


@dataclass(frozen=True)
class EffectiveBorder:
    width: float
    color: str
    radius: float


@dataclass(frozen=True)
class EffectiveStyle:
    """
    Style an element renders with after every layer is applied.

    ``backdrop_color`` is the page colour behind the element (paper background
    after the card theme), carried so renderers can paint transparent elements.
    """

    font_size: float | None = None
    font_family: str | None = None
    font_weight: str | None = None
    font_style: str | None = None
    color: str | None = None
    text_align: TextAlign | None = None
    background_color: str | None = None
    background_opacity: float | None = None
    border: EffectiveBorder | None = None
    padding: float | None = None
    opacity: float | None = None
    rotation: float | None = None
    backdrop_color: str | None = None


@dataclass(frozen=True)
class PageBackground:
    type: str
    color: str | None
    image: str | None = None
    gradient_colors: tuple[str, ...] = ()
