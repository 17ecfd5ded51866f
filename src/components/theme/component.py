"""
Theme component - Effective style computation.

Layers, later overriding earlier field by field:
1. Element style as authored in the template.
2. Card custom theme, mapped onto element fields:
   - colors.text -> color
   - colors.background -> background_color (only where the element paints
     its own background; transparent elements stay transparent)
   - fonts.primary -> font_family
   - layout.text_alignment -> text_align
   - effects.border (enabled) -> border

There is no layer below the element. Unset fields at any layer fall through
unchanged. All functions are pure.
"""

from __future__ import annotations

from dataclasses import replace

from src.core.entities import Background, CustomTheme, ElementStyle

from .models import EffectiveBorder, EffectiveStyle, PageBackground


def base_style(style: ElementStyle) -> EffectiveStyle:
    """Lift a template element style into an EffectiveStyle unchanged."""
    border = None
    if style.border is not None:
        border = EffectiveBorder(
            width=style.border.width,
            color=style.border.color,
            radius=style.border.radius,
        )
    return EffectiveStyle(
        font_size=style.font_size,
        font_family=style.font_family,
        font_weight=style.font_weight,
        font_style=style.font_style,
        color=style.color,
        text_align=style.text_align,
        background_color=style.background_color,
        background_opacity=style.background_opacity,
        border=border,
        padding=style.padding,
        opacity=style.opacity,
        rotation=style.rotation,
    )


def apply_theme(style: EffectiveStyle, theme: CustomTheme | None) -> EffectiveStyle:
    """Overlay the card theme's mapped fields onto an effective style."""
    if theme is None:
        return style

    overrides: dict[str, object] = {}

    if theme.colors.text:
        overrides["color"] = theme.colors.text
    if theme.colors.background and style.background_color is not None:
        overrides["background_color"] = theme.colors.background
    if theme.fonts.primary:
        overrides["font_family"] = theme.fonts.primary
    if theme.layout.text_alignment:
        overrides["text_align"] = theme.layout.text_alignment

    border = theme.effects.border
    if border is not None and border.enabled:
        overrides["border"] = EffectiveBorder(
            width=border.width,
            color=border.color,
            radius=border.radius,
        )

    if not overrides:
        return style
    return replace(style, **overrides)  # type: ignore[arg-type]


def page_background(
    background: Background,
    theme: CustomTheme | None = None,
) -> PageBackground:
    """Paper background after the card theme's background colour."""
    color = background.color
    if theme is not None and theme.colors.background and background.type == "color":
        color = theme.colors.background
    return PageBackground(
        type=background.type,
        color=color,
        image=background.image,
        gradient_colors=background.gradient_colors,
    )


def merge_style(
    element_style: ElementStyle,
    background: Background,
    custom_theme: CustomTheme | None = None,
) -> EffectiveStyle:
    """
    Compute the effective style of one element.

    Args:
        element_style: Template-authored style of the element
        background: Template paper background (sets the backdrop colour)
        custom_theme: Optional card-wide theme override

    Returns:
        EffectiveStyle with every layer applied
    """
    style = apply_theme(base_style(element_style), custom_theme)
    backdrop = page_background(background, custom_theme)
    return replace(style, backdrop_color=backdrop.color)
