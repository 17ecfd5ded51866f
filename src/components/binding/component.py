"""
Binding component - Resolves a card against its template.

Produces the RenderTree used for on-screen preview, print and contact export.

Content precedence per element (highest wins):
1. card.field_values[element.id], when a non-blank string
2. element.content (template-authored default; image_url for pictures)
3. the card's value for element.field via the field registry
4. '' (the element still renders)

Invariants:
- Output has exactly one ResolvedElement per template element, same order.
- Pure function of (template, card); calling twice yields equal trees.
- Missing values never raise.
- Picture elements skip candidates that are not URLs.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from src.components.fields import (
    FieldValues,
    MalformedFieldValue,
    classify_field_values,
    is_url_value,
    lookup_field,
    read_card_field,
)
from src.components.theme import merge_style, page_background
from src.core.entities import BusinessCard, Element, Template
from src.core.errors import TemplateMismatch, TemplateMissing

from .models import (
    ContentSource,
    Geometry,
    NoLayout,
    RenderTree,
    ResolvedElement,
    ResolveInput,
    ResolveOutput,
)

logger = logging.getLogger(__name__)


def check_binding(template: Template | None, card: BusinessCard) -> Template:
    """
    Verify the card is bound to the given template.

    Raises:
        TemplateMissing: card has no template_id (or no template supplied)
        TemplateMismatch: card.template_id differs from template.id
    """
    if card.template_id is None or template is None:
        raise TemplateMissing(card.id)
    if card.template_id != template.id:
        raise TemplateMismatch(card.id, card.template_id, template.id)
    return template


def _candidates(
    element: Element,
    card: BusinessCard,
    values: FieldValues,
) -> Iterator[tuple[str, ContentSource]]:
    """Content candidates for one element, highest precedence first."""
    override = values.value_for(element.id)
    # whitespace-only overrides count as absent
    if override.strip():
        yield override, "field_value"

    default = element.content
    if element.type == "picture" and not default:
        default = element.image_url
    if default:
        yield default, "content"

    spec = lookup_field(element.field)
    if spec is not None:
        value = read_card_field(card, spec)
        if value:
            yield value, "field"
    elif element.field:
        logger.warning("Element %s bound to unknown field %r", element.id, element.field)


def resolve_content(
    element: Element,
    card: BusinessCard,
    values: FieldValues,
    warnings: list[MalformedFieldValue] | None = None,
) -> tuple[str, ContentSource]:
    """
    Apply the four-level precedence to one element.

    Pictures only accept URL candidates; a non-URL candidate is reported on
    warnings and the next level is tried.
    """
    for content, source in _candidates(element, card, values):
        if element.type != "picture" or is_url_value(content):
            return content, source
        logger.warning("Picture element %s has a non-URL %s value", element.id, source)
        if warnings is not None:
            warnings.append(
                MalformedFieldValue(
                    element_id=element.id,
                    reason="picture content is not a URL",
                    raw_type="str",
                )
            )

    return "", "empty"


def resolve(template: Template | None, card: BusinessCard) -> RenderTree:
    """
    Bind a card to its template.

    Args:
        template: Template the card references
        card: Card supplying field values and theme

    Returns:
        RenderTree with one resolved element per template element

    Raises:
        TemplateMissing: card has no template bound
        TemplateMismatch: card is bound to a different template
    """
    template = check_binding(template, card)

    values = classify_field_values(card.field_values, (e.id for e in template.elements))
    warnings: list[MalformedFieldValue] = list(values.malformed)
    background = template.paper.background
    theme = card.custom_theme

    resolved: list[ResolvedElement] = []
    for element in template.elements:
        content, source = resolve_content(element, card, values, warnings)

        resolved.append(
            ResolvedElement(
                id=element.id,
                type=element.type,
                geometry=Geometry(
                    x=element.x,
                    y=element.y,
                    width=element.width,
                    height=element.height,
                ),
                effective_style=merge_style(element.style, background, theme),
                resolved_content=content,
                field=element.field,
                source=source,
            )
        )

    return RenderTree(
        template_id=template.id,
        card_id=card.id,
        unit=template.paper.unit,
        paper_width=template.paper.width,
        paper_height=template.paper.height,
        background=page_background(background, theme),
        elements=tuple(resolved),
        warnings=tuple(warnings),
    )


def run(inp: ResolveInput) -> ResolveOutput:
    """
    Component entry point.

    Resolution failures become an explicit NoLayout rather than an exception
    so a public card page can still render its fallback.
    """
    try:
        return ResolveOutput(render_tree=resolve(inp.template, inp.card))
    except TemplateMissing:
        return ResolveOutput(
            render_tree=None,
            no_layout=NoLayout(card_id=inp.card.id, reason="no_template"),
        )
    except TemplateMismatch as e:
        logger.warning("Template mismatch: %s", e)
        return ResolveOutput(
            render_tree=None,
            no_layout=NoLayout(card_id=inp.card.id, reason="template_mismatch"),
        )
