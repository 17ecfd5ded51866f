"""
Distribution component - Single entry point for card distribution.

Fetches raw records through the store ports, binds them, and hands the
result to the paper, contact and view components.

Invariants:
- Templates are fetched by id on every call; nothing is cached or embedded
  in the card.
- NotFound and StoreUnavailable propagate to the caller untouched.
- A card without a template resolves to an explicit NoLayout.
"""

from __future__ import annotations

import logging

from src.components.binding import NoLayout, RenderTree, resolve
from src.components.contact import ContactPayload, format_contact
from src.components.paper import PrintLayout, compute_print_layout
from src.components.views import RecordViewOutput, ViewLedger, ViewStats
from src.core.entities import BusinessCard, Template
from src.core.errors import CardNotFound, ResolutionError, TemplateMissing, TemplateNotFound

from .models import (
    DistributionConfig,
    ExportContactInput,
    ExportPaperCardInput,
    QrPayload,
    QrPayloadInput,
    ResolveCardInput,
)
from .ports import CardStorePort, TemplateStorePort

logger = logging.getLogger(__name__)


def build_public_url(base_url: str, card_id: str, path_prefix: str = "/card") -> str:
    """Public card URL: <base>/card/<card_id>."""
    base = base_url.rstrip("/")
    prefix = path_prefix if path_prefix.startswith("/") else f"/{path_prefix}"
    return f"{base}{prefix.rstrip('/')}/{card_id}"


class DistributionFacade:
    """
    Card distribution service.

    Args:
        cards: Card store
        templates: Template store
        ledger: View ledger
        config: Site URL, placeholder name and default paper settings
    """

    def __init__(
        self,
        cards: CardStorePort,
        templates: TemplateStorePort,
        ledger: ViewLedger,
        config: DistributionConfig | None = None,
    ) -> None:
        self._cards = cards
        self._templates = templates
        self._ledger = ledger
        self._config = config or DistributionConfig()

    # --- Fetch ---

    def _get_card(self, card_id: str) -> BusinessCard:
        card = self._cards.get_card(card_id)
        if card is None:
            raise CardNotFound(card_id)
        return card

    def _get_template(self, card: BusinessCard) -> Template:
        if card.template_id is None:
            raise TemplateMissing(card.id)
        template = self._templates.get_template(card.template_id)
        if template is None:
            raise TemplateNotFound(card.template_id)
        return template

    def _render(self, card: BusinessCard) -> RenderTree:
        return resolve(self._get_template(card), card)

    # --- Operations ---

    def resolve_card(self, card_id: str) -> RenderTree | NoLayout:
        """
        Resolve a card for preview.

        Raises:
            CardNotFound: card does not exist
            TemplateNotFound: card references a template that does not exist
            TemplateMismatch: store returned a template with another id
        """
        card = self._get_card(card_id)
        try:
            return self._render(card)
        except TemplateMissing:
            return NoLayout(card_id=card.id, reason="no_template")

    def export_paper_card(self, card_id: str) -> PrintLayout:
        """
        Print layout for a card.

        Uses the card's paper settings or the configured default.

        Raises:
            CardNotFound, TemplateNotFound, TemplateMissing, TemplateMismatch
        """
        card = self._get_card(card_id)
        tree = self._render(card)
        return compute_print_layout(
            tree,
            card.paper_card_settings,
            default_settings=self._config.default_paper_settings,
        )

    def export_contact(self, card_id: str, viewer_identity: str | None = None) -> ContactPayload:
        """
        vCard for a card.

        The template is used when available so element overrides reach the
        contact file; a card without a usable layout still exports from its
        plain attributes. When a viewer is given the download counts as a view.
        """
        card = self._get_card(card_id)
        tree: RenderTree | None = None
        try:
            tree = self._render(card)
        except (ResolutionError, TemplateNotFound) as e:
            logger.debug("Exporting contact for card %s without layout: %s", card_id, e)

        payload = format_contact(card, tree, placeholder_name=self._config.placeholder_name)

        if viewer_identity is not None:
            self._ledger.record_view(
                card_id, viewer_identity, self._config.contact_download_device
            )
        return payload

    def record_view(
        self,
        card_id: str,
        viewer_identity: str | None = None,
        device_info: str | None = None,
    ) -> str:
        """Record a public view. Returns the view id (the earlier one for duplicates)."""
        return self.record_view_detailed(card_id, viewer_identity, device_info).view_id

    def record_view_detailed(
        self,
        card_id: str,
        viewer_identity: str | None = None,
        device_info: str | None = None,
    ) -> RecordViewOutput:
        return self._ledger.record_view(card_id, viewer_identity, device_info)

    def get_stats(self, card_id: str) -> ViewStats:
        self._get_card(card_id)
        return self._ledger.get_stats(card_id)

    def public_url(self, card_id: str) -> str:
        return build_public_url(
            self._config.site_base_url, card_id, self._config.card_path_prefix
        )

    def qr_payload(self, card_id: str) -> QrPayload:
        """QR payload for an existing card."""
        card = self._get_card(card_id)
        return QrPayload(card_id=card.id, data=self.public_url(card.id))

    def bind_template(self, card_id: str, template_id: str) -> None:
        """Point a card at a template. The template must exist."""
        self._get_card(card_id)
        if self._templates.get_template(template_id) is None:
            raise TemplateNotFound(template_id)
        self._cards.update_card(card_id, {"template_id": template_id})

    def delete_card(self, card_id: str) -> None:
        """Delete a card and its views."""
        self._get_card(card_id)
        self._ledger.forget_card(card_id)
        self._cards.delete_card(card_id)


# --- Component Entry Points ---


DistributionInput = ResolveCardInput | ExportPaperCardInput | ExportContactInput | QrPayloadInput


def run(
    inp: DistributionInput,
    *,
    facade: DistributionFacade,
) -> RenderTree | NoLayout | PrintLayout | ContactPayload | QrPayload:
    """Main component entry point (record/stats go through the views component)."""
    if isinstance(inp, ResolveCardInput):
        return facade.resolve_card(inp.card_id)
    elif isinstance(inp, ExportPaperCardInput):
        return facade.export_paper_card(inp.card_id)
    elif isinstance(inp, ExportContactInput):
        return facade.export_contact(inp.card_id, inp.viewer_identity)
    elif isinstance(inp, QrPayloadInput):
        return facade.qr_payload(inp.card_id)
    else:
        raise ValueError(f"Unknown input type: {type(inp)}")
