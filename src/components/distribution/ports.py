"""
Distribution component port definitions.

Stores are external collaborators. Implementations raise StoreUnavailable
for I/O failures and timeouts and return None for absent records.
"""

from __future__ import annotations

from typing import Any, Protocol

from src.core.entities import BusinessCard, Template


class TemplateStorePort(Protocol):
    """Read access to templates."""

    def get_template(self, template_id: str) -> Template | None:
        """Get a template by id."""
        ...


class CardStorePort(Protocol):
    """Read/update access to business cards."""

    def get_card(self, card_id: str) -> BusinessCard | None:
        """Get a card by id."""
        ...

    def update_card(self, card_id: str, patch: dict[str, Any]) -> None:
        """Apply a partial update (field name -> new value)."""
        ...

    def delete_card(self, card_id: str) -> None:
        """Delete a card; its views go with it."""
        ...
