"""
In-memory store adapters for development and tests.

Implement TemplateStorePort, CardStorePort and ViewStorePort over dicts.
Records are frozen pydantic models, so handing them out never leaks
mutable state between calls.
"""

from __future__ import annotations

import threading
from datetime import UTC, datetime
from typing import Any

from src.core.entities import BusinessCard, CardView, Template
from src.core.errors import CardNotFound


class InMemoryTemplateStore:
    def __init__(self, templates: list[Template] | None = None) -> None:
        self._templates: dict[str, Template] = {t.id: t for t in templates or []}

    def get_template(self, template_id: str) -> Template | None:
        return self._templates.get(template_id)

    def save_template(self, template: Template) -> Template:
        self._templates[template.id] = template
        return template


class InMemoryCardStore:
    def __init__(self, cards: list[BusinessCard] | None = None) -> None:
        self._cards: dict[str, BusinessCard] = {c.id: c for c in cards or []}

    def get_card(self, card_id: str) -> BusinessCard | None:
        return self._cards.get(card_id)

    def save_card(self, card: BusinessCard) -> BusinessCard:
        self._cards[card.id] = card
        return card

    def update_card(self, card_id: str, patch: dict[str, Any]) -> None:
        card = self._cards.get(card_id)
        if card is None:
            raise CardNotFound(card_id)
        data = {**card.model_dump(), **patch, "updated_at": datetime.now(UTC)}
        self._cards[card_id] = BusinessCard.model_validate(data)

    def delete_card(self, card_id: str) -> None:
        self._cards.pop(card_id, None)


class InMemoryViewStore:
    """Append-only view list."""

    def __init__(self) -> None:
        self._views: list[CardView] = []
        self._lock = threading.Lock()

    def append(self, view: CardView) -> None:
        with self._lock:
            self._views.append(view)

    def list_for_card(self, card_id: str) -> list[CardView]:
        with self._lock:
            return [v for v in self._views if v.card_id == card_id]

    def delete_for_card(self, card_id: str) -> int:
        with self._lock:
            before = len(self._views)
            self._views = [v for v in self._views if v.card_id != card_id]
            return before - len(self._views)

    def clear(self) -> None:
        """Clear all views (for testing)."""
        with self._lock:
            self._views.clear()
