"""
Views component port definitions.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from src.core.entities import BusinessCard, CardView


class ViewStorePort(Protocol):
    """Append-only storage of view records."""

    def append(self, view: CardView) -> None:
        """Store one view record."""
        ...

    def list_for_card(self, card_id: str) -> list[CardView]:
        """All views of a card, any order."""
        ...

    def delete_for_card(self, card_id: str) -> int:
        """Remove all views of a card. Returns count removed."""
        ...


class CardLookupPort(Protocol):
    """Existence check against the card store."""

    def get_card(self, card_id: str) -> BusinessCard | None:
        ...


class ViewWindowPort(Protocol):
    """Idempotency window keyed by (card, viewer)."""

    def claim(self, key: str, view_id: str, now: datetime, window_seconds: int) -> str | None:
        """
        Claim the window for key.

        Returns None if claimed (caller stores view_id), or the view id
        already holding an unexpired window.
        """
        ...

    def release(self, key: str, view_id: str) -> None:
        """Drop the claim on key if view_id still holds it."""
        ...


class TimePort(Protocol):
    """Time provider interface."""

    def now_utc(self) -> datetime:
        """Get current UTC time."""
        ...
