"""
Engine error taxonomy.

- NotFound: card or template absent. Surfaced as a 404, never retried.
- ResolutionError: card and template cannot be bound (mismatch or no template).
- StoreUnavailable: I/O failure or timeout talking to a store. Callers may
  retry with backoff; the engine itself never retries.

Print-safety violations and malformed field values are not exceptions; they
are collected on results (see paper.models and fields.models).
"""

from __future__ import annotations


class EngineError(Exception):
    """Base class for card engine errors."""


class NotFound(EngineError):
    """Raised when a referenced record does not exist."""

    kind = "record"

    def __init__(self, record_id: str) -> None:
        self.record_id = record_id
        super().__init__(f"{self.kind.capitalize()} not found: {record_id}")


class CardNotFound(NotFound):
    kind = "card"


class TemplateNotFound(NotFound):
    kind = "template"


class ResolutionError(EngineError):
    """Raised when a card cannot be bound to a template."""


class TemplateMismatch(ResolutionError):
    """Raised when the card's template_id disagrees with the template passed in."""

    def __init__(self, card_id: str, expected: str | None, actual: str) -> None:
        self.card_id = card_id
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Card {card_id} is bound to template {expected!r}, got {actual!r}"
        )


class TemplateMissing(ResolutionError):
    """Raised when the card has no template bound."""

    def __init__(self, card_id: str) -> None:
        self.card_id = card_id
        super().__init__(f"Card {card_id} has no template bound")


class StoreUnavailable(EngineError):
    """Raised when a store cannot be reached or times out."""

    def __init__(self, store: str, reason: str = "") -> None:
        self.store = store
        self.reason = reason
        msg = f"{store} unavailable"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)
