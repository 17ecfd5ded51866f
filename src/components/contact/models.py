"""
Contact component models.
"""

from __future__ import annotations

from dataclasses import dataclass

from src.components.binding.models import RenderTree
from src.core.entities import BusinessCard

VCARD_MIME_TYPE = "text/vcard"


@dataclass(frozen=True)
class ContactPayload:
    """Portable contact file (vCard 3.0, CRLF line endings)."""

    text: str
    filename: str
    mime_type: str = VCARD_MIME_TYPE

    @property
    def lines(self) -> list[str]:
        return self.text.split("\r\n")[:-1]


@dataclass(frozen=True)
class FormatContactInput:
    card: BusinessCard
    render_tree: RenderTree | None = None
