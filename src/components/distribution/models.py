"""
Distribution component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from src.components.contact.component import DEFAULT_PLACEHOLDER_NAME
from src.components.paper.component import DEFAULT_PAPER_SETTINGS
from src.core.entities import PaperCardSettings


@dataclass(frozen=True)
class DistributionConfig:
    site_base_url: str = "http://localhost:3000"
    card_path_prefix: str = "/card"
    placeholder_name: str = DEFAULT_PLACEHOLDER_NAME
    default_paper_settings: PaperCardSettings = field(
        default_factory=lambda: DEFAULT_PAPER_SETTINGS
    )
    contact_download_device: str = "vCard Generated"


@dataclass(frozen=True)
class QrPayload:
    """
    Data handed to the external QR encoder.

    Only the payload is defined here; symbol size and error correction are
    the encoder's concern.
    """

    card_id: str
    data: str

    @property
    def public_url(self) -> str:
        return self.data


# --- Input Models ---


@dataclass(frozen=True)
class ResolveCardInput:
    card_id: str


@dataclass(frozen=True)
class ExportPaperCardInput:
    card_id: str


@dataclass(frozen=True)
class ExportContactInput:
    card_id: str
    viewer_identity: str | None = None


@dataclass(frozen=True)
class QrPayloadInput:
    card_id: str
