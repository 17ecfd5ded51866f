"""
Views component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ViewsConfig:
    """View ledger configuration."""

    dedupe_window_seconds: int = 5
    max_device_info_length: int = 512
    max_card_name_length: int = 255
    unknown_viewer: str = "unknown"
    unknown_device: str = "Unknown Device"


DEFAULT_VIEWS_CONFIG = ViewsConfig()


@dataclass(frozen=True)
class ViewStats:
    total_views: int
    unique_views: int
    today_views: int

    def as_dict(self) -> dict[str, int]:
        return {
            "totalViews": self.total_views,
            "uniqueViews": self.unique_views,
            "todayViews": self.today_views,
        }


# --- Input / Output ---


@dataclass(frozen=True)
class RecordViewInput:
    card_id: str
    viewer_identity: str | None = None
    device_info: str | None = None


@dataclass(frozen=True)
class RecordViewOutput:
    view_id: str
    deduplicated: bool = False


@dataclass(frozen=True)
class GetStatsInput:
    card_id: str
