from dataclasses import asdict
from typing import Any

from pydantic import BaseModel, Field

from src.components.binding import NoLayout, RenderTree
from src.components.paper import PrintLayout


# --- Requests ---
class RecordViewRequest(BaseModel):
    device_info: str | None = Field(
        default=None, alias="deviceInfo", description="Client user agent or device label"
    )

    model_config = {"populate_by_name": True}


# --- Responses ---
class LayoutResponse(BaseModel):
    """Envelope for layouts; layout is null when the card has nothing to render."""

    layout: dict[str, Any] | None = None
    reason: str | None = None
    message: str | None = None


class RecordViewResponse(BaseModel):
    view_id: str = Field(..., alias="viewId")
    deduplicated: bool = False

    model_config = {"populate_by_name": True}


class QrPayloadResponse(BaseModel):
    card_id: str = Field(..., alias="cardId")
    data: str = Field(..., description="Text to encode in the QR symbol")
    public_url: str = Field(..., alias="publicUrl")

    model_config = {"populate_by_name": True}


class StatsResponse(BaseModel):
    total_views: int = Field(..., alias="totalViews")
    unique_views: int = Field(..., alias="uniqueViews")
    today_views: int = Field(..., alias="todayViews")

    model_config = {"populate_by_name": True}


# --- Serializers ---
def render_tree_payload(tree: RenderTree) -> dict[str, Any]:
    return asdict(tree)


def print_layout_payload(layout: PrintLayout) -> dict[str, Any]:
    data = asdict(layout)
    data["is_print_safe"] = layout.is_print_safe
    return data


def placeholder(no_layout: NoLayout) -> LayoutResponse:
    return LayoutResponse(layout=None, reason=no_layout.reason, message=no_layout.message)
