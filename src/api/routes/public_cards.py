"""
Public card endpoints: preview layout, print layout, vCard, QR payload and
view recording.

Public routes (no auth). The client address is the viewer identity for
view deduplication.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request, Response, status

from src.api.deps import get_facade
from src.api.errors import http_error
from src.api.schemas import (
    LayoutResponse,
    QrPayloadResponse,
    RecordViewRequest,
    RecordViewResponse,
    placeholder,
    print_layout_payload,
    render_tree_payload,
)
from src.components.binding import NoLayout
from src.components.distribution import DistributionFacade
from src.core.errors import (
    EngineError,
    ResolutionError,
    TemplateMismatch,
    TemplateMissing,
    TemplateNotFound,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def get_client_ip(request: Request) -> str:
    # Use X-Forwarded-For if behind proxy, otherwise client host
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def _layout_unavailable(card_id: str, exc: EngineError) -> LayoutResponse:
    """Resolution failures become a placeholder so the public page still renders."""
    if isinstance(exc, TemplateMissing):
        return placeholder(NoLayout(card_id=card_id, reason="no_template"))
    if isinstance(exc, TemplateMismatch):
        logger.warning("Layout unavailable for card %s: %s", card_id, exc)
        return placeholder(NoLayout(card_id=card_id, reason="template_mismatch"))
    if isinstance(exc, TemplateNotFound):
        logger.warning("Layout unavailable for card %s: %s", card_id, exc)
        return placeholder(NoLayout(card_id=card_id, reason="template_unavailable"))
    raise http_error(exc) from exc


@router.get("/cards/{card_id}", response_model=LayoutResponse)
def get_card_layout(
    card_id: str,
    facade: DistributionFacade = Depends(get_facade),
) -> LayoutResponse:
    """Render tree for a card, or a null layout when its template cannot be used."""
    try:
        result = facade.resolve_card(card_id)
    except (ResolutionError, TemplateNotFound) as e:
        return _layout_unavailable(card_id, e)
    except EngineError as e:
        raise http_error(e) from e

    if isinstance(result, NoLayout):
        return placeholder(result)
    return LayoutResponse(layout=render_tree_payload(result))


@router.get("/cards/{card_id}/paper", response_model=LayoutResponse)
def get_paper_layout(
    card_id: str,
    facade: DistributionFacade = Depends(get_facade),
) -> LayoutResponse:
    """Print layout in points with any print-safety violations."""
    try:
        layout = facade.export_paper_card(card_id)
    except (ResolutionError, TemplateNotFound) as e:
        return _layout_unavailable(card_id, e)
    except EngineError as e:
        raise http_error(e) from e
    return LayoutResponse(layout=print_layout_payload(layout))


@router.get("/cards/{card_id}/vcard")
def get_vcard(
    card_id: str,
    request: Request,
    facade: DistributionFacade = Depends(get_facade),
) -> Response:
    """Download the card as a vCard. Counts as a view from the caller."""
    try:
        payload = facade.export_contact(card_id, viewer_identity=get_client_ip(request))
    except EngineError as e:
        raise http_error(e) from e

    return Response(
        content=payload.text,
        media_type=f"{payload.mime_type}; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{payload.filename}"'},
    )


@router.get("/cards/{card_id}/qr", response_model=QrPayloadResponse)
def get_qr_payload(
    card_id: str,
    facade: DistributionFacade = Depends(get_facade),
) -> QrPayloadResponse:
    try:
        qr = facade.qr_payload(card_id)
    except EngineError as e:
        raise http_error(e) from e
    return QrPayloadResponse(card_id=qr.card_id, data=qr.data, public_url=qr.public_url)


@router.post(
    "/cards/{card_id}/views",
    response_model=RecordViewResponse,
    status_code=status.HTTP_201_CREATED,
)
def record_card_view(
    card_id: str,
    request: Request,
    body: RecordViewRequest | None = None,
    facade: DistributionFacade = Depends(get_facade),
) -> RecordViewResponse:
    """
    Record a view of a public card.

    Repeat calls from the same address inside the dedupe window return the
    first view's id with deduplicated=true.
    """
    device_info = body.device_info if body else None
    if device_info is None:
        device_info = request.headers.get("user-agent")

    try:
        result = facade.record_view_detailed(card_id, get_client_ip(request), device_info)
    except EngineError as e:
        raise http_error(e) from e
    return RecordViewResponse(view_id=result.view_id, deduplicated=result.deduplicated)
