"""
Views component - Card view ledger.

Records public card views and derives view counts.

Key behaviors:
- Views from the same (card, viewer) inside a rolling window (default 5s)
  collapse into the first stored record; the window absorbs duplicate
  client-side firing, later real visits from the same address still count.
- Appends for the same card are independent; no ledger-wide lock.
- Stats tolerate a partially-updated ledger (eventually consistent).
"""

from __future__ import annotations

import hashlib
import logging
import threading
from collections.abc import Iterable
from datetime import UTC, datetime, timedelta
from uuid import uuid4

from src.core.entities import CardView
from src.core.errors import CardNotFound

from .models import (
    DEFAULT_VIEWS_CONFIG,
    GetStatsInput,
    RecordViewInput,
    RecordViewOutput,
    ViewsConfig,
    ViewStats,
)
from .ports import CardLookupPort, TimePort, ViewStorePort, ViewWindowPort

logger = logging.getLogger(__name__)


# --- Pure Functions ---


def idempotency_key(card_id: str, viewer_identity: str) -> str:
    """Window key for a (card, viewer) pair. The viewer address is not stored in it."""
    return hashlib.sha256(f"{card_id}|{viewer_identity}".encode()).hexdigest()[:32]


def _as_utc(ts: datetime) -> datetime:
    if ts.tzinfo is None:
        return ts.replace(tzinfo=UTC)
    return ts.astimezone(UTC)


def compute_stats(views: Iterable[CardView], now: datetime) -> ViewStats:
    """
    Aggregate view records.

    unique_views counts distinct viewer identities; today_views counts
    records whose created_at falls on now's UTC calendar day.
    """
    today = _as_utc(now).date()
    total = 0
    viewers: set[str] = set()
    today_count = 0
    for view in views:
        total += 1
        viewers.add(view.viewer_ip)
        if _as_utc(view.created_at).date() == today:
            today_count += 1
    return ViewStats(total_views=total, unique_views=len(viewers), today_views=today_count)


def clip(value: str | None, limit: int, default: str) -> str:
    value = (value or "").strip()
    if not value:
        return default
    return value[:limit]


# --- In-Memory Window ---


class InMemoryViewWindow:
    """
    Process-local idempotency window for dev and single-process deployments.

    Expired entries are swept every `sweep_every` claims so a long-lived
    window stays bounded by the traffic of one window length.
    """

    def __init__(self, sweep_every: int = 256) -> None:
        self._entries: dict[str, tuple[str, datetime]] = {}
        self._lock = threading.Lock()
        self._sweep_every = max(1, sweep_every)
        self._claims = 0

    def claim(self, key: str, view_id: str, now: datetime, window_seconds: int) -> str | None:
        with self._lock:
            self._claims += 1
            if self._claims % self._sweep_every == 0:
                self._drop_expired(now)

            held = self._entries.get(key)
            if held is not None:
                if now < held[1]:
                    return held[0]
                del self._entries[key]
            self._entries[key] = (view_id, now + timedelta(seconds=window_seconds))
            return None

    def release(self, key: str, view_id: str) -> None:
        with self._lock:
            held = self._entries.get(key)
            if held is not None and held[0] == view_id:
                del self._entries[key]

    def cleanup_expired(self, now: datetime) -> int:
        with self._lock:
            return self._drop_expired(now)

    def __len__(self) -> int:
        return len(self._entries)

    def _drop_expired(self, now: datetime) -> int:
        expired = [k for k, (_, until) in self._entries.items() if now >= until]
        for key in expired:
            del self._entries[key]
        return len(expired)


class DefaultTimePort:
    def now_utc(self) -> datetime:
        return datetime.now(UTC)


# --- Ledger (Shell) ---


class ViewLedger:
    """Append-only view ledger with a per-viewer idempotency window."""

    def __init__(
        self,
        store: ViewStorePort,
        cards: CardLookupPort,
        window: ViewWindowPort | None = None,
        time_port: TimePort | None = None,
        config: ViewsConfig | None = None,
    ) -> None:
        self._store = store
        self._cards = cards
        self._window = window or InMemoryViewWindow()
        self._time = time_port or DefaultTimePort()
        self._config = config or DEFAULT_VIEWS_CONFIG

    def record_view(
        self,
        card_id: str,
        viewer_identity: str | None = None,
        device_info: str | None = None,
    ) -> RecordViewOutput:
        """
        Record a view of a card.

        Raises:
            CardNotFound: card does not exist
            StoreUnavailable: the append failed; the window is released so
                a retry is recorded
        """
        card = self._cards.get_card(card_id)
        if card is None:
            raise CardNotFound(card_id)

        cfg = self._config
        viewer = clip(viewer_identity, 255, cfg.unknown_viewer)
        now = self._time.now_utc()
        view_id = str(uuid4())
        key = idempotency_key(card_id, viewer)

        held = self._window.claim(key, view_id, now, cfg.dedupe_window_seconds)
        if held is not None:
            logger.debug("Collapsed duplicate view of card %s into %s", card_id, held)
            return RecordViewOutput(view_id=held, deduplicated=True)

        card_name = card.name[: cfg.max_card_name_length] if card.name else None
        try:
            self._store.append(
                CardView(
                    id=view_id,
                    card_id=card_id,
                    viewer_ip=viewer,
                    device_info=clip(device_info, cfg.max_device_info_length, cfg.unknown_device),
                    card_name=card_name,
                    created_at=now,
                )
            )
        except Exception:
            self._window.release(key, view_id)
            raise
        logger.info("Recorded view %s of card %s", view_id, card_id)
        return RecordViewOutput(view_id=view_id)

    def get_stats(self, card_id: str) -> ViewStats:
        return compute_stats(self._store.list_for_card(card_id), self._time.now_utc())

    def forget_card(self, card_id: str) -> int:
        """Drop every view of a deleted card."""
        removed = self._store.delete_for_card(card_id)
        logger.info("Removed %d view(s) of deleted card %s", removed, card_id)
        return removed


# --- Component Entry Points ---


def run_record_view(inp: RecordViewInput, *, ledger: ViewLedger) -> RecordViewOutput:
    return ledger.record_view(inp.card_id, inp.viewer_identity, inp.device_info)


def run_get_stats(inp: GetStatsInput, *, ledger: ViewLedger) -> ViewStats:
    return ledger.get_stats(inp.card_id)


def run(
    inp: RecordViewInput | GetStatsInput,
    *,
    ledger: ViewLedger,
) -> RecordViewOutput | ViewStats:
    """Main component entry point."""
    if isinstance(inp, RecordViewInput):
        return run_record_view(inp, ledger=ledger)
    elif isinstance(inp, GetStatsInput):
        return run_get_stats(inp, ledger=ledger)
    else:
        raise ValueError(f"Unknown input type: {type(inp)}")
