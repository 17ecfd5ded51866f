"""
Views component - Card view ledger.
"""

from .component import (
    DefaultTimePort,
    InMemoryViewWindow,
    ViewLedger,
    compute_stats,
    idempotency_key,
    run,
    run_get_stats,
    run_record_view,
)
from .models import (
    DEFAULT_VIEWS_CONFIG,
    GetStatsInput,
    RecordViewInput,
    RecordViewOutput,
    ViewsConfig,
    ViewStats,
)
from .ports import CardLookupPort, TimePort, ViewStorePort, ViewWindowPort

__all__ = [
    # Entry points
    "run",
    "run_record_view",
    "run_get_stats",
    # Ledger
    "ViewLedger",
    "InMemoryViewWindow",
    "DefaultTimePort",
    "compute_stats",
    "idempotency_key",
    # Models
    "DEFAULT_VIEWS_CONFIG",
    "GetStatsInput",
    "RecordViewInput",
    "RecordViewOutput",
    "ViewsConfig",
    "ViewStats",
    # Ports
    "CardLookupPort",
    "TimePort",
    "ViewStorePort",
    "ViewWindowPort",
]
