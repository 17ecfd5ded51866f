"""
Distribution component - Single entry point for card distribution.
"""

from .component import DistributionFacade, DistributionInput, build_public_url, run
from .models import (
    DistributionConfig,
    ExportContactInput,
    ExportPaperCardInput,
    QrPayload,
    QrPayloadInput,
    ResolveCardInput,
)
from .ports import CardStorePort, TemplateStorePort

__all__ = [
    # Component
    "run",
    "DistributionFacade",
    "DistributionInput",
    "build_public_url",
    # Models
    "DistributionConfig",
    "ExportContactInput",
    "ExportPaperCardInput",
    "QrPayload",
    "QrPayloadInput",
    "ResolveCardInput",
    # Ports
    "CardStorePort",
    "TemplateStorePort",
]
