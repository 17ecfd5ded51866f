"""
Binding component - Resolves a card against its template.
"""

from .component import check_binding, resolve, resolve_content, run
from .models import (
    ContentSource,
    Geometry,
    NoLayout,
    RenderTree,
    ResolvedElement,
    ResolveInput,
    ResolveOutput,
)

__all__ = [
    # Component
    "run",
    "resolve",
    "resolve_content",
    "check_binding",
    # Models
    "ContentSource",
    "Geometry",
    "NoLayout",
    "RenderTree",
    "ResolvedElement",
    "ResolveInput",
    "ResolveOutput",
]
