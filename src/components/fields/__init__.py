"""
Fields component - Semantic field registry.
"""

from .component import (
    FIELD_ALIASES,
    FIELD_REGISTRY,
    classify_field_values,
    is_url_value,
    lookup_field,
    read_card_field,
    validate_value,
)
from .models import (
    FieldKey,
    FieldSpec,
    FieldValues,
    FieldValueType,
    MalformedFieldValue,
)

__all__ = [
    # Registry
    "FIELD_ALIASES",
    "FIELD_REGISTRY",
    "lookup_field",
    "read_card_field",
    # Values
    "classify_field_values",
    "is_url_value",
    "validate_value",
    # Models
    "FieldKey",
    "FieldSpec",
    "FieldValues",
    "FieldValueType",
    "MalformedFieldValue",
]
