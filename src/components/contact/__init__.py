"""
Contact component - vCard export.
"""

from .component import (
    DEFAULT_PLACEHOLDER_NAME,
    URL_FIELDS,
    build_lines,
    contact_filename,
    contact_values,
    ensure_envelope,
    escape_value,
    format_contact,
    run,
    structured_name,
    uri_value,
)
from .models import VCARD_MIME_TYPE, ContactPayload, FormatContactInput

__all__ = [
    # Component
    "run",
    "format_contact",
    # Helpers
    "build_lines",
    "contact_filename",
    "contact_values",
    "ensure_envelope",
    "escape_value",
    "structured_name",
    "uri_value",
    # Constants
    "DEFAULT_PLACEHOLDER_NAME",
    "URL_FIELDS",
    "VCARD_MIME_TYPE",
    # Models
    "ContactPayload",
    "FormatContactInput",
]
