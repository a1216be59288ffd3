"""Reference lxml codec for the KML model.

The codec is split into focused stages:
- **_conversions**: scalar, enum and coordinate text forms
- **_writer**: model tree to ``<kml>`` markup (default omission,
  namespaces declared only when used)
- **_reader**: ``<kml>`` markup to model tree (hardened parser, closed
  enumerations enforced)

Round trip: ``from_string(to_string(tree))`` equals ``tree`` for every tree
that passes ``validate_document``.
"""

from __future__ import annotations

from kml_model.codec._conversions import (
    format_coordinates,
    format_scalar,
    parse_coordinates_text,
    parse_scalar,
)
from kml_model.codec._reader import from_element, from_string, parse_kml
from kml_model.codec._writer import to_element, to_string, write_kml

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

__all__ = [
    "format_coordinates",
    "format_scalar",
    "from_element",
    "from_string",
    "parse_coordinates_text",
    "parse_kml",
    "parse_scalar",
    "to_element",
    "to_string",
    "write_kml",
]
