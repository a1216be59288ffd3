"""Shared constants: the single source of truth for namespaces and sentinels.

References:
    OGC KML 2.2 (07-147r2), Annex A
    Google KML Extension Reference (``gx`` namespace)
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# XML namespaces
# ---------------------------------------------------------------------------

KML_NAMESPACE: str = "http://www.opengis.net/kml/2.2"
"""OGC KML 2.2 namespace."""

GX_NAMESPACE: str = "http://www.google.com/kml/ext/2.2"
"""Google extension namespace."""

ATOM_NAMESPACE: str = "http://www.w3.org/2005/Atom"
"""Atom syndication namespace (``atom:author``, ``atom:link``)."""

XAL_NAMESPACE: str = "urn:oasis:names:tc:ciq:xsdschema:xAL:2.0"
"""OASIS extensible Address Language namespace."""

NSMAP: dict[str | None, str] = {
    None: KML_NAMESPACE,
    "gx": GX_NAMESPACE,
    "atom": ATOM_NAMESPACE,
    "xal": XAL_NAMESPACE,
}
"""Prefix map used when writing; unused prefixes are stripped afterwards."""

# ---------------------------------------------------------------------------
# ScreenOverlay size sentinels
# ---------------------------------------------------------------------------

NATIVE_SIZE: float = -1
"""``<size>`` axis value meaning "use the image's native dimension"."""

PRESERVE_ASPECT: float = 0
"""``<size>`` axis value meaning "scale to keep the aspect ratio"."""

# ---------------------------------------------------------------------------
# Coordinate bounds
# ---------------------------------------------------------------------------

MIN_LONGITUDE = -180.0
MAX_LONGITUDE = 180.0
MIN_LATITUDE = -90.0
MAX_LATITUDE = 90.0

# Minimum vertices for a LinearRing (3 distinct + closing = 4)
MIN_RING_VERTICES = 4

DEFAULT_COLOR: str = "ffffffff"
"""Opaque white in KML ``aabbggrr`` order."""
