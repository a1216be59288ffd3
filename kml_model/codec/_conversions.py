"""Scalar and coordinate conversions between model values and KML text.

Responsibilities:
- Format scalars (bool, number, enum, str) the way KML writes them
- Parse scalars back, refusing values outside closed enumerations
- Format and parse ``<coordinates>`` tuples, ``gx:coord`` and
  ``gx:angles`` samples
"""

from __future__ import annotations

import enum
from typing import Any

from kml_model.core.exceptions import EnumerationViolation, KmlParseError
from kml_model.models.base import Coordinate, LatLon

_TRUE_TEXT = frozenset({"1", "true"})
_FALSE_TEXT = frozenset({"0", "false"})


# ---------------------------------------------------------------------------
# Scalars
# ---------------------------------------------------------------------------


def format_number(value: float) -> str:
    """Shortest text for a number; integral values drop the ``.0``."""
    number = float(value)
    if number.is_integer():
        return str(int(number))
    return repr(number)


def format_scalar(value: Any) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, enum.Enum):
        return str(value.value)
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return format_number(value)
    return str(value)


def parse_scalar(raw: str | None, value_type: Any, *, element: str, field: str) -> Any:
    """Convert element or attribute text to ``value_type``.

    Raises:
        EnumerationViolation: If ``value_type`` is an enum and ``raw`` is
            not one of its lexical values.
        KmlParseError: If a boolean or number cannot be read.
    """
    path = f"{element}.{field}"
    text = raw or ""
    if value_type is str:
        return text

    stripped = text.strip()
    if isinstance(value_type, type) and issubclass(value_type, enum.Enum):
        try:
            return value_type(stripped)
        except ValueError as exc:
            allowed = [member.value for member in value_type]
            msg = f"{stripped!r} is not one of {allowed}"
            raise EnumerationViolation(msg, element=element, field_path=path) from exc

    if value_type is bool:
        lowered = stripped.lower()
        if lowered in _TRUE_TEXT:
            return True
        if lowered in _FALSE_TEXT:
            return False
        msg = f"{stripped!r} is not a boolean (1/0/true/false)"
        raise KmlParseError(msg, element=element, field_path=path)

    try:
        if value_type is int:
            return int(stripped)
        return float(stripped)
    except ValueError as exc:
        msg = f"{stripped!r} is not a valid {value_type.__name__}"
        raise KmlParseError(msg, element=element, field_path=path) from exc


# ---------------------------------------------------------------------------
# Coordinates
# ---------------------------------------------------------------------------


def format_coordinates(coords: tuple[Coordinate, ...]) -> str:
    """Format tuples as KML ``lon,lat[,alt]`` tokens separated by spaces."""
    return " ".join(",".join(format_number(v) for v in coord) for coord in coords)


def parse_coordinates_text(text: str, *, element: str = "", field: str = "coordinates") -> tuple[Coordinate, ...]:
    """Parse KML coordinate text (``lon,lat[,alt] ...``) into tuples.

    Raises:
        KmlParseError: If any token is not 2 or 3 comma-separated numbers.
    """
    coords: list[Coordinate] = []
    for token in text.split():
        parts = token.strip().strip(",").split(",")
        if len(parts) not in (2, 3):
            msg = f"malformed coordinate {token!r}: expected lon,lat[,alt]"
            raise KmlParseError(msg, element=element, field_path=f"{element}.{field}")
        try:
            coords.append(tuple(float(part) for part in parts))
        except ValueError as exc:
            msg = f"malformed coordinate {token!r}: cannot convert to float"
            raise KmlParseError(msg, element=element, field_path=f"{element}.{field}") from exc
    return tuple(coords)


def format_corners(corners: tuple[LatLon, ...]) -> str:
    return format_coordinates(tuple((corner.lon, corner.lat) for corner in corners))


def parse_corners(text: str, *, element: str = "") -> tuple[LatLon, ...]:
    """Parse ``gx:LatLonQuad`` coordinates; any altitude is dropped."""
    return tuple(
        LatLon(lat=coord[1], lon=coord[0])
        for coord in parse_coordinates_text(text, element=element)
    )


def format_sample(values: tuple[float, ...]) -> str:
    """Format a ``gx:coord``/``gx:angles`` sample (space separated)."""
    return " ".join(format_number(v) for v in values)


def parse_sample(text: str, *, element: str, field: str) -> tuple[float, ...]:
    try:
        return tuple(float(part) for part in text.split())
    except ValueError as exc:
        msg = f"malformed sample {text!r}: expected space separated numbers"
        raise KmlParseError(msg, element=element, field_path=f"{element}.{field}") from exc
