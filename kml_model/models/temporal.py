"""Time primitives attached to Features (and, in ``gx``, to views).

Values are kept in their XML Schema lexical form (``dateTime``, ``date``,
``gYearMonth`` or ``gYear``) so the precision the author chose survives a
round trip. The format is checked by validation.
"""

from __future__ import annotations

from dataclasses import dataclass

from kml_model.models._fields import text
from kml_model.models.base import KmlObject, kml_element


@dataclass(frozen=True, slots=True, kw_only=True)
class TimePrimitive(KmlObject):
    """Abstract base of ``TimeStamp`` and ``TimeSpan``."""


@kml_element("TimeStamp")
@dataclass(frozen=True, slots=True, kw_only=True)
class TimeStamp(TimePrimitive):
    """A single moment in time."""

    when: str = text("when", required=True)


@kml_element("TimeSpan")
@dataclass(frozen=True, slots=True, kw_only=True)
class TimeSpan(TimePrimitive):
    """An extent in time; an absent bound is open-ended."""

    begin: str | None = text("begin")
    end: str | None = text("end")
