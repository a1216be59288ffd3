"""Google extension (``gx``) elements.

Mirrors the base model under ``http://www.google.com/kml/ext/2.2``:
tours, tracks, quadrilateral ground placement and sea-floor altitude
modes. Extension variants subclass the same bases as the core variants
(``Feature``, ``Geometry``, ``TimePrimitive``), so they fit every slot the
core ones do.
"""

from __future__ import annotations

from dataclasses import dataclass

from kml_model.core.constants import GX_NAMESPACE
from kml_model.models._fields import (
    altitude_mode,
    angle_list,
    child,
    children,
    coord_list,
    latlon_corners,
    repeated,
    text,
)
from kml_model.models.base import Coordinate, KmlObject, LatLon, kml_element
from kml_model.models.enums import AltitudeMode, BaseAltitudeMode, FlyToMode, PlayMode
from kml_model.models.enums import GxAltitudeMode as AltitudeModeExtension
from kml_model.models.feature import Feature
from kml_model.models.geometry import Geometry, Model
from kml_model.models.temporal import TimeSpan, TimeStamp
from kml_model.models.update import Update
from kml_model.models.view import AbstractView

__all__ = [
    "AltitudeModeExtension",
    "AnimatedUpdate",
    "FlyTo",
    "GxTimeSpan",
    "GxTimeStamp",
    "LatLonQuad",
    "MultiTrack",
    "PlayList",
    "SoundCue",
    "Tour",
    "TourControl",
    "TourPrimitive",
    "Track",
    "Wait",
]


@kml_element("TimeStamp", GX_NAMESPACE)
@dataclass(frozen=True, slots=True, kw_only=True)
class GxTimeStamp(TimeStamp):
    """``gx:TimeStamp``: selects historical imagery for a view."""


@kml_element("TimeSpan", GX_NAMESPACE)
@dataclass(frozen=True, slots=True, kw_only=True)
class GxTimeSpan(TimeSpan):
    """``gx:TimeSpan``: selects a range of historical imagery for a view."""


@kml_element("LatLonQuad", GX_NAMESPACE)
@dataclass(frozen=True, slots=True, kw_only=True)
class LatLonQuad(KmlObject):
    """Non-rectangular ground placement of a ``GroundOverlay``.

    Four corners, counter-clockwise starting at the lower-left of the
    image. The quadrilateral must be convex.
    """

    coordinates: tuple[LatLon, ...] = latlon_corners()


# ---------------------------------------------------------------------------
# Tracks
# ---------------------------------------------------------------------------


@kml_element("Track", GX_NAMESPACE)
@dataclass(frozen=True, slots=True, kw_only=True)
class Track(Geometry):
    """A path sampled in time.

    ``whens`` and ``coords`` are parallel sequences; ``angles``, when
    given, holds one ``(heading, tilt, roll)`` per sample.
    """

    altitude_mode: BaseAltitudeMode = altitude_mode(AltitudeMode.CLAMP_TO_GROUND)
    whens: tuple[str, ...] = repeated("when")
    coords: tuple[Coordinate, ...] = coord_list("coord", GX_NAMESPACE)
    angles: tuple[tuple[float, float, float], ...] = angle_list("angles", GX_NAMESPACE)
    model: Model | None = child(Model)


@kml_element("MultiTrack", GX_NAMESPACE)
@dataclass(frozen=True, slots=True, kw_only=True)
class MultiTrack(Geometry):
    """Several tracks; ``interpolate`` joins the end of one to the next."""

    altitude_mode: BaseAltitudeMode = altitude_mode(AltitudeMode.CLAMP_TO_GROUND)
    interpolate: bool = text("interpolate", bool, default=False, ns=GX_NAMESPACE)
    tracks: tuple[Track, ...] = children(Track)


# ---------------------------------------------------------------------------
# Tours
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True, kw_only=True)
class TourPrimitive(KmlObject):
    """Abstract base of the steps of a ``PlayList``."""


@kml_element("AnimatedUpdate", GX_NAMESPACE)
@dataclass(frozen=True, slots=True, kw_only=True)
class AnimatedUpdate(TourPrimitive):
    duration: float = text("duration", float, default=0.0, ns=GX_NAMESPACE)
    update: Update | None = child(Update)
    delayed_start: float = text("delayedStart", float, default=0.0, ns=GX_NAMESPACE)


@kml_element("FlyTo", GX_NAMESPACE)
@dataclass(frozen=True, slots=True, kw_only=True)
class FlyTo(TourPrimitive):
    duration: float = text("duration", float, default=0.0, ns=GX_NAMESPACE)
    fly_to_mode: FlyToMode = text("flyToMode", FlyToMode, default=FlyToMode.BOUNCE, ns=GX_NAMESPACE)
    view: AbstractView | None = child(AbstractView)


@kml_element("SoundCue", GX_NAMESPACE)
@dataclass(frozen=True, slots=True, kw_only=True)
class SoundCue(TourPrimitive):
    """Plays an audio file; the tour continues while it plays."""

    href: str = text("href", required=True)
    delayed_start: float = text("delayedStart", float, default=0.0, ns=GX_NAMESPACE)


@kml_element("Wait", GX_NAMESPACE)
@dataclass(frozen=True, slots=True, kw_only=True)
class Wait(TourPrimitive):
    duration: float = text("duration", float, default=0.0, ns=GX_NAMESPACE)


@kml_element("TourControl", GX_NAMESPACE)
@dataclass(frozen=True, slots=True, kw_only=True)
class TourControl(TourPrimitive):
    play_mode: PlayMode = text("playMode", PlayMode, default=PlayMode.PAUSE, ns=GX_NAMESPACE)


@kml_element("Playlist", GX_NAMESPACE)
@dataclass(frozen=True, slots=True, kw_only=True)
class PlayList(KmlObject):
    """Tour steps, executed in order by the viewer."""

    primitives: tuple[TourPrimitive, ...] = children(TourPrimitive)

    @property
    def total_duration(self) -> float:
        """Sum of ``FlyTo`` and ``Wait`` durations, in seconds."""
        return sum(p.duration for p in self.primitives if isinstance(p, FlyTo | Wait))


@kml_element("Tour", GX_NAMESPACE)
@dataclass(frozen=True, slots=True, kw_only=True)
class Tour(Feature):
    play_list: PlayList | None = child(PlayList)
