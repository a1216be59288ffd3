"""Viewpoints: ``Camera`` and ``LookAt``."""

from __future__ import annotations

from dataclasses import dataclass

from kml_model.models._fields import altitude_mode, child, text
from kml_model.models.base import KmlObject, angle90, angle180, angle360, kml_element
from kml_model.models.enums import AltitudeMode, BaseAltitudeMode
from kml_model.models.temporal import TimePrimitive


@dataclass(frozen=True, slots=True, kw_only=True)
class AbstractView(KmlObject):
    """Abstract base of ``Camera`` and ``LookAt``."""


@kml_element("Camera")
@dataclass(frozen=True, slots=True, kw_only=True)
class Camera(AbstractView):
    """Position and orientation of the viewer itself.

    Attributes:
        longitude: Camera longitude (angle180).
        latitude: Camera latitude (angle90).
        altitude: Metres, interpreted per ``altitude_mode``.
        heading: Rotation about the z axis (angle360).
        tilt: Rotation about the x axis, 0 looks straight down (0-180).
        roll: Rotation about the y axis (angle180).
        time_primitive: ``gx:TimeStamp``/``gx:TimeSpan`` for historical imagery.
    """

    longitude: angle180 = text("longitude", float, default=0.0)
    latitude: angle90 = text("latitude", float, default=0.0)
    altitude: float = text("altitude", float, default=0.0)
    heading: angle360 = text("heading", float, default=0.0)
    tilt: float = text("tilt", float, default=0.0)
    roll: angle180 = text("roll", float, default=0.0)
    altitude_mode: BaseAltitudeMode = altitude_mode(AltitudeMode.CLAMP_TO_GROUND)
    time_primitive: TimePrimitive | None = child(TimePrimitive)


@kml_element("LookAt")
@dataclass(frozen=True, slots=True, kw_only=True)
class LookAt(AbstractView):
    """A viewpoint aimed at a point on (or above) the Earth.

    ``range`` is the distance in metres from the looked-at point to the
    viewer. ``tilt`` is limited to 0-90.
    """

    longitude: angle180 = text("longitude", float, default=0.0)
    latitude: angle90 = text("latitude", float, default=0.0)
    altitude: float = text("altitude", float, default=0.0)
    heading: angle360 = text("heading", float, default=0.0)
    tilt: float = text("tilt", float, default=0.0)
    range: float = text("range", float, default=0.0)
    altitude_mode: BaseAltitudeMode = altitude_mode(AltitudeMode.CLAMP_TO_GROUND)
    time_primitive: TimePrimitive | None = child(TimePrimitive)
