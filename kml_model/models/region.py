"""Regions and bounding boxes."""

from __future__ import annotations

from dataclasses import dataclass

from kml_model.models._fields import altitude_mode, child, text
from kml_model.models.base import KmlObject, angle90, angle180, kml_element
from kml_model.models.enums import AltitudeMode, BaseAltitudeMode


@dataclass(frozen=True, slots=True, kw_only=True)
class AbstractLatLonBox(KmlObject):
    """Edges shared by ``LatLonBox`` and ``LatLonAltBox``, in decimal degrees."""

    north: angle90 = text("north", float, required=True)
    south: angle90 = text("south", float, required=True)
    east: angle180 = text("east", float, required=True)
    west: angle180 = text("west", float, required=True)


@kml_element("LatLonBox")
@dataclass(frozen=True, slots=True, kw_only=True)
class LatLonBox(AbstractLatLonBox):
    """Axis-aligned ground placement of a ``GroundOverlay``.

    ``rotation`` turns the box counter-clockwise about its centre. Boxes
    crossing the 180 degree meridian may carry ``east``/``west`` beyond
    +/-180.
    """

    rotation: angle180 = text("rotation", float, default=0.0)


@kml_element("LatLonAltBox")
@dataclass(frozen=True, slots=True, kw_only=True)
class LatLonAltBox(AbstractLatLonBox):
    min_altitude: float = text("minAltitude", float, default=0.0)
    max_altitude: float = text("maxAltitude", float, default=0.0)
    altitude_mode: BaseAltitudeMode = altitude_mode(AltitudeMode.CLAMP_TO_GROUND)


@kml_element("Lod")
@dataclass(frozen=True, slots=True, kw_only=True)
class Lod(KmlObject):
    """Level of detail: the projected size range in which a Region is active.

    ``max_lod_pixels = -1`` means active to infinite size.
    """

    min_lod_pixels: float = text("minLodPixels", float, default=0.0)
    max_lod_pixels: float = text("maxLodPixels", float, default=-1.0)
    min_fade_extent: float = text("minFadeExtent", float, default=0.0)
    max_fade_extent: float = text("maxFadeExtent", float, default=0.0)


@kml_element("Region")
@dataclass(frozen=True, slots=True, kw_only=True)
class Region(KmlObject):
    lat_lon_alt_box: LatLonAltBox = child(LatLonAltBox, required=True)
    lod: Lod | None = child(Lod)
