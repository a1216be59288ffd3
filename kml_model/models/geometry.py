"""Geometry variants: ``Point``, ``LineString``, ``LinearRing``, ``Polygon``,
``MultiGeometry`` and ``Model``.

Coordinates are ``(lon, lat)`` or ``(lon, lat, alt)`` tuples in WGS 84
decimal degrees, altitude in metres. Vertex counts, ring closure and
coordinate bounds are validation concerns.
"""

from __future__ import annotations

from dataclasses import dataclass

from kml_model.models._fields import altitude_mode, child, children, coordinates, text
from kml_model.models.base import Coordinate, KmlObject, angle90, angle180, angle360, kml_element
from kml_model.models.enums import AltitudeMode, BaseAltitudeMode
from kml_model.models.link import Link


@dataclass(frozen=True, slots=True, kw_only=True)
class Geometry(KmlObject):
    """Abstract base of all geometry variants."""


@kml_element("Point")
@dataclass(frozen=True, slots=True, kw_only=True)
class Point(Geometry):
    extrude: bool = text("extrude", bool, default=False)
    altitude_mode: BaseAltitudeMode = altitude_mode(AltitudeMode.CLAMP_TO_GROUND)
    coordinates: Coordinate = coordinates(single=True, required=True)


@kml_element("LineString")
@dataclass(frozen=True, slots=True, kw_only=True)
class LineString(Geometry):
    """An open path of two or more vertices."""

    extrude: bool = text("extrude", bool, default=False)
    tessellate: bool = text("tessellate", bool, default=False)
    altitude_mode: BaseAltitudeMode = altitude_mode(AltitudeMode.CLAMP_TO_GROUND)
    coordinates: tuple[Coordinate, ...] = coordinates()


@kml_element("LinearRing")
@dataclass(frozen=True, slots=True, kw_only=True)
class LinearRing(Geometry):
    """A closed path: at least four vertices, first equal to last."""

    extrude: bool = text("extrude", bool, default=False)
    tessellate: bool = text("tessellate", bool, default=False)
    altitude_mode: BaseAltitudeMode = altitude_mode(AltitudeMode.CLAMP_TO_GROUND)
    coordinates: tuple[Coordinate, ...] = coordinates()


@kml_element("Polygon")
@dataclass(frozen=True, slots=True, kw_only=True)
class Polygon(Geometry):
    extrude: bool = text("extrude", bool, default=False)
    tessellate: bool = text("tessellate", bool, default=False)
    altitude_mode: BaseAltitudeMode = altitude_mode(AltitudeMode.CLAMP_TO_GROUND)
    outer_boundary: LinearRing = child(LinearRing, required=True, wrapper="outerBoundaryIs")
    inner_boundaries: tuple[LinearRing, ...] = children(LinearRing, wrapper="innerBoundaryIs")


@kml_element("MultiGeometry")
@dataclass(frozen=True, slots=True, kw_only=True)
class MultiGeometry(Geometry):
    geometries: tuple[Geometry, ...] = children(Geometry)


# ---------------------------------------------------------------------------
# Model and its parts
# ---------------------------------------------------------------------------


@kml_element("Location")
@dataclass(frozen=True, slots=True, kw_only=True)
class Location(KmlObject):
    longitude: angle180 = text("longitude", float, default=0.0)
    latitude: angle90 = text("latitude", float, default=0.0)
    altitude: float = text("altitude", float, default=0.0)


@kml_element("Orientation")
@dataclass(frozen=True, slots=True, kw_only=True)
class Orientation(KmlObject):
    heading: angle360 = text("heading", float, default=0.0)
    tilt: angle180 = text("tilt", float, default=0.0)
    roll: angle180 = text("roll", float, default=0.0)


@kml_element("Scale")
@dataclass(frozen=True, slots=True, kw_only=True)
class Scale(KmlObject):
    x: float = text("x", float, default=1.0)
    y: float = text("y", float, default=1.0)
    z: float = text("z", float, default=1.0)


@kml_element("Alias")
@dataclass(frozen=True, slots=True, kw_only=True)
class Alias(KmlObject):
    """Maps a texture path inside a model file to a path in the KMZ."""

    target_href: str = text("targetHref", required=True)
    source_href: str = text("sourceHref", required=True)


@kml_element("ResourceMap")
@dataclass(frozen=True, slots=True, kw_only=True)
class ResourceMap(KmlObject):
    aliases: tuple[Alias, ...] = children(Alias)


@kml_element("Model")
@dataclass(frozen=True, slots=True, kw_only=True)
class Model(Geometry):
    """A 3D model (COLLADA) placed at a ``Location``."""

    altitude_mode: BaseAltitudeMode = altitude_mode(AltitudeMode.CLAMP_TO_GROUND)
    location: Location | None = child(Location)
    orientation: Orientation | None = child(Orientation)
    scale: Scale | None = child(Scale)
    link: Link = child(Link, required=True)
    resource_map: ResourceMap | None = child(ResourceMap)
