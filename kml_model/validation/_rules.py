"""Element-level validation rules.

Each rule takes one element and yields violations; it never raises.
Rules are registered per model class and apply to subclasses too, so a
rule for ``BasicLink`` covers both ``Link`` and ``Icon``.

Responsibilities:
- Coupled fields (refresh mode/interval, view refresh mode/time)
- Exclusive fields (GroundOverlay placement, StyleMap pair content)
- Angle, latitude/longitude and altitude-box ranges
- Coordinate counts and ring closure
- Lexical formats: ``aabbggrr`` colors and XML Schema date/times
- LatLonQuad convexity and winding (shapely)
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterator
from typing import Any

from kml_model.core.constants import (
    MAX_LATITUDE,
    MAX_LONGITUDE,
    MIN_LATITUDE,
    MIN_LONGITUDE,
    MIN_RING_VERTICES,
)
from kml_model.core.exceptions import (
    EnumerationViolation,
    KmlModelError,
    RangeViolation,
    StructuralViolation,
)
from kml_model.models import gx
from kml_model.models.base import KmlElement
from kml_model.models.enums import AltitudeMode, RefreshMode, ViewRefreshMode
from kml_model.models.geometry import LinearRing, LineString, Location, Orientation, Point
from kml_model.models.link import BasicLink, Icon
from kml_model.models.overlay import (
    GroundOverlay,
    ImagePyramid,
    PhotoOverlay,
    ScreenOverlay,
    ViewVolume,
    check_ground_placement,
)
from kml_model.models.region import AbstractLatLonBox, LatLonAltBox, LatLonBox, Lod
from kml_model.models.style import BalloonStyle, ColorStyle, IconStyle, ListStyle, Pair
from kml_model.models.temporal import TimeSpan, TimeStamp
from kml_model.models.view import Camera, LookAt

logger = logging.getLogger("kml_model.validation")

Rule = Callable[[Any], Iterator[KmlModelError]]

_RULES: list[tuple[type[KmlElement], Rule]] = []

_COLOR_RE = re.compile(r"^[0-9a-fA-F]{8}$")

# XML Schema dateTime | date | gYearMonth | gYear
_DATETIME_RE = re.compile(
    r"^-?\d{4,}"
    r"(-(0[1-9]|1[0-2])"
    r"(-(0[1-9]|[12]\d|3[01])"
    r"(T([01]\d|2[0-3]):[0-5]\d:[0-5]\d(\.\d+)?)?)?)?"
    r"(Z|[+-]\d{2}:\d{2})?$"
)

_GROUND_OVERLAY_MODES = frozenset(
    {AltitudeMode.CLAMP_TO_GROUND, AltitudeMode.ABSOLUTE, *gx.AltitudeModeExtension}
)


def rule(model: type[KmlElement]) -> Callable[[Rule], Rule]:
    """Register ``func`` for ``model`` and its subclasses."""

    def decorate(func: Rule) -> Rule:
        _RULES.append((model, func))
        return func

    return decorate


def check_element(element: KmlElement) -> Iterator[KmlModelError]:
    """Yield every violation of the rules that apply to ``element``."""
    for model, func in _RULES:
        if isinstance(element, model):
            yield from func(element)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _structural(element: KmlElement, field: str, message: str) -> StructuralViolation:
    return StructuralViolation(message, element=element.tag, field_path=f"{element.tag}.{field}")


def _out_of_range(
    element: KmlElement, field: str, value: float, low: float, high: float
) -> Iterator[RangeViolation]:
    if not low <= value <= high:
        yield RangeViolation(
            f"{value!r} outside [{low:g}, {high:g}]",
            element=element.tag,
            field_path=f"{element.tag}.{field}",
        )


def _angle180(element: KmlElement, *names: str) -> Iterator[RangeViolation]:
    for name in names:
        yield from _out_of_range(element, name, getattr(element, name), -180.0, 180.0)


def _angle90(element: KmlElement, *names: str) -> Iterator[RangeViolation]:
    for name in names:
        yield from _out_of_range(element, name, getattr(element, name), -90.0, 90.0)


def _angle360(element: KmlElement, *names: str) -> Iterator[RangeViolation]:
    for name in names:
        yield from _out_of_range(element, name, getattr(element, name), -360.0, 360.0)


def _coordinate(element: KmlElement, field: str, coord: tuple[float, ...]) -> Iterator[KmlModelError]:
    if len(coord) not in (2, 3):
        yield _structural(element, field, f"coordinate {coord!r} must have 2 or 3 values")
        return
    yield from _out_of_range(element, field, coord[0], MIN_LONGITUDE, MAX_LONGITUDE)
    yield from _out_of_range(element, field, coord[1], MIN_LATITUDE, MAX_LATITUDE)


def _color(element: KmlElement, field: str) -> Iterator[RangeViolation]:
    value = getattr(element, field)
    if not _COLOR_RE.match(value):
        yield RangeViolation(
            f"{value!r} is not an aabbggrr hex color",
            element=element.tag,
            field_path=f"{element.tag}.{field}",
        )


def _datetime(element: KmlElement, field: str) -> Iterator[RangeViolation]:
    value = getattr(element, field)
    if value is not None and not _DATETIME_RE.match(value):
        yield RangeViolation(
            f"{value!r} is not an XML Schema dateTime, date, gYearMonth or gYear",
            element=element.tag,
            field_path=f"{element.tag}.{field}",
        )


def _is_power_of_two(value: int) -> bool:
    return value > 0 and value & (value - 1) == 0


# ---------------------------------------------------------------------------
# Resource descriptors
# ---------------------------------------------------------------------------


@rule(BasicLink)
def _link_refresh(link: BasicLink) -> Iterator[KmlModelError]:
    if link.refresh_mode is RefreshMode.ON_INTERVAL and link.refresh_interval is None:
        yield _structural(link, "refresh_interval", "is required when refresh_mode is onInterval")
    if link.view_refresh_mode is ViewRefreshMode.ON_STOP and link.view_refresh_time is None:
        yield _structural(link, "view_refresh_time", "is required when view_refresh_mode is onStop")
    if link.refresh_interval is not None and link.refresh_interval <= 0:
        yield RangeViolation(
            f"{link.refresh_interval!r} must be > 0 seconds",
            element=link.tag,
            field_path=f"{link.tag}.refresh_interval",
        )
    if link.view_refresh_time is not None and link.view_refresh_time < 0:
        yield RangeViolation(
            f"{link.view_refresh_time!r} must be >= 0 seconds",
            element=link.tag,
            field_path=f"{link.tag}.view_refresh_time",
        )
    if link.view_bound_scale <= 0:
        yield RangeViolation(
            f"{link.view_bound_scale!r} must be > 0",
            element=link.tag,
            field_path=f"{link.tag}.view_bound_scale",
        )
    if not link.href:
        yield _structural(link, "href", "must not be empty")


@rule(Icon)
def _icon_palette(icon: Icon) -> Iterator[KmlModelError]:
    values = (icon.gx_x, icon.gx_y, icon.gx_w, icon.gx_h)
    for name, value in zip(("gx_x", "gx_y", "gx_w", "gx_h"), values, strict=True):
        if value is not None and value < 0:
            yield RangeViolation(
                f"{value!r} must be >= 0 pixels", element=icon.tag, field_path=f"Icon.{name}"
            )


# ---------------------------------------------------------------------------
# Geometry
# ---------------------------------------------------------------------------


@rule(Point)
def _point(point: Point) -> Iterator[KmlModelError]:
    yield from _coordinate(point, "coordinates", point.coordinates)


@rule(LineString)
def _line_string(line: LineString) -> Iterator[KmlModelError]:
    if len(line.coordinates) < 2:
        yield _structural(line, "coordinates", f"needs at least 2 vertices, got {len(line.coordinates)}")
    for coord in line.coordinates:
        yield from _coordinate(line, "coordinates", coord)


@rule(LinearRing)
def _linear_ring(ring: LinearRing) -> Iterator[KmlModelError]:
    coords = ring.coordinates
    if len(coords) < MIN_RING_VERTICES:
        yield _structural(
            ring,
            "coordinates",
            f"needs at least {MIN_RING_VERTICES} vertices (including closure), got {len(coords)}",
        )
    elif coords[0] != coords[-1]:
        yield _structural(ring, "coordinates", "first and last vertex must be equal")
    for coord in coords:
        yield from _coordinate(ring, "coordinates", coord)


@rule(Location)
def _location(location: Location) -> Iterator[KmlModelError]:
    yield from _angle180(location, "longitude")
    yield from _angle90(location, "latitude")


@rule(Orientation)
def _orientation(orientation: Orientation) -> Iterator[KmlModelError]:
    yield from _angle360(orientation, "heading")
    yield from _angle180(orientation, "tilt", "roll")


@rule(gx.Track)
def _track(track: gx.Track) -> Iterator[KmlModelError]:
    if len(track.whens) != len(track.coords):
        yield _structural(
            track,
            "coords",
            f"{len(track.coords)} coords for {len(track.whens)} whens; counts must match",
        )
    if track.angles and len(track.angles) != len(track.coords):
        yield _structural(
            track,
            "angles",
            f"{len(track.angles)} angles for {len(track.coords)} coords; counts must match",
        )
    for index, when in enumerate(track.whens):
        if not _DATETIME_RE.match(when):
            yield RangeViolation(
                f"{when!r} is not an XML Schema dateTime",
                element=track.tag,
                field_path=f"Track.whens[{index}]",
            )
    for coord in track.coords:
        yield from _coordinate(track, "coords", coord)


# ---------------------------------------------------------------------------
# Boxes and regions
# ---------------------------------------------------------------------------


@rule(AbstractLatLonBox)
def _lat_lon_box(box: AbstractLatLonBox) -> Iterator[KmlModelError]:
    yield from _angle90(box, "north", "south")
    if box.north < box.south:
        yield _structural(box, "north", f"north ({box.north}) must be >= south ({box.south})")


@rule(LatLonBox)
def _lat_lon_box_edges(box: LatLonBox) -> Iterator[KmlModelError]:
    # boxes crossing the antimeridian may push east or west past 180
    yield from _angle360(box, "east", "west")
    yield from _angle180(box, "rotation")


@rule(LatLonAltBox)
def _lat_lon_alt_box(box: LatLonAltBox) -> Iterator[KmlModelError]:
    yield from _angle180(box, "east", "west")
    if box.min_altitude > box.max_altitude:
        yield _structural(
            box,
            "min_altitude",
            f"min_altitude ({box.min_altitude}) must be <= max_altitude ({box.max_altitude})",
        )


@rule(Lod)
def _lod(lod: Lod) -> Iterator[KmlModelError]:
    if lod.max_lod_pixels != -1 and lod.max_lod_pixels < lod.min_lod_pixels:
        yield _structural(lod, "max_lod_pixels", "must be -1 or >= min_lod_pixels")


@rule(gx.LatLonQuad)
def _lat_lon_quad(quad: gx.LatLonQuad) -> Iterator[KmlModelError]:
    corners = quad.coordinates
    if len(corners) != 4:
        yield _structural(quad, "coordinates", f"needs exactly 4 corners, got {len(corners)}")
        return
    for corner in corners:
        yield from _out_of_range(quad, "coordinates", corner.lon, MIN_LONGITUDE, MAX_LONGITUDE)
        yield from _out_of_range(quad, "coordinates", corner.lat, MIN_LATITUDE, MAX_LATITUDE)
    yield from _quad_shape(quad)


def _quad_shape(quad: gx.LatLonQuad) -> Iterator[KmlModelError]:
    """Check the corners form a convex, counter-clockwise quadrilateral."""
    from shapely.geometry import LinearRing as ShapelyRing
    from shapely.geometry import Polygon as ShapelyPolygon

    points = [(corner.lon, corner.lat) for corner in quad.coordinates]
    polygon = ShapelyPolygon(points)
    if not polygon.is_valid or polygon.area == 0:
        yield _structural(quad, "coordinates", "corners do not form a simple quadrilateral")
        return
    if not polygon.convex_hull.equals(polygon):
        yield _structural(quad, "coordinates", "quadrilateral must be convex")
    if not ShapelyRing(points).is_ccw:
        logger.debug("LatLonQuad corners are clockwise: %s", points)
        yield _structural(quad, "coordinates", "corners must run counter-clockwise")


# ---------------------------------------------------------------------------
# Overlays
# ---------------------------------------------------------------------------


@rule(GroundOverlay)
def _ground_overlay(overlay: GroundOverlay) -> Iterator[KmlModelError]:
    try:
        check_ground_placement(overlay)
    except StructuralViolation as exc:
        yield exc
    if overlay.altitude_mode not in _GROUND_OVERLAY_MODES:
        yield EnumerationViolation(
            f"{overlay.altitude_mode.value!r} is not a ground overlay altitude mode",
            element=overlay.tag,
            field_path="GroundOverlay.altitude_mode",
        )


@rule(ScreenOverlay)
def _screen_overlay(overlay: ScreenOverlay) -> Iterator[KmlModelError]:
    yield from _angle180(overlay, "rotation")


@rule(PhotoOverlay)
def _photo_overlay(overlay: PhotoOverlay) -> Iterator[KmlModelError]:
    yield from _angle180(overlay, "rotation")


@rule(ViewVolume)
def _view_volume(volume: ViewVolume) -> Iterator[KmlModelError]:
    yield from _angle180(volume, "left_fov", "right_fov")
    yield from _angle90(volume, "bottom_fov", "top_fov")
    if volume.near < 0:
        yield RangeViolation(
            f"{volume.near!r} must be >= 0 metres", element=volume.tag, field_path="ViewVolume.near"
        )


@rule(ImagePyramid)
def _image_pyramid(pyramid: ImagePyramid) -> Iterator[KmlModelError]:
    if not _is_power_of_two(pyramid.tile_size):
        yield RangeViolation(
            f"{pyramid.tile_size!r} is not a power of two",
            element=pyramid.tag,
            field_path="ImagePyramid.tile_size",
        )
    for name in ("max_width", "max_height"):
        if getattr(pyramid, name) < 0:
            yield RangeViolation(
                "must be >= 0 pixels", element=pyramid.tag, field_path=f"ImagePyramid.{name}"
            )


# ---------------------------------------------------------------------------
# Styles
# ---------------------------------------------------------------------------


@rule(ColorStyle)
def _color_style(style: ColorStyle) -> Iterator[KmlModelError]:
    yield from _color(style, "color")


@rule(IconStyle)
def _icon_style(style: IconStyle) -> Iterator[KmlModelError]:
    yield from _angle360(style, "heading")


@rule(BalloonStyle)
def _balloon_style(style: BalloonStyle) -> Iterator[KmlModelError]:
    yield from _color(style, "bg_color")
    yield from _color(style, "text_color")


@rule(ListStyle)
def _list_style(style: ListStyle) -> Iterator[KmlModelError]:
    yield from _color(style, "bg_color")


@rule(Pair)
def _pair(pair: Pair) -> Iterator[KmlModelError]:
    if pair.style_url is None and pair.style is None:
        yield _structural(pair, "style_url", "one of style_url or style is required")


# ---------------------------------------------------------------------------
# Time and views
# ---------------------------------------------------------------------------


@rule(TimeStamp)
def _time_stamp(stamp: TimeStamp) -> Iterator[KmlModelError]:
    yield from _datetime(stamp, "when")


@rule(TimeSpan)
def _time_span(span: TimeSpan) -> Iterator[KmlModelError]:
    yield from _datetime(span, "begin")
    yield from _datetime(span, "end")


@rule(Camera)
def _camera(camera: Camera) -> Iterator[KmlModelError]:
    yield from _angle180(camera, "longitude", "roll")
    yield from _angle90(camera, "latitude")
    yield from _angle360(camera, "heading")
    yield from _out_of_range(camera, "tilt", camera.tilt, 0.0, 180.0)


@rule(LookAt)
def _look_at(look_at: LookAt) -> Iterator[KmlModelError]:
    yield from _angle180(look_at, "longitude")
    yield from _angle90(look_at, "latitude")
    yield from _angle360(look_at, "heading")
    yield from _out_of_range(look_at, "tilt", look_at.tilt, 0.0, 90.0)
    if look_at.range < 0:
        yield RangeViolation(
            f"{look_at.range!r} must be >= 0 metres", element=look_at.tag, field_path="LookAt.range"
        )
