"""Overlays: images fixed to the ground, the screen, or a photo frustum.

- ``GroundOverlay``: an ``Icon`` draped on terrain, placed by exactly one of
  ``LatLonBox`` or ``gx:LatLonQuad``.
- ``ScreenOverlay``: an ``Icon`` fixed to the screen via ``XY`` anchors.
- ``PhotoOverlay``: an ``Icon`` shown in a view frustum, optionally tiled
  through an ``ImagePyramid``.
"""

from __future__ import annotations

from dataclasses import dataclass

from kml_model.core.constants import DEFAULT_COLOR
from kml_model.core.exceptions import StructuralViolation
from kml_model.models._fields import altitude_mode, child, text, xy
from kml_model.models.base import XY, KmlObject, angle90, angle180, kml_element
from kml_model.models.enums import AltitudeMode, BaseAltitudeMode, GridOrigin, Shape
from kml_model.models.feature import Feature
from kml_model.models.geometry import Point
from kml_model.models.gx import LatLonQuad
from kml_model.models.link import Icon
from kml_model.models.region import LatLonBox

#: Tile edge, in pixels, a viewer assumes when ``tileSize`` is omitted.
DEFAULT_TILE_SIZE = 256


@dataclass(frozen=True, slots=True, kw_only=True)
class Overlay(Feature):
    """Abstract base of overlays.

    Attributes:
        color: ``aabbggrr`` tint blended with the image.
        draw_order: Stacking order among overlapping overlays.
        icon: The image.
    """

    color: str = text("color", default=DEFAULT_COLOR)
    draw_order: int = text("drawOrder", int, default=0)
    icon: Icon | None = child(Icon)


@kml_element("GroundOverlay")
@dataclass(frozen=True, slots=True, kw_only=True)
class GroundOverlay(Overlay):
    """Image draped on the terrain.

    Exactly one of ``lat_lon_box`` and ``lat_lon_quad`` must be given.
    ``altitude_mode`` accepts ``clampToGround``, ``absolute`` and either
    ``gx`` mode.
    """

    altitude: float = text("altitude", float, default=0.0)
    altitude_mode: BaseAltitudeMode = altitude_mode(AltitudeMode.CLAMP_TO_GROUND)
    lat_lon_box: LatLonBox | None = child(LatLonBox)
    lat_lon_quad: LatLonQuad | None = child(LatLonQuad)

    def _check_invariants(self) -> None:
        check_ground_placement(self)


def check_ground_placement(overlay: GroundOverlay) -> None:
    """Raise ``StructuralViolation`` unless exactly one placement is set."""
    has_box = overlay.lat_lon_box is not None
    has_quad = overlay.lat_lon_quad is not None
    if has_box and has_quad:
        msg = "lat_lon_box and lat_lon_quad are mutually exclusive; got both"
        raise StructuralViolation(msg, element="GroundOverlay", field_path="GroundOverlay.lat_lon_box")
    if not has_box and not has_quad:
        msg = "exactly one of lat_lon_box or lat_lon_quad is required; got neither"
        raise StructuralViolation(msg, element="GroundOverlay", field_path="GroundOverlay.lat_lon_box")


@kml_element("ScreenOverlay")
@dataclass(frozen=True, slots=True, kw_only=True)
class ScreenOverlay(Overlay):
    """Image fixed to the screen.

    Attributes:
        overlay_xy: Point in the image mapped to ``screen_xy``.
        screen_xy: Point on the screen the image is anchored to.
        rotation_xy: Point on the screen the image rotates about.
        size_xy: Displayed size. Per axis, ``-1`` keeps the image's native
            size and ``0`` scales to preserve the aspect ratio; any other
            value is a size in the axis' units. Sentinels are stored as-is.
        rotation: Counter-clockwise rotation in degrees (angle180).
    """

    overlay_xy: XY | None = xy("overlayXY")
    screen_xy: XY | None = xy("screenXY")
    rotation_xy: XY | None = xy("rotationXY")
    size_xy: XY | None = xy("size")
    rotation: angle180 = text("rotation", float, default=0.0)


@kml_element("ViewVolume")
@dataclass(frozen=True, slots=True, kw_only=True)
class ViewVolume(KmlObject):
    """Frustum of a ``PhotoOverlay``: field-of-view angles plus near distance.

    Left/right angles are angle180, bottom/top are angle90, all measured
    from the viewing direction. ``near`` is in metres.
    """

    left_fov: angle180 = text("leftFov", float, default=0.0)
    right_fov: angle180 = text("rightFov", float, default=0.0)
    bottom_fov: angle90 = text("bottomFov", float, default=0.0)
    top_fov: angle90 = text("topFov", float, default=0.0)
    near: float = text("near", float, default=0.0)


@kml_element("ImagePyramid")
@dataclass(frozen=True, slots=True, kw_only=True)
class ImagePyramid(KmlObject):
    """Tiling of a very large photo.

    Tiles are square with a power-of-two ``tile_size`` in pixels.
    ``max_width``/``max_height`` are the full-resolution image size.
    """

    tile_size: int = text("tileSize", int, default=DEFAULT_TILE_SIZE)
    max_width: int = text("maxWidth", int, default=0)
    max_height: int = text("maxHeight", int, default=0)
    grid_origin: GridOrigin = text("gridOrigin", GridOrigin, default=GridOrigin.LOWER_LEFT)


@kml_element("PhotoOverlay")
@dataclass(frozen=True, slots=True, kw_only=True)
class PhotoOverlay(Overlay):
    rotation: angle180 = text("rotation", float, default=0.0)
    view_volume: ViewVolume | None = child(ViewVolume)
    image_pyramid: ImagePyramid | None = child(ImagePyramid)
    point: Point | None = child(Point)
    shape: Shape = text("shape", Shape, default=Shape.RECTANGLE)
