"""Style selectors and sub-styles.

Colors are KML ``aabbggrr`` hex strings (alpha first, then blue, green,
red). The format is checked by validation.
"""

from __future__ import annotations

from dataclasses import dataclass

from kml_model.core.constants import DEFAULT_COLOR
from kml_model.models import _fields
from kml_model.models._fields import child, children, enum_list, text, xy
from kml_model.models.base import XY, KmlObject, angle360, kml_element
from kml_model.models.enums import (
    ColorMode,
    DisplayMode,
    ItemIconState,
    ListItemType,
    StyleState,
)
from kml_model.models.link import Icon


@dataclass(frozen=True, slots=True, kw_only=True)
class SubStyle(KmlObject):
    """Abstract base of the style components held by ``Style``."""


@dataclass(frozen=True, slots=True, kw_only=True)
class ColorStyle(SubStyle):
    """Abstract base of sub-styles that carry a color."""

    color: str = text("color", default=DEFAULT_COLOR)
    color_mode: ColorMode = text("colorMode", ColorMode, default=ColorMode.NORMAL)


@kml_element("IconStyle")
@dataclass(frozen=True, slots=True, kw_only=True)
class IconStyle(ColorStyle):
    scale: float = text("scale", float, default=1.0)
    heading: angle360 = text("heading", float, default=0.0)
    icon: Icon | None = child(Icon)
    hot_spot: XY | None = xy("hotSpot")


@kml_element("LabelStyle")
@dataclass(frozen=True, slots=True, kw_only=True)
class LabelStyle(ColorStyle):
    scale: float = text("scale", float, default=1.0)


@kml_element("LineStyle")
@dataclass(frozen=True, slots=True, kw_only=True)
class LineStyle(ColorStyle):
    width: float = text("width", float, default=1.0)


@kml_element("PolyStyle")
@dataclass(frozen=True, slots=True, kw_only=True)
class PolyStyle(ColorStyle):
    fill: bool = text("fill", bool, default=True)
    outline: bool = text("outline", bool, default=True)


@kml_element("BalloonStyle")
@dataclass(frozen=True, slots=True, kw_only=True)
class BalloonStyle(SubStyle):
    """Description balloon appearance; ``text`` may use ``$[name]`` entities."""

    bg_color: str = text("bgColor", default=DEFAULT_COLOR)
    text_color: str = text("textColor", default="ff000000")
    text: str | None = text("text")
    # the ``text`` field above shadows the factory in this class body
    display_mode: DisplayMode = _fields.text(
        "displayMode", DisplayMode, default=DisplayMode.DEFAULT
    )


@kml_element("ItemIcon")
@dataclass(frozen=True, slots=True, kw_only=True)
class ItemIcon(KmlObject):
    states: tuple[ItemIconState, ...] = enum_list("state", ItemIconState)
    href: str | None = text("href")


@kml_element("ListStyle")
@dataclass(frozen=True, slots=True, kw_only=True)
class ListStyle(SubStyle):
    list_item_type: ListItemType = text("listItemType", ListItemType, default=ListItemType.CHECK)
    bg_color: str = text("bgColor", default=DEFAULT_COLOR)
    item_icons: tuple[ItemIcon, ...] = children(ItemIcon)


# ---------------------------------------------------------------------------
# Selectors
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True, kw_only=True)
class StyleSelector(KmlObject):
    """Abstract base of ``Style`` and ``StyleMap``."""


@kml_element("Style")
@dataclass(frozen=True, slots=True, kw_only=True)
class Style(StyleSelector):
    icon_style: IconStyle | None = child(IconStyle)
    label_style: LabelStyle | None = child(LabelStyle)
    line_style: LineStyle | None = child(LineStyle)
    poly_style: PolyStyle | None = child(PolyStyle)
    balloon_style: BalloonStyle | None = child(BalloonStyle)
    list_style: ListStyle | None = child(ListStyle)


@kml_element("Pair")
@dataclass(frozen=True, slots=True, kw_only=True)
class Pair(KmlObject):
    """One ``StyleMap`` entry: a state key and a style (by reference or inline)."""

    key: StyleState = text("key", StyleState, required=True)
    style_url: str | None = text("styleUrl")
    style: Style | None = child(Style)


@kml_element("StyleMap")
@dataclass(frozen=True, slots=True, kw_only=True)
class StyleMap(StyleSelector):
    """Switches between styles for the normal and highlighted states."""

    pairs: tuple[Pair, ...] = children(Pair)

    def style_for(self, state: StyleState) -> Pair | None:
        for pair in self.pairs:
            if pair.key is state:
                return pair
        return None
