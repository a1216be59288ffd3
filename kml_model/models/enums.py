"""Closed enumerations used by KML fields.

Every member's value is its KML lexical form, so codecs convert with
``Enum(value)`` / ``member.value`` and anything else is rejected.
"""

from __future__ import annotations

import enum


class RefreshMode(enum.Enum):
    """Time-based refresh trigger for a ``Link``/``Icon``."""

    ON_CHANGE = "onChange"
    ON_INTERVAL = "onInterval"
    ON_EXPIRE = "onExpire"


class ViewRefreshMode(enum.Enum):
    """Camera-movement refresh trigger for a ``Link``/``Icon``."""

    NEVER = "never"
    ON_STOP = "onStop"
    ON_REQUEST = "onRequest"
    ON_REGION = "onRegion"


class BaseAltitudeMode(enum.Enum):
    """Common base of the KML and ``gx`` altitude modes.

    Fields typed with this base accept members of either namespace.
    """

    @property
    def is_extension(self) -> bool:
        """Whether this mode lives in the ``gx`` namespace."""
        return isinstance(self, GxAltitudeMode)


class AltitudeMode(BaseAltitudeMode):
    """OGC KML 2.2 altitude modes."""

    CLAMP_TO_GROUND = "clampToGround"
    RELATIVE_TO_GROUND = "relativeToGround"
    ABSOLUTE = "absolute"


class GxAltitudeMode(BaseAltitudeMode):
    """Google extension altitude modes, measured against the sea floor."""

    CLAMP_TO_SEA_FLOOR = "clampToSeaFloor"
    RELATIVE_TO_SEA_FLOOR = "relativeToSeaFloor"


class Shape(enum.Enum):
    """Projection surface of a ``PhotoOverlay``."""

    RECTANGLE = "rectangle"
    CYLINDER = "cylinder"
    SPHERE = "sphere"


class GridOrigin(enum.Enum):
    """Where row 0 / column 0 of an ``ImagePyramid`` starts."""

    LOWER_LEFT = "lowerLeft"
    UPPER_LEFT = "upperLeft"


class Units(enum.Enum):
    """Unit tag of one axis of an ``XY`` value."""

    FRACTION = "fraction"
    PIXELS = "pixels"
    INSET_PIXELS = "insetPixels"


class ColorMode(enum.Enum):
    NORMAL = "normal"
    RANDOM = "random"


class DisplayMode(enum.Enum):
    DEFAULT = "default"
    HIDE = "hide"


class ListItemType(enum.Enum):
    """How a Feature's children appear in the Places panel."""

    CHECK = "check"
    CHECK_OFF_ONLY = "checkOffOnly"
    CHECK_HIDE_CHILDREN = "checkHideChildren"
    RADIO_FOLDER = "radioFolder"


class ItemIconState(enum.Enum):
    OPEN = "open"
    CLOSED = "closed"
    ERROR = "error"
    FETCHING0 = "fetching0"
    FETCHING1 = "fetching1"
    FETCHING2 = "fetching2"


class StyleState(enum.Enum):
    """Key of a ``StyleMap`` pair."""

    NORMAL = "normal"
    HIGHLIGHT = "highlight"


class SimpleFieldType(enum.Enum):
    """Value type declared by a ``Schema`` field."""

    STRING = "string"
    INT = "int"
    UINT = "uint"
    SHORT = "short"
    USHORT = "ushort"
    FLOAT = "float"
    DOUBLE = "double"
    BOOL = "bool"


class FlyToMode(enum.Enum):
    """Transition style of a ``gx:FlyTo``."""

    BOUNCE = "bounce"
    SMOOTH = "smooth"


class PlayMode(enum.Enum):
    """Tour control action of a ``gx:TourControl``."""

    PAUSE = "pause"
