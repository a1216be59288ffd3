"""Field bindings: how each dataclass field maps onto KML markup.

A binding is stored in the dataclass field's ``metadata`` and read by
three consumers: construction-time checks in ``KmlElement``, the tree
walker used by validation, and the reference codec. Models only declare
bindings; they never touch XML themselves.
"""

from __future__ import annotations

import dataclasses
import enum
from dataclasses import dataclass
from typing import Any

from kml_model.core.constants import KML_NAMESPACE

BINDING_KEY = "kml"

# Binding kinds
ATTR = "attr"  # XML attribute on the element itself
TEXT = "text"  # child element holding a scalar; tag may be a '/' path
CONTENT = "content"  # the element's own text
ALTITUDE_MODE = "altitude_mode"  # kml:altitudeMode or gx:altitudeMode
COORDINATES = "coordinates"  # whitespace separated lon,lat[,alt] tuples
LATLON = "latlon"  # coordinates text read as LatLon corners
XY = "xy"  # element carrying x/y/xunits/yunits attributes
OBJECT = "object"  # one nested element, variant chosen by tag
OBJECTS = "objects"  # repeated nested elements, order preserved
REPEATED = "repeated"  # repeated scalar elements
COORD_LIST = "coord_list"  # repeated gx:coord "lon lat alt"
ANGLE_LIST = "angle_list"  # repeated gx:angles "heading tilt roll"
ENUM_LIST = "enum_list"  # one element holding space separated enum values
MARKUP = "markup"  # opaque foreign-namespace children

SEQUENCE_KINDS = frozenset({OBJECTS, REPEATED, COORD_LIST, ANGLE_LIST, ENUM_LIST, MARKUP, LATLON})


@dataclass(frozen=True, slots=True)
class Binding:
    """Mapping of one model field onto KML markup.

    Attributes:
        name: Element or attribute name (or ``/`` path for nested leaves).
        kind: One of the kind constants defined in this module.
        ns: Namespace of the element named by ``name``.
        value_type: Scalar type, ``Enum`` subclass, or model base class.
        required: Absent (``None``) values are a structural violation.
        wrapper: Element wrapping each nested object (``outerBoundaryIs``).
        single: ``COORDINATES`` holds exactly one tuple instead of a sequence.
    """

    name: str
    kind: str
    ns: str = KML_NAMESPACE
    value_type: Any = str
    required: bool = False
    wrapper: str | None = None
    single: bool = False

    @property
    def is_enum(self) -> bool:
        return isinstance(self.value_type, type) and issubclass(self.value_type, enum.Enum)

    @property
    def is_sequence(self) -> bool:
        return self.kind in SEQUENCE_KINDS or (self.kind == COORDINATES and not self.single)


def binding_of(field: dataclasses.Field[Any]) -> Binding | None:
    """Return the binding attached to a dataclass field, if any."""
    return field.metadata.get(BINDING_KEY)


def _field(binding: Binding, default: Any, default_factory: Any) -> Any:
    metadata = {BINDING_KEY: binding}
    if default_factory is not dataclasses.MISSING:
        return dataclasses.field(default_factory=default_factory, metadata=metadata)
    return dataclasses.field(default=default, metadata=metadata)


# ---------------------------------------------------------------------------
# Field factories
# ---------------------------------------------------------------------------


def attribute(name: str, value_type: Any = str, *, default: Any = None, required: bool = False) -> Any:
    """Scalar stored as an XML attribute."""
    binding = Binding(name, ATTR, value_type=value_type, required=required)
    return _field(binding, None if required else default, dataclasses.MISSING)


def text(
    name: str,
    value_type: Any = str,
    *,
    default: Any = None,
    ns: str = KML_NAMESPACE,
    required: bool = False,
) -> Any:
    """Scalar stored as the text of a child element."""
    binding = Binding(name, TEXT, ns=ns, value_type=value_type, required=required)
    return _field(binding, None if required else default, dataclasses.MISSING)


def content(value_type: Any = str, *, default: Any = "") -> Any:
    """Scalar stored as the element's own text."""
    return _field(Binding("", CONTENT, value_type=value_type), default, dataclasses.MISSING)


def altitude_mode(default: Any) -> Any:
    """Altitude mode written in the namespace of its enum."""
    from kml_model.models.enums import BaseAltitudeMode

    binding = Binding("altitudeMode", ALTITUDE_MODE, value_type=BaseAltitudeMode)
    return _field(binding, default, dataclasses.MISSING)


def coordinates(*, single: bool = False, required: bool = False) -> Any:
    """``<coordinates>`` element; a single tuple or a tuple of tuples."""
    binding = Binding("coordinates", COORDINATES, value_type=tuple, required=required, single=single)
    return _field(binding, None if single or required else (), dataclasses.MISSING)


def latlon_corners(ns: str = KML_NAMESPACE) -> Any:
    """``<coordinates>`` element read as ``LatLon`` corners."""
    from kml_model.models.base import LatLon

    binding = Binding("coordinates", LATLON, ns=ns, value_type=LatLon)
    return _field(binding, (), dataclasses.MISSING)


def xy(name: str, *, default: Any = None) -> Any:
    """``XY`` value; ``default`` is a zero-argument factory."""
    from kml_model.models.base import XY as XYValue

    binding = Binding(name, XY, value_type=XYValue)
    if default is None:
        return _field(binding, None, dataclasses.MISSING)
    return _field(binding, dataclasses.MISSING, default)


def child(
    value_type: Any,
    *,
    required: bool = False,
    wrapper: str | None = None,
    ns: str = KML_NAMESPACE,
) -> Any:
    """Single nested element; any registered subclass of ``value_type``."""
    binding = Binding("", OBJECT, ns=ns, value_type=value_type, required=required, wrapper=wrapper)
    return _field(binding, None, dataclasses.MISSING)


def children(value_type: Any, *, wrapper: str | None = None, ns: str = KML_NAMESPACE) -> Any:
    """Ordered nested elements; each a registered subclass of ``value_type``."""
    binding = Binding("", OBJECTS, ns=ns, value_type=value_type, wrapper=wrapper)
    return _field(binding, (), dataclasses.MISSING)


def repeated(name: str, value_type: Any = str, *, ns: str = KML_NAMESPACE) -> Any:
    binding = Binding(name, REPEATED, ns=ns, value_type=value_type)
    return _field(binding, (), dataclasses.MISSING)


def coord_list(name: str, ns: str) -> Any:
    return _field(Binding(name, COORD_LIST, ns=ns, value_type=tuple), (), dataclasses.MISSING)


def angle_list(name: str, ns: str) -> Any:
    return _field(Binding(name, ANGLE_LIST, ns=ns, value_type=tuple), (), dataclasses.MISSING)


def enum_list(name: str, value_type: Any) -> Any:
    return _field(Binding(name, ENUM_LIST, value_type=value_type), (), dataclasses.MISSING)


def markup() -> Any:
    """Opaque foreign markup preserved verbatim."""
    from kml_model.models.base import OpaqueMarkup

    return _field(Binding("", MARKUP, value_type=OpaqueMarkup), (), dataclasses.MISSING)
