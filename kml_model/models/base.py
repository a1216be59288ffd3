"""Base contracts, primitives and the element registry.

- ``KmlElement``: any markup-bearing model value. Concrete subclasses carry
  explicit ``tag``/``namespace`` discriminants set by ``@kml_element``.
- ``KmlObject``: the KML ``Object`` base with optional ``id``/``target_id``.
- ``XY``, ``LatLon``, ``OpaqueMarkup``: small value types.
- ``angle180``/``angle90``/``angle360``: plain float aliases whose ranges
  are checked by validation, never by storage.

Design notes:
- All models are frozen, slotted, keyword-only dataclasses.
- Construction checks only what a value cannot exist without: required
  fields, closed-enum membership, variant types in nested slots. Ranges
  and couplings are left to ``kml_model.validation``.
- An object carrying ``target_id`` is an update payload (the body of a
  ``Change``): it holds only the fields being changed, so required fields
  and variant invariants are not enforced on it.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Any, ClassVar, TypeVar

from kml_model.core.constants import KML_NAMESPACE
from kml_model.core.exceptions import EnumerationViolation, StructuralViolation
from kml_model.models import _fields
from kml_model.models._fields import attribute, binding_of
from kml_model.models.enums import Units

angle180 = float
angle90 = float
angle360 = float

Coordinate = tuple[float, ...]
"""``(lon, lat)`` or ``(lon, lat, alt)`` in decimal degrees and metres."""

_E = TypeVar("_E", bound="type[KmlElement]")

_REGISTRY: dict[tuple[str, str], type[KmlElement]] = {}


def kml_element(tag: str, namespace: str = KML_NAMESPACE) -> Callable[[_E], _E]:
    """Register a concrete model class under its element name.

    Applied above ``@dataclass`` so the registry holds the final class.
    """

    def decorate(cls: _E) -> _E:
        cls.tag = tag
        cls.namespace = namespace
        _REGISTRY[(namespace, tag)] = cls
        return cls

    return decorate


def lookup_element(namespace: str, tag: str) -> type[KmlElement] | None:
    """Return the model class registered for ``{namespace}tag``."""
    return _REGISTRY.get((namespace, tag))


def registered_elements() -> list[type[KmlElement]]:
    return list(_REGISTRY.values())


# ---------------------------------------------------------------------------
# Value types
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class XY:
    """A point in image or screen space with per-axis units.

    For ``ScreenOverlay.size_xy`` the axis values ``-1`` (native size) and
    ``0`` (preserve aspect ratio) are sentinels; see ``NATIVE_SIZE`` and
    ``PRESERVE_ASPECT`` in ``kml_model.core.constants``. Defaults follow the
    KML schema attribute defaults (``x="1" y="1"``, fraction units).
    """

    x: float = 1.0
    y: float = 1.0
    xunits: Units = Units.FRACTION
    yunits: Units = Units.FRACTION

    def __post_init__(self) -> None:
        for name in ("xunits", "yunits"):
            value = getattr(self, name)
            if not isinstance(value, Units):
                raise EnumerationViolation(
                    f"must be one of {[u.value for u in Units]}, got {value!r}",
                    element="XY",
                    field_path=f"XY.{name}",
                )


@dataclass(frozen=True, slots=True)
class LatLon:
    """A geographic corner in decimal degrees."""

    lat: float
    lon: float


@dataclass(frozen=True, slots=True)
class OpaqueMarkup:
    """Serialized XML of an element the model does not interpret.

    Stored as text so the value stays immutable; the codec re-parses it
    when writing.
    """

    xml: str


# ---------------------------------------------------------------------------
# Element bases
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True, kw_only=True)
class KmlElement:
    """Base of every model value that maps onto a KML element."""

    tag: ClassVar[str] = ""
    namespace: ClassVar[str] = KML_NAMESPACE

    def __post_init__(self) -> None:
        cls = type(self)
        if not cls.tag:
            msg = f"{cls.__name__} is abstract; construct one of its variants"
            raise TypeError(msg)
        partial = self.is_partial
        for field in dataclasses.fields(self):
            binding = binding_of(field)
            if binding is not None:
                _check_field(self, field, binding, partial=partial)
        if not partial:
            self._check_invariants()

    @property
    def is_partial(self) -> bool:
        """Whether this value is an update payload addressed by ``target_id``."""
        return getattr(self, "target_id", None) is not None

    def _check_invariants(self) -> None:
        """Hook for construction-time structural rules of a variant."""


@dataclass(frozen=True, slots=True, kw_only=True)
class KmlObject(KmlElement):
    """The KML ``Object`` base: optional identity and update target."""

    id: str | None = attribute("id")
    target_id: str | None = attribute("targetId")


_TYPED_KINDS = frozenset({_fields.OBJECT, _fields.OBJECTS, _fields.XY, _fields.MARKUP, _fields.LATLON})


def _check_field(
    element: KmlElement, field: dataclasses.Field[Any], binding: _fields.Binding, *, partial: bool
) -> None:
    name = field.name
    value = getattr(element, name)
    path = f"{element.tag}.{name}"

    if value is None:
        if binding.required:
            if partial:
                return
            raise StructuralViolation("is required", element=element.tag, field_path=path)
        if binding.is_sequence or field.default is not None:
            msg = "must not be None; omit the field to use its default"
            raise StructuralViolation(msg, element=element.tag, field_path=path)
        return

    if binding.is_sequence:
        if isinstance(value, list):
            value = tuple(value)
            object.__setattr__(element, name, value)
        if not isinstance(value, tuple):
            msg = f"must be a sequence, got {type(value).__name__}"
            raise StructuralViolation(msg, element=element.tag, field_path=path)
        if binding.kind in (_fields.COORDINATES, _fields.COORD_LIST, _fields.ANGLE_LIST):
            try:
                frozen = tuple(tuple(item) for item in value)
            except TypeError as exc:
                msg = "must be a sequence of numeric tuples"
                raise StructuralViolation(msg, element=element.tag, field_path=path) from exc
            object.__setattr__(element, name, frozen)
            return
        items = value
    else:
        if binding.kind == _fields.COORDINATES:
            if not isinstance(value, tuple):
                object.__setattr__(element, name, tuple(value))
            return
        items = (value,)

    for index, item in enumerate(items):
        item_path = f"{path}[{index}]" if binding.is_sequence else path
        if binding.is_enum or binding.kind == _fields.ALTITUDE_MODE:
            if not isinstance(item, binding.value_type):
                allowed = _allowed_values(binding.value_type)
                msg = f"must be one of {allowed}, got {item!r}"
                raise EnumerationViolation(msg, element=element.tag, field_path=item_path)
        elif binding.kind in _TYPED_KINDS:
            if not isinstance(item, binding.value_type):
                msg = f"must be a {binding.value_type.__name__}, got {type(item).__name__}"
                raise StructuralViolation(msg, element=element.tag, field_path=item_path)


def _allowed_values(enum_type: Any) -> list[str]:
    members = [m.value for m in enum_type]
    for sub in enum_type.__subclasses__():
        members.extend(m.value for m in sub)
    return members


# ---------------------------------------------------------------------------
# Traversal
# ---------------------------------------------------------------------------


def iter_children(element: KmlElement) -> Iterator[tuple[str, KmlElement]]:
    """Yield ``(field path segment, child)`` for nested elements, in order."""
    for field in dataclasses.fields(element):
        binding = binding_of(field)
        if binding is None:
            continue
        value = getattr(element, field.name)
        if binding.kind == _fields.OBJECT and value is not None:
            yield field.name, value
        elif binding.kind == _fields.OBJECTS:
            for index, item in enumerate(value):
                yield f"{field.name}[{index}]", item


def walk(element: KmlElement, path: str = "") -> Iterator[tuple[str, KmlElement]]:
    """Depth-first, document-order traversal yielding ``(path, element)``."""
    path = path or element.tag
    yield path, element
    for segment, item in iter_children(element):
        yield from walk(item, f"{path}.{segment}")
