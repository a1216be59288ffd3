"""Parser: KML markup to model trees.

Each element is looked up in the element registry by namespace and local
name, and its fields are read back through their bindings. Absent fields
take their model defaults. Nested elements are routed to the field whose
declared base class they subclass, so ordering in the input does not
matter.

Security: the lxml parser never resolves entities or touches the network.
"""

from __future__ import annotations

import copy
import dataclasses
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from lxml import etree  # type: ignore[attr-defined]

from kml_model.codec._conversions import (
    parse_coordinates_text,
    parse_corners,
    parse_sample,
    parse_scalar,
)
from kml_model.core.config import CodecConfig
from kml_model.core.constants import GX_NAMESPACE, KML_NAMESPACE
from kml_model.core.exceptions import (
    KmlModelError,
    KmlParseError,
    StructuralViolation,
    UnsupportedElementError,
)
from kml_model.models import _fields
from kml_model.models._fields import Binding, binding_of
from kml_model.models.base import XY, KmlElement, OpaqueMarkup, lookup_element
from kml_model.models.enums import AltitudeMode, GxAltitudeMode, Units
from kml_model.models.feature import Feature

if TYPE_CHECKING:
    from lxml.etree import _Element

logger = logging.getLogger("kml_model.codec")

_ABSENT = object()
_NESTED_KINDS = frozenset({_fields.OBJECT, _fields.OBJECTS})


def parse_kml(path: Path | str, *, config: CodecConfig | None = None) -> Feature:
    """Read a KML file and return its root Feature.

    Raises:
        KmlParseError: If the file is not well-formed XML or not KML.
        EnumerationViolation: If a closed-enumeration field holds an
            unknown value; ``element`` and ``field_path`` name it.
        StructuralViolation: If a required field is missing.
    """
    path = Path(path)
    logger.info("Parsing KML file: %s", path.name)
    root = from_string(path.read_bytes(), config=config)
    logger.info("Parsed <%s> from %s", root.tag, path.name)
    return root


def from_string(content: bytes | str, *, config: CodecConfig | None = None) -> Feature:
    """Parse a KML document held in memory.

    A ``<kml>`` root is unwrapped to its Feature; a bare Feature root is
    accepted as well.
    """
    config = config or CodecConfig()
    if isinstance(content, str):
        content = content.encode("utf-8")
    parser = etree.XMLParser(resolve_entities=False, no_network=True, huge_tree=config.huge_tree)
    try:
        node: _Element = etree.fromstring(content, parser=parser)
    except etree.XMLSyntaxError as exc:
        msg = f"not well-formed XML: {exc}"
        raise KmlParseError(msg) from exc

    namespace, tag = _split(node.tag)
    if namespace != KML_NAMESPACE:
        msg = f"root element <{tag}> is not in the KML namespace {KML_NAMESPACE}"
        raise KmlParseError(msg, element=tag)
    if tag == "kml":
        node = _feature_node(node)

    element = from_element(node)
    if not isinstance(element, Feature):
        msg = f"document root <{element.tag}> is not a Feature"
        raise KmlParseError(msg, element=element.tag)
    return element


def from_element(node: _Element) -> KmlElement:
    """Build the model value for an lxml element and its descendants.

    Raises:
        UnsupportedElementError: If the element has no registered model.
        StructuralViolation: If a required field is missing. Objects with a
            ``targetId`` are update payloads and may omit required fields.
    """
    namespace, tag = _split(node.tag)
    cls = lookup_element(namespace, tag)
    if cls is None:
        msg = f"no model registered for {{{namespace}}}{tag}"
        raise UnsupportedElementError(msg, element=tag)

    return cls(**_read_fields(node, cls))


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _split(qname: str) -> tuple[str, str]:
    q = etree.QName(qname)
    return q.namespace or "", q.localname


def _qname(namespace: str, tag: str) -> str:
    return f"{{{namespace}}}{tag}"


def _element_children(node: _Element) -> list[_Element]:
    # Comments and processing instructions have non-string tags.
    return [child for child in node if isinstance(child.tag, str)]


def _feature_node(kml: _Element) -> _Element:
    for child in _element_children(kml):
        namespace, tag = _split(child.tag)
        cls = lookup_element(namespace, tag)
        if cls is not None and issubclass(cls, Feature):
            return child
        logger.debug("Skipping <%s> under <kml>", tag)
    msg = "<kml> holds no Feature"
    raise KmlParseError(msg, element="kml")


def _read_child(node: _Element, path: str) -> KmlElement:
    """Read a nested element; its errors are re-rooted at ``path``."""
    try:
        return from_element(node)
    except KmlModelError as exc:
        raise exc.rebase(_split(node.tag)[1], path) from exc


def _read_fields(node: _Element, cls: type[KmlElement]) -> dict[str, Any]:
    kwargs: dict[str, Any] = {}
    nested: list[tuple[str, Binding]] = []
    known: set[str] = set()

    for field in dataclasses.fields(cls):
        binding = binding_of(field)
        if binding is None:
            continue
        if binding.kind in _NESTED_KINDS and not binding.wrapper:
            nested.append((field.name, binding))
            continue
        known.update(_claimed_names(binding))
        value = _READERS[binding.kind](node, binding, cls.tag, field.name)
        if value is not _ABSENT:
            kwargs[field.name] = value

    for child in _element_children(node):
        if child.tag in known:
            continue
        namespace, tag = _split(child.tag)
        child_cls = lookup_element(namespace, tag)
        target = None
        if child_cls is not None:
            target = next(
                ((name, b) for name, b in nested if issubclass(child_cls, b.value_type)), None
            )
        if target is None:
            if namespace == KML_NAMESPACE or not _holds_markup(cls):
                logger.warning("Ignoring unexpected <%s> in <%s>", tag, cls.tag)
            continue

        name, binding = target
        if binding.kind == _fields.OBJECT:
            if name in kwargs:
                msg = f"only one element allowed, got another <{tag}>"
                raise StructuralViolation(msg, element=cls.tag, field_path=f"{cls.tag}.{name}")
            kwargs[name] = _read_child(child, f"{cls.tag}.{name}")
        else:
            items = kwargs.setdefault(name, [])
            items.append(_read_child(child, f"{cls.tag}.{name}[{len(items)}]"))
    return kwargs


def _claimed_names(binding: Binding) -> set[str]:
    if binding.kind == _fields.ALTITUDE_MODE:
        return {_qname(KML_NAMESPACE, binding.name), _qname(GX_NAMESPACE, binding.name)}
    if binding.kind in (_fields.ATTR, _fields.CONTENT, _fields.MARKUP):
        return set()
    name = binding.wrapper or binding.name.split("/")[0]
    return {_qname(binding.ns, name)}


def _holds_markup(cls: type[KmlElement]) -> bool:
    return any(
        (b := binding_of(f)) is not None and b.kind == _fields.MARKUP
        for f in dataclasses.fields(cls)
    )


def _path(binding: Binding) -> str:
    return "/".join(_qname(binding.ns, segment) for segment in binding.name.split("/"))


def _read_attr(node: _Element, binding: Binding, tag: str, name: str) -> Any:
    raw = node.get(binding.name)
    if raw is None:
        return _ABSENT
    return parse_scalar(raw, binding.value_type, element=tag, field=name)


def _read_text(node: _Element, binding: Binding, tag: str, name: str) -> Any:
    leaf = node.find(_path(binding))
    if leaf is None:
        return _ABSENT
    return parse_scalar(leaf.text, binding.value_type, element=tag, field=name)


def _read_content(node: _Element, binding: Binding, tag: str, name: str) -> Any:
    return parse_scalar(node.text, binding.value_type, element=tag, field=name)


def _read_altitude_mode(node: _Element, binding: Binding, tag: str, name: str) -> Any:
    # gx:altitudeMode wins when both are present
    for namespace, enum_type in ((GX_NAMESPACE, GxAltitudeMode), (KML_NAMESPACE, AltitudeMode)):
        leaf = node.find(_qname(namespace, binding.name))
        if leaf is not None:
            return parse_scalar(leaf.text, enum_type, element=tag, field=name)
    return _ABSENT


def _read_coordinates(node: _Element, binding: Binding, tag: str, name: str) -> Any:
    leaf = node.find(_qname(binding.ns, binding.name))
    if leaf is None:
        return _ABSENT
    coords = parse_coordinates_text(leaf.text or "", element=tag, field=name)
    if not binding.single:
        return coords
    if len(coords) != 1:
        msg = f"expected exactly one coordinate, got {len(coords)}"
        raise StructuralViolation(msg, element=tag, field_path=f"{tag}.{name}")
    return coords[0]


def _read_latlon(node: _Element, binding: Binding, tag: str, name: str) -> Any:
    leaf = node.find(_qname(binding.ns, binding.name))
    if leaf is None:
        return _ABSENT
    return parse_corners(leaf.text or "", element=tag)


def _read_xy(node: _Element, binding: Binding, tag: str, name: str) -> Any:
    leaf = node.find(_qname(binding.ns, binding.name))
    if leaf is None:
        return _ABSENT
    default = XY()
    return XY(
        x=_xy_attribute(leaf, "x", float, default.x, tag, name),
        y=_xy_attribute(leaf, "y", float, default.y, tag, name),
        xunits=_xy_attribute(leaf, "xunits", Units, default.xunits, tag, name),
        yunits=_xy_attribute(leaf, "yunits", Units, default.yunits, tag, name),
    )


def _xy_attribute(leaf: _Element, attr: str, value_type: Any, default: Any, tag: str, name: str) -> Any:
    raw = leaf.get(attr)
    if raw is None:
        return default
    return parse_scalar(raw, value_type, element=tag, field=f"{name}.{attr}")


def _read_wrapped(node: _Element, binding: Binding, tag: str, name: str) -> Any:
    wrappers = node.findall(_qname(binding.ns, binding.wrapper))
    inners = [inner for wrapper in wrappers for inner in _element_children(wrapper)]
    if binding.kind == _fields.OBJECTS:
        return tuple(
            _read_child(inner, f"{tag}.{name}[{index}]") for index, inner in enumerate(inners)
        )
    items = [_read_child(inner, f"{tag}.{name}") for inner in inners]
    if not items:
        return _ABSENT
    if len(items) > 1:
        msg = f"<{binding.wrapper}> holds {len(items)} elements; expected one"
        raise StructuralViolation(msg, element=tag, field_path=f"{tag}.{name}")
    return items[0]


def _read_repeated(node: _Element, binding: Binding, tag: str, name: str) -> Any:
    return tuple(
        parse_scalar(leaf.text, binding.value_type, element=tag, field=f"{name}[{index}]")
        for index, leaf in enumerate(node.findall(_qname(binding.ns, binding.name)))
    )


def _read_samples(node: _Element, binding: Binding, tag: str, name: str) -> Any:
    return tuple(
        parse_sample(leaf.text or "", element=tag, field=f"{name}[{index}]")
        for index, leaf in enumerate(node.findall(_qname(binding.ns, binding.name)))
    )


def _read_enum_list(node: _Element, binding: Binding, tag: str, name: str) -> Any:
    leaf = node.find(_qname(binding.ns, binding.name))
    if leaf is None:
        return _ABSENT
    return tuple(
        parse_scalar(token, binding.value_type, element=tag, field=name)
        for token in (leaf.text or "").split()
    )


def _read_markup(node: _Element, binding: Binding, tag: str, name: str) -> Any:
    return tuple(
        _opaque(child)
        for child in _element_children(node)
        if _split(child.tag)[0] != KML_NAMESPACE
    )


def _opaque(node: _Element) -> OpaqueMarkup:
    """Detach ``node`` keeping only the namespace declarations it uses."""
    detached = copy.deepcopy(node)
    detached.tail = None
    etree.cleanup_namespaces(detached)
    return OpaqueMarkup(xml=etree.tostring(detached, encoding="unicode"))


_READERS = {
    _fields.ATTR: _read_attr,
    _fields.TEXT: _read_text,
    _fields.CONTENT: _read_content,
    _fields.ALTITUDE_MODE: _read_altitude_mode,
    _fields.COORDINATES: _read_coordinates,
    _fields.LATLON: _read_latlon,
    _fields.XY: _read_xy,
    _fields.OBJECT: _read_wrapped,
    _fields.OBJECTS: _read_wrapped,
    _fields.REPEATED: _read_repeated,
    _fields.COORD_LIST: _read_samples,
    _fields.ANGLE_LIST: _read_samples,
    _fields.ENUM_LIST: _read_enum_list,
    _fields.MARKUP: _read_markup,
}
