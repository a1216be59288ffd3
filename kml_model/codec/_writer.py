"""Serializer: model trees to KML markup.

Every field is written from its binding, in declaration order, which is
KML schema order. Fields equal to their default are omitted. Namespaces
are declared once on the outermost element and pruned when unused, so
``gx``/``atom``/``xal`` appear only in documents that use them.
"""

from __future__ import annotations

import dataclasses
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from lxml import etree  # type: ignore[attr-defined]

from kml_model.codec._conversions import (
    format_coordinates,
    format_corners,
    format_sample,
    format_scalar,
)
from kml_model.core.config import CodecConfig
from kml_model.core.constants import GX_NAMESPACE, KML_NAMESPACE, NSMAP
from kml_model.core.exceptions import (
    StructuralViolation,
    UnsupportedElementError,
)
from kml_model.models import _fields
from kml_model.models._fields import Binding, binding_of
from kml_model.models.base import KmlElement, lookup_element
from kml_model.models.feature import Feature
from kml_model.validation import validate_document

if TYPE_CHECKING:
    from lxml.etree import _Element

logger = logging.getLogger("kml_model.codec")

_MARKUP_PARSER = etree.XMLParser(resolve_entities=False, no_network=True, huge_tree=False)


def to_element(element: KmlElement) -> _Element:
    """Build the lxml element for ``element`` and its descendants.

    Raises:
        UnsupportedElementError: If a variant in the tree is not registered.
        StructuralViolation: If opaque markup is not well-formed XML.
    """
    node = etree.Element(_qname(*_registered_name(element, element.tag)), nsmap=NSMAP)
    _fill(node, element, element.tag)
    etree.cleanup_namespaces(node)
    return node


def to_string(root: Feature, config: CodecConfig | None = None) -> bytes:
    """Serialize a Document (or bare Feature) as a ``<kml>`` document.

    Returns the encoded bytes (``config.encoding``). When
    ``config.validate_on_write`` is set, the tree is validated first and
    the first violation is raised instead of writing anything.
    """
    config = config or CodecConfig()
    if not isinstance(root, Feature):
        msg = f"document root must be a Feature, got {type(root).__name__}"
        raise UnsupportedElementError(msg, element=getattr(root, "tag", ""))
    if config.validate_on_write:
        validate_document(root)

    kml = etree.Element(_qname(KML_NAMESPACE, "kml"), nsmap=NSMAP)
    _append(kml, root, root.tag)
    etree.cleanup_namespaces(kml)
    return etree.tostring(
        kml,
        pretty_print=config.pretty_print,
        xml_declaration=config.xml_declaration,
        encoding=config.encoding,
    )


def write_kml(root: Feature, path: Path | str, config: CodecConfig | None = None) -> Path:
    """Serialize ``root`` and write it to ``path``; returns the path written."""
    path = Path(path)
    content = to_string(root, config)
    path.write_bytes(content)
    logger.info("Wrote KML document %s (%d bytes)", path.name, len(content))
    return path


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _qname(namespace: str, tag: str) -> str:
    return f"{{{namespace}}}{tag}"


def _registered_name(element: KmlElement, path: str) -> tuple[str, str]:
    cls = type(element)
    if not cls.tag or lookup_element(cls.namespace, cls.tag) is not cls:
        msg = f"no KML binding for {cls.__name__}"
        raise UnsupportedElementError(msg, element=cls.tag, field_path=path)
    return cls.namespace, cls.tag


def _append(parent: _Element, element: KmlElement, path: str) -> None:
    node = etree.SubElement(parent, _qname(*_registered_name(element, path)))
    _fill(node, element, path)


def _fill(node: _Element, element: KmlElement, path: str) -> None:
    for field in dataclasses.fields(element):
        binding = binding_of(field)
        if binding is None:
            continue
        value = getattr(element, field.name)
        if _is_default(field, binding, value):
            continue
        _WRITERS[binding.kind](node, binding, value, f"{path}.{field.name}")


def _is_default(field: dataclasses.Field[Any], binding: Binding, value: Any) -> bool:
    if value is None:
        return True
    if binding.required:
        return False
    if binding.is_sequence:
        return len(value) == 0
    if field.default is not dataclasses.MISSING:
        return value == field.default
    if field.default_factory is not dataclasses.MISSING:
        return value == field.default_factory()
    return False


def _leaf(node: _Element, path: str, namespace: str) -> _Element:
    """Create the element at ``path``, reusing intermediate elements."""
    *parents, name = path.split("/")
    for segment in parents:
        existing = node.find(_qname(namespace, segment))
        node = existing if existing is not None else etree.SubElement(node, _qname(namespace, segment))
    return etree.SubElement(node, _qname(namespace, name))


def _write_attr(node: _Element, binding: Binding, value: Any, path: str) -> None:
    node.set(binding.name, format_scalar(value))


def _write_text(node: _Element, binding: Binding, value: Any, path: str) -> None:
    _leaf(node, binding.name, binding.ns).text = format_scalar(value)


def _write_content(node: _Element, binding: Binding, value: Any, path: str) -> None:
    node.text = format_scalar(value)


def _write_altitude_mode(node: _Element, binding: Binding, value: Any, path: str) -> None:
    namespace = GX_NAMESPACE if value.is_extension else KML_NAMESPACE
    etree.SubElement(node, _qname(namespace, binding.name)).text = value.value


def _write_coordinates(node: _Element, binding: Binding, value: Any, path: str) -> None:
    coords = (value,) if binding.single else value
    etree.SubElement(node, _qname(binding.ns, binding.name)).text = format_coordinates(coords)


def _write_latlon(node: _Element, binding: Binding, value: Any, path: str) -> None:
    etree.SubElement(node, _qname(binding.ns, binding.name)).text = format_corners(value)


def _write_xy(node: _Element, binding: Binding, value: Any, path: str) -> None:
    xy_node = etree.SubElement(node, _qname(binding.ns, binding.name))
    xy_node.set("x", format_scalar(value.x))
    xy_node.set("y", format_scalar(value.y))
    xy_node.set("xunits", value.xunits.value)
    xy_node.set("yunits", value.yunits.value)


def _write_object(node: _Element, binding: Binding, value: Any, path: str) -> None:
    parent = node
    if binding.wrapper:
        parent = etree.SubElement(node, _qname(binding.ns, binding.wrapper))
    _append(parent, value, path)


def _write_objects(node: _Element, binding: Binding, value: Any, path: str) -> None:
    for index, item in enumerate(value):
        _write_object(node, binding, item, f"{path}[{index}]")


def _write_repeated(node: _Element, binding: Binding, value: Any, path: str) -> None:
    for item in value:
        etree.SubElement(node, _qname(binding.ns, binding.name)).text = format_scalar(item)


def _write_samples(node: _Element, binding: Binding, value: Any, path: str) -> None:
    for sample in value:
        etree.SubElement(node, _qname(binding.ns, binding.name)).text = format_sample(sample)


def _write_enum_list(node: _Element, binding: Binding, value: Any, path: str) -> None:
    text = " ".join(member.value for member in value)
    etree.SubElement(node, _qname(binding.ns, binding.name)).text = text


def _write_markup(node: _Element, binding: Binding, value: Any, path: str) -> None:
    for index, item in enumerate(value):
        try:
            node.append(etree.fromstring(item.xml, parser=_MARKUP_PARSER))
        except etree.XMLSyntaxError as exc:
            msg = f"opaque markup is not well-formed XML: {exc}"
            element = etree.QName(node).localname
            raise StructuralViolation(msg, element=element, field_path=f"{path}[{index}]") from exc


_WRITERS = {
    _fields.ATTR: _write_attr,
    _fields.TEXT: _write_text,
    _fields.CONTENT: _write_content,
    _fields.ALTITUDE_MODE: _write_altitude_mode,
    _fields.COORDINATES: _write_coordinates,
    _fields.LATLON: _write_latlon,
    _fields.XY: _write_xy,
    _fields.OBJECT: _write_object,
    _fields.OBJECTS: _write_objects,
    _fields.REPEATED: _write_repeated,
    _fields.COORD_LIST: _write_samples,
    _fields.ANGLE_LIST: _write_samples,
    _fields.ENUM_LIST: _write_enum_list,
    _fields.MARKUP: _write_markup,
}
