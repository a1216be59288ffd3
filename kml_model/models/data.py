"""Custom data: ``ExtendedData`` and ``Schema`` declarations."""

from __future__ import annotations

from dataclasses import dataclass

from kml_model.models._fields import attribute, children, content, markup, text
from kml_model.models.base import KmlElement, KmlObject, OpaqueMarkup, kml_element
from kml_model.models.enums import SimpleFieldType


@kml_element("Data")
@dataclass(frozen=True, slots=True, kw_only=True)
class Data(KmlObject):
    """Untyped name/value pair."""

    name: str = attribute("name", required=True)
    display_name: str | None = text("displayName")
    value: str = text("value", required=True)


@kml_element("SimpleData")
@dataclass(frozen=True, slots=True, kw_only=True)
class SimpleData(KmlElement):
    name: str = attribute("name", required=True)
    value: str = content()


@kml_element("SchemaData")
@dataclass(frozen=True, slots=True, kw_only=True)
class SchemaData(KmlObject):
    """Typed values for the fields of the ``Schema`` named by ``schema_url``."""

    schema_url: str = attribute("schemaUrl", required=True)
    simple_data: tuple[SimpleData, ...] = children(SimpleData)


@kml_element("ExtendedData")
@dataclass(frozen=True, slots=True, kw_only=True)
class ExtendedData(KmlElement):
    """Supplementary data attached to a Feature.

    ``other`` keeps elements from foreign namespaces, in document order,
    exactly as they were read.
    """

    data: tuple[Data, ...] = children(Data)
    schema_data: tuple[SchemaData, ...] = children(SchemaData)
    other: tuple[OpaqueMarkup, ...] = markup()

    def as_dict(self) -> dict[str, str]:
        """Flatten ``Data`` and ``SimpleData`` pairs into a name/value dict."""
        values = {item.name: item.value for item in self.data}
        for schema_data in self.schema_data:
            for simple in schema_data.simple_data:
                values[simple.name] = simple.value
        return values


@kml_element("SimpleField")
@dataclass(frozen=True, slots=True, kw_only=True)
class SimpleField(KmlElement):
    field_type: SimpleFieldType = attribute("type", SimpleFieldType, required=True)
    name: str = attribute("name", required=True)
    display_name: str | None = text("displayName")


@kml_element("Schema")
@dataclass(frozen=True, slots=True, kw_only=True)
class Schema(KmlObject):
    """Declares typed fields referenced by ``SchemaData.schema_url``."""

    name: str | None = attribute("name")
    simple_fields: tuple[SimpleField, ...] = children(SimpleField)
