"""Features: everything a viewer renders.

``Feature`` carries every common field, so traversal and serialization code
reads name, visibility, styling and metadata without knowing the concrete
variant. Variants defined here:

- ``Placemark``: a Feature with an optional ``Geometry``
- ``NetworkLink``: a Feature that loads more KML from a ``Link``
- ``Folder`` / ``Document``: ``Container`` variants holding child Features

Overlays live in ``kml_model.models.overlay``; ``gx:Tour`` in
``kml_model.models.gx``.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING

from kml_model.models._fields import child, children, text
from kml_model.models.atom import Author
from kml_model.models.atom import Link as AtomLink
from kml_model.models.base import KmlObject, kml_element
from kml_model.models.data import ExtendedData, Schema
from kml_model.models.geometry import Geometry, Point
from kml_model.models.link import Link
from kml_model.models.region import Region
from kml_model.models.style import StyleSelector
from kml_model.models.temporal import TimePrimitive
from kml_model.models.view import AbstractView
from kml_model.models.xal import AddressDetails


@dataclass(frozen=True, slots=True, kw_only=True)
class Feature(KmlObject):
    """Abstract base of all rendered elements.

    Attributes:
        name: Label shown in the viewer and the Places panel.
        visibility: Drawn when first loaded. All ancestors must also be
            visible for the Feature to show.
        open: Expanded in the Places panel (Document, Folder, NetworkLink).
        atom_author: Author of the KML.
        atom_link: Web page related to the KML.
        address: Unstructured postal address. When a ``Point`` geometry is
            also present the geometry wins for display; both are kept.
        address_details: Structured xAL address.
        phone_number: RFC 3966 phone number.
        snippet: Short description shown in the Places panel.
        description: Balloon content; may hold HTML.
        abstract_view: Initial viewpoint.
        time_primitive: When the Feature is active.
        style_url: ``#id`` fragment or full URI of a ``Style``/``StyleMap``.
        style_selector: Inline styles, in document order.
        region: Activation region.
        extended_data: Custom data.
    """

    name: str | None = text("name")
    visibility: bool = text("visibility", bool, default=True)
    open: bool = text("open", bool, default=False)
    atom_author: Author | None = child(Author)
    atom_link: AtomLink | None = child(AtomLink)
    address: str | None = text("address")
    address_details: AddressDetails | None = child(AddressDetails)
    phone_number: str | None = text("phoneNumber")
    snippet: str | None = text("Snippet")
    description: str | None = text("description")
    abstract_view: AbstractView | None = child(AbstractView)
    time_primitive: TimePrimitive | None = child(TimePrimitive)
    style_url: str | None = text("styleUrl")
    style_selector: tuple[StyleSelector, ...] = children(StyleSelector)
    region: Region | None = child(Region)
    extended_data: ExtendedData | None = child(ExtendedData)


@kml_element("Placemark")
@dataclass(frozen=True, slots=True, kw_only=True)
class Placemark(Feature):
    geometry: Geometry | None = child(Geometry)

    @property
    def display_location(self) -> Point | str | None:
        """The Point geometry if present, else the free-text address."""
        if isinstance(self.geometry, Point):
            return self.geometry
        return self.address


@kml_element("NetworkLink")
@dataclass(frozen=True, slots=True, kw_only=True)
class NetworkLink(Feature):
    """References KML loaded from ``link``.

    Attributes:
        refresh_visibility: Reset visibility of loaded Features on refresh.
        fly_to_view: Fly to the loaded document's view on refresh.
        link: Location and refresh policy of the linked KML.
    """

    refresh_visibility: bool = text("refreshVisibility", bool, default=False)
    fly_to_view: bool = text("flyToView", bool, default=False)
    link: Link = child(Link, required=True)


# ---------------------------------------------------------------------------
# Containers
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True, kw_only=True)
class Container(Feature):
    """Abstract base of Features that own an ordered sequence of Features.

    Each variant declares ``features`` as its last field so it follows any
    variant-specific fields in document order.
    """

    if TYPE_CHECKING:
        features: tuple[Feature, ...]

    def iter_features(self) -> Iterator[Feature]:
        """Yield every descendant Feature depth-first, in document order."""
        for feature in self.features:
            yield feature
            if isinstance(feature, Container):
                yield from feature.iter_features()


@kml_element("Folder")
@dataclass(frozen=True, slots=True, kw_only=True)
class Folder(Container):
    features: tuple[Feature, ...] = children(Feature)


@kml_element("Document")
@dataclass(frozen=True, slots=True, kw_only=True)
class Document(Container):
    """Root container; also the home of shared styles and schemas."""

    schemas: tuple[Schema, ...] = children(Schema)
    features: tuple[Feature, ...] = children(Feature)

    def find_style(self, style_id: str) -> StyleSelector | None:
        for selector in self.style_selector:
            if selector.id == style_id:
                return selector
        return None
