"""Atom elements used for Feature authorship (``atom:author``, ``atom:link``)."""

from __future__ import annotations

from dataclasses import dataclass

from kml_model.core.constants import ATOM_NAMESPACE
from kml_model.models._fields import attribute, text
from kml_model.models.base import KmlElement, kml_element


@kml_element("author", ATOM_NAMESPACE)
@dataclass(frozen=True, slots=True, kw_only=True)
class Author(KmlElement):
    name: str | None = text("name", ns=ATOM_NAMESPACE)
    uri: str | None = text("uri", ns=ATOM_NAMESPACE)
    email: str | None = text("email", ns=ATOM_NAMESPACE)


@kml_element("link", ATOM_NAMESPACE)
@dataclass(frozen=True, slots=True, kw_only=True)
class Link(KmlElement):
    """Related web resource, usually the page hosting the KML."""

    href: str = attribute("href", required=True)
    rel: str | None = attribute("rel")
    mime_type: str | None = attribute("type")
    hreflang: str | None = attribute("hreflang")
    title: str | None = attribute("title")
    length: int | None = attribute("length", int)
