"""Tests for the unified violation taxonomy.

Validates:
- KmlModelError base attributes and string form
- Category classification and default codes
- ``to_error_dict()`` produces stable payload keys
- ``at()`` and ``rebase()`` re-root field paths without changing the category
- Violations are also ``ValueError`` (and ``TypeError`` for unsupported variants)
"""

from __future__ import annotations

from typing import ClassVar

import pytest

from kml_model.core.config import ConfigValidationError
from kml_model.core.exceptions import (
    EnumerationViolation,
    KmlModelError,
    KmlParseError,
    RangeViolation,
    ReferenceViolation,
    StructuralViolation,
    UnsupportedElementError,
)


class TestKmlModelErrorBase:
    """KmlModelError base class behavior."""

    def test_default_attributes(self) -> None:
        err = KmlModelError("boom")
        assert err.message == "boom"
        assert err.element == ""
        assert err.field_path == ""
        assert err.code == ""

    def test_str_is_message_without_context(self) -> None:
        assert str(KmlModelError("human-readable error")) == "human-readable error"

    def test_str_prefers_field_path(self) -> None:
        err = KmlModelError("is required", element="Link", field_path="Link.href")
        assert str(err) == "Link.href: is required"

    def test_str_falls_back_to_element(self) -> None:
        err = KmlModelError("bad", element="Polygon")
        assert str(err) == "<Polygon>: bad"

    def test_to_error_dict_keys(self) -> None:
        err = KmlModelError("x", element="E", field_path="E.f", code="C")
        d = err.to_error_dict()
        assert set(d.keys()) == {"category", "code", "element", "field_path", "message"}
        assert d["message"] == "x"
        assert d["element"] == "E"
        assert d["field_path"] == "E.f"
        assert d["code"] == "C"


class TestViolationCategories:
    """Each category sets its own code and category label."""

    CASES: ClassVar[list[tuple[type[KmlModelError], str, str]]] = [
        (StructuralViolation, "KML_STRUCTURE_INVALID", "structural"),
        (EnumerationViolation, "KML_ENUM_INVALID", "enumeration"),
        (RangeViolation, "KML_RANGE_INVALID", "range"),
        (ReferenceViolation, "KML_REFERENCE_INVALID", "reference"),
        (KmlParseError, "KML_PARSE_FAILED", "parse"),
        (UnsupportedElementError, "KML_ELEMENT_UNSUPPORTED", "structural"),
    ]

    @pytest.mark.parametrize(("cls", "code", "category"), CASES)
    def test_default_code_and_category(
        self, cls: type[KmlModelError], code: str, category: str
    ) -> None:
        err = cls("x")
        assert err.code == code
        assert err.category == category
        assert err.to_error_dict()["category"] == category

    @pytest.mark.parametrize(
        "cls", [StructuralViolation, EnumerationViolation, RangeViolation, ReferenceViolation]
    )
    def test_violations_are_value_errors(self, cls: type[KmlModelError]) -> None:
        err = cls("x", element="Point", field_path="Point.coordinates")
        assert isinstance(err, ValueError)
        assert isinstance(err, KmlModelError)
        assert err.field_path == "Point.coordinates"

    def test_unsupported_element_is_type_error(self) -> None:
        assert isinstance(UnsupportedElementError("x"), TypeError)

    def test_explicit_code_overrides_default(self) -> None:
        err = RangeViolation("x", code="CUSTOM")
        assert err.code == "CUSTOM"

    def test_config_error_is_model_error(self) -> None:
        err = ConfigValidationError("KML_ENCODING", "nope", "must be a known codec name")
        assert isinstance(err, KmlModelError)
        assert err.key == "KML_ENCODING"
        assert err.value == "nope"
        assert err.code == "CONFIG_VALIDATION_FAILED"
        assert "KML_ENCODING='nope'" in str(err)


class TestReRooting:
    """``at()`` and ``rebase()`` move the field path and keep the error's identity."""

    def test_at_prefixes_path(self) -> None:
        err = EnumerationViolation("bad", element="Link", field_path="Link.refresh_mode")
        rooted = err.at("NetworkLink")
        assert isinstance(rooted, EnumerationViolation)
        assert rooted.field_path == "NetworkLink.Link.refresh_mode"
        assert rooted.element == "Link"
        assert rooted.code == err.code

    def test_at_without_path_uses_prefix(self) -> None:
        rooted = StructuralViolation("bad").at("Document")
        assert rooted.field_path == "Document"

    def test_rebase_replaces_tag_prefix(self) -> None:
        err = EnumerationViolation("bad", element="Link", field_path="Link.refresh_mode")
        rebased = err.rebase("Link", "Document.features[0].link")
        assert isinstance(rebased, EnumerationViolation)
        assert rebased.field_path == "Document.features[0].link.refresh_mode"
        assert rebased.element == "Link"
        assert rebased.code == err.code

    def test_rebase_exact_tag(self) -> None:
        err = StructuralViolation("bad", element="Placemark", field_path="Placemark")
        assert err.rebase("Placemark", "Folder.features[2]").field_path == "Folder.features[2]"

    def test_rebase_does_not_match_longer_tag(self) -> None:
        err = RangeViolation("bad", element="StyleMap", field_path="StyleMap.pairs")
        rebased = err.rebase("Style", "Document.style_selector[0]")
        assert rebased.field_path == "Document.style_selector[0].StyleMap.pairs"

    def test_rebase_without_path_uses_prefix(self) -> None:
        rebased = KmlParseError("bad").rebase("Point", "Placemark.geometry")
        assert isinstance(rebased, KmlParseError)
        assert rebased.field_path == "Placemark.geometry"
