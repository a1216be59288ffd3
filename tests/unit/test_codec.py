"""Tests for the reference lxml codec.

Covers:
- Scalar and coordinate conversions
- Default omission and namespace declarations on write
- The ScreenOverlay ``size`` scenario
- Every closed-enumeration member written and read back
- Parsing sample documents (styles, schema data, gx tours and tracks)
- Parser refusals: malformed XML, foreign root, unknown enum values,
  missing required fields
- Round trips of sample files and in-memory trees
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from pathlib import Path

import pytest
from lxml import etree

from kml_model.codec import (
    format_coordinates,
    format_scalar,
    from_element,
    from_string,
    parse_coordinates_text,
    parse_kml,
    parse_scalar,
    to_element,
    to_string,
    write_kml,
)
from kml_model.core.config import CodecConfig
from kml_model.core.constants import GX_NAMESPACE, KML_NAMESPACE
from kml_model.core.exceptions import (
    EnumerationViolation,
    KmlParseError,
    RangeViolation,
    StructuralViolation,
    UnsupportedElementError,
)
from kml_model.models import (
    XY,
    AddressDetails,
    AltitudeMode,
    Author,
    Data,
    Document,
    ExtendedData,
    Folder,
    GridOrigin,
    GroundOverlay,
    GxAltitudeMode,
    Icon,
    ImagePyramid,
    ItemIcon,
    ItemIconState,
    LatLonBox,
    LinearRing,
    Link,
    ListStyle,
    LookAt,
    NetworkLink,
    OpaqueMarkup,
    PhotoOverlay,
    Placemark,
    Point,
    Polygon,
    RefreshMode,
    ScreenOverlay,
    Shape,
    Style,
    TimeStamp,
    Units,
    Update,
    ViewRefreshMode,
    gx,
)
from kml_model.models.update import Change

KML = f"{{{KML_NAMESPACE}}}"
GX = f"{{{GX_NAMESPACE}}}"


def _child_tags(node: etree._Element) -> list[str]:
    return [etree.QName(child).localname for child in node]


# ---------------------------------------------------------------------------
# Conversions
# ---------------------------------------------------------------------------


class TestConversions:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (True, "1"),
            (False, "0"),
            (-1.0, "-1"),
            (0.0, "0"),
            (1.5, "1.5"),
            (256, "256"),
            (Shape.SPHERE, "sphere"),
            ("text", "text"),
        ],
    )
    def test_format_scalar(self, value: object, expected: str) -> None:
        assert format_scalar(value) == expected

    @pytest.mark.parametrize("raw", ["1", "true", " TRUE "])
    def test_parse_true(self, raw: str) -> None:
        assert parse_scalar(raw, bool, element="Placemark", field="visibility") is True

    @pytest.mark.parametrize("raw", ["0", "false"])
    def test_parse_false(self, raw: str) -> None:
        assert parse_scalar(raw, bool, element="Placemark", field="visibility") is False

    def test_parse_bad_bool(self) -> None:
        with pytest.raises(KmlParseError, match="boolean"):
            parse_scalar("yes", bool, element="Placemark", field="visibility")

    def test_parse_bad_number(self) -> None:
        with pytest.raises(KmlParseError) as exc_info:
            parse_scalar("wide", float, element="LineStyle", field="width")
        assert exc_info.value.field_path == "LineStyle.width"

    def test_parse_unknown_enum(self) -> None:
        with pytest.raises(EnumerationViolation) as exc_info:
            parse_scalar("cone", Shape, element="PhotoOverlay", field="shape")
        assert exc_info.value.element == "PhotoOverlay"
        assert exc_info.value.field_path == "PhotoOverlay.shape"
        assert "cone" in exc_info.value.message

    def test_parse_string_kept_verbatim(self) -> None:
        assert parse_scalar("  spaced  ", str, element="Placemark", field="name") == "  spaced  "

    def test_parse_coordinates(self) -> None:
        text = """
            -122.0,37.0,10 -121.9,37.0
            -121.9,37.1,
        """
        assert parse_coordinates_text(text) == (
            (-122.0, 37.0, 10.0),
            (-121.9, 37.0),
            (-121.9, 37.1),
        )

    @pytest.mark.parametrize("text", ["1", "1,2,3,4", "a,b"])
    def test_malformed_coordinates_raise(self, text: str) -> None:
        with pytest.raises(KmlParseError, match="malformed coordinate"):
            parse_coordinates_text(text, element="Point")

    def test_format_coordinates(self) -> None:
        assert format_coordinates(((-122.0, 37.5, 0.0), (1.25, 2.0))) == "-122,37.5,0 1.25,2"


# ---------------------------------------------------------------------------
# Writer
# ---------------------------------------------------------------------------


class TestWriter:
    def test_screen_overlay_size_scenario(self) -> None:
        overlay = ScreenOverlay(
            size_xy=XY(x=-1, y=0, xunits=Units.PIXELS, yunits=Units.FRACTION)
        )
        node = to_element(overlay)
        size = node.find(f"{KML}size")
        assert size is not None
        assert dict(size.attrib) == {
            "x": "-1",
            "y": "0",
            "xunits": "pixels",
            "yunits": "fraction",
        }

    def test_defaults_omitted(self) -> None:
        node = to_element(Link(href="a.kml"))
        assert _child_tags(node) == ["href"]

        placemark = to_element(Placemark(name="a", visibility=True, open=False))
        assert _child_tags(placemark) == ["name"]

    def test_non_defaults_written(self) -> None:
        node = to_element(Placemark(name="a", visibility=False, open=True))
        assert node.findtext(f"{KML}visibility") == "0"
        assert node.findtext(f"{KML}open") == "1"

    def test_required_fields_always_written(self) -> None:
        node = to_element(Link(href=""))
        assert _child_tags(node) == ["href"]

    def test_look_at_range_omitted_at_default(self) -> None:
        assert _child_tags(to_element(LookAt(longitude=1.0))) == ["longitude"]
        node = to_element(LookAt(range=250.0))
        assert node.findtext(f"{KML}range") == "250"

    def test_id_and_target_id_are_attributes(self) -> None:
        node = to_element(Placemark(id="p", target_id="q"))
        assert node.get("id") == "p"
        assert node.get("targetId") == "q"

    def test_polygon_boundaries_wrapped(self, square_ring: LinearRing) -> None:
        node = to_element(Polygon(outer_boundary=square_ring, inner_boundaries=[square_ring] * 2))
        assert _child_tags(node) == ["outerBoundaryIs", "innerBoundaryIs", "innerBoundaryIs"]
        ring = node.find(f"{KML}outerBoundaryIs/{KML}LinearRing")
        assert ring.findtext(f"{KML}coordinates") == "0,0 1,0 1,1 0,1 0,0"

    def test_gx_altitude_mode_in_gx_namespace(self) -> None:
        node = to_element(
            Point(coordinates=(1, 2), altitude_mode=GxAltitudeMode.RELATIVE_TO_SEA_FLOOR)
        )
        assert node.findtext(f"{GX}altitudeMode") == "relativeToSeaFloor"
        assert node.find(f"{KML}altitudeMode") is None

    def test_address_details_share_parents(self) -> None:
        details = AddressDetails(country_name_code="NZ", country_name="New Zealand")
        node = to_element(details)
        assert len(node) == 1
        assert _child_tags(node[0]) == ["CountryNameCode", "CountryName"]

    def test_item_icon_states_space_separated(self) -> None:
        style = ListStyle(
            item_icons=[ItemIcon(states=[ItemIconState.OPEN, ItemIconState.ERROR], href="i.png")]
        )
        node = to_element(style)
        assert node.findtext(f"{KML}ItemIcon/{KML}state") == "open error"

    def test_extended_data_other_appended(self) -> None:
        data = ExtendedData(
            data=[Data(name="k", value="v")],
            other=[OpaqueMarkup(xml='<camp:tent xmlns:camp="urn:camp">dry</camp:tent>')],
        )
        node = to_element(data)
        assert _child_tags(node) == ["Data", "tent"]
        assert node[1].text == "dry"

    def test_malformed_opaque_markup(self) -> None:
        data = ExtendedData(other=[OpaqueMarkup(xml="<unclosed>")])
        with pytest.raises(StructuralViolation) as exc_info:
            to_element(data)
        assert exc_info.value.field_path == "ExtendedData.other[0]"

    def test_unregistered_variant_raises(self) -> None:
        @dataclass(frozen=True, slots=True, kw_only=True)
        class CustomPlacemark(Placemark):
            pass

        with pytest.raises(UnsupportedElementError):
            to_element(Folder(features=[CustomPlacemark(name="x")]))

    def test_root_must_be_feature(self) -> None:
        with pytest.raises(UnsupportedElementError):
            to_string(Point(coordinates=(0, 0)))  # type: ignore[arg-type]


class TestNamespaces:
    def test_core_document_declares_only_kml(self, sample_document: Document) -> None:
        content = to_string(sample_document)
        assert f'xmlns="{KML_NAMESPACE}"'.encode() in content
        assert b"xmlns:gx" not in content
        assert b"xmlns:atom" not in content
        assert b"xmlns:xal" not in content

    def test_gx_declared_when_used(self) -> None:
        doc = Document(
            features=[
                Placemark(
                    geometry=gx.Track(whens=["2024-01-01T00:00:00Z"], coords=[(1.0, 2.0, 3.0)])
                )
            ]
        )
        content = to_string(doc)
        assert f'xmlns:gx="{GX_NAMESPACE}"'.encode() in content
        assert b"<gx:Track>" in content
        assert b"xmlns:atom" not in content

    def test_atom_and_xal_declared_when_used(self) -> None:
        placemark = Placemark(
            atom_author=Author(name="Field team"),
            address_details=AddressDetails(country_name_code="NZ"),
        )
        content = to_string(placemark)
        assert b"xmlns:atom=" in content
        assert b"xmlns:xal=" in content
        assert b"xmlns:gx" not in content


class TestWriterConfig:
    def test_declaration_and_encoding(self, sample_document: Document) -> None:
        content = to_string(sample_document, CodecConfig(encoding="ISO-8859-1"))
        assert content.startswith(b"<?xml version='1.0' encoding='ISO-8859-1'?>")

    def test_no_declaration(self, sample_document: Document) -> None:
        content = to_string(sample_document, CodecConfig(xml_declaration=False))
        assert content.startswith(b"<kml")

    def test_validate_on_write_refuses(self) -> None:
        doc = Document(features=[Placemark(style_url="#missing")])
        with pytest.raises(Exception, match="#missing"):
            to_string(doc)

    def test_validation_can_be_disabled(self) -> None:
        doc = Document(features=[Placemark(style_url="#missing")])
        content = to_string(doc, CodecConfig(validate_on_write=False))
        assert b"#missing" in content

    def test_range_violation_refuses(self) -> None:
        doc = Document(features=[Placemark(geometry=Point(coordinates=(0.0, 95.0)))])
        with pytest.raises(RangeViolation):
            to_string(doc)

    def test_write_kml(self, tmp_path: Path, sample_document: Document) -> None:
        target = write_kml(sample_document, tmp_path / "out.kml")
        assert target.exists()
        assert parse_kml(target) == sample_document


# ---------------------------------------------------------------------------
# Closed enumerations
# ---------------------------------------------------------------------------


def _enum_cases() -> list[tuple[object, str, str, enum.Enum]]:
    cases: list[tuple[object, str, str, enum.Enum]] = []
    for member in Shape:
        cases.append((PhotoOverlay(shape=member), KML, "shape", member))
    for member in GridOrigin:
        cases.append((ImagePyramid(grid_origin=member), KML, "gridOrigin", member))
    for member in AltitudeMode:
        cases.append((Point(coordinates=(0, 0), altitude_mode=member), KML, "altitudeMode", member))
    for member in GxAltitudeMode:
        cases.append((Point(coordinates=(0, 0), altitude_mode=member), GX, "altitudeMode", member))
    for member in RefreshMode:
        link = Link(href="a.kml", refresh_mode=member, refresh_interval=30.0)
        cases.append((link, KML, "refreshMode", member))
    for member in ViewRefreshMode:
        link = Link(href="a.kml", view_refresh_mode=member, view_refresh_time=2.0)
        cases.append((link, KML, "viewRefreshMode", member))
    return cases


_DEFAULTS = {
    Shape.RECTANGLE,
    GridOrigin.LOWER_LEFT,
    AltitudeMode.CLAMP_TO_GROUND,
    RefreshMode.ON_CHANGE,
    ViewRefreshMode.NEVER,
}


class TestEnumerations:
    """Every closed-set member is written and read back."""

    @pytest.mark.parametrize(
        ("element", "ns", "tag", "member"), _enum_cases(), ids=lambda v: getattr(v, "value", None)
    )
    def test_member_round_trip(self, element: object, ns: str, tag: str, member: enum.Enum) -> None:
        node = to_element(element)
        written = node.findtext(f"{ns}{tag}")
        if member in _DEFAULTS:
            assert written is None
        else:
            assert written == member.value
        assert from_element(node) == element

    @pytest.mark.parametrize("member", list(Units))
    def test_units_round_trip(self, member: Units) -> None:
        overlay = ScreenOverlay(overlay_xy=XY(x=0.5, y=0.5, xunits=member, yunits=member))
        node = to_element(overlay)
        assert node.find(f"{KML}overlayXY").get("xunits") == member.value
        assert from_element(node) == overlay


# ---------------------------------------------------------------------------
# Reader
# ---------------------------------------------------------------------------


class TestReader:
    def test_styled_document(self, styled_document_kml: Path) -> None:
        doc = parse_kml(styled_document_kml)
        assert isinstance(doc, Document)
        assert doc.id == "doc"
        assert doc.open is True
        assert [s.id for s in doc.style_selector] == ["block", "block-map"]
        assert doc.find_style("block").poly_style.outline is False
        assert doc.schemas[0].simple_fields[1].name == "rows"

        folder = doc.features[0]
        assert isinstance(folder, Folder)
        block, well = folder.features
        assert block.style_url == "#block-map"
        assert len(block.geometry.inner_boundaries) == 1
        assert block.geometry.outer_boundary.coordinates[0] == (-122.0, 37.0)
        assert block.extended_data.as_dict() == {
            "owner": "North Farm",
            "variety": "Gala",
            "rows": "42",
        }
        (tent,) = block.extended_data.other
        assert tent.xml == '<camp:tent xmlns:camp="http://example.com/camp" number="3">dry</camp:tent>'

        assert well.visibility is False
        assert well.geometry.altitude_mode is AltitudeMode.ABSOLUTE
        assert well.geometry.coordinates == (-121.95, 37.05, 12.0)

    def test_gx_document(self, gx_tour_kml: Path) -> None:
        doc = parse_kml(gx_tour_kml)
        overlay, flight, tour = doc.features

        assert isinstance(overlay, GroundOverlay)
        assert overlay.altitude_mode is GxAltitudeMode.CLAMP_TO_SEA_FLOOR
        assert overlay.lat_lon_box is None
        assert overlay.lat_lon_quad.coordinates[1].lon == 10.0
        assert overlay.color == "bfffffff"

        track = flight.geometry
        assert isinstance(track, gx.Track)
        assert track.altitude_mode is AltitudeMode.ABSOLUTE
        assert track.whens == ("2024-05-01T10:00:00Z", "2024-05-01T10:00:30Z")
        assert track.coords[1] == (-122.1, 37.5, 180.0)
        assert track.angles[0] == (45.0, 0.0, 0.0)

        assert isinstance(tour, gx.Tour)
        fly_to, animated, wait, control = tour.play_list.primitives
        assert fly_to.fly_to_mode.value == "smooth"
        assert isinstance(fly_to.view, LookAt)
        assert fly_to.view.range == 1200.0
        assert animated.update.target_ids == ["flight"]
        assert isinstance(animated.update.operations[0], Change)
        assert wait.duration == 3.0
        assert control.play_mode.value == "pause"
        assert tour.play_list.total_duration == 8.0

    def test_network_link_and_screen_overlay(self, network_link_kml: Path) -> None:
        folder = parse_kml(network_link_kml)
        link_feature, legend = folder.features
        assert isinstance(link_feature, NetworkLink)
        assert link_feature.refresh_visibility is True
        assert link_feature.link.time_refresh.seconds == 60.0
        assert link_feature.link.view_refresh.is_complete

        assert legend.size_xy == XY(x=-1, y=0, xunits=Units.PIXELS, yunits=Units.FRACTION)
        assert legend.screen_xy.yunits is Units.INSET_PIXELS
        assert legend.rotation_xy is None

    def test_google_earth_edges(self, google_earth_edges_kml: Path) -> None:
        doc = parse_kml(google_earth_edges_kml)
        assert doc.abstract_view.heading == -23.5
        assert doc.abstract_view.range == 0.0
        assert doc.style_selector[0].icon_style.heading == -90.0

        chart, vessel, tour = doc.features
        assert chart.lat_lon_box.east == 185.0
        assert chart.lat_lon_box.west == 175.0
        assert vessel.abstract_view.heading == -140.0
        assert vessel.geometry.orientation.heading == 270.0

        (change,) = tour.play_list.primitives[0].update.operations
        overlay, placemark, point = change.objects
        assert overlay.is_partial
        assert overlay.color == "80ffffff"
        assert overlay.lat_lon_box is None
        assert placemark.style_url == "#ferry-night"
        assert point.coordinates is None
        assert tour.play_list.primitives[0].update.target_ids == ["chart", "vessel", "buoy"]

    def test_defaults_populated(self) -> None:
        placemark = from_string(
            f'<Placemark xmlns="{KML_NAMESPACE}"><name>bare</name></Placemark>'
        )
        assert placemark.visibility is True
        assert placemark.open is False
        assert placemark.style_selector == ()

    def test_link_defaults_populated(self) -> None:
        link = from_string(
            f'<NetworkLink xmlns="{KML_NAMESPACE}"><Link><href>a.kml</href></Link></NetworkLink>'
        ).link
        assert link.refresh_mode is RefreshMode.ON_CHANGE
        assert link.view_bound_scale == 1.0

    def test_look_at_without_range(self) -> None:
        placemark = from_string(
            f'<Placemark xmlns="{KML_NAMESPACE}"><LookAt>'
            "<longitude>1</longitude><latitude>2</latitude><heading>-23.5</heading>"
            "</LookAt></Placemark>"
        )
        assert placemark.abstract_view.range == 0.0
        assert placemark.abstract_view.heading == -23.5

    def test_change_payloads_are_partial(self) -> None:
        change = from_element(
            etree.fromstring(
                f'<Change xmlns="{KML_NAMESPACE}">'
                '<GroundOverlay targetId="go1"><color>80ffffff</color></GroundOverlay>'
                '<NetworkLink targetId="feed"><name>Renamed</name></NetworkLink>'
                '<Point targetId="pin"><altitudeMode>absolute</altitudeMode></Point>'
                "</Change>"
            )
        )
        overlay, network_link, point = change.objects
        assert overlay.color == "80ffffff"
        assert overlay.lat_lon_box is None
        assert network_link.link is None
        assert network_link.name == "Renamed"
        assert point.coordinates is None
        assert point.altitude_mode is AltitudeMode.ABSOLUTE

    def test_xy_attribute_defaults(self) -> None:
        overlay = from_string(
            f'<ScreenOverlay xmlns="{KML_NAMESPACE}"><screenXY x="5" xunits="pixels"/></ScreenOverlay>'
        )
        assert overlay.screen_xy == XY(x=5.0, y=1.0, xunits=Units.PIXELS, yunits=Units.FRACTION)

    def test_gx_altitude_mode_preferred(self) -> None:
        point = from_string(
            f'<Placemark xmlns="{KML_NAMESPACE}" xmlns:gx="{GX_NAMESPACE}"><Point>'
            "<altitudeMode>absolute</altitudeMode>"
            "<gx:altitudeMode>clampToSeaFloor</gx:altitudeMode>"
            "<coordinates>1,2</coordinates></Point></Placemark>"
        ).geometry
        assert point.altitude_mode is GxAltitudeMode.CLAMP_TO_SEA_FLOOR

    def test_gx_time_stamp_in_camera(self) -> None:
        placemark = from_string(
            f'<Placemark xmlns="{KML_NAMESPACE}" xmlns:gx="{GX_NAMESPACE}"><Camera>'
            "<gx:TimeStamp><when>2011</when></gx:TimeStamp></Camera></Placemark>"
        )
        assert isinstance(placemark.abstract_view.time_primitive, gx.GxTimeStamp)

    def test_unknown_element_ignored(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="kml_model.codec"):
            placemark = from_string(
                f'<Placemark xmlns="{KML_NAMESPACE}"><name>a</name><bogus>1</bogus></Placemark>'
            )
        assert placemark.name == "a"
        assert "bogus" in caplog.text


class TestReaderRefusals:
    def test_not_xml(self, not_xml_kml: Path) -> None:
        with pytest.raises(KmlParseError, match="well-formed"):
            parse_kml(not_xml_kml)

    def test_wrong_namespace(self, wrong_namespace_kml: Path) -> None:
        with pytest.raises(KmlParseError, match="namespace"):
            parse_kml(wrong_namespace_kml)

    def test_empty_kml(self, empty_kml: Path) -> None:
        with pytest.raises(KmlParseError, match="no Feature"):
            parse_kml(empty_kml)

    def test_unknown_enum_value(self, unknown_enum_kml: Path) -> None:
        with pytest.raises(EnumerationViolation) as exc_info:
            parse_kml(unknown_enum_kml)
        err = exc_info.value
        assert err.element == "Link"
        assert err.field_path == "Document.features[0].link.refresh_mode"
        assert "onSometimes" in err.message

    def test_ground_overlay_without_placement(self, no_placement_kml: Path) -> None:
        with pytest.raises(StructuralViolation, match="neither"):
            parse_kml(no_placement_kml)

    def test_missing_required_child(self) -> None:
        with pytest.raises(StructuralViolation) as exc_info:
            from_string(f'<NetworkLink xmlns="{KML_NAMESPACE}"><name>x</name></NetworkLink>')
        assert exc_info.value.field_path == "NetworkLink.link"

    def test_missing_required_text(self) -> None:
        with pytest.raises(StructuralViolation) as exc_info:
            from_string(
                f'<Placemark xmlns="{KML_NAMESPACE}"><TimeStamp/></Placemark>'
            )
        assert exc_info.value.field_path == "Placemark.time_primitive.when"

    def test_two_geometries(self) -> None:
        with pytest.raises(StructuralViolation, match="only one"):
            from_string(
                f'<Placemark xmlns="{KML_NAMESPACE}">'
                "<Point><coordinates>1,2</coordinates></Point>"
                "<Point><coordinates>3,4</coordinates></Point></Placemark>"
            )

    def test_point_with_two_coordinates(self) -> None:
        with pytest.raises(StructuralViolation, match="exactly one"):
            from_string(
                f'<Placemark xmlns="{KML_NAMESPACE}">'
                "<Point><coordinates>1,2 3,4</coordinates></Point></Placemark>"
            )

    def test_malformed_coordinates(self) -> None:
        with pytest.raises(KmlParseError, match="malformed"):
            from_string(
                f'<Placemark xmlns="{KML_NAMESPACE}">'
                "<LineString><coordinates>1,2 oops</coordinates></LineString></Placemark>"
            )

    def test_nested_error_path_uses_field_names(self) -> None:
        with pytest.raises(KmlParseError) as exc_info:
            from_string(
                f'<Folder xmlns="{KML_NAMESPACE}"><Placemark><name>a</name></Placemark>'
                "<Placemark><Polygon><outerBoundaryIs><LinearRing>"
                "<coordinates>0,0 1,0 oops</coordinates>"
                "</LinearRing></outerBoundaryIs></Polygon></Placemark></Folder>"
            )
        assert exc_info.value.element == "LinearRing"
        assert exc_info.value.field_path == "Folder.features[1].geometry.outer_boundary.coordinates"

    def test_root_must_be_feature(self) -> None:
        with pytest.raises(KmlParseError, match="not a Feature"):
            from_string(f'<Point xmlns="{KML_NAMESPACE}"><coordinates>1,2</coordinates></Point>')

    def test_unregistered_root(self) -> None:
        with pytest.raises(UnsupportedElementError):
            from_string(f'<NetworkLinkControl xmlns="{KML_NAMESPACE}"/>')

    def test_absolute_is_not_a_gx_altitude_mode(self) -> None:
        with pytest.raises(EnumerationViolation, match="absolute") as exc_info:
            from_string(
                f'<Placemark xmlns="{KML_NAMESPACE}" xmlns:gx="{GX_NAMESPACE}"><Point>'
                "<gx:altitudeMode>absolute</gx:altitudeMode>"
                "<coordinates>1,2</coordinates></Point></Placemark>"
            )
        assert exc_info.value.field_path == "Placemark.geometry.altitude_mode"


# ---------------------------------------------------------------------------
# Round trips
# ---------------------------------------------------------------------------


class TestRoundTrip:
    @pytest.mark.parametrize(
        "fixture",
        ["styled_document_kml", "gx_tour_kml", "network_link_kml", "google_earth_edges_kml"],
    )
    def test_sample_files(self, fixture: str, request: pytest.FixtureRequest) -> None:
        path: Path = request.getfixturevalue(fixture)
        parsed = parse_kml(path)
        assert from_string(to_string(parsed)) == parsed

    def test_written_output_is_stable(self, styled_document_kml: Path) -> None:
        first = to_string(parse_kml(styled_document_kml))
        assert to_string(from_string(first)) == first

    def test_in_memory_document(self, sample_document: Document) -> None:
        assert from_string(to_string(sample_document)) == sample_document

    def test_partial_change_payloads(self) -> None:
        update = Update(
            target_href="farm.kml",
            operations=[
                Change(
                    objects=[
                        GroundOverlay(target_id="scan", color="80ffffff"),
                        NetworkLink(target_id="feed", name="Paused"),
                        Point(target_id="pin", altitude_mode=AltitudeMode.ABSOLUTE),
                    ]
                )
            ],
        )
        doc = Document(
            features=[gx.Tour(play_list=gx.PlayList(primitives=[gx.AnimatedUpdate(update=update)]))]
        )
        content = to_string(doc)
        assert b"<Link" not in content
        assert b"<LatLonBox" not in content
        assert from_string(content) == doc

    def test_gx_tree(self, lat_lon_quad: gx.LatLonQuad) -> None:
        flight = Placemark(
            id="flight",
            geometry=gx.MultiTrack(
                interpolate=True,
                tracks=[
                    gx.Track(
                        altitude_mode=GxAltitudeMode.RELATIVE_TO_SEA_FLOOR,
                        whens=["2024-05-01T10:00:00Z", "2024-05-01T10:00:10Z"],
                        coords=[(1.0, 2.0, -30.0), (1.1, 2.1, -35.5)],
                        angles=[(10.0, 0.0, 0.0), (12.5, 1.0, 0.0)],
                    )
                ],
            ),
            extended_data=ExtendedData(
                other=[OpaqueMarkup(xml='<ext:note xmlns:ext="urn:ext">keep me</ext:note>')]
            ),
        )
        tour = gx.Tour(
            name="Dive",
            play_list=gx.PlayList(
                primitives=[
                    gx.FlyTo(duration=4.0, view=LookAt(longitude=1.0, latitude=2.0, range=500.0)),
                    gx.AnimatedUpdate(
                        duration=1.5,
                        update=Update(
                            target_href="dive.kml",
                            operations=[Change(objects=[Placemark(target_id="flight", name="Up")])],
                        ),
                    ),
                    gx.SoundCue(href="ping.mp3", delayed_start=0.5),
                    gx.Wait(duration=2.0),
                    gx.TourControl(),
                ]
            ),
        )
        doc = Document(
            features=[
                flight,
                GroundOverlay(
                    icon=Icon(href="sonar.png", gx_w=64, gx_h=64),
                    altitude_mode=AltitudeMode.ABSOLUTE,
                    altitude=-40.0,
                    lat_lon_quad=lat_lon_quad,
                ),
                tour,
            ],
        )
        assert from_string(to_string(doc)) == doc

    def test_styles_and_time(self) -> None:
        doc = Document(
            style_selector=[
                Style(
                    id="s",
                    list_style=ListStyle(
                        item_icons=[ItemIcon(states=[ItemIconState.FETCHING0], href="f.png")]
                    ),
                )
            ],
            features=[
                Placemark(
                    style_url="#s",
                    time_primitive=TimeStamp(when="2024-05-01"),
                    geometry=Point(coordinates=(170.5, -45.25, 100.0)),
                ),
                GroundOverlay(
                    lat_lon_box=LatLonBox(north=1.0, south=0.0, east=1.0, west=0.0, rotation=15.0)
                ),
            ],
        )
        assert from_string(to_string(doc)) == doc
