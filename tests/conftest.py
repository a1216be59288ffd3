"""Shared pytest fixtures for the KML model test suite."""

from pathlib import Path

import pytest

from kml_model.models import (
    XY,
    Document,
    Folder,
    GroundOverlay,
    Icon,
    LatLon,
    LatLonBox,
    LineStyle,
    LinearRing,
    Placemark,
    Point,
    Polygon,
    ScreenOverlay,
    Style,
    Units,
    gx,
)

# ---------------------------------------------------------------------------
# Path fixtures
# ---------------------------------------------------------------------------

TESTS_DIR = Path(__file__).parent
DATA_DIR = TESTS_DIR / "data"
EDGE_CASES_DIR = DATA_DIR / "edge_cases"


@pytest.fixture()
def data_dir() -> Path:
    """Return the path to the test data directory."""
    return DATA_DIR


@pytest.fixture()
def edge_cases_dir() -> Path:
    """Return the path to the edge-cases test data directory."""
    return EDGE_CASES_DIR


# ---------------------------------------------------------------------------
# Sample KML file fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def styled_document_kml(data_dir: Path) -> Path:
    """Document with shared styles, a Schema, ExtendedData and a polygon with a hole."""
    return data_dir / "01_document_styles_schema.kml"


@pytest.fixture()
def gx_tour_kml(data_dir: Path) -> Path:
    """Document with a gx:Tour, a gx:Track and a gx:LatLonQuad GroundOverlay."""
    return data_dir / "02_gx_tour_track_quad.kml"


@pytest.fixture()
def network_link_kml(data_dir: Path) -> Path:
    """Folder with a refreshing NetworkLink and a ScreenOverlay."""
    return data_dir / "03_network_link_screen_overlay.kml"


@pytest.fixture()
def google_earth_edges_kml(data_dir: Path) -> Path:
    """Document with negative headings, a dateline LatLonBox and partial Change payloads."""
    return data_dir / "04_google_earth_edges.kml"


# ---------------------------------------------------------------------------
# Edge-case KML file fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def not_xml_kml(edge_cases_dir: Path) -> Path:
    """Path to a file that is not valid XML."""
    return edge_cases_dir / "11_malformed_not_xml.kml"


@pytest.fixture()
def unknown_enum_kml(edge_cases_dir: Path) -> Path:
    """Path to a KML whose Link has an unknown refreshMode."""
    return edge_cases_dir / "12_unknown_refresh_mode.kml"


@pytest.fixture()
def wrong_namespace_kml(edge_cases_dir: Path) -> Path:
    """Path to a KML 2.1 document (unsupported namespace)."""
    return edge_cases_dir / "13_wrong_namespace.kml"


@pytest.fixture()
def no_placement_kml(edge_cases_dir: Path) -> Path:
    """Path to a GroundOverlay with neither LatLonBox nor LatLonQuad."""
    return edge_cases_dir / "14_ground_overlay_no_placement.kml"


@pytest.fixture()
def empty_kml(edge_cases_dir: Path) -> Path:
    """Path to a ``<kml>`` root without any Feature."""
    return edge_cases_dir / "15_empty_kml.kml"


# ---------------------------------------------------------------------------
# In-memory model fixtures
# ---------------------------------------------------------------------------


SQUARE = ((0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0), (0.0, 0.0))


@pytest.fixture()
def square_ring() -> LinearRing:
    return LinearRing(coordinates=SQUARE)


@pytest.fixture()
def lat_lon_box() -> LatLonBox:
    return LatLonBox(north=10.0, south=-10.0, east=20.0, west=-20.0)


@pytest.fixture()
def lat_lon_quad() -> gx.LatLonQuad:
    """Convex quadrilateral, counter-clockwise from the lower-left corner."""
    return gx.LatLonQuad(
        coordinates=(
            LatLon(lat=-10.0, lon=-10.0),
            LatLon(lat=-10.0, lon=10.0),
            LatLon(lat=10.0, lon=10.0),
            LatLon(lat=10.0, lon=-10.0),
        )
    )


@pytest.fixture()
def sample_document(square_ring: LinearRing, lat_lon_box: LatLonBox) -> Document:
    """A small valid document exercising styles, containers and overlays."""
    return Document(
        id="doc",
        name="Sample",
        style_selector=[Style(id="red", line_style=LineStyle(color="ff0000ff", width=3.0))],
        features=[
            Folder(
                name="Shapes",
                features=[
                    Placemark(name="Pin", geometry=Point(coordinates=(-122.08, 37.42))),
                    Placemark(
                        name="Square",
                        style_url="#red",
                        geometry=Polygon(outer_boundary=square_ring),
                    ),
                ],
            ),
            GroundOverlay(name="Scan", icon=Icon(href="scan.png"), lat_lon_box=lat_lon_box),
            ScreenOverlay(
                name="Legend",
                icon=Icon(href="legend.png"),
                size_xy=XY(x=-1, y=0, xunits=Units.PIXELS, yunits=Units.FRACTION),
            ),
        ],
    )
