"""KML document model.

Defines the immutable element hierarchy:
- base: ``KmlElement``/``KmlObject`` contracts, ``XY``, ``LatLon``, registry
- enums: closed variant sets (refresh modes, altitude modes, units, ...)
- feature / overlay: ``Feature`` variants and ``Container`` variants
- geometry, style, temporal, view, region: families referenced by Features
- link: ``Link``/``Icon`` resource descriptors
- data, atom, xal: custom data, authorship and structured addresses
- update: ``Update`` payloads
- gx: Google extension elements
"""

from kml_model.models import gx
from kml_model.models.atom import Author
from kml_model.models.atom import Link as AtomLink
from kml_model.models.base import (
    XY,
    Coordinate,
    KmlElement,
    KmlObject,
    LatLon,
    OpaqueMarkup,
    angle90,
    angle180,
    angle360,
    iter_children,
    lookup_element,
    walk,
)
from kml_model.models.data import (
    Data,
    ExtendedData,
    Schema,
    SchemaData,
    SimpleData,
    SimpleField,
)
from kml_model.models.enums import (
    AltitudeMode,
    BaseAltitudeMode,
    ColorMode,
    DisplayMode,
    FlyToMode,
    GridOrigin,
    GxAltitudeMode,
    ItemIconState,
    ListItemType,
    PlayMode,
    RefreshMode,
    Shape,
    SimpleFieldType,
    StyleState,
    Units,
    ViewRefreshMode,
)
from kml_model.models.feature import (
    Container,
    Document,
    Feature,
    Folder,
    NetworkLink,
    Placemark,
)
from kml_model.models.geometry import (
    Alias,
    Geometry,
    LinearRing,
    LineString,
    Location,
    Model,
    MultiGeometry,
    Orientation,
    Point,
    Polygon,
    ResourceMap,
    Scale,
)
from kml_model.models.link import BasicLink, Icon, Link, RefreshPolicy
from kml_model.models.overlay import (
    GroundOverlay,
    ImagePyramid,
    Overlay,
    PhotoOverlay,
    ScreenOverlay,
    ViewVolume,
)
from kml_model.models.region import LatLonAltBox, LatLonBox, Lod, Region
from kml_model.models.style import (
    BalloonStyle,
    ColorStyle,
    IconStyle,
    ItemIcon,
    LabelStyle,
    LineStyle,
    ListStyle,
    Pair,
    PolyStyle,
    Style,
    StyleMap,
    StyleSelector,
    SubStyle,
)
from kml_model.models.temporal import TimePrimitive, TimeSpan, TimeStamp
from kml_model.models.update import Change, Create, Delete, Update, UpdateOperation
from kml_model.models.view import AbstractView, Camera, LookAt
from kml_model.models.xal import AddressDetails

__all__ = [
    "XY",
    "AbstractView",
    "AddressDetails",
    "Alias",
    "AltitudeMode",
    "AtomLink",
    "Author",
    "BalloonStyle",
    "BaseAltitudeMode",
    "BasicLink",
    "Camera",
    "Change",
    "ColorMode",
    "ColorStyle",
    "Container",
    "Coordinate",
    "Create",
    "Data",
    "Delete",
    "DisplayMode",
    "Document",
    "ExtendedData",
    "Feature",
    "FlyToMode",
    "Folder",
    "Geometry",
    "GridOrigin",
    "GroundOverlay",
    "GxAltitudeMode",
    "Icon",
    "IconStyle",
    "ImagePyramid",
    "ItemIcon",
    "ItemIconState",
    "KmlElement",
    "KmlObject",
    "LabelStyle",
    "LatLon",
    "LatLonAltBox",
    "LatLonBox",
    "LineString",
    "LineStyle",
    "LinearRing",
    "Link",
    "ListItemType",
    "ListStyle",
    "Location",
    "Lod",
    "LookAt",
    "Model",
    "MultiGeometry",
    "NetworkLink",
    "OpaqueMarkup",
    "Orientation",
    "Overlay",
    "Pair",
    "PhotoOverlay",
    "Placemark",
    "PlayMode",
    "Point",
    "PolyStyle",
    "Polygon",
    "RefreshMode",
    "RefreshPolicy",
    "Region",
    "ResourceMap",
    "Scale",
    "Schema",
    "SchemaData",
    "ScreenOverlay",
    "Shape",
    "SimpleData",
    "SimpleField",
    "SimpleFieldType",
    "Style",
    "StyleMap",
    "StyleSelector",
    "StyleState",
    "SubStyle",
    "TimePrimitive",
    "TimeSpan",
    "TimeStamp",
    "Units",
    "Update",
    "UpdateOperation",
    "ViewRefreshMode",
    "ViewVolume",
    "angle90",
    "angle180",
    "angle360",
    "gx",
    "iter_children",
    "lookup_element",
    "walk",
]
