"""xAL structured address attached to a Feature.

Only the common postal path is modelled:
``AddressDetails/Country/Locality/Thoroughfare|PostalCode``.
"""

from __future__ import annotations

from dataclasses import dataclass

from kml_model.core.constants import XAL_NAMESPACE
from kml_model.models._fields import text
from kml_model.models.base import KmlElement, kml_element


@kml_element("AddressDetails", XAL_NAMESPACE)
@dataclass(frozen=True, slots=True, kw_only=True)
class AddressDetails(KmlElement):
    country_name_code: str | None = text("Country/CountryNameCode", ns=XAL_NAMESPACE)
    country_name: str | None = text("Country/CountryName", ns=XAL_NAMESPACE)
    locality_name: str | None = text("Country/Locality/LocalityName", ns=XAL_NAMESPACE)
    thoroughfare_name: str | None = text(
        "Country/Locality/Thoroughfare/ThoroughfareName", ns=XAL_NAMESPACE
    )
    postal_code_number: str | None = text(
        "Country/Locality/PostalCode/PostalCodeNumber", ns=XAL_NAMESPACE
    )
