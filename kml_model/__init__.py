"""Typed object model for OGC KML 2.2 and the Google ``gx`` extension.

Producers build immutable document trees in memory and hand them to the
reference codec (``kml_model.codec``) or the validator
(``kml_model.validation``). Consumers parse KML into the same trees.
"""

__version__ = "0.1.0"
