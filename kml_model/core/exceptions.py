"""Unified violation taxonomy.

Every error raised by the model, the validator and the codec inherits from
``KmlModelError`` and carries structured context (offending element, field
path, machine-readable code) so callers can report a refusal precisely.

Taxonomy categories
-------------------
- ``StructuralViolation``: required field missing, exclusive pair both
  present or both absent, coupled companion missing.
- ``EnumerationViolation``: value outside a closed variant set.
- ``RangeViolation``: value outside its numeric or lexical domain.
- ``ReferenceViolation``: id/targetId/styleUrl that does not resolve
  within the document scope being validated.

None of these are recoverable locally. Every exception exposes
``to_error_dict()`` for a stable structured error payload.
"""

from __future__ import annotations


class KmlModelError(Exception):
    """Base exception for all KML model errors.

    Attributes:
        message: Human-readable error description.
        element: KML element name where the error occurred
            (e.g. ``"GroundOverlay"``).
        field_path: Dotted/indexed path to the offending field
            (e.g. ``"Document.features[2].lat_lon_box"``).
        code: Machine-readable error code (e.g. ``"KML_RANGE_INVALID"``).
    """

    #: Default code for subclasses (override via class attribute or kwarg).
    default_code: str = ""
    #: Category reported by ``to_error_dict()``.
    category: str = "model"

    def __init__(
        self,
        message: str = "",
        *,
        element: str = "",
        field_path: str = "",
        code: str = "",
    ) -> None:
        self.message = message
        self.element = element
        self.field_path = field_path
        self.code = code or self.default_code
        super().__init__(self._format())

    def _format(self) -> str:
        if self.field_path:
            return f"{self.field_path}: {self.message}"
        if self.element:
            return f"<{self.element}>: {self.message}"
        return self.message

    def at(self, path: str) -> KmlModelError:
        """Return a copy of this error re-rooted under ``path``."""
        field_path = f"{path}.{self.field_path}" if self.field_path else path
        return type(self)(
            self.message, element=self.element, field_path=field_path, code=self.code
        )

    def rebase(self, tag: str, path: str) -> KmlModelError:
        """Return a copy whose ``<tag>.`` path prefix is replaced by ``path``.

        Element-local paths (``"Link.refresh_mode"``) become tree paths
        (``"Document.features[0].link.refresh_mode"``). Paths that do not
        start at ``tag`` are nested under ``path`` instead.
        """
        if self.field_path == tag:
            field_path = path
        elif self.field_path.startswith(f"{tag}."):
            field_path = f"{path}{self.field_path[len(tag):]}"
        else:
            return self.at(path)
        return type(self)(
            self.message, element=self.element, field_path=field_path, code=self.code
        )

    def to_error_dict(self) -> dict[str, object]:
        """Return a structured error payload with stable keys."""
        return {
            "category": self.category,
            "code": self.code,
            "element": self.element,
            "field_path": self.field_path,
            "message": self.message,
        }


# ---------------------------------------------------------------------------
# Violation categories
# ---------------------------------------------------------------------------


class StructuralViolation(ValueError, KmlModelError):
    """Required field missing or an exclusive/coupled field pair is inconsistent."""

    default_code = "KML_STRUCTURE_INVALID"
    category = "structural"

    def __init__(self, message: str = "", **kwargs: str) -> None:
        KmlModelError.__init__(self, message, **kwargs)


class EnumerationViolation(ValueError, KmlModelError):
    """Value outside a closed enumeration."""

    default_code = "KML_ENUM_INVALID"
    category = "enumeration"

    def __init__(self, message: str = "", **kwargs: str) -> None:
        KmlModelError.__init__(self, message, **kwargs)


class RangeViolation(ValueError, KmlModelError):
    """Value outside its numeric range or lexical format."""

    default_code = "KML_RANGE_INVALID"
    category = "range"

    def __init__(self, message: str = "", **kwargs: str) -> None:
        KmlModelError.__init__(self, message, **kwargs)


class ReferenceViolation(ValueError, KmlModelError):
    """Identifier reference that does not resolve within the validated scope."""

    default_code = "KML_REFERENCE_INVALID"
    category = "reference"

    def __init__(self, message: str = "", **kwargs: str) -> None:
        KmlModelError.__init__(self, message, **kwargs)


# ---------------------------------------------------------------------------
# Codec errors
# ---------------------------------------------------------------------------


class KmlParseError(KmlModelError):
    """Raised when input is not well-formed XML or not a KML document."""

    default_code = "KML_PARSE_FAILED"
    category = "parse"


class UnsupportedElementError(TypeError, KmlModelError):
    """Raised when the codec meets a variant it has no binding for."""

    default_code = "KML_ELEMENT_UNSUPPORTED"
    category = "structural"

    def __init__(self, message: str = "", **kwargs: str) -> None:
        KmlModelError.__init__(self, message, **kwargs)
