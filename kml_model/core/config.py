"""Codec configuration loaded from environment variables.

All configuration values have sensible defaults; environment variables
override them for batch jobs that cannot pass arguments through.

Fail-fast validation:
    ``from_env()`` raises ``ConfigValidationError`` if any value is
    unusable, so a bad setting surfaces before the first document is
    written.
"""

from __future__ import annotations

import codecs
import os
from dataclasses import dataclass

from kml_model.core.exceptions import KmlModelError

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


class ConfigValidationError(KmlModelError):
    """Raised when configuration values are out of valid range.

    Attributes:
        key: The configuration key that failed validation.
        value: The invalid value.
    """

    default_code = "CONFIG_VALIDATION_FAILED"
    category = "config"

    def __init__(self, key: str, value: object, message: str) -> None:
        self.key = key
        self.value = value
        super().__init__(f"Invalid configuration {key}={value!r}: {message}")


@dataclass(frozen=True, slots=True)
class CodecConfig:
    """Immutable serializer/parser configuration.

    Attributes:
        pretty_print: Indent written documents.
        xml_declaration: Emit ``<?xml ...?>`` at the top of written documents.
        encoding: Output encoding for ``to_string``/``write_kml``.
        validate_on_write: Run element validation before serializing.
        huge_tree: Allow lxml to parse very deep or very large documents.
    """

    pretty_print: bool = True
    xml_declaration: bool = True
    encoding: str = "UTF-8"
    validate_on_write: bool = True
    huge_tree: bool = False

    @classmethod
    def from_env(cls) -> CodecConfig:
        """Load and validate configuration from environment variables.

        Raises:
            ConfigValidationError: If a value is not a recognised boolean
                or the encoding is unknown.
        """
        config = cls(
            pretty_print=_env_bool("KML_PRETTY_PRINT", default=True),
            xml_declaration=_env_bool("KML_XML_DECLARATION", default=True),
            encoding=os.getenv("KML_ENCODING", "UTF-8"),
            validate_on_write=_env_bool("KML_VALIDATE_ON_WRITE", default=True),
            huge_tree=_env_bool("KML_HUGE_TREE", default=False),
        )
        _validate(config)
        return config


def _env_bool(key: str, *, default: bool) -> bool:
    raw = os.getenv(key)
    if raw is None or not raw.strip():
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigValidationError(key, raw, "must be a boolean (1/0, true/false, yes/no, on/off)")


def _validate(config: CodecConfig) -> None:
    """Validate configuration values.  Raises ``ConfigValidationError``."""
    if not config.encoding:
        raise ConfigValidationError("KML_ENCODING", config.encoding, "must not be empty")

    try:
        codecs.lookup(config.encoding)
    except LookupError as exc:
        raise ConfigValidationError(
            "KML_ENCODING", config.encoding, "must be a known codec name"
        ) from exc
