"""Validation of model trees.

Two passes:
- **element rules** (``_rules``): ranges, couplings, exclusivity, formats
  for each element in the tree
- **references** (``_references``): id uniqueness, style fragments,
  container ownership and, optionally, ``target_id`` resolution

Construction already rejects missing required fields, out-of-set enum
values and wrong variants in nested slots; validation covers the rest.
Violations are never repaired: ``validate`` refuses the tree by raising
the first violation found.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from kml_model.core.exceptions import KmlModelError
from kml_model.models.base import KmlElement, walk
from kml_model.validation._references import check_references
from kml_model.validation._rules import check_element

logger = logging.getLogger("kml_model.validation")

__all__ = [
    "check_element",
    "check_references",
    "iter_violations",
    "validate",
    "validate_document",
]


def iter_violations(element: KmlElement) -> Iterator[KmlModelError]:
    """Yield element-rule violations for ``element`` and all its descendants.

    Each violation's ``field_path`` is rooted at ``element``. Update
    payloads (objects with a ``target_id``) hold only the fields being
    changed, so their own element rules are skipped; their descendants are
    still checked.
    """
    for path, node in walk(element):
        if node.is_partial:
            continue
        for violation in check_element(node):
            yield _rooted(violation, path, node)


def validate(element: KmlElement) -> None:
    """Apply element rules to the tree rooted at ``element``.

    Raises:
        StructuralViolation: A coupled or exclusive field pair is inconsistent.
        EnumerationViolation: A value is outside the set allowed in its slot.
        RangeViolation: An angle, size or lexical value is out of domain.
    """
    for violation in iter_violations(element):
        logger.info("Validation failed: %s", violation)
        raise violation


def validate_document(root: KmlElement, *, known_ids: Iterable[str] | None = None) -> None:
    """Apply element rules, then the document-level reference pass.

    Args:
        root: The Document (or bare Feature) being validated.
        known_ids: Ids from previously loaded documents; enables
            ``target_id`` resolution.

    Raises:
        StructuralViolation, EnumerationViolation, RangeViolation: see
            ``validate``.
        ReferenceViolation: Duplicate id or unresolved reference.
    """
    validate(root)
    for violation in check_references(root, known_ids):
        logger.info("Reference check failed: %s", violation)
        raise violation


def _rooted(violation: KmlModelError, path: str, node: KmlElement) -> KmlModelError:
    # rules report "<Tag>.<field>"
    return violation.rebase(node.tag, path)
