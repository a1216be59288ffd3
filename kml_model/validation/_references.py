"""Document-level reference checks.

Runs once a whole tree is available:
- ``id`` values are unique within the document
- ``#fragment`` style URLs resolve to a ``Style``/``StyleMap`` id
- no Feature instance is owned by two containers
- ``target_id`` values resolve, when the caller supplies the ids of the
  documents an update will be applied to
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from kml_model.core.exceptions import KmlModelError, ReferenceViolation, StructuralViolation
from kml_model.models.base import KmlElement, KmlObject, walk
from kml_model.models.feature import Feature
from kml_model.models.style import Pair, StyleSelector

logger = logging.getLogger("kml_model.validation")


def check_references(
    root: KmlElement, known_ids: Iterable[str] | None = None
) -> Iterator[KmlModelError]:
    """Yield reference violations for the tree rooted at ``root``.

    Args:
        root: Document or Feature to check.
        known_ids: Ids of previously loaded documents. When given,
            every ``target_id`` must resolve against them or the tree.
    """
    nodes = list(walk(root))
    ids: dict[str, str] = {}
    style_ids: set[str] = set()
    seen_features: dict[int, str] = {}

    for path, node in nodes:
        if isinstance(node, KmlObject) and node.id is not None:
            if node.id in ids:
                yield ReferenceViolation(
                    f"duplicate id {node.id!r} (first used at {ids[node.id]})",
                    element=node.tag,
                    field_path=f"{path}.id",
                )
            else:
                ids[node.id] = path
            if isinstance(node, StyleSelector):
                style_ids.add(node.id)
        if isinstance(node, Feature):
            previous = seen_features.get(id(node))
            if previous is not None:
                yield StructuralViolation(
                    f"the same Feature is also owned at {previous}",
                    element=node.tag,
                    field_path=path,
                )
            else:
                seen_features[id(node)] = path

    for path, node in nodes:
        # update payloads resolve against the document they target
        if isinstance(node, Feature | Pair) and node.style_url and not node.is_partial:
            yield from _check_style_url(path, node, style_ids)

    if known_ids is None:
        logger.debug("Skipping targetId resolution: no known ids supplied")
        return
    resolvable = set(known_ids) | set(ids)
    for path, node in nodes:
        if isinstance(node, KmlObject) and node.target_id is not None:
            if node.target_id not in resolvable:
                yield ReferenceViolation(
                    f"target_id {node.target_id!r} does not match any known id",
                    element=node.tag,
                    field_path=f"{path}.target_id",
                )


def _check_style_url(path: str, node: Feature | Pair, style_ids: set[str]) -> Iterator[KmlModelError]:
    url = node.style_url or ""
    if not url.startswith("#"):
        # External documents are not resolved here.
        return
    fragment = url[1:]
    if fragment not in style_ids:
        yield ReferenceViolation(
            f"style_url {url!r} does not match any Style or StyleMap id",
            element=node.tag,
            field_path=f"{path}.style_url",
        )
