"""``Update`` payloads: partial edits to previously loaded KML.

Targets are addressed by ``target_id`` against the ``id`` values of the
document at ``target_href``. Resolving and applying them is left to the
consumer; this module only records the edit.
"""

from __future__ import annotations

from dataclasses import dataclass

from kml_model.models._fields import children, text
from kml_model.models.base import KmlElement, KmlObject, kml_element
from kml_model.models.feature import Container, Feature


@dataclass(frozen=True, slots=True, kw_only=True)
class UpdateOperation(KmlElement):
    """Abstract base of ``Create``, ``Delete`` and ``Change``."""

    @property
    def targets(self) -> tuple[KmlObject, ...]:
        return ()


@kml_element("Create")
@dataclass(frozen=True, slots=True, kw_only=True)
class Create(UpdateOperation):
    """Adds the Features of each container to the container it targets."""

    containers: tuple[Container, ...] = children(Container)

    @property
    def targets(self) -> tuple[KmlObject, ...]:
        return self.containers


@kml_element("Delete")
@dataclass(frozen=True, slots=True, kw_only=True)
class Delete(UpdateOperation):
    features: tuple[Feature, ...] = children(Feature)

    @property
    def targets(self) -> tuple[KmlObject, ...]:
        return self.features


@kml_element("Change")
@dataclass(frozen=True, slots=True, kw_only=True)
class Change(UpdateOperation):
    """Replaces the given fields of each targeted object."""

    objects: tuple[KmlObject, ...] = children(KmlObject)

    @property
    def targets(self) -> tuple[KmlObject, ...]:
        return self.objects


@kml_element("Update")
@dataclass(frozen=True, slots=True, kw_only=True)
class Update(KmlElement):
    target_href: str = text("targetHref", required=True)
    operations: tuple[UpdateOperation, ...] = children(UpdateOperation)

    @property
    def target_ids(self) -> list[str]:
        """``target_id`` values this update refers to, in order."""
        return [
            item.target_id
            for operation in self.operations
            for item in operation.targets
            if item.target_id
        ]
