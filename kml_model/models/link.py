"""Resource descriptors: ``Link`` and ``Icon``.

Both describe a fetchable resource and how a viewer should refresh it.
Refresh runs along two independent axes, each a small state machine whose
triggers are external to the model:

- time-based: ``refresh_mode`` (+ ``refresh_interval`` under ``onInterval``)
- view-based: ``view_refresh_mode`` (+ ``view_refresh_time`` under ``onStop``)

The model only records the configuration. Companion values are optional so
an omitted-but-required companion stays representable and is reported by
validation rather than defaulted.
"""

from __future__ import annotations

from dataclasses import dataclass

from kml_model.core.constants import GX_NAMESPACE
from kml_model.models._fields import text
from kml_model.models.base import KmlObject, kml_element
from kml_model.models.enums import RefreshMode, ViewRefreshMode

#: Value a viewer assumes for ``viewRefreshTime`` when it is omitted.
DEFAULT_VIEW_REFRESH_TIME = 0.0


@dataclass(frozen=True, slots=True)
class RefreshPolicy:
    """One refresh axis: a trigger mode plus its optional companion value.

    Attributes:
        mode: ``RefreshMode`` or ``ViewRefreshMode`` member.
        seconds: Interval (time axis) or settle delay (view axis).
        needs_seconds: Whether ``mode`` is only meaningful with ``seconds``.
    """

    mode: RefreshMode | ViewRefreshMode
    seconds: float | None
    needs_seconds: bool

    @property
    def is_complete(self) -> bool:
        return not self.needs_seconds or self.seconds is not None


@dataclass(frozen=True, slots=True, kw_only=True)
class BasicLink(KmlObject):
    """Fields shared by ``Link`` and ``Icon``."""

    href: str = text("href", required=True)
    refresh_mode: RefreshMode = text("refreshMode", RefreshMode, default=RefreshMode.ON_CHANGE)
    refresh_interval: float | None = text("refreshInterval", float)
    view_refresh_mode: ViewRefreshMode = text(
        "viewRefreshMode", ViewRefreshMode, default=ViewRefreshMode.NEVER
    )
    view_refresh_time: float | None = text("viewRefreshTime", float)
    view_bound_scale: float = text("viewBoundScale", float, default=1.0)
    view_format: str | None = text("viewFormat")
    http_query: str | None = text("httpQuery")

    @property
    def time_refresh(self) -> RefreshPolicy:
        return RefreshPolicy(
            mode=self.refresh_mode,
            seconds=self.refresh_interval,
            needs_seconds=self.refresh_mode is RefreshMode.ON_INTERVAL,
        )

    @property
    def view_refresh(self) -> RefreshPolicy:
        return RefreshPolicy(
            mode=self.view_refresh_mode,
            seconds=self.view_refresh_time,
            needs_seconds=self.view_refresh_mode is ViewRefreshMode.ON_STOP,
        )

    @property
    def effective_view_refresh_time(self) -> float:
        if self.view_refresh_time is None:
            return DEFAULT_VIEW_REFRESH_TIME
        return self.view_refresh_time


@kml_element("Link")
@dataclass(frozen=True, slots=True, kw_only=True)
class Link(BasicLink):
    """Network link target or 3D model resource."""


@kml_element("Icon")
@dataclass(frozen=True, slots=True, kw_only=True)
class Icon(BasicLink):
    """Image resource for overlays and icon styles.

    ``gx_x``/``gx_y``/``gx_w``/``gx_h`` select a pixel rectangle inside an
    icon palette, measured from the image's lower-left corner.
    """

    gx_x: int | None = text("x", int, ns=GX_NAMESPACE)
    gx_y: int | None = text("y", int, ns=GX_NAMESPACE)
    gx_w: int | None = text("w", int, ns=GX_NAMESPACE)
    gx_h: int | None = text("h", int, ns=GX_NAMESPACE)
