"""
SkyDomeRenderer: drives the whole sky pipeline for a host render loop.

Lifecycle
---------
    dome = SkyDomeRenderer(sink, hud=hud, external_source=skydb)
    if not dome.initialize():          # catalogue + merge, then first build
        ...                            # failure already logged
    while running:
        dome.update(now_s, camera_position)   # once per frame
    dome.dispose()

The first update() only starts the cadence for the sky initialize() built.
Each frame advances the simulated clock and feeds the camera to the LOD
policy. Every `update_interval_s` the star positions are recomputed:
    - LOD budget changed since the last build → full rebuild (new buffer)
    - otherwise → the existing buffer is rewritten in place
Constellation lines, solar system placements and the HUD count follow the
same tick.
"""

from __future__ import annotations
import logging
from typing import Any, List, Optional, Sequence

from core.settings import RendererSettings
from core.time_controller import TimeController
from core.types import ObserverContext, RenderableStar
from universe.catalog_store import CatalogStore
from universe.solar_bodies import BodyPlacement, BodyPositionApproximator
from .sinks import HudSink, RenderSink
from .star_field import (
    ConstellationLabel,
    LineSegment,
    StarBuffer,
    brightest_stars,
    calculate_positions,
    constellation_labels,
    constellation_segments,
    order_for_buffer,
)
from .update_scheduler import LODPolicy, UpdateScheduler

LOG = logging.getLogger(__name__)


class SkyDomeRenderer:

    def __init__(self,
                 sink: RenderSink,
                 settings: Optional[RendererSettings] = None,
                 store: Optional[CatalogStore] = None,
                 hud: Optional[HudSink] = None,
                 external_source: Any = None,
                 clock: Optional[TimeController] = None):
        self.sink = sink
        self.settings = settings or RendererSettings()
        self.store = store or CatalogStore(cap=self.settings.catalog_cap)
        self.hud = hud
        self.external_source = external_source
        self.clock = clock or TimeController()

        s = self.settings
        self.bodies = BodyPositionApproximator(s.sphere_radius, s.body_scale)
        self.scheduler = UpdateScheduler(s.update_interval_s)
        self.lod = LODPolicy(s.lod_distance, s.far_lod_distance, s.max_stars, s.far_max_stars)

        # Current render state
        self.buffer: Optional[StarBuffer] = None
        self.visible: List[RenderableStar] = []
        self.lines: List[LineSegment] = []
        self.labels: List[ConstellationLabel] = []
        self.placements: List[BodyPlacement] = []

        self._rebuild_pending = False
        self._built_untimed = False
        self._last_frame: Optional[float] = None
        self.initialized = False
        self.disposed = False

    # -----------------------------------------------------------------------
    # Lifecycle
    # -----------------------------------------------------------------------

    def initialize(self) -> bool:
        """
        Load the catalogue (and merge the external source) before the first
        build. Returns False on failure; the host keeps running.
        """
        if self.disposed:
            LOG.error("Cannot initialise a disposed sky dome")
            return False
        LOG.info("Initialising sky dome")
        try:
            if not self.store.initialized and not self.store.initialize(self.external_source):
                return False
            self._rebuild(self.observer_context())
        except Exception:
            LOG.exception("Sky dome initialisation failed")
            return False

        self._built_untimed = True
        self.initialized = True
        LOG.info("Sky dome ready: %d of %d stars above the horizon limit",
                 self.visible_star_count, self.store.star_count)
        return True

    def dispose(self) -> None:
        """Release sink resources and drop all internal collections."""
        if self.disposed:
            return
        try:
            self.sink.dispose()
        finally:
            if self.buffer is not None:
                self.buffer.clear()
            self.buffer = None
            self.visible = []
            self.lines = []
            self.labels = []
            self.placements = []
            self.store.clear()
            self.initialized = False
            self.disposed = True
            LOG.info("Sky dome disposed")

    # -----------------------------------------------------------------------
    # Pipeline
    # -----------------------------------------------------------------------

    def observer_context(self) -> ObserverContext:
        return self.clock.observer_context(self.settings.latitude, self.settings.longitude)

    def calculate_positions(self, ctx: Optional[ObserverContext] = None) -> List[RenderableStar]:
        """Visible stars for the observer (catalogue order)."""
        if ctx is None:
            ctx = self.observer_context()
        return calculate_positions(self.store.stars, ctx, self.settings.sphere_radius)

    def update(self, now_s: float, camera_position: Optional[Sequence[float]] = None) -> bool:
        """
        Per-frame entry point.

        Args:
            now_s: host clock in seconds (monotonic)
            camera_position: camera (x, y, z) in scene units, optional

        Returns:
            True if this call recomputed the sky.
        """
        if self.disposed or not self.initialized:
            return False

        if self._last_frame is not None:
            self.clock.step(now_s - self._last_frame)
        self._last_frame = now_s

        if camera_position is not None and self.lod.observe(camera_position):
            self._rebuild_pending = True

        if not self.scheduler.claim(now_s):
            return False

        # initialize() already built this sky; its tick starts here
        if self._built_untimed and not self._rebuild_pending:
            self._built_untimed = False
            return False
        self._built_untimed = False

        ctx = self.observer_context()
        if self._rebuild_pending or self.buffer is None:
            self._rebuild(ctx)
        else:
            self._refresh(ctx)
        return True

    def _rebuild(self, ctx: ObserverContext) -> None:
        visible = order_for_buffer(self.calculate_positions(ctx))
        capacity = min(self.store.star_count, self.lod.budget)
        buffer = StarBuffer(capacity)
        buffer.fill(visible)

        self.buffer = buffer
        self.visible = visible
        self._rebuild_pending = False
        self.sink.upload_stars(buffer)
        self.sink.set_star_appearance(self.settings.star_size_multiplier,
                                      self.settings.star_brightness)
        LOG.debug("Star buffer rebuilt: %d/%d rows", buffer.count, buffer.capacity)
        self._push_overlays(ctx)

    def _refresh(self, ctx: ObserverContext) -> None:
        self.visible = order_for_buffer(self.calculate_positions(ctx))
        self.buffer.fill(self.visible)
        self.sink.refresh_stars(self.buffer)
        self._push_overlays(ctx)

    def _push_overlays(self, ctx: ObserverContext) -> None:
        s = self.settings
        drawn = self.visible[: self.buffer.count] if self.buffer is not None else []
        self.lines = constellation_segments(self.store.resolved_segments(), drawn,
                                            s.constellation_color, s.constellation_opacity)
        self.sink.set_constellation_lines(self.lines, s.show_constellations)
        self.labels = constellation_labels(self.store.constellations, ctx, s.sphere_radius)
        self.sink.set_constellation_labels(self.labels, s.show_constellations)

        self._place_bodies(ctx)

        if self.hud is not None:
            self.hud.show_star_count(self.visible_star_count)

    def _place_bodies(self, ctx: ObserverContext) -> None:
        s = self.settings
        self.placements = self.bodies.all(ctx, self.store.planets,
                                          show_sun=s.show_sun,
                                          show_moon=s.show_moon,
                                          show_planets=s.show_planets)
        self.sink.place_bodies(self.placements)

    # -----------------------------------------------------------------------
    # Controls
    # -----------------------------------------------------------------------

    def set_observer(self, latitude: float, longitude: float) -> None:
        """Move the observer; the next update() recomputes immediately."""
        self.settings = self.settings.updated(latitude=latitude, longitude=longitude)
        self._built_untimed = False
        self.scheduler.reset()

    def set_star_brightness(self, brightness: float) -> None:
        self.settings = self.settings.updated(star_brightness=brightness)
        if self.initialized:
            self.sink.set_star_appearance(self.settings.star_size_multiplier, brightness)

    def set_star_size(self, size_multiplier: float) -> None:
        self.settings = self.settings.updated(star_size_multiplier=size_multiplier)
        if self.initialized:
            self.sink.set_star_appearance(size_multiplier, self.settings.star_brightness)

    def toggle_constellations(self, show: bool) -> None:
        self.settings = self.settings.updated(show_constellations=show)
        if self.initialized:
            self.sink.set_constellation_lines(self.lines, show)
            self.sink.set_constellation_labels(self.labels, show)

    def set_body_visibility(self, sun: bool, moon: bool, planets: bool) -> None:
        self.settings = self.settings.updated(show_sun=sun, show_moon=moon, show_planets=planets)
        if self.initialized:
            self._place_bodies(self.observer_context())

    # -----------------------------------------------------------------------
    # Queries
    # -----------------------------------------------------------------------

    @property
    def visible_star_count(self) -> int:
        return self.buffer.count if self.buffer is not None else 0

    def brightest_visible(self, limit: int = 20) -> List[RenderableStar]:
        return brightest_stars(self.visible, limit)

    def __repr__(self) -> str:
        state = "disposed" if self.disposed else "ready" if self.initialized else "new"
        return f"SkyDomeRenderer({state}, stars={self.visible_star_count}, lines={len(self.lines)})"
