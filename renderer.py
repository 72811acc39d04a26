# renderer.py
"""
The particle field renderer.

Owns a ParticleSystem and its Simulation, draws particles and connection
lines onto a canvas-like drawing surface each frame, and keeps itself
running by re-requesting a frame from the FrameScheduler after every tick.
"""
import logging
from typing import Optional, Tuple, TYPE_CHECKING

from constants import (
    DEFAULT_CAPACITY, DEFAULT_CONNECTION_DISTANCE, DEFAULT_SPATIAL_GRID_THRESHOLD,
    LINE_WIDTH, PARTICLE_ALPHA, THEME_PALETTES
)
from context import FrameContext, PointerState
from particle import ParticleSystem
from scheduler import FrameScheduler
from simulation import Simulation, connection_alpha

if TYPE_CHECKING:
    from visualization import PygameCanvas

# --- Data Contracts ---
#
# Drawing surface (duck-typed, see visualization.PygameCanvas):
#   get_size() -> (width, height); clear(); set_fill_color(rgba);
#   set_stroke_color(rgba); set_line_width(width); set_global_alpha(alpha);
#   fill_circle(x, y, radius); stroke_line(x0, y0, x1, y1).
#
# class ParticleFieldRenderer:
#   - __init__(self, scheduler: FrameScheduler, seed: Optional[int] = None,
#              spatial_grid_threshold: int = DEFAULT_SPATIAL_GRID_THRESHOLD)
#   - initialize(self, surface, capacity=50, connection_distance=100.0) -> None:
#     - Side Effects: Binds the surface, generates `capacity` particles over
#       its current size and requests the first frame.
#     - Raises: ValueError for a negative capacity or a non-positive
#       connection distance.
#   - resize(self) -> None: Re-reads the surface size and regenerates
#     every particle.
#   - on_pointer_move(self, x, y) -> None
#   - tick(self, context: Optional[FrameContext] = None) -> None:
#     - Side Effects: One update step and one draw step, then requests the
#       next frame if the renderer is running.
#   - stop(self) -> None: Cancels the owned frame handle. Idempotent.
#   - start(self) -> None: Requests a frame if none is owned.
#   - Invariants: at most one frame request is pending at any time.


class ParticleFieldRenderer:
    """
    Animates a fixed-size field of particles with pointer attraction and
    proximity lines.
    """
    def __init__(
        self,
        scheduler: FrameScheduler,
        seed: Optional[int] = None,
        spatial_grid_threshold: int = DEFAULT_SPATIAL_GRID_THRESHOLD
    ):
        self.scheduler = scheduler
        self.seed = seed
        self.spatial_grid_threshold = spatial_grid_threshold

        self.surface: Optional["PygameCanvas"] = None
        self.particles: Optional[ParticleSystem] = None
        self.simulation: Optional[Simulation] = None
        self.pointer = PointerState()
        self.dark_mode = False

        self._frame_handle: Optional[int] = None
        self._running = False
        self.tick_count = 0
        self.last_connection_count = 0

    # --- Lifecycle ---

    def initialize(
        self,
        surface,
        capacity: int = DEFAULT_CAPACITY,
        connection_distance: float = DEFAULT_CONNECTION_DISTANCE
    ) -> None:
        """
        Binds the renderer to a surface and starts the animation loop.
        """
        self.surface = surface
        width, height = self._surface_size()

        self.particles = ParticleSystem(capacity, width, height, seed=self.seed)
        self.simulation = Simulation(self.particles, {
            'connection_distance': connection_distance,
            'spatial_grid_threshold': self.spatial_grid_threshold,
        })

        logging.info(
            f"Particle field initialized: {capacity} particles on a "
            f"{width}x{height} surface, connection distance {connection_distance}."
        )
        self.start()

    def start(self) -> None:
        self._running = True
        if self._frame_handle is None:
            self._frame_handle = self.scheduler.request_frame(self._on_frame)

    def stop(self) -> None:
        """
        Cancels the pending frame. The particle state is kept, so start()
        resumes where the field left off.
        """
        was_running = self._running
        self._running = False
        if self._frame_handle is not None:
            self.scheduler.cancel_frame(self._frame_handle)
            self._frame_handle = None
        if was_running:
            logging.info(f"Particle field stopped after {self.tick_count} ticks.")

    @property
    def running(self) -> bool:
        return self._running

    # --- External events ---

    def resize(self) -> None:
        """
        Regenerates the whole particle set for the surface's current size.
        """
        if self.particles is None:
            return
        self._regenerate(*self._surface_size())

    def _regenerate(self, width: int, height: int) -> None:
        self.particles.regenerate(width, height)
        logging.info(f"Surface resized to {width}x{height}; particles regenerated.")

    def on_pointer_move(self, x: float, y: float) -> None:
        self.pointer.update(x, y)

    # --- Frame ---

    def _on_frame(self, context: FrameContext) -> None:
        # The scheduler has consumed the handle that brought us here.
        self._frame_handle = None
        self.tick(context)

    def tick(self, context: Optional[FrameContext] = None) -> None:
        """
        Performs one update and draw cycle and schedules the next one.
        """
        try:
            if context is not None:
                self._apply_context(context)

            if self.simulation is not None:
                self.simulation.step(self.pointer.x, self.pointer.y)
                self.draw()
            self.tick_count += 1
        finally:
            # Re-arm even if this frame failed; start() is a no-op while a
            # frame is already pending.
            if self._running:
                self.start()

    def draw(self) -> None:
        """
        Clears the surface and renders connection lines, then particles.
        """
        if self.surface is None or self.simulation is None:
            return
        self.surface.clear()

        width, height = self._surface_size()
        if width <= 0 or height <= 0:
            self.last_connection_count = 0
            return

        palette = THEME_PALETTES['dark' if self.dark_mode else 'light']
        positions = self.particles.positions

        pairs, distances = self.simulation.find_connections()
        alphas = connection_alpha(distances, self.simulation.connection_distance)
        self.last_connection_count = len(pairs)

        self.surface.set_stroke_color(palette['line'])
        self.surface.set_line_width(LINE_WIDTH)
        for (i, j), alpha in zip(pairs, alphas):
            self.surface.set_global_alpha(float(alpha))
            self.surface.stroke_line(
                positions[i, 0], positions[i, 1], positions[j, 0], positions[j, 1]
            )

        self.surface.set_global_alpha(PARTICLE_ALPHA)
        self.surface.set_fill_color(palette['particle'])
        for (x, y), radius in zip(positions, self.particles.radii):
            self.surface.fill_circle(x, y, radius)

        self.surface.set_global_alpha(1.0)

    # --- Helpers ---

    def _apply_context(self, context: FrameContext) -> None:
        self.dark_mode = bool(context.dark_mode)
        if context.pointer is not None:
            self.pointer.update(context.pointer.x, context.pointer.y)

        size = context.surface_size
        if self.particles is None or size is None:
            return
        width, height = max(int(size.width), 0), max(int(size.height), 0)
        if (float(width), float(height)) != (self.particles.width, self.particles.height):
            # Bounds follow the reported size, which may be logical rather
            # than the surface's pixel size.
            self._regenerate(width, height)

    def _surface_size(self) -> Tuple[int, int]:
        if self.surface is None:
            return 0, 0
        width, height = self.surface.get_size()
        return max(int(width), 0), max(int(height), 0)
