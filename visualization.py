# visualization.py
"""
Hosts the particle field in a Pygame window.

PygameCanvas is the drawing surface the renderer paints on: a transparent,
per-pixel-alpha layer with an HTML-canvas-like API. Visualizer owns the
window, turns Pygame events into renderer calls, builds the FrameContext
and drives the FrameScheduler once per display frame.
"""
import logging
import math
import pygame
from typing import Tuple, Optional, Dict, Any

from constants import (
    BACKGROUND_COLORS, DEFAULT_WINDOW_SIZE, FPS, FULLSCREEN, WINDOW_CAPTION
)
from context import FrameContext, PointerState, SurfaceSize
from renderer import ParticleFieldRenderer
from scheduler import FrameScheduler
from theme import ThemeStore

# --- Data Contracts ---
#
# class PygameCanvas:
#   - __init__(self, width: int, height: int)
#   - Colours are (r, g, b) or (r, g, b, alpha) with alpha in [0, 1]. The
#     pixel alpha written is colour alpha * global alpha, scaled to 0-255.
#   - clear() makes every pixel fully transparent.
#   - fill_circle and stroke_line blend source-over onto what is already
#     drawn, so overlapping translucent shapes build up opacity.
#
# class Visualizer:
#   - __init__(self, renderer: ParticleFieldRenderer, theme: ThemeStore,
#              vis_params: Optional[Dict[str, Any]] = None):
#     - Side Effects: Initializes Pygame and creates the display and canvas.
#   - run_frame(self, scheduler: FrameScheduler) -> bool:
#     - Outputs: False if the user has quit, True otherwise.
#     - Side Effects: Handles events, runs one scheduler frame, presents it.

RGBA = Tuple[float, float, float, float]


class PygameCanvas:
    """
    A transparent drawing layer with canvas-style state (fill, stroke,
    line width, global alpha).
    """
    def __init__(self, width: int, height: int):
        self.surface = pygame.Surface((max(int(width), 0), max(int(height), 0)), pygame.SRCALPHA)
        self.fill_color: RGBA = (0, 0, 0, 1.0)
        self.stroke_color: RGBA = (0, 0, 0, 1.0)
        self.line_width = 1
        self.global_alpha = 1.0

    def get_size(self) -> Tuple[int, int]:
        return self.surface.get_size()

    def resize(self, width: int, height: int) -> None:
        self.surface = pygame.Surface((max(int(width), 0), max(int(height), 0)), pygame.SRCALPHA)
        logging.debug(f"Canvas resized to {width}x{height}.")

    def clear(self) -> None:
        self.surface.fill((0, 0, 0, 0))

    def set_fill_color(self, color) -> None:
        self.fill_color = self._normalize(color)

    def set_stroke_color(self, color) -> None:
        self.stroke_color = self._normalize(color)

    def set_line_width(self, width: int) -> None:
        self.line_width = max(int(width), 1)

    def set_global_alpha(self, alpha: float) -> None:
        self.global_alpha = min(max(float(alpha), 0.0), 1.0)

    def fill_circle(self, x: float, y: float, radius: float) -> None:
        radius = float(radius)
        pad = int(math.ceil(radius)) + 1
        left, top = int(math.floor(x)) - pad, int(math.floor(y)) - pad
        layer = pygame.Surface((2 * pad + 1, 2 * pad + 1), pygame.SRCALPHA)
        pygame.draw.circle(
            layer, self._pixel_color(self.fill_color),
            (float(x) - left, float(y) - top), radius
        )
        self._composite(layer, left, top)

    def stroke_line(self, x0: float, y0: float, x1: float, y1: float) -> None:
        pad = self.line_width + 1
        left = int(math.floor(min(x0, x1))) - pad
        top = int(math.floor(min(y0, y1))) - pad
        width = int(math.ceil(max(x0, x1))) + pad + 1 - left
        height = int(math.ceil(max(y0, y1))) + pad + 1 - top
        layer = pygame.Surface((width, height), pygame.SRCALPHA)
        pygame.draw.line(
            layer, self._pixel_color(self.stroke_color),
            (float(x0) - left, float(y0) - top), (float(x1) - left, float(y1) - top),
            self.line_width
        )
        self._composite(layer, left, top)

    def _composite(self, layer: pygame.Surface, left: int, top: int) -> None:
        # pygame.draw overwrites RGBA on an SRCALPHA target; blitting a
        # primitive's own layer blends it source-over, as a canvas does.
        self.surface.blit(layer, (left, top))

    @staticmethod
    def _normalize(color) -> RGBA:
        if len(color) == 3:
            r, g, b = color
            return (r, g, b, 1.0)
        r, g, b, a = color
        return (r, g, b, float(a))

    def _pixel_color(self, color: RGBA) -> pygame.Color:
        r, g, b, a = color
        alpha = int(round(255 * a * self.global_alpha))
        return pygame.Color(int(r), int(g), int(b), min(max(alpha, 0), 255))


class Visualizer:
    """
    Runs the particle field inside a Pygame window.
    """
    def __init__(
        self,
        renderer: ParticleFieldRenderer,
        theme: ThemeStore,
        vis_params: Optional[Dict[str, Any]] = None
    ):
        """
        Initializes Pygame and the display window.
        """
        vis_params = vis_params if vis_params is not None else {}
        pygame.init()

        self.fullscreen = vis_params.get('fullscreen', FULLSCREEN)
        if self.fullscreen:
            display_info = pygame.display.Info()
            width, height = display_info.current_w, display_info.current_h
            self.screen = pygame.display.set_mode((width, height), pygame.FULLSCREEN)
        else:
            width, height = vis_params.get('window_size', DEFAULT_WINDOW_SIZE)
            self.screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)

        pygame.display.set_caption(WINDOW_CAPTION)
        self.clock = pygame.time.Clock()

        self.canvas = PygameCanvas(width, height)
        self.renderer = renderer
        self.theme = theme
        self.pointer = PointerState(*pygame.mouse.get_pos())

        logging.info(f"Visualizer initialized with Pygame display ({width}x{height}).")

    def handle_events(self) -> bool:
        """
        Forwards input to the renderer and theme.

        Returns:
            bool: False if the application should exit, True otherwise.
        """
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                logging.info("Quit event received. Shutting down visualizer.")
                return False

            if event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    logging.info("ESC key pressed. Shutting down visualizer.")
                    return False
                if event.key == pygame.K_t:
                    self.theme.toggle()

            if event.type == pygame.MOUSEMOTION:
                x, y = event.pos
                self.pointer.update(x, y)
                self.renderer.on_pointer_move(x, y)

            if event.type == pygame.VIDEORESIZE:
                width, height = event.w, event.h
                if not self.fullscreen:
                    self.screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)
                self.canvas.resize(width, height)
                self.renderer.resize()

        return True

    def frame_context(self) -> FrameContext:
        width, height = self.canvas.get_size()
        return FrameContext(
            dark_mode=self.theme.is_dark,
            pointer=PointerState(self.pointer.x, self.pointer.y),
            surface_size=SurfaceSize(width, height),
        )

    def run_frame(self, scheduler: FrameScheduler) -> bool:
        """
        Handles events, lets the scheduler run this frame's callbacks and
        presents the result.
        """
        if not self.handle_events():
            return False

        background = BACKGROUND_COLORS['dark' if self.theme.is_dark else 'light']
        self.screen.fill(background)

        scheduler.run_frame(self.frame_context())

        self.screen.blit(self.canvas.surface, (0, 0))
        pygame.display.flip()
        self.clock.tick(FPS)
        return True

    def close(self):
        """Shuts down Pygame."""
        pygame.quit()
