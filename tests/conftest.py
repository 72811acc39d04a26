import logging
import os

import pytest

# Pygame-backed tests run headless.
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

from scheduler import FrameScheduler


class RecordingCanvas:
    """Drawing surface that records primitives with the state they were drawn in."""

    def __init__(self, width=800, height=600):
        self.width = width
        self.height = height
        self.calls = []
        self.fill_color = None
        self.stroke_color = None
        self.line_width = 1
        self.global_alpha = 1.0

    def get_size(self):
        return (self.width, self.height)

    def clear(self):
        self.calls.append(("clear",))

    def set_fill_color(self, color):
        self.fill_color = color

    def set_stroke_color(self, color):
        self.stroke_color = color

    def set_line_width(self, width):
        self.line_width = width

    def set_global_alpha(self, alpha):
        self.global_alpha = alpha

    def fill_circle(self, x, y, radius):
        self.calls.append(("circle", x, y, radius, self.fill_color, self.global_alpha))

    def stroke_line(self, x0, y0, x1, y1):
        self.calls.append(("line", x0, y0, x1, y1, self.stroke_color, self.global_alpha))

    def of(self, kind):
        return [call for call in self.calls if call[0] == kind]

    def reset(self):
        self.calls = []


@pytest.fixture
def canvas():
    return RecordingCanvas()


@pytest.fixture
def make_canvas():
    return RecordingCanvas


@pytest.fixture
def scheduler():
    return FrameScheduler()


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
