# context.py
"""
Explicit per-frame state handed to the particle field renderer.

The host refreshes a FrameContext before every frame instead of the
renderer looking up the theme, pointer or window size on its own.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass
class PointerState:
    """Last known pointer position in surface coordinates."""
    x: float = 0.0
    y: float = 0.0

    def update(self, x: float, y: float) -> None:
        self.x = float(x)
        self.y = float(y)


@dataclass(frozen=True)
class SurfaceSize:
    width: int = 0
    height: int = 0


@dataclass
class FrameContext:
    dark_mode: bool = False
    pointer: Optional[PointerState] = None
    # Fields left as None keep whatever the renderer already knows.
    surface_size: Optional[SurfaceSize] = None
