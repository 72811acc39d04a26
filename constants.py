# constants.py
"""
Application-level constants.

These values are static and do not change between runs. They cover the
rendering look of the particle field (palettes, opacities), the fixed
physics of the pointer attraction, and window defaults. Anything a user may
want to tune per run lives in `config.json` instead.
"""

# Visualization settings
# Set to True to run in borderless fullscreen mode.
# Set to False to run in a resizable window of DEFAULT_WINDOW_SIZE.
FULLSCREEN = False
DEFAULT_WINDOW_SIZE = (1280, 720)
FPS = 60
WINDOW_CAPTION = "Particle Field"

# Page background behind the transparent particle canvas, per theme.
BACKGROUND_COLORS = {
    "light": (249, 250, 251),  # gray-50
    "dark": (17, 24, 39),      # gray-900
}

# --- Particle Field Defaults ---
DEFAULT_CAPACITY = 50
DEFAULT_CONNECTION_DISTANCE = 100.0
# Above this particle count the connection pass switches to a spatial grid.
DEFAULT_SPATIAL_GRID_THRESHOLD = 400

# Initial velocity components are drawn from [-MAX_INITIAL_SPEED, MAX_INITIAL_SPEED].
MAX_INITIAL_SPEED = 0.25
PARTICLE_RADIUS_MIN = 1.0
PARTICLE_RADIUS_MAX = 3.0

# --- Pointer Attraction ---
ATTRACTION_RADIUS = 100.0
ATTRACTION_STRENGTH = 0.01

# --- Opacity ---
# Connection lines fade linearly from this alpha (touching) to 0 (at the cutoff).
CONNECTION_ALPHA_SCALE = 0.3
PARTICLE_ALPHA = 0.7
LINE_WIDTH = 1

# Theme palettes as (r, g, b, alpha). The colour alpha multiplies with the
# global alpha set for each primitive, as on an HTML canvas.
THEME_PALETTES = {
    "dark": {
        "particle": (59, 130, 246, 0.6),
        "line": (59, 130, 246, 0.1),
    },
    "light": {
        "particle": (59, 130, 246, 0.4),
        "line": (59, 130, 246, 0.08),
    },
}
