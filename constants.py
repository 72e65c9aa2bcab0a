# constants.py
"""
Application-level constants.

These values are static and do not change between runs. They are the
fixed visual formulas of the sand effect (window size, colors, wave and
jitter constants) and the defaults used when `config.json` leaves a key out.
"""
import os

# Window settings
# The window is fixed-size and not resizable.
WINDOW_WIDTH = 1280
WINDOW_HEIGHT = 720
FPS = 60
TITLE_SCREEN_CAPTION = "The Rings of Power"
PATHWAY_SAMPLE_CAPTION = "Sand Pathway Sample"

# Bundled resources live next to the modules.
BASE_DIR = os.path.dirname(os.path.abspath(__file__))
ASSETS_DIR = os.path.join(BASE_DIR, "assets")
CONFIG_PATH = os.path.join(BASE_DIR, "config.json")
DEFAULT_TITLE_IMAGE = "title.png"

# --- Palette ---
BACKGROUND_COLOR = (0, 0, 0)
WHITE = (255, 255, 255)
GRAY = (136, 136, 136)
LIGHT_GRAY = (204, 204, 204)

# Sand tones for the pathway sample particles. Each particle picks one
# uniformly at creation.
SAND_COLORS = [
    (97, 89, 75),
    (93, 80, 67),
    (91, 81, 70),
    (81, 72, 62),
    (92, 81, 69),
]

# --- Sand-on-line effect ---
# Grid positions per pixel of curve length.
SAND_DENSITY = 0.1
GRAINS_PER_POSITION = 4
# Normal offset jitter range is [-SAND_NORMAL_JITTER, SAND_NORMAL_JITTER).
SAND_NORMAL_JITTER = 10.0
SAND_SINE_AMPLITUDE = 3.0
SAND_SINE_FREQUENCY = 300.0
SAND_SINE_WRAP = 1000.0
SAND_GRAIN_RADIUS_MIN = 2.0
SAND_GRAIN_RADIUS_MAX = 4.0

# --- Sand pathways ---
PATHWAY_FACTOR_COUNT = 12
# Amplitude and frequency coefficients are drawn from [min, max).
PATHWAY_COEFFICIENT_MIN = 2.0
PATHWAY_COEFFICIENT_MAX = 5.0
PATH_STEPS = 1000

# --- Pathway sample screen ---
DEFAULT_PARTICLE_COUNT = 1500
DEFAULT_PATHWAY_COUNT = 3
PARTICLE_VELOCITY_MIN = 0.75
PARTICLE_VELOCITY_MAX = 1.25
# Fraction of one full pass along the pathway covered per second.
PERIOD_SPEED = 0.03
ROW_PADDING = 20
GRAPH_ROW_HEIGHT = 50
FLOW_ROW_HEIGHT = 50
PARTICLE_ROW_HEIGHT = 20
# Dot radius as a fraction of a row's larger dimension.
DOT_RADIUS_RATIO = 0.0025

# --- Run control defaults ---
DEFAULT_LOG_THROTTLE_FRAMES = 600
