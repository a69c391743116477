# constants.py

"""
Application Constants

This module defines static configuration values for the engine's framework.
These are not expected to change between simulation runs. Tunable physics
coefficients live in config.json instead.

Data Contract:
- All values are immutable constants.
- Units are specified in comments where applicable.
"""

# Default arena dimensions, used when the shell does not supply its own.
WIDTH = 1200  # Arena units
HEIGHT = 800  # Arena units

# Framerate assumed by the headless driver
FPS = 60  # Ticks per second

# Name of the dedicated application logger
LOGGER_NAME = "domino_sim"

# Number of discrete hue ranges used for statistics and spawn fairness.
BUCKET_COUNT = 10

# Hue of the first manual spawn is (simulation_time * HUE_TIME_SCALE) mod 1.
HUE_TIME_SCALE = 0.1

# Launch velocity used by auto-fire when the target sits on the launch point.
# Screen coordinates: negative y points up.
DEFAULT_LAUNCH_VELOCITY = (0.0, -200.0)  # Units per second

# HSL parameters for mapping a hue onto a display color.
COLOR_SATURATION = 0.8
COLOR_LIGHTNESS = 0.6
