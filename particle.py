# particle.py

import logging
import numpy as np
import constants
from physics import bucket_index, _update_particle_jit

logger = logging.getLogger(constants.LOGGER_NAME)


def hsl_to_rgb(h: float, s: float, l: float):
    """
    Converts an HSL color (all components in [0, 1]) to an (R, G, B) tuple
    of ints in [0, 255].
    """
    c = (1.0 - abs(2.0 * l - 1.0)) * s
    x = c * (1.0 - abs((h * 6.0) % 2.0 - 1.0))
    m = l - c / 2.0

    if h < 1.0 / 6.0:
        r, g, b = c, x, 0.0
    elif h < 2.0 / 6.0:
        r, g, b = x, c, 0.0
    elif h < 3.0 / 6.0:
        r, g, b = 0.0, c, x
    elif h < 4.0 / 6.0:
        r, g, b = 0.0, x, c
    elif h < 5.0 / 6.0:
        r, g, b = x, 0.0, c
    else:
        r, g, b = c, 0.0, x

    return (int(round((r + m) * 255)), int(round((g + m) * 255)), int(round((b + m) * 255)))


class Particle:
    """
    Represents a single ball in the arena.

    Data Contract:
    - position, velocity: float64 NumPy arrays of shape (2,).
    - radius: positive float while active.
    - hue: float in [0, 1), fixed at creation.
    - active: False means the particle is logically deleted.
    """
    def __init__(self, position, velocity, radius: float, hue: float, active: bool = True):
        if not 0.0 <= hue < 1.0:
            raise ValueError(f"Hue must lie in [0, 1), got {hue}.")
        if radius <= 0:
            raise ValueError(f"Radius must be positive, got {radius}.")

        self.position = np.array(position, dtype=np.float64)
        self.velocity = np.array(velocity, dtype=np.float64)
        self.radius = float(radius)
        self.hue = float(hue)
        self.active = active

        logger.debug(f"Particle created: r={self.radius}, hue={self.hue:.3f}, pos={self.position}")

    @property
    def bucket(self) -> int:
        """Index of the color bucket this particle's hue falls into."""
        return bucket_index(self.hue, constants.BUCKET_COUNT)

    @property
    def color(self):
        """Display color derived from the hue."""
        return hsl_to_rgb(self.hue, constants.COLOR_SATURATION, constants.COLOR_LIGHTNESS)

    def update(self, dt: float, width: float, height: float,
               restitution: float = 0.8, friction: float = 0.99):
        """
        Advances the particle by dt seconds and bounces it off the arena walls.
        Inactive particles are left untouched.
        """
        if not self.active:
            return
        _update_particle_jit(
            self.position, self.velocity, self.radius,
            float(dt), float(width), float(height),
            float(restitution), float(friction)
        )

    def __repr__(self):
        return (
            f"Particle(pos={self.position.tolist()}, vel={self.velocity.tolist()}, "
            f"r={self.radius:.2f}, hue={self.hue:.3f}, active={self.active})"
        )
