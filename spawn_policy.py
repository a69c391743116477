# spawn_policy.py

import logging
import numpy as np
import constants
from color_stats import ColorStatsTracker, bucket_hue
from particle import Particle

logger = logging.getLogger(constants.LOGGER_NAME)


class SpawnPolicy:
    """
    Decides the hue and launch velocity of new particles.

    Data Contract:
    - Inputs:
        - tracker (ColorStatsTracker): Source of the least-collided buckets.
        - rng (np.random.Generator): The master seeded random number generator.
        - config (dict): The 'simulation' section of the config file.
    - Side Effects: Owns the auto-fire timer and the enabled flag.
    - Invariants: Every hue produced lies in [0, 1). The timer never exceeds
      the firing interval after a tick returns.
    """
    def __init__(self, tracker: ColorStatsTracker, rng: np.random.Generator, config: dict = None):
        config = config or {}
        self.tracker = tracker
        self.rng = rng
        self.radius = config.get('ball_radius', 20.0)
        self.drag_velocity_scale = config.get('drag_velocity_scale', 5.0)
        self.interval = config.get('auto_fire_interval', 1.0)
        self.speed_multiplier = config.get('auto_fire_speed_multiplier', 1.0)
        self.enabled = config.get('auto_fire_enabled', False)
        self.timer = 0.0

    def toggle(self) -> bool:
        """Flips auto-fire on or off. Returns the new state."""
        self.enabled = not self.enabled
        logger.info(f"Auto-fire {'enabled' if self.enabled else 'disabled'}.")
        return self.enabled

    def force_expiry(self):
        """Makes the next auto_fire_tick fire regardless of elapsed time."""
        if self.enabled:
            self.timer = self.interval

    def choose_hue(self) -> float:
        return bucket_hue(self.tracker.choose_min_bucket(self.rng))

    def spawn_from_drag(self, start, end, is_first_spawn: bool, now: float) -> Particle:
        """
        Creates a particle at the drag start, moving along the drag with speed
        proportional to its length.

        The first manual spawn takes a time-derived hue. Later ones take the
        hue of a randomly chosen least-collided bucket.
        """
        start = np.asarray(start, dtype=np.float64)
        end = np.asarray(end, dtype=np.float64)
        velocity = (end - start) * self.drag_velocity_scale

        if is_first_spawn:
            hue = (now * constants.HUE_TIME_SCALE) % 1.0
        else:
            hue = self.choose_hue()

        logger.info(f"Manual spawn at {start.tolist()} with velocity {velocity.tolist()} and hue {hue:.3f}.")
        return Particle(start, velocity, self.radius, hue)

    def auto_fire_tick(self, dt: float, interval: float, speed_multiplier: float,
                       particles, last_launched_position):
        """
        Advances the auto-fire timer and fires when it reaches the interval.

        The shot starts at last_launched_position and aims at the active
        particle farthest from it. Its speed is the distance to the target
        times speed_multiplier. Returns the new Particle, or None when nothing
        was fired. The timer resets on expiry even when there is no target.
        """
        if not self.enabled:
            return None

        self.timer += dt
        if self.timer < interval:
            return None
        self.timer = 0.0

        target_index = particles.farthest_active_from(last_launched_position)
        if target_index is None:
            logger.warning("Auto-fire skipped: no active particle to target.")
            return None

        origin = np.asarray(last_launched_position, dtype=np.float64)
        delta = particles.positions[target_index] - origin
        distance = float(np.linalg.norm(delta))
        if distance == 0.0:
            velocity = np.array(constants.DEFAULT_LAUNCH_VELOCITY, dtype=np.float64)
        else:
            direction = delta / distance
            velocity = direction * distance * speed_multiplier

        hue = self.choose_hue()
        logger.info(
            f"Auto-fire from {origin.tolist()} at particle {int(particles.ids[target_index])} "
            f"({distance:.1f} away) with hue {hue:.3f}."
        )
        return Particle(origin, velocity, self.radius, hue)
