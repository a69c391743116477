# simulation.py

import logging
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import numpy as np
import constants
from color_stats import ColorStatsTracker
from events import PointerDown, PointerUp, PointerMove, KeyToggle, AutoFireElapsed
from particle import Particle
from particle_system import ParticleSystem
from spawn_policy import SpawnPolicy

logger = logging.getLogger(constants.LOGGER_NAME)


@dataclass(frozen=True)
class ParticleState:
    position: Tuple[float, float]
    radius: float
    hue: float
    active: bool


@dataclass(frozen=True)
class Snapshot:
    """Read-only view of the arena after a tick, for drawing and the leaderboard."""
    time: float
    particles: Tuple[ParticleState, ...]
    active_counts: Tuple[int, ...]
    collision_counts: Tuple[int, ...]
    auto_fire_enabled: bool
    drag_preview: Optional[Tuple[Tuple[float, float], Tuple[float, float]]]


class Simulation:
    """
    Orchestrates one tick of the arena.

    Data Contract:
    - Inputs:
        - config (dict): The 'simulation' section of the config file.
        - rng (np.random.Generator): The master seeded random number generator.
    - Outputs: step() returns a Snapshot.
    - Side Effects: Owns the ParticleSystem, the ColorStatsTracker and the
      SpawnPolicy, and mutates them only inside step().
    - Invariants: Tick order is fixed: integrate, recount, collide, spawn,
      purge. step() is not reentrant.
    """
    def __init__(self, config: dict, rng: np.random.Generator):
        self.config = config
        self.particles = ParticleSystem(config)
        self.tracker = ColorStatsTracker()
        self.spawn_policy = SpawnPolicy(self.tracker, rng, config)

        self.time = 0.0
        self.tick = 0
        self.manual_spawns = 0
        self.drag_start = None
        self.pointer_position = None

        self.particles.populate_grid()

        # The first grid particle is the initial launch origin.
        self.last_launched_id = None
        self.last_launched_position = np.array(
            [constants.WIDTH / 2, constants.HEIGHT / 2], dtype=np.float64
        )
        if self.particles.num_particles > 0:
            self.last_launched_id = int(self.particles.ids[0])
            self.last_launched_position = self.particles.positions[0].copy()

        logger.info(
            f"Simulation created with {self.particles.num_particles} particles. "
            f"Auto-fire {'on' if self.spawn_policy.enabled else 'off'}."
        )

    def toggle_auto_fire(self) -> bool:
        return self.spawn_policy.toggle()

    def step(self, dt: float, events: Sequence = (), width: float = constants.WIDTH,
             height: float = constants.HEIGHT) -> Snapshot:
        """
        Advances the arena by dt seconds, consuming the batched input events.

        Args:
            dt (float): Elapsed time since the previous tick, >= 0.
            events (Sequence): Event objects from events.py, in arrival order.
            width, height (float): Current arena extents supplied by the shell.
        """
        if dt < 0:
            raise ValueError(f"dt must be non-negative, got {dt}.")
        if width <= 0 or height <= 0:
            raise ValueError(f"Arena extents must be positive, got {width}x{height}.")

        self.time += dt
        self.tick += 1

        # 1. Integration and wall contact
        self.particles.integrate(dt, width, height)

        # 2. Active counts must reflect this tick before the collision pass reads them
        self.tracker.recount(self.particles)

        # 3. Single all-pairs collision pass
        self.particles.handle_collisions(self.tracker)

        # Launch origin follows the tracked particle through this tick's motion
        self._refresh_last_launched()

        # 4. Input events, then auto-fire
        for event in events:
            self._handle_event(event)

        shot = self.spawn_policy.auto_fire_tick(
            dt, self.spawn_policy.interval, self.spawn_policy.speed_multiplier,
            self.particles, self.last_launched_position
        )
        if shot is not None:
            self._launch(shot)

        # 5. Retirement
        self.particles.purge_inactive()
        self._refresh_last_launched()

        logger.debug(
            f"Tick {self.tick} | Particles: {self.particles.num_particles}, "
            f"Contacts: {self.particles.contacts_last_pass}, "
            f"Retired: {self.particles.retired_last_pass}"
        )
        return self.snapshot()

    def _handle_event(self, event):
        if isinstance(event, PointerDown):
            self.drag_start = tuple(event.pos)
            self.pointer_position = tuple(event.pos)
        elif isinstance(event, PointerMove):
            self.pointer_position = tuple(event.pos)
        elif isinstance(event, PointerUp):
            if self.drag_start is None:
                # Release without a matching press
                return
            particle = self.spawn_policy.spawn_from_drag(
                self.drag_start, event.pos, self.manual_spawns == 0, self.time
            )
            self.manual_spawns += 1
            self.drag_start = None
            self.pointer_position = tuple(event.pos)
            self._launch(particle)
        elif isinstance(event, KeyToggle):
            self.toggle_auto_fire()
        elif isinstance(event, AutoFireElapsed):
            self.spawn_policy.force_expiry()
        else:
            raise TypeError(f"Unknown input event: {event!r}")

    def _launch(self, particle: Particle):
        self.last_launched_id = self.particles.add(particle)
        self.last_launched_position = particle.position.copy()

    def _refresh_last_launched(self):
        """Follows the last launched particle while it is alive. Otherwise keeps its last position."""
        if self.last_launched_id is None:
            return
        index = self.particles.index_of(self.last_launched_id)
        if index is None:
            self.last_launched_id = None
            return
        self.last_launched_position = self.particles.positions[index].copy()

    def snapshot(self) -> Snapshot:
        states = tuple(
            ParticleState(
                (float(self.particles.positions[i, 0]), float(self.particles.positions[i, 1])),
                float(self.particles.radii[i]),
                float(self.particles.hues[i]),
                bool(self.particles.active[i]),
            )
            for i in range(self.particles.num_particles)
        )
        preview = None
        if self.drag_start is not None:
            preview = (self.drag_start, self.pointer_position)
        return Snapshot(
            time=self.time,
            particles=states,
            active_counts=tuple(int(c) for c in self.tracker.active_counts),
            collision_counts=tuple(int(c) for c in self.tracker.collision_counts),
            auto_fire_enabled=self.spawn_policy.enabled,
            drag_preview=preview,
        )
