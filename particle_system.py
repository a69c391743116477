# particle_system.py

import logging
import numpy as np
import constants
from particle import Particle
from physics import _integrate_jit, _handle_collisions_jit

logger = logging.getLogger(constants.LOGGER_NAME)


class ParticleSystem:
    """
    Arena-style collection of every ball in the simulation, stored as
    structure-of-arrays NumPy buffers so the physics kernels can run over them.

    Data Contract:
    - Inputs:
        - config (dict): The 'simulation' section of the config file. Every key
          is optional and falls back to the canonical value.
    - Outputs: None. This class modifies its internal state.
    - Side Effects: Owns the lifecycle of all particle data. Spawns append,
      purge_inactive() removes.
    - Invariants: All internal arrays have the same length (num_particles).
      Particle ids are unique and never reused. Index order is insertion order,
      which fixes the order of the pairwise collision pass.
    """
    def __init__(self, config: dict = None):
        config = config or {}
        self.config = config
        self.wall_restitution = config.get('wall_restitution', 0.8)
        self.collision_restitution = config.get('collision_restitution', 0.8)
        self.friction = config.get('friction', 0.99)
        self.min_radius = config.get('min_radius', 5.0)
        self.size_ratio_limit = config.get('size_ratio_limit', 10.0)
        self.area_transfer_enabled = config.get('area_transfer_enabled', True)
        self.double_count_same_bucket = config.get('double_count_same_bucket', True)

        self.positions = np.zeros((0, 2), dtype=np.float64)
        self.velocities = np.zeros((0, 2), dtype=np.float64)
        self.radii = np.zeros(0, dtype=np.float64)
        self.hues = np.zeros(0, dtype=np.float64)
        self.active = np.zeros(0, dtype=np.bool_)
        self.ids = np.zeros(0, dtype=np.int64)
        self._next_id = 0

        # Per-tick counters, read by the orchestrator for logging
        self.contacts_last_pass = 0
        self.retired_last_pass = 0

    @property
    def num_particles(self) -> int:
        return self.positions.shape[0]

    def __len__(self):
        return self.num_particles

    def populate_grid(self):
        """
        Lays out the initial staggered grid. Odd rows are shifted by half a
        spacing, hues are spread evenly over [0, 1) by grid index, and the first
        particle gets a horizontal kick to start the chain reaction.
        """
        rows = self.config.get('grid_rows', 5)
        cols = self.config.get('grid_cols', 10)
        origin = self.config.get('grid_origin', 100.0)
        radius = self.config.get('ball_radius', 20.0)
        spacing = radius * self.config.get('grid_spacing_factor', 2.5)
        total = rows * cols

        for row in range(rows):
            for col in range(cols):
                x = origin + col * spacing + (row % 2) * spacing * 0.5
                y = origin + row * spacing
                hue = (row * cols + col) / total
                self.add(Particle((x, y), (0.0, 0.0), radius, hue))

        if self.num_particles > 0:
            self.velocities[0, 0] = self.config.get('initial_velocity_x', 200.0)

        logger.info(f"Grid of {rows}x{cols} particles laid out with spacing {spacing}.")

    def add(self, particle: Particle) -> int:
        """Appends a particle and returns the id assigned to it."""
        pid = self._next_id
        self._next_id += 1
        self.positions = np.vstack([self.positions, particle.position.reshape(1, 2)])
        self.velocities = np.vstack([self.velocities, particle.velocity.reshape(1, 2)])
        self.radii = np.append(self.radii, particle.radius)
        self.hues = np.append(self.hues, particle.hue)
        self.active = np.append(self.active, particle.active)
        self.ids = np.append(self.ids, pid)
        return pid

    def index_of(self, pid: int):
        """Current index of the particle with the given id, or None if it is gone."""
        matches = np.flatnonzero(self.ids == pid)
        if len(matches) == 0:
            return None
        return int(matches[0])

    def integrate(self, dt: float, width: float, height: float):
        """Moves every active particle and resolves wall contact."""
        _integrate_jit(
            self.positions, self.velocities, self.radii, self.active,
            float(dt), float(width), float(height),
            self.wall_restitution, self.friction
        )

    def handle_collisions(self, tracker):
        """
        Runs one all-pairs resolution pass. Collision counts are written straight
        into the tracker's array; active counts must already be recounted.
        """
        contacts, retired = _handle_collisions_jit(
            self.positions, self.velocities, self.radii, self.hues, self.active,
            tracker.active_counts, tracker.collision_counts, tracker.bucket_count,
            self.collision_restitution, self.min_radius, self.size_ratio_limit,
            self.area_transfer_enabled, self.double_count_same_bucket
        )
        self.contacts_last_pass = contacts
        self.retired_last_pass = retired

    def farthest_active_from(self, point):
        """
        Index of the active particle farthest from point, or None when no
        particle is active. Ties resolve to the lowest index.
        """
        active_indices = np.flatnonzero(self.active)
        if len(active_indices) == 0:
            return None
        diffs = self.positions[active_indices] - np.asarray(point, dtype=np.float64)
        dists_sq = np.sum(diffs**2, axis=1)
        return int(active_indices[np.argmax(dists_sq)])

    def purge_inactive(self) -> int:
        """Removes retired particles from every array. Returns how many were removed."""
        survival_mask = self.active.copy()
        removed = int(self.num_particles - np.count_nonzero(survival_mask))
        if removed == 0:
            return 0

        self.positions = self.positions[survival_mask]
        self.velocities = self.velocities[survival_mask]
        self.radii = self.radii[survival_mask]
        self.hues = self.hues[survival_mask]
        self.active = self.active[survival_mask]
        self.ids = self.ids[survival_mask]

        logger.debug(f"{removed} particle(s) retired. New count: {self.num_particles}.")
        return removed
