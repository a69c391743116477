# color_stats.py

import logging
import numpy as np
import constants

logger = logging.getLogger(constants.LOGGER_NAME)


def bucket_hue(bucket: int) -> float:
    """Lower hue bound of a bucket, used both as its label and as a spawn hue."""
    return bucket / constants.BUCKET_COUNT


class ColorStatsTracker:
    """
    Per-bucket statistics for the arena.

    Data Contract:
    - active_counts: int64 array of length BUCKET_COUNT, rebuilt from scratch by
      recount() every tick. Never maintained incrementally.
    - collision_counts: int64 array of length BUCKET_COUNT, monotonically
      non-decreasing for the lifetime of the tracker.
    - The collision kernel writes into collision_counts directly, so the array
      object itself must never be replaced.
    """
    def __init__(self, bucket_count: int = constants.BUCKET_COUNT):
        self.bucket_count = bucket_count
        self.active_counts = np.zeros(bucket_count, dtype=np.int64)
        self.collision_counts = np.zeros(bucket_count, dtype=np.int64)

    def recount(self, particles):
        """
        Rebuilds active_counts from the currently active particles of a
        ParticleSystem, discarding the previous value.
        """
        hues = particles.hues[particles.active]
        buckets = np.clip((hues * self.bucket_count).astype(np.int64), 0, self.bucket_count - 1)
        self.active_counts[:] = np.bincount(buckets, minlength=self.bucket_count)

    def record_collision(self, bucket_a: int, bucket_b: int):
        """
        Counts one participation for each side of a collision, unconditionally.

        The collision kernel in physics.py writes into collision_counts itself
        with the same rule, so this is the Python-side entry point for callers
        outside the kernel pass.
        """
        self.collision_counts[bucket_a] += 1
        self.collision_counts[bucket_b] += 1

    def min_bucket(self) -> set:
        """All bucket indices that share the lowest collision count."""
        lowest = self.collision_counts.min()
        return set(int(b) for b in np.flatnonzero(self.collision_counts == lowest))

    def choose_min_bucket(self, rng: np.random.Generator) -> int:
        """Uniform random pick among the least-collided buckets."""
        candidates = sorted(self.min_bucket())
        return int(rng.choice(candidates))

    def leaderboard(self):
        """(bucket, collision_count) pairs, most collisions first, bucket ascending on ties."""
        order = sorted(range(self.bucket_count), key=lambda b: (-self.collision_counts[b], b))
        return [(b, int(self.collision_counts[b])) for b in order]

    def log_summary(self):
        logger.debug(
            f"Active per bucket: {self.active_counts.tolist()} | "
            f"Collisions per bucket: {self.collision_counts.tolist()}"
        )
