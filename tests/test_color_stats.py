# test_color_stats.py

import numpy as np

from color_stats import ColorStatsTracker, bucket_hue
from particle import Particle
from particle_system import ParticleSystem


def test_min_bucket_returns_every_tied_minimum():
    tracker = ColorStatsTracker()
    tracker.collision_counts[:] = [3, 1, 1, 5, 2, 1, 3, 0, 0, 2]
    assert tracker.min_bucket() == {7, 8}


def test_min_bucket_on_fresh_tracker_is_every_bucket():
    assert ColorStatsTracker().min_bucket() == set(range(10))


def test_choose_min_bucket_draws_uniformly_from_ties():
    tracker = ColorStatsTracker()
    tracker.collision_counts[:] = [3, 1, 1, 5, 2, 1, 3, 0, 0, 2]
    rng = np.random.default_rng(7)

    draws = [tracker.choose_min_bucket(rng) for _ in range(200)]

    assert set(draws) == {7, 8}
    # Both outcomes should be well represented
    assert 60 < draws.count(7) < 140


def test_recount_reflects_only_active_particles_and_replaces_old_values():
    system = ParticleSystem()
    for hue in (0.05, 0.07, 0.33, 0.91):
        system.add(Particle((0, 0), (0, 0), 10.0, hue))
    tracker = ColorStatsTracker()
    tracker.active_counts[:] = 99

    tracker.recount(system)
    assert tracker.active_counts.tolist() == [2, 0, 0, 1, 0, 0, 0, 0, 0, 1]

    system.active[0] = False
    tracker.recount(system)
    assert tracker.active_counts.tolist() == [1, 0, 0, 1, 0, 0, 0, 0, 0, 1]


def test_recount_of_empty_system_is_all_zero():
    tracker = ColorStatsTracker()
    tracker.recount(ParticleSystem())
    assert tracker.active_counts.tolist() == [0] * 10


def test_record_collision_increments_both_sides_even_when_equal():
    tracker = ColorStatsTracker()
    tracker.record_collision(2, 6)
    tracker.record_collision(4, 4)

    assert tracker.collision_counts[2] == 1
    assert tracker.collision_counts[6] == 1
    assert tracker.collision_counts[4] == 2


def test_leaderboard_orders_by_count_then_bucket():
    tracker = ColorStatsTracker()
    tracker.collision_counts[:] = [3, 1, 1, 5, 2, 1, 3, 0, 0, 2]
    board = tracker.leaderboard()

    assert board[:3] == [(3, 5), (0, 3), (6, 3)]
    assert board[-2:] == [(7, 0), (8, 0)]


def test_bucket_hue_is_lower_bound_of_bucket():
    assert bucket_hue(0) == 0.0
    assert bucket_hue(3) == 0.3
    assert Particle((0, 0), (0, 0), 1.0, bucket_hue(9)).bucket == 9
