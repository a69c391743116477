# main.py

import cProfile
import io
import logging
import pstats
import sys

import numpy as np
import constants
import logger_setup
from config_loader import load_config, simulation_section
from events import PointerDown, PointerMove, PointerUp
from simulation import Simulation

# Get the application's dedicated logger
logger = logging.getLogger(constants.LOGGER_NAME)


def scripted_events(tick: int, width: float, height: float):
    """
    Stand-in for the display shell's input polling: a single drag from the
    lower left corner towards the arena centre, spread over a few ticks.
    """
    start = (width * 0.1, height * 0.9)
    end = (width * 0.2, height * 0.8)
    if tick == 120:
        return [PointerDown(start)]
    if tick == 125:
        return [PointerMove(((start[0] + end[0]) / 2, (start[1] + end[1]) / 2))]
    if tick == 130:
        return [PointerUp(end)]
    return []


def run_simulation_loop(sim: Simulation, run_params: dict):
    """
    Drives the simulation for a fixed number of ticks with a constant dt.
    Returns the final snapshot.
    """
    ticks = run_params.get('ticks', 3000)
    log_throttle = run_params.get('log_throttle_ticks', 100)
    dt = run_params.get('dt', 1.0 / constants.FPS)
    width, height = constants.WIDTH, constants.HEIGHT

    snapshot = sim.snapshot()
    for tick in range(ticks):
        snapshot = sim.step(dt, scripted_events(tick, width, height), width, height)

        # Hot loops must throttle logs
        if tick % log_throttle == 0:
            leader, leader_count = sim.tracker.leaderboard()[0]
            logger.info(
                f"Tick={tick}, "
                f"Particles={len(snapshot.particles)}, "
                f"TotalCollisions={sum(snapshot.collision_counts)}, "
                f"Leader=bucket {leader} ({leader_count})"
            )
            sim.tracker.log_summary()

    return snapshot


def main(config_path: str = 'config.json'):
    """
    Loads configuration, initializes the simulation and runs the headless
    session under the profiler.
    """
    try:
        config = load_config(config_path)
        sim_config = simulation_section(config)
    except (OSError, ValueError) as e:
        # Logging is not set up yet, so we use a print for this one error.
        print(f"FATAL: Could not load {config_path}. Error: {e}")
        return 1

    logger_setup.setup_logging(config)
    logger.info("Application starting...")
    logger.info(f"Loaded configuration: {config}")

    # Initialize the master random number generator (RNG)
    seed = config.get('master_seed', 0)
    rng = np.random.default_rng(seed)
    logger.info(f"Master RNG initialized with seed: {seed}")

    sim = Simulation(sim_config, rng)

    profiler = cProfile.Profile()
    profiler.enable()
    snapshot = run_simulation_loop(sim, config.get('run_control', {}))
    profiler.disable()

    logger.info(f"Run finished at t={snapshot.time:.2f}s with {len(snapshot.particles)} particles.")
    logger.info(f"Final leaderboard: {sim.tracker.leaderboard()}")

    s = io.StringIO()
    # Sort by cumulative time spent in the function
    stats = pstats.Stats(profiler, stream=s).sort_stats('cumtime')
    stats.print_stats(20)
    logger.debug(f"\n{s.getvalue()}")

    logger.info("Application shutting down.")
    return 0


if __name__ == "__main__":
    sys.exit(main(*sys.argv[1:2]))
