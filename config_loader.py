# config_loader.py

import json
import logging
import constants

logger = logging.getLogger(constants.LOGGER_NAME)


class ConfigError(ValueError):
    """Raised when config.json is structurally valid JSON but unusable."""


# (key, lower bound, upper bound, bound inclusive) for numeric simulation keys.
# None means unbounded on that side.
_RANGES = [
    ('wall_restitution', 0.0, 1.0, True),
    ('collision_restitution', 0.0, 1.0, True),
    ('friction', 0.0, 1.0, True),
    ('ball_radius', 0.0, None, False),
    ('min_radius', 0.0, None, False),
    ('size_ratio_limit', 1.0, None, False),
    ('auto_fire_interval', 0.0, None, False),
    ('grid_spacing_factor', 0.0, None, False),
]


def load_config(path: str = 'config.json') -> dict:
    """Loads a JSON configuration file."""
    logger.info(f"Loading configuration from {path}...")
    try:
        with open(path, 'r') as f:
            config = json.load(f)
    except FileNotFoundError:
        logger.error(f"Configuration file not found at {path}.")
        raise
    except json.JSONDecodeError:
        logger.error(f"Error decoding JSON from {path}.")
        raise

    if not isinstance(config, dict):
        raise ConfigError(f"Top level of {path} must be an object.")
    logger.info("Configuration loaded successfully.")
    return config


def simulation_section(config: dict) -> dict:
    """
    Returns the validated 'simulation' section. Missing keys are left missing;
    consumers apply their own defaults.
    """
    section = config.get('simulation', {})
    if not isinstance(section, dict):
        raise ConfigError("'simulation' section must be an object.")

    for key, low, high, inclusive in _RANGES:
        if key not in section:
            continue
        value = section[key]
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ConfigError(f"'{key}' must be a number, got {value!r}.")
        if inclusive:
            if value < low or (high is not None and value > high):
                raise ConfigError(f"'{key}' must lie in [{low}, {high}], got {value}.")
        elif value <= low:
            raise ConfigError(f"'{key}' must be greater than {low}, got {value}.")

    for key in ('grid_rows', 'grid_cols'):
        if key in section and (not isinstance(section[key], int) or section[key] < 1):
            raise ConfigError(f"'{key}' must be a positive integer, got {section[key]!r}.")

    return section
