# logger_setup.py

import logging
import os
import constants

def setup_logging(config: dict, base_dir: str = 'runs'):
    """
    Sets up logging for the application.

    Configures the dedicated "domino_sim" logger (not the root logger) to
    output to both the console and a run-specific log file, keeping Numba's
    own log output out of the application log.

    Data Contract:
    - Inputs:
        - config (dict): Loaded config.json. Uses 'run_id' and the optional
          'logging' section with 'level' and 'format'.
        - base_dir (str): Parent directory for per-run log folders.
    - Outputs: The configured logger.
    - Side Effects:
        - Replaces any handlers already attached to the "domino_sim" logger.
        - Creates <base_dir>/<run_id>/ if missing.
    """
    run_id = config.get('run_id', 'default')
    log_config = config.get('logging', {})
    level = log_config.get('level', 'INFO').upper()
    fmt = log_config.get('format', '%(asctime)s - %(levelname)s - %(message)s')

    logger = logging.getLogger(constants.LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    log_dir = os.path.join(base_dir, run_id)
    os.makedirs(log_dir, exist_ok=True)
    log_file = os.path.join(log_dir, 'simulation.log')

    formatter = logging.Formatter(fmt)

    file_handler = logging.FileHandler(log_file)
    file_handler.setFormatter(formatter)

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)

    # Avoid duplicate output when called more than once
    if logger.hasHandlers():
        for handler in list(logger.handlers):
            handler.close()
        logger.handlers.clear()
    logger.addHandler(file_handler)
    logger.addHandler(stream_handler)

    logger.info(f"Logging initialized. Run ID: {run_id}. Log file: {log_file}")
    return logger
