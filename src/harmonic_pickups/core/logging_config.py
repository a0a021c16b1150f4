"""
Logging Configuration for the harmonic pickup tools.

Provides centralized logging control with easily toggleable levels:
- DEBUG: Full diagnostic output (every sampled field, every peak candidate)
- INFO: Key events only (final pickup positions)
- WARNING+: Errors and warnings only (separation fallbacks, bad input)

Usage:
    from harmonic_pickups.core.logging_config import setup_logging, set_debug_mode

    setup_logging(debug=False)
    set_debug_mode(True)
"""

import logging
import os

# Named loggers for different components
LOGGER_NAMES = [
    'harmonic_pickups.core.harmonic_field',
    'harmonic_pickups.core.peak_locator',
    'harmonic_pickups.core.placement',
    'harmonic_pickups.render',
    'harmonic_pickups.cli',
]

LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
DATE_FORMAT = '%H:%M:%S'


def setup_logging(debug: bool = False, log_file: str = None):
    """
    Setup logging configuration.

    Args:
        debug: If True, set DEBUG level. Otherwise INFO level.
        log_file: Optional file path to write logs to.
    """
    level = logging.DEBUG if debug else logging.INFO

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    set_logging_level(level)


def set_debug_mode(enabled: bool):
    """
    Enable or disable debug mode for all components.

    Args:
        enabled: True for DEBUG level, False for INFO level.
    """
    set_logging_level(logging.DEBUG if enabled else logging.INFO)


def set_logging_level(level: int):
    """
    Set logging level for all package components.

    Args:
        level: logging.DEBUG, logging.INFO, logging.WARNING, etc.
    """
    for name in LOGGER_NAMES:
        logging.getLogger(name).setLevel(level)


# Environment variable control
if os.environ.get('HARMONIC_PICKUPS_DEBUG', '').lower() in ('1', 'true', 'yes'):
    setup_logging(debug=True)
elif os.environ.get('HARMONIC_PICKUPS_QUIET', '').lower() in ('1', 'true', 'yes'):
    setup_logging(debug=False)
    set_logging_level(logging.WARNING)
