"""
Logging configuration for forestinv.

The library logs through the standard ``logging`` module under the
``forestinv`` namespace and installs only a NullHandler; applications call
``setup_logging`` to see the output.
"""
import logging
from pathlib import Path
from typing import Optional, Union

ROOT_LOGGER_NAME = 'forestinv'
DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())


def get_logger(name: str) -> logging.Logger:
    """Get a logger namespaced under the package root logger.

    Args:
        name: Module name, usually ``__name__``

    Returns:
        Logger instance
    """
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + '.'):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def setup_logging(
    level: Union[int, str] = logging.INFO,
    log_file: Optional[Union[str, Path]] = None,
    fmt: str = DEFAULT_FORMAT
) -> logging.Logger:
    """Configure the package logger with a console handler and optional file.

    Calling this more than once replaces the handlers installed by the
    previous call.

    Args:
        level: Logging level (name or number)
        log_file: Optional path of a log file
        fmt: Log record format string

    Returns:
        The configured package root logger
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    logger.setLevel(level)

    for handler in list(logger.handlers):
        if not isinstance(handler, logging.NullHandler):
            logger.removeHandler(handler)
            handler.close()

    formatter = logging.Formatter(fmt)

    console = logging.StreamHandler()
    console.setFormatter(formatter)
    logger.addHandler(console)

    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding='utf-8')
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def log_data_quality(logger: logging.Logger, plot_id, tree_id, issue: str) -> None:
    """Record a data-quality limitation for a single tree."""
    logger.debug("Data quality: plot %s tree %s: %s", plot_id, tree_id, issue)


def log_projection_summary(
    logger: logging.Logger,
    model_name: str,
    years: int,
    start_ba: float,
    end_ba: float,
    start_tpa: float,
    end_tpa: float
) -> None:
    """Log a one-line summary of a growth projection.

    Args:
        logger: Logger instance
        model_name: Name of the growth model used
        years: Projection horizon
        start_ba: Basal area at year 0
        end_ba: Basal area at the final year
        start_tpa: Trees per acre at year 0
        end_tpa: Trees per acre at the final year
    """
    logger.info(
        "Projected %d years with %s model: BA %.2f -> %.2f sq ft/ac, "
        "TPA %.1f -> %.1f",
        years, model_name, start_ba, end_ba, start_tpa, end_tpa
    )
