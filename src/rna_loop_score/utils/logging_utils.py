"""
Logging setup for applications that drive the scoring providers.

Library modules only ever call ``logging.getLogger(__name__)``; nothing is
configured on import. A DP driver or notebook that wants to see the
providers' INFO/DEBUG records calls :func:`setup_logger` once, usually on
the package logger ``"rna_loop_score"``.
"""
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

PACKAGE_LOGGER = "rna_loop_score"

# Directory used for timestamped log files when none is given.
DEFAULT_LOG_DIR = Path("var/log")

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def get_log_file_path(
    logger_name: str,
    log_dir: Optional[Path] = None,
    include_timestamp: bool = True,
) -> Path:
    """
    Build the path of a log file for `logger_name`, creating its directory.

    Dots in the logger name become underscores, so
    ``"rna_loop_score.energies"`` logs to ``rna_loop_score_energies[_<stamp>].log``.
    """
    directory = DEFAULT_LOG_DIR if log_dir is None else log_dir
    directory.mkdir(parents=True, exist_ok=True)

    stem = logger_name.replace(".", "_")
    if include_timestamp:
        stem = f"{stem}_{datetime.now():%Y%m%d_%H%M%S}"

    return directory / f"{stem}.log"


def _attach(logger: logging.Logger, handler: logging.Handler, level: int) -> None:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    logger.addHandler(handler)


def setup_logger(
    name: str = PACKAGE_LOGGER,
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    log_dir: Optional[Path] = None,
    enable_file_logging: bool = True,
    console_level: Optional[int] = None,
    file_level: Optional[int] = None,
) -> logging.Logger:
    """
    Attach a stdout handler and, optionally, a file handler to a logger.

    Handlers from a previous call are removed first, so calling this again
    (from tests or a notebook) reconfigures instead of duplicating output.

    Parameters
    ----------
    name : str
        Logger to configure. Defaults to the package logger.
    level : int
        Logger level, and the default level of both handlers.
    log_file : str, optional
        Explicit log file. Takes precedence over `log_dir`.
    log_dir : Path, optional
        Directory of the timestamped log file used when `log_file` is not given.
    enable_file_logging : bool
        Whether to log to a timestamped file when `log_file` is not given.
    console_level, file_level : int, optional
        Per-handler overrides of `level`.

    Returns
    -------
    logging.Logger
        The configured logger.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    _attach(logger, logging.StreamHandler(sys.stdout), level if console_level is None else console_level)

    if log_file:
        file_path = Path(log_file)
        file_path.parent.mkdir(parents=True, exist_ok=True)
    elif enable_file_logging:
        file_path = get_log_file_path(name, log_dir=log_dir)
    else:
        return logger

    _attach(logger, logging.FileHandler(file_path, mode="a"), level if file_level is None else file_level)
    logger.debug(f"Writing log records to {file_path}")

    return logger
