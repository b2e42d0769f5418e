import logging
import sys
from pathlib import Path

from xrefkit.core.paths import LOGS_DIR

DEFAULT_LOG_FILE = LOGS_DIR / "xrefkit.log"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(log_level: str = "INFO", log_file: Path | None = None) -> None:
    """
    Configures logging for the application.

    Logs go to stderr; a file handler is added only when ``log_file`` is given.
    """
    log_level = log_level.upper()

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file is not None:
        # Ensure the logs directory exists
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )

    # Quieten down noisy libraries
    logging.getLogger("pydantic").setLevel(logging.WARNING)

def get_logger(name: str) -> logging.Logger:
    """
    Returns a logger instance for a given module.
    """
    return logging.getLogger(name)
