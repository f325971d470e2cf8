"""Process-wide logging setup: stdout plus an append-mode log file."""

import logging
import sys

from timeful.config import Settings
from timeful.errors import LogFileError

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y/%m/%d %H:%M:%S"


def configure_logging(settings: Settings) -> logging.Logger:
    """Send log records to stdout and to ``settings.LOG_FILE``.

    Raises LogFileError when the log file cannot be opened; the caller treats
    that as fatal.
    """
    try:
        file_handler = logging.FileHandler(settings.LOG_FILE, mode="a", encoding="utf-8")
    except OSError as e:
        raise LogFileError(settings.LOG_FILE, e) from e

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    stream_handler = logging.StreamHandler(sys.stdout)
    for handler in (file_handler, stream_handler):
        handler.setFormatter(formatter)

    root = logging.getLogger()
    for old in list(root.handlers):
        root.removeHandler(old)
    root.addHandler(file_handler)
    root.addHandler(stream_handler)
    root.setLevel(logging.INFO if settings.RELEASE else logging.DEBUG)
    return root
