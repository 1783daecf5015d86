# stampede/logging_config.py
import logging
import sys

from rich.console import Console
from rich.logging import RichHandler

# Shared by log output and the progress bar so neither tears the other's lines
console = Console(stderr=True)

FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)-20s | %(message)s"


def setup_logging(level: str = "INFO", log_file: str | None = None) -> logging.Logger:
    """
    Route all log records to stderr through rich; stdout is reserved for
    throughput reports. With log_file, records are also appended there in
    plain text.
    """
    root = logging.getLogger()
    root.setLevel(level.upper())
    for handler in list(root.handlers):
        root.removeHandler(handler)

    root.addHandler(
        RichHandler(console=console, show_path=False, log_time_format="%H:%M:%S")
    )

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        root.addHandler(file_handler)
        root.info(f"Logging to file: {log_file}")

    def log_uncaught(exc_type, exc_value, exc_traceback):
        if issubclass(exc_type, KeyboardInterrupt):
            sys.__excepthook__(exc_type, exc_value, exc_traceback)
            return
        root.critical("Uncaught exception", exc_info=(exc_type, exc_value, exc_traceback))

    sys.excepthook = log_uncaught

    return root
