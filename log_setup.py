# log_setup.py
"""Logging for the directory CLI.

The console shows INFO (DEBUG with ``--verbose``). When a data directory is
given, every record including DEBUG also goes to
``{data_dir}/logs/{command}_{YYYYMMDD_HHMMSS}.log``, so the remote or
fallback decision behind each page can be traced after the run.
"""

from __future__ import annotations

import logging
import os
from datetime import datetime

from rich.logging import RichHandler

import config


def _console_handler(level: int, use_rich: bool) -> logging.Handler:
    if use_rich:
        return RichHandler(level=level, show_time=True, show_path=False, markup=False)
    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(config.LOG_FORMAT))
    return handler


def _file_handler(data_dir: str, command_name: str) -> tuple[logging.Handler, str]:
    log_dir = os.path.join(data_dir, config.LOG_DIR_NAME)
    os.makedirs(log_dir, exist_ok=True)
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_path = os.path.join(log_dir, f"{command_name}_{stamp}.log")

    handler = logging.FileHandler(log_path, encoding="utf-8")
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(config.LOG_FORMAT))
    return handler, log_path


def setup_logging(
    verbose: bool = False,
    data_dir: str | None = None,
    command_name: str = "run",
    use_rich: bool = False,
    quiet_console: bool = False,
) -> str | None:
    """Replace the root logger's handlers for one CLI command.

    Args:
        verbose: Console at DEBUG, and HTTP library loggers unmuted.
        data_dir: Directory under which the DEBUG log file is written.
        command_name: Prefix of the log file name.
        use_rich: Render the console through Rich.
        quiet_console: Only WARNING and above on the console, for commands
            that draw a progress spinner. Ignored when ``verbose``.

    Returns:
        The log file path, or None without ``data_dir``.
    """
    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    root.handlers.clear()

    if verbose:
        console_level = logging.DEBUG
    elif quiet_console:
        console_level = logging.WARNING
    else:
        console_level = logging.INFO
    root.addHandler(_console_handler(console_level, use_rich))

    for name in config.QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if verbose else logging.WARNING)

    if not data_dir:
        return None
    handler, log_path = _file_handler(data_dir, command_name)
    root.addHandler(handler)
    logging.getLogger(__name__).debug("Logging %s to %s", command_name, log_path)
    return log_path
