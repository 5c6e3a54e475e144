from __future__ import annotations

import logging
from pathlib import Path
from typing import Tuple, Union

DEFAULT_LOG_PATH = "c:/firstboot/firstboot-agent.log"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
# Handlers we install carry this name so a second call can find them.
HANDLER_NAME = "firstboot-agent"


def parse_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).strip().upper())
    return value if isinstance(value, int) else logging.INFO


def _open_log_file(log_path: str) -> Tuple[logging.FileHandler, str]:
    """File handler at ``log_path``, or in the working directory if that fails."""

    try:
        Path(log_path).parent.mkdir(parents=True, exist_ok=True)
        return logging.FileHandler(log_path, encoding="utf-8"), log_path
    except OSError:
        fallback = str(Path.cwd() / Path(log_path).name)
        return logging.FileHandler(fallback, encoding="utf-8"), fallback


def configure_logging(
    log_path: str = DEFAULT_LOG_PATH,
    level: Union[int, str] = logging.INFO,
    also_console: bool = True,
) -> str:
    """Send the root logger to a file (and the console).

    The log file is the only record an unattended run leaves behind besides
    progress events. Returns the path actually written to.
    """

    root = logging.getLogger()
    root.setLevel(parse_level(level))

    for h in root.handlers:
        if h.get_name() == HANDLER_NAME and isinstance(h, logging.FileHandler):
            return h.baseFilename

    file_handler, actual = _open_log_file(log_path)
    handlers: list[logging.Handler] = [file_handler]
    if also_console:
        handlers.append(logging.StreamHandler())

    fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S%z")
    for h in handlers:
        h.set_name(HANDLER_NAME)
        h.setFormatter(fmt)
        root.addHandler(h)

    logging.getLogger(__name__).info("Logging to %s (requested %s)", actual, log_path)
    return actual
