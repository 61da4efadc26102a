"""Host-side logging setup for the draft assistant.

The engines log through module loggers under ``src.*``. The value model
reports dropped pool rows and discarded stale recomputes, and the
availability model reports missing-ADP fallbacks. None of them install
handlers; a host (CLI, service, notebook) calls
:func:`setup_logging` once to route those records to a rotating file and
the console.
"""

import logging
import logging.handlers
from pathlib import Path
from typing import Optional, Union

LOG_FILE_NAME = "draft_assistant.log"


def setup_logging(
    log_level: str = "INFO", log_dir: Optional[Union[str, Path]] = None
) -> None:
    """Install the draft assistant's file and console handlers.

    Repeat calls are no-ops, so a host that already configured logging keeps
    its own handlers.

    Args:
        log_level: Root and console level name; unknown names fall back to
            INFO. The file handler always records DEBUG.
        log_dir: Directory for ``draft_assistant.log``; created if missing.
            Defaults to ``logs/`` beside the ``src`` package.
    """
    root_logger = logging.getLogger()
    if root_logger.handlers:
        return  # Already configured

    log_dir = Path(log_dir) if log_dir else Path(__file__).parent.parent / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    level = getattr(logging, log_level.upper(), logging.INFO)
    root_logger.setLevel(level)

    # File handler with rotation (5MB max, keep 3 backups)
    file_handler = logging.handlers.RotatingFileHandler(
        log_file, maxBytes=5 * 1024 * 1024, backupCount=3
    )
    file_handler.setLevel(logging.DEBUG)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    file_handler.setFormatter(formatter)
    console_handler.setFormatter(formatter)

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    logging.getLogger(__name__).info("Logging initialized (level=%s)", log_level)
