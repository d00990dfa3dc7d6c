import logging
import os
from logging.handlers import RotatingFileHandler
from typing import List

from rich.console import Console
from rich.logging import RichHandler

from .config import Config

LOG_FILE_NAME = "snapshell.log"

_installed_handlers: List[logging.Handler] = []


def setup_logging(config: Config) -> None:
    """
    Set up logging for the application.

    Console logs go to stderr through Rich so stdout only ever carries the
    generated command. A rotating file log is kept under the log directory
    when it can be created. Calling this again replaces the handlers
    installed by the previous call.
    """
    root_logger = logging.getLogger()
    for handler in _installed_handlers:
        root_logger.removeHandler(handler)
        handler.close()
    _installed_handlers.clear()

    root_logger.setLevel(logging.INFO)

    # Console handler (with Rich)
    console = Console(stderr=True)
    rich_handler = RichHandler(
        console=console,
        show_time=True,
        show_path=False,
        rich_tracebacks=True
    )
    rich_handler.setLevel(logging.INFO if config.verbose else logging.WARNING)
    _installed_handlers.append(rich_handler)

    # File handler (Rotating)
    try:
        os.makedirs(config.log_dir, exist_ok=True)
        file_handler = RotatingFileHandler(
            os.path.join(config.log_dir, LOG_FILE_NAME),
            maxBytes=1024 * 1024, backupCount=3, encoding="utf-8"  # 1 MB per file, 3 backups
        )
    except OSError as e:
        file_handler = None
        file_error = e
    else:
        file_handler.setLevel(logging.INFO)
        file_handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
        _installed_handlers.append(file_handler)

    for handler in _installed_handlers:
        root_logger.addHandler(handler)

    logging.getLogger("urllib3").setLevel(logging.WARNING)

    logger = logging.getLogger(__name__)
    if file_handler is None:
        logger.warning(f"File logging disabled: {file_error}")
    else:
        logger.info(f"Logger initialized. Logs will be stored in {config.log_dir}")
