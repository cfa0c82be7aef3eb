"""dragboard - Kanban boards with drag-and-drop card ordering.

Cards live in ordered lists; dragging a card within a list or across lists
recomputes the affected positions and writes them back to the board REST
API, then reloads the board.
"""

import logging
import os
from logging.handlers import RotatingFileHandler

__version__ = "0.1.0"

_FILE_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s:%(lineno)d] %(message)s"
_LOG_BYTES = 5 * 1024 * 1024
_LOG_BACKUPS = 3


def _setup_logging() -> None:
    """Send DEBUG and up to a rotating log file, INFO and up to the console.

    Safe to call more than once: handlers are only attached on the first call
    in a process.
    """
    from dragboard.config import get_settings

    root = logging.getLogger()
    if any(isinstance(h, RotatingFileHandler) for h in root.handlers):
        return

    log_dir = get_settings().app.log_dir
    log_dir.mkdir(parents=True, exist_ok=True)
    # One file per worker process; NiceGUI reload spawns a fresh one.
    log_path = log_dir / f"dragboard.{os.getpid()}.log"

    to_file = RotatingFileHandler(
        log_path, maxBytes=_LOG_BYTES, backupCount=_LOG_BACKUPS, encoding="utf-8"
    )
    to_file.setLevel(logging.DEBUG)
    to_file.setFormatter(logging.Formatter(_FILE_FORMAT))

    to_console = logging.StreamHandler()
    to_console.setLevel(logging.INFO)
    to_console.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))

    root.setLevel(logging.DEBUG)
    root.addHandler(to_file)
    root.addHandler(to_console)
    logging.getLogger(__name__).info("Writing log to %s", log_path.resolve())


def main() -> None:
    """Entry point for the dragboard web application."""
    from nicegui import ui

    from dragboard.config import get_settings

    _setup_logging()

    import dragboard.pages  # noqa: F401 - registers routes

    settings = get_settings()
    if settings.dev.api_mock:
        print("Board API: in-memory mock (DEV__API_MOCK=true)")
    else:
        print(f"Board API: {settings.api.base_url}")
    print(f"dragboard v{__version__} listening on http://0.0.0.0:{settings.app.port}")

    ui.run(
        host="0.0.0.0",  # nosec B104
        port=settings.app.port,
        reload=os.environ.get("DRAGBOARD_RELOAD", "1") != "0",
        storage_secret=settings.app.storage_secret.get_secret_value(),
        title="dragboard",
    )


if __name__ in {"__main__", "__mp_main__"}:
    main()
