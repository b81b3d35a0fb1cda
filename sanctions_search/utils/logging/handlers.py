import logging
from logging.handlers import RotatingFileHandler, TimedRotatingFileHandler
from pathlib import Path

LOG_FORMAT = '%(asctime)s [%(levelname)s] %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S %z'

# Daily files are kept for 30 days, size-rotated files 10 deep
TIMED_BACKUP_COUNT = 30
SIZE_BACKUP_COUNT = 10


def attach_rotating_handlers(target: logging.Logger, logs_dir: Path, stem: str,
                             when: str, max_size_mb: int) -> None:
    """
    Replace the handlers of target with a timed and a size-based rotating file.

    Files are written to <logs_dir>/<stem>.log and <logs_dir>/<stem>_size.log.
    """
    logs_dir.mkdir(parents=True, exist_ok=True)
    if target.handlers:
        target.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    timed_handler = TimedRotatingFileHandler(
        filename=logs_dir / f"{stem}.log",
        when=when,
        backupCount=TIMED_BACKUP_COUNT
    )
    size_handler = RotatingFileHandler(
        filename=logs_dir / f"{stem}_size.log",
        maxBytes=max_size_mb * 1024 * 1024,
        backupCount=SIZE_BACKUP_COUNT
    )
    for handler in (timed_handler, size_handler):
        handler.setFormatter(formatter)
        target.addHandler(handler)

    # Entries are JSON lines; keep them out of the console output
    target.propagate = False
