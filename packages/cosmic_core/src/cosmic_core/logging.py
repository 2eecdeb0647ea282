import logging
import sys
import time
from contextlib import contextmanager
from contextvars import ContextVar
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Iterable, Iterator, Optional, Union

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(request_tag)s%(name)s: %(message)s"

# Chatty third-party loggers held at WARNING unless the app runs at DEBUG
NOISY_LOGGERS = ("sqlalchemy.engine", "uvicorn.access", "aiosqlite")

# Id of the HTTP request being served, set by the request id middleware
current_request_id: ContextVar[Optional[str]] = ContextVar(
    "current_request_id", default=None
)


class RequestFormatter(logging.Formatter):
    """
    Prefixes records with the current request id and stamps them in UTC.

    >>> formatter = RequestFormatter("%(request_tag)s%(message)s")
    """

    converter = time.gmtime

    def formatTime(self, record, datefmt=None):  # noqa: N802
        stamp = self.converter(record.created)
        if datefmt:
            return time.strftime(datefmt, stamp)
        return "%s.%03dZ" % (time.strftime("%Y-%m-%dT%H:%M:%S", stamp), record.msecs)

    def format(self, record: logging.LogRecord) -> str:
        request_id = current_request_id.get()
        record.request_tag = f"[{request_id}] " if request_id else ""
        return super().format(record)


def _file_handler(
    log_file: Union[str, Path], max_bytes: int, backup_count: int
) -> Optional[logging.Handler]:
    path = Path(log_file).resolve()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        return RotatingFileHandler(
            path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
        )
    except OSError as e:
        sys.stderr.write(f"Cannot write log file {path}: {e}\n")
        return None


def setup_logging(
    level: Union[int, str] = logging.INFO,
    log_file: Optional[Union[str, Path]] = None,
    *,
    namespace: Optional[str] = None,
    max_bytes: int = 10_485_760,
    backup_count: int = 5,
    quiet: Iterable[str] = NOISY_LOGGERS,
) -> logging.Logger:
    """
    Configure console logging, plus a rotating file when ``log_file`` is set.

    Args:
        level: Level name or number (``"INFO"``, ``logging.DEBUG``).
        log_file: Optional path of the rotating log file.
        namespace: Configure only this logger (``"cosmic_cms"``) instead of
            the root logger. It then stops propagating to the root.
        quiet: Loggers capped at WARNING when ``level`` is above DEBUG.

    Returns:
        The configured logger.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    target = logging.getLogger(namespace)
    # Reconfiguring replaces the previous handlers
    for handler in list(target.handlers):
        target.removeHandler(handler)
        handler.close()
    target.setLevel(level)

    formatter = RequestFormatter(LOG_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        file_handler = _file_handler(log_file, max_bytes, backup_count)
        if file_handler is not None:
            handlers.append(file_handler)

    for handler in handlers:
        handler.setFormatter(formatter)
        target.addHandler(handler)

    if namespace:
        target.propagate = False

    if level > logging.DEBUG:
        for name in quiet:
            logging.getLogger(name).setLevel(logging.WARNING)

    return target


@contextmanager
def request_context(request_id: str) -> Iterator[str]:
    """
    Tag every record logged inside the block with ``request_id``.

    >>> with request_context("req-123"):
    ...     logging.getLogger("cosmic_cms").info("handled")
    """
    token = current_request_id.set(request_id)
    try:
        yield request_id
    finally:
        current_request_id.reset(token)
