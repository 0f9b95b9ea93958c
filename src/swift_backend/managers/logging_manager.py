"""
Logging manager.

Central place for configuring the application's console logging and handing out
component loggers. Every module obtains its logger through `get_logger()`; the
optional `prefix` tags each record with the component that emitted it:

```python
from swift_backend.managers.logging_manager import get_logger

logger = get_logger(prefix="[SEED]")
logger.info("Inserted %d users", 10)
# 2025-01-01 12:00:00,000 INFO swift_backend [SEED] Inserted 10 users
```
"""

import logging
import sys
from typing import Any, MutableMapping, Optional, Tuple

ROOT_LOGGER_NAME = "swift_backend"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


class PrefixedLoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that prepends a fixed component prefix to every message."""

    def __init__(self, logger: logging.Logger, prefix: str):
        super().__init__(logger, {"prefix": prefix})
        self.prefix = prefix

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> Tuple[Any, MutableMapping[str, Any]]:
        return f"{self.prefix} {msg}", kwargs


def setup_logging(level: str = "INFO") -> None:
    """
    Configure application-wide console logging.

    Safe to call more than once: the handler is only attached the first time,
    later calls just update the level.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    """
    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(level.upper())

    if not any(getattr(handler, "_swift_backend", False) for handler in root.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._swift_backend = True
        root.addHandler(handler)


def get_logger(name: Optional[str] = None, prefix: str = ""):
    """
    Get a component logger.

    Args:
        name: Logger name; defaults to the application root logger.
        prefix: Optional tag such as ``"[DATABASE]"`` prepended to every message.

    Returns:
        A `logging.Logger`, or a `PrefixedLoggerAdapter` when a prefix is given.
    """
    logger = logging.getLogger(name or ROOT_LOGGER_NAME)
    if prefix:
        return PrefixedLoggerAdapter(logger, prefix)
    return logger
