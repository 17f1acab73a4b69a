import json
import logging
import sys
from pathlib import Path
from typing import Any, cast

from loguru import logger
from loguru._defaults import LOGURU_FORMAT


class InterceptHandler(logging.Handler):
    """A custom logging handler to intercept standard logging messages.

    This handler redirects standard logging messages to Loguru.
    """

    def emit(self, record: logging.LogRecord) -> None:
        """Emits a log record to the Loguru logger.

        Args:
            record: The log record to emit.
        """
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = str(record.levelno)

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = cast(Any, frame.f_back)
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


SENSITIVE_KEYS = frozenset({"api_key", "api_secret", "secret", "password", "token"})
REDACTED = "***REDACTED***"


def _sensitive_data_filter(record: dict[str, Any]) -> bool:
    """Redacts sensitive values bound to a record before any sink sees them.

    Values in the record's `extra` whose key names a credential are replaced
    with a fixed marker. Records are never dropped.
    """
    for key, value in record["extra"].items():
        if key.lower() in SENSITIVE_KEYS and value is not None:
            record["extra"][key] = REDACTED
    return True


def _json_formatter(record: dict[str, Any]) -> str:
    """Structures a log record as a single JSON line.

    Loguru treats the returned value as a format template, so the serialized
    object is stashed in `extra` and referenced from the template.
    """
    log_object = {
        "timestamp": record["time"].isoformat(),
        "level": record["level"].name,
        "message": record["message"],
        "source": {
            "name": record["name"],
            "file": f"{record['file'].name}:{record['line']}",
            "function": record["function"],
        },
        "extra": {k: v for k, v in record["extra"].items() if k != "serialized"},
    }
    record["extra"]["serialized"] = json.dumps(log_object, default=str)
    return "{extra[serialized]}\n"


def setup_logging(
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    log_dir: Path | None = None,
) -> None:
    """Configures the application-wide Loguru logger.

    This function removes any default handlers, sets up a new console sink
    with a readable format, and an optional rotating file sink with
    structured JSON output. Both sinks redact credential-like values bound to
    a record. It also intercepts standard library logging.

    Args:
        console_level: The minimum log level for console output.
        file_level: The minimum log level for file output.
        log_dir: Directory to store log files. If None, file logging is disabled.
    """
    logger.remove()
    logger.add(
        sys.stderr,
        level=console_level.upper(),
        format=LOGURU_FORMAT,
        colorize=True,
        filter=_sensitive_data_filter,
    )

    if log_dir:
        log_dir.mkdir(parents=True, exist_ok=True)
        logger.add(
            str(log_dir / "coindetails_{time:YYYY-MM-DD}.log"),
            level=file_level.upper(),
            format=_json_formatter,
            rotation="00:00",  # New file at midnight
            retention="7 days",
            compression="zip",
            encoding="utf-8",
            backtrace=False,
            diagnose=False,
            filter=_sensitive_data_filter,
        )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

    logger.info("Logging configured successfully.")
