from __future__ import annotations

import os
import sys
import time
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from loguru import Logger

from loguru import logger

DEFAULT_LOG_DIR = Path(
    os.environ.get(
        "DEVTOOLS_LOG_DIR",
        Path.home() / ".local" / "state" / "devtools" / "logs",
    )
)

SESSION_ID = f"session-{uuid.uuid4().hex[:8]}"


def _should_log_keypress(record) -> bool:
    """Filter key press logs - only show in TRACE mode."""
    message = record["message"].lower()
    tags = record["extra"].get("tags", [])

    if "keys" in tags and "key" in message:
        return record["level"].no <= logger.level("TRACE").no

    return True


def _should_log_render(record) -> bool:
    """Filter repaint logs - one per key press is noise."""
    message = record["message"].lower()

    if "repaint" in message:
        return record["level"].no <= logger.level("TRACE").no

    return True


def _combined_filter(record) -> bool:
    """Combined filter for all log suppression rules."""
    return _should_log_keypress(record) and _should_log_render(record)


def setup_logging(
    *,
    debug: bool = False,
    trace: bool = False,
    log_dir: Path | None = None,
    console: bool = True,
) -> Logger:
    """
    Setup logging with separate sinks for different log levels.

    Log Files:
    - operations.log: INFO+ events (7 day retention)
    - debug.log: DEBUG+ events when --debug or --trace is enabled (3 day retention)
    - structured.jsonl: Structured JSON logs for analysis (7 day retention)

    The stderr sink is skipped when ``console`` is False. The full-screen menu
    owns the terminal while it runs, so anything written to stderr would be
    painted over the menu.

    Args:
        debug: Enable DEBUG level logging
        trace: Enable TRACE level logging (very verbose, includes key presses)
        log_dir: Custom log directory (defaults to ~/.local/state/devtools/logs)
        console: Add a colourised stderr sink
    """
    logger.remove()
    logger.configure(extra={"session_id": SESSION_ID, "tags": [], "source": "APP"})

    if trace:
        level = "TRACE"
    elif debug:
        level = "DEBUG"
    else:
        level = "INFO"

    if console:
        logger.add(
            sys.stderr,
            level=level if (debug or trace) else "WARNING",
            backtrace=False,
            diagnose=False,
            filter=_combined_filter,
            colorize=True,
            format=(
                "<green>{time:HH:mm:ss}</green> | "
                "<level>{level: <8}</level> | "
                "<cyan>{extra[source]: <12}</cyan> | "
                "{message}"
            ),
        )

    log_dir = log_dir or DEFAULT_LOG_DIR
    log_dir.mkdir(parents=True, exist_ok=True)

    logger.add(
        log_dir / "operations.log",
        level="INFO",
        rotation="5 MB",
        retention="7 days",
        compression="zip",
        enqueue=True,
        backtrace=False,
        diagnose=False,
        format=(
            "{time:YYYY-MM-DD HH:mm:ss.SSS} | "
            "{level: <8} | "
            "{extra[source]: <12} | "
            "{extra[session_id]: <16} | "
            "{message}"
        ),
    )

    if debug or trace:
        logger.add(
            log_dir / "debug.log",
            level=level,
            rotation="10 MB",
            retention="3 days",
            compression="zip",
            enqueue=True,
            backtrace=True,
            diagnose=True,
            filter=None if trace else _combined_filter,
            format=(
                "{time:YYYY-MM-DD HH:mm:ss.SSS} | "
                "{level: <8} | "
                "{extra[source]: <12} | "
                "{extra[session_id]: <16} | "
                "{extra[tags]} | "
                "{message}"
            ),
        )

    logger.add(
        log_dir / "structured.jsonl",
        level="INFO",
        rotation="10 MB",
        retention="7 days",
        compression="zip",
        enqueue=True,
        serialize=True,
        format="{message}",
    )

    return logger


@contextmanager
def operation_context(operation: str, **details):
    """
    Context manager for tracking operations with automatic timing.

    Logs start, completion and failure with the elapsed duration. Exceptions
    are logged and re-raised.

    Example:
        with operation_context("install", target="awscli") as log:
            log.debug("Running brew")
    """
    operation_id = f"{operation}-{uuid.uuid4().hex[:8]}"

    with logger.contextualize(operation_id=operation_id, operation=operation, **details):
        start_time = time.time()
        log = logger.bind(source=operation, tags=[operation])

        log.info(f"{operation.capitalize()} started")

        try:
            yield log
            duration = time.time() - start_time
            log.success(
                f"{operation.capitalize()} completed", duration_seconds=round(duration, 2)
            )
        except Exception as e:
            duration = time.time() - start_time
            log.error(
                f"{operation.capitalize()} failed",
                error=str(e),
                error_type=type(e).__name__,
                duration_seconds=round(duration, 2),
            )
            raise


class LoggerFactory:
    """
    Factory for creating domain-specific loggers with automatic context.

    Each factory method returns a logger pre-configured with appropriate
    source and tags for the domain.
    """

    @staticmethod
    def for_menu() -> Logger:
        """Logger for menu navigation."""
        return logger.bind(source="menu", tags=["ui", "menu"])

    @staticmethod
    def for_terminal() -> Logger:
        """Logger for raw terminal mode and key decoding."""
        return logger.bind(source="terminal", tags=["ui", "keys"])

    @staticmethod
    def for_tools(tool_id: str | None = None) -> Logger:
        """Logger for tool actions and requirement checks."""
        return logger.bind(source=tool_id or "tools", tags=["tools"])

    @staticmethod
    def for_system() -> Logger:
        """Logger for system operations (startup, shutdown, config)."""
        return logger.bind(source="system", tags=["system"])
