"""Logger configuration using loguru.

Console output goes to stderr by default: stdout is reserved for the GitHub
Actions workflow commands (``::notice::``/``::error::``) emitted by the
reporter, and the runner would otherwise interpret stray log lines.

File paths in log records are reported relative to the package root, e.g.::

    linked_issue_check/detector.py:57 in detect - Found 2 issue reference(s) in title/body
"""

import os
import sys
from functools import wraps
from inspect import signature
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable, Optional, TypeVar

from loguru import logger

if TYPE_CHECKING:
    from loguru import Logger

from .config import settings

# ``.../site-packages`` when installed, ``.../src`` when running from the repository.
_PACKAGE_DIR = Path(__file__).resolve().parent
_PATH_TRIM_BASES = (_PACKAGE_DIR.parent.resolve(),)

VALID_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def format_path_for_log(file_path: str) -> str:
    """Return a concise, project-relative path for logging purposes.

    Args:
        file_path: Original absolute file path reported by loguru.

    Returns:
        A trimmed path relative to :data:`_PATH_TRIM_BASES` when possible.  If
        the path is outside our project roots the original path is returned.
    """

    path = Path(file_path)
    try:
        resolved = path.resolve()
    except OSError:
        resolved = path

    for base in _PATH_TRIM_BASES:
        try:
            trimmed = resolved.relative_to(base)
        except ValueError:
            continue
        else:
            return trimmed.as_posix()

    return str(resolved)


def _patch_record(record: Any) -> None:
    """Enrich log records with shortened file paths."""

    record["extra"]["short_path"] = format_path_for_log(record["file"].path)


def setup_logger(
    log_level: Optional[str] = None,
    log_file: Optional[str] = None,
    stream: Any = sys.stderr,
) -> None:
    """
    Setup loguru logger with file and line information.

    Args:
        log_level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional log file path
        stream: Stream to write console logs to (default: sys.stderr)

    Raises:
        ValueError: If an invalid log level is provided
    """
    logger.remove()
    logger.configure(patcher=_patch_record)

    level = log_level or settings.log_level

    if level.upper() not in VALID_LEVELS:
        raise ValueError(f"Invalid log level '{level}'. Must be one of: {', '.join(VALID_LEVELS)}")

    level = level.upper()

    format_string = "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | " "<level>{level: <8}</level> | " "{extra[short_path]}:{line} in <cyan>{function}</cyan> - " "<level>{message}</level>"

    # Use non-enqueue mode during pytest to avoid background queue growth
    use_enqueue = False if os.environ.get("PYTEST_CURRENT_TEST") else True

    logger.add(
        stream,
        format=format_string,
        level=level,
        colorize=True,
        enqueue=use_enqueue,
    )

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_format = "{time:YYYY-MM-DD HH:mm:ss.SSS} | " "{level: <8} | " "{extra[short_path]}:{line} in {function} - " "{message}"

        logger.add(
            log_file,
            format=file_format,
            level=level,
            enqueue=use_enqueue,
        )


def get_logger(name: str) -> "Logger":
    """
    Get a logger instance with the specified name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    return logger.bind(name=name)


def _format_args(func: Any, args: Any, kwargs: Any, max_len: int = 120) -> str:
    """Build a compact call signature string for logging."""
    bound = signature(func).bind_partial(*args, **kwargs)
    bound.apply_defaults()
    s = ", ".join(f"{k}={bound.arguments[k]!r}" for k in bound.arguments)
    if len(s) > max_len:
        s = s[:max_len] + "…"
    return s


F = TypeVar("F", bound=Callable[..., Any])


def log_calls(func: F) -> F:
    """Decorator: log the fully qualified name, arguments and result of every call."""
    qualname = getattr(func, "__qualname__", getattr(func, "__name__", "<?>"))
    module = getattr(func, "__module__", "<module>")
    where = f"{module}.{qualname}"

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        logger.opt(depth=1).debug(f"CALL {where}({_format_args(func, args, kwargs)})")
        result = func(*args, **kwargs)
        logger.opt(depth=1).debug(f"RET  {where} -> {result!r}")
        return result

    return wrapper  # type: ignore


# Initialize logger on module import
setup_logger()
