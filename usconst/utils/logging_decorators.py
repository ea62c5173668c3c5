"""
Decorator that sets up logging for the command line entry points.

License:
    https://github.com/quadratecode/zhlaw/blob/main/LICENSE.md
"""

import os
import sys
from functools import wraps
from typing import Any, Callable, Dict, Optional, TypeVar, cast

from usconst.logging_config import LogContext, LoggerManager

F = TypeVar("F", bound=Callable[..., Any])


def configure_logging(
    log_level: Optional[str] = None,
    structured: bool = False,
    context_fields: Optional[Dict[str, Any]] = None,
) -> Callable[[F], F]:
    """
    Configure logging before an entry point runs.

    The level is taken from the call's ``log_level`` keyword argument, then
    from the decorator argument, then from LOG_LEVEL (default INFO). Records
    logged during the call carry the script name, the process id and the
    function name as context fields.

    Example:
        @configure_logging()
        def main(args, log_level=None):
            logger.info("Building")
    """
    def decorator(func: F) -> F:
        @wraps(func)
        def wrapper(*args, **kwargs):
            level = kwargs.get("log_level") or log_level or os.getenv("LOG_LEVEL", "INFO")
            script = os.path.splitext(os.path.basename(sys.argv[0]))[0]

            LoggerManager.setup_logging(
                log_level=level,
                structured=structured or os.getenv("LOG_FORMAT") == "json",
                context_fields={"script": script, "pid": os.getpid(), **(context_fields or {})},
                force=True,
            )
            logger = LoggerManager.get_logger(func.__module__)

            with LogContext(operation=func.__name__):
                logger.debug(f"Starting {script}")
                try:
                    return func(*args, **kwargs)
                except KeyboardInterrupt:
                    logger.warning(f"{script} interrupted")
                    raise
                except Exception as e:
                    logger.error(f"{script} failed: {type(e).__name__}: {e}", exc_info=True)
                    raise

        return cast(F, wrapper)
    return decorator


__all__ = ["configure_logging"]
