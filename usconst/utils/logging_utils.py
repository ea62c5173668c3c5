"""
Module logger lookup.

License:
    https://github.com/quadratecode/zhlaw/blob/main/LICENSE.md
"""

import inspect
import logging
from typing import Optional

from usconst.logging_config import LoggerManager


def get_module_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Return the logger of the calling module.

    Usage at module level:
        logger = get_module_logger(__name__)

    Without ``name`` the caller's ``__name__`` is used.
    """
    if name is None:
        caller = inspect.currentframe().f_back
        name = caller.f_globals.get("__name__", "usconst") if caller else "usconst"
    return LoggerManager.get_logger(name)
