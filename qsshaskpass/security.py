"""
Process hardening applied before any secret is held in memory.
"""

from __future__ import annotations
import logging
import sys

logger = logging.getLogger(__name__)

IS_WINDOWS = sys.platform == 'win32'

if not IS_WINDOWS:
    import resource


def disable_core_dumps() -> bool:
    """
    Set the core file size limit to zero for this process.

    A core file written while a password dialog is open would contain the
    password. Best effort: returns False where the limit can't be set.
    """
    if IS_WINDOWS:
        logger.debug("Core dump limits not supported on Windows")
        return False

    try:
        resource.setrlimit(resource.RLIMIT_CORE, (0, 0))
    except (OSError, ValueError) as e:
        logger.debug(f"Failed to disable core dumps: {e}")
        return False

    return True
