"""Bridge to the live process environment.

``os.environ`` is process-wide shared state. Nothing here is synchronized:
callers that write it while another thread reads it (including a concurrent
``ConfigStore.load``) must serialize those calls themselves.
"""

import logging
import os

from envie.exceptions import EnvironmentWriteError

logger = logging.getLogger(__name__)


def snapshot_environment() -> dict[str, str]:
    """Copy of the current process environment."""
    return dict(os.environ)


def validate_name(key: str) -> str | None:
    """Return an error message if the OS would refuse key, else None."""
    if not key:
        return "Environment variable name must not be empty."
    if "=" in key or "\x00" in key:
        return f"Environment variable name {key!r} must not contain '=' or NUL."
    return None


def set_system_environment(key: str, value: str) -> None:
    """Set key in this process's environment and in children it spawns later.

    Does not touch any .env file or loaded ConfigStore. Names that a .env
    file could not hold (leading spaces, a leading ``#``) are still accepted.
    """
    error = validate_name(key)
    if error:
        raise EnvironmentWriteError(error)
    try:
        os.environ[key] = value
    except (OSError, ValueError) as e:
        raise EnvironmentWriteError(f"Failed to set environment variable {key}: {e}") from e
    logger.debug("Set process environment variable %s", key)
