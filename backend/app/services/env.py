import logging
import os
from typing import Callable, Optional, TypeVar

logger = logging.getLogger(__name__)

N = TypeVar("N", int, float)


def number_from_env(name: str, default: N, cast: Callable[[str], N] = int, minimum: Optional[N] = None) -> N:
    """Read a numeric setting, logging and falling back to default when it is malformed or below minimum."""
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = cast(raw)
    except (TypeError, ValueError):
        logger.warning("Invalid %s value %r; falling back to default %s", name, raw, default)
        return default
    if minimum is not None and value < minimum:
        logger.warning("%s must be at least %s; falling back to default %s", name, minimum, default)
        return default
    return value
