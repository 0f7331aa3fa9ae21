"""Logger access for adocparse modules.

Every logger lives under the ``adocparse`` namespace so applications can
tune parser diagnostics (unterminated blocks, loader reads, phase timings)
with a single ``logging.getLogger("adocparse")`` call. The library never
installs handlers.

Example:
    >>> from adocparse.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Unterminated delimited block at line %d", 12)
"""

from __future__ import annotations

import logging

ROOT_LOGGER = "adocparse"


def get_logger(name: str) -> logging.Logger:
    """Return the namespaced logger for ``name``.

    Module names inside the package are used as-is; any other name is
    nested under ``adocparse.``.

    Example:
        >>> get_logger("adocparse.parser").name
        'adocparse.parser'
        >>> get_logger("renderer").name
        'adocparse.renderer'
    """
    if name != ROOT_LOGGER and not name.startswith(f"{ROOT_LOGGER}."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)
