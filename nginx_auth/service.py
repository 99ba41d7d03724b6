"""Web server reload through the service manager."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from nginx_auth.exceptions import PrivilegedCommandError

if TYPE_CHECKING:
    from nginx_auth.utils.privileged import PrivilegedRunner

logger = logging.getLogger(__name__)

SYSTEMCTL = "systemctl"


def reload_service(name: str, runner: PrivilegedRunner) -> bool:
    """Ask systemd to reload *name*.

    A failed reload is not an error for the caller: it is logged and
    reported through the return value.

    Returns:
        True if the reload succeeded.
    """
    try:
        runner.run([SYSTEMCTL, "reload", name])
    except PrivilegedCommandError as e:
        logger.debug("Reload of %s failed: %s", name, e)
        return False
    return True
