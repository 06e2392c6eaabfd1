"""Administrative privilege check."""

import os
from typing import Callable, Optional

from bsd_hardener.exceptions import PrivilegeError


def check_privilege(geteuid: Optional[Callable[[], int]] = None) -> None:
    """Refuse to continue unless running as root.

    Raises:
        PrivilegeError: If the effective uid is not 0
    """
    euid = (geteuid or os.geteuid)()
    if euid != 0:
        raise PrivilegeError(f"This tool must be run as root (effective uid {euid})")
