"""Detection of administrator / root privileges."""

import ctypes
import os
import sys
from abc import ABC, abstractmethod


class PrivilegeCheck(ABC):
    """Abstract privilege check for dependency injection."""

    @abstractmethod
    def is_elevated(self) -> bool:
        """Return True if the process runs with administrator or root rights."""
        ...


class RealPrivilegeCheck(PrivilegeCheck):
    """Asks the operating system. A check that fails counts as not elevated."""

    def is_elevated(self) -> bool:
        if sys.platform == "win32":
            try:
                return bool(ctypes.windll.shell32.IsUserAnAdmin())
            except (AttributeError, OSError):
                return False
        geteuid = getattr(os, "geteuid", None)
        if geteuid is None:
            return False
        return geteuid() == 0
