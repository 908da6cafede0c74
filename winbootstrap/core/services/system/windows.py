"""
Host readings that need Windows APIs: elevation, build number, registry.

Read-only.  On non-Windows hosts every function returns a neutral
value instead of failing, so the package imports and tests anywhere.
"""

from __future__ import annotations

import logging
import os
import platform
import sys

logger = logging.getLogger(__name__)

# Registry locations (HKEY_LOCAL_MACHINE / HKEY_CURRENT_USER).
MACHINE_ENV_KEY = r"SYSTEM\CurrentControlSet\Control\Session Manager\Environment"
USER_ENV_KEY = "Environment"
USER_SHELL_FOLDERS_KEY = r"Software\Microsoft\Windows\CurrentVersion\Explorer\User Shell Folders"


def is_windows() -> bool:
    return sys.platform == "win32"


def is_admin() -> bool:
    """Whether the current process runs elevated (root elsewhere)."""
    if is_windows():
        import ctypes

        try:
            return bool(ctypes.windll.shell32.IsUserAnAdmin())
        except OSError as e:
            logger.debug("IsUserAnAdmin failed: %s", e)
            return False
    return hasattr(os, "geteuid") and os.geteuid() == 0


def windows_build() -> int | None:
    """OS build number (e.g. 22631), or None when not on Windows."""
    if is_windows():
        return sys.getwindowsversion().build
    # platform.version() on Windows-like hosts is "10.0.22631"
    parts = platform.version().split(".")
    if platform.system() == "Windows" and len(parts) >= 3 and parts[2].isdigit():
        return int(parts[2])
    return None


def os_tier_name(build: int | None) -> str:
    """Marketing name tier for a Windows build number."""
    if build is None:
        return "unknown"
    if build >= 22000:
        return "Windows 11"
    if build >= 10240:
        return "Windows 10"
    return "Windows (legacy)"


def read_registry_value(hive: str, key: str, name: str) -> str | None:
    """Read a string value from HKLM ("machine") or HKCU ("user").

    Returns None when not on Windows or when the value is absent.
    ``REG_EXPAND_SZ`` values are returned unexpanded.
    """
    if not is_windows():
        return None

    import winreg

    root = winreg.HKEY_LOCAL_MACHINE if hive == "machine" else winreg.HKEY_CURRENT_USER
    try:
        with winreg.OpenKey(root, key) as handle:
            value, _kind = winreg.QueryValueEx(handle, name)
    except OSError:
        return None
    return str(value) if value is not None else None
