"""
PATH refresh — re-read machine and user PATH after an installer ran.

Installers write PATH into the registry; the running process never
sees that change on its own.  ``refresh_path`` rebuilds
``os.environ["PATH"]`` from both scopes so ``shutil.which`` finds
freshly installed binaries.
"""

from __future__ import annotations

import logging
import os
from collections.abc import MutableMapping

from winbootstrap.core.services.system.windows import (
    MACHINE_ENV_KEY,
    USER_ENV_KEY,
    is_windows,
    read_registry_value,
)

logger = logging.getLogger(__name__)


def merge_path_scopes(*scopes: str | None, sep: str = os.pathsep) -> str:
    """Join PATH strings in order, dropping empties and duplicates.

    Duplicates are compared case-insensitively and without trailing
    separators, the way Windows resolves directories.
    """
    seen: set[str] = set()
    entries: list[str] = []
    for scope in scopes:
        if not scope:
            continue
        for raw in scope.split(sep):
            entry = os.path.expandvars(raw.strip())
            if not entry:
                continue
            key = entry.rstrip("\\/").lower()
            if key in seen:
                continue
            seen.add(key)
            entries.append(entry)
    return sep.join(entries)


def refresh_path(environ: MutableMapping[str, str] | None = None) -> str:
    """Rebuild PATH from the machine and user scopes.

    Entries only present in the current process PATH are kept at the
    end.  Outside Windows the PATH is returned unchanged.
    """
    env = os.environ if environ is None else environ
    current = env.get("PATH", "")
    if not is_windows():
        return current

    machine = read_registry_value("machine", MACHINE_ENV_KEY, "Path")
    user = read_registry_value("user", USER_ENV_KEY, "Path")
    merged = merge_path_scopes(machine, user, current, sep=os.pathsep)
    if merged != current:
        logger.debug("PATH refreshed from machine and user scope")
    env["PATH"] = merged
    return merged
