"""
Documents root resolution — where the configuration repository lives.

Resolution order:
    1. ``%OneDrive%\\Documents`` when OneDrive redirects Documents
    2. The "Personal" user shell folder from the registry
    3. ``~/Documents``
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Mapping
from pathlib import Path

from winbootstrap.core.services.system.windows import (
    USER_SHELL_FOLDERS_KEY,
    read_registry_value,
)

logger = logging.getLogger(__name__)


def _registry_personal_folder() -> str | None:
    return read_registry_value("user", USER_SHELL_FOLDERS_KEY, "Personal")


def resolve_documents_root(
    environ: Mapping[str, str] | None = None,
    shell_folder: Callable[[], str | None] = _registry_personal_folder,
    home: Path | None = None,
) -> Path:
    """Locate the user's Documents folder, honouring cloud redirection."""
    env = os.environ if environ is None else environ

    onedrive = env.get("OneDrive") or env.get("OneDriveConsumer")
    if onedrive:
        candidate = Path(onedrive) / "Documents"
        if candidate.is_dir():
            logger.debug("Documents redirected to OneDrive: %s", candidate)
            return candidate

    personal = shell_folder()
    if personal:
        expanded = Path(os.path.expandvars(personal))
        if expanded.is_dir():
            return expanded

    return (home or Path.home()) / "Documents"
