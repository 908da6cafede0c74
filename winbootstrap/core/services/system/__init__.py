"""
Host access — read-only probes of the Windows machine.

These functions READ system state (registry, elevation, PATH)
but never install anything.  ``refresh_path`` is the one writer and
it only touches this process's environment.
"""

from winbootstrap.core.services.system.documents import resolve_documents_root  # noqa: F401
from winbootstrap.core.services.system.path_env import (  # noqa: F401
    merge_path_scopes,
    refresh_path,
)
from winbootstrap.core.services.system.windows import (  # noqa: F401
    is_admin,
    is_windows,
    os_tier_name,
    windows_build,
)
