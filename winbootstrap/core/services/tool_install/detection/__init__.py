"""
L3 Detection — ``__init__.py`` re-exports all detection functions.

These functions READ system state but never WRITE.
"""

from winbootstrap.core.services.tool_install.detection.presence import (  # noqa: F401
    Which,
    is_present,
    uv_python_installed,
)
from winbootstrap.core.services.tool_install.detection.tool_version import (  # noqa: F401
    VERSION_COMMANDS,
    get_python_version,
    get_tool_version,
)
