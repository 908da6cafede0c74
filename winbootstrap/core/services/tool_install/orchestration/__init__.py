"""L5 Orchestration — the tiered installer."""

from winbootstrap.core.services.tool_install.orchestration.installer import (  # noqa: F401
    TieredInstaller,
)
