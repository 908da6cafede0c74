"""L4 Execution — install strategies and single attempts."""

from winbootstrap.core.services.tool_install.execution.strategy import (  # noqa: F401
    AttemptResult,
    InstallStrategy,
    attempt,
    build_strategies,
)
