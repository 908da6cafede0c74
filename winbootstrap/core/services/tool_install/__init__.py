"""
Tool installation service — package re-exports.

Layers, inner to outer (data → detection → execution → orchestration):

    data           recipes: which tools, which install methods, in what order
    detection      read-only presence and version probes
    execution      strategies built from recipes, one attempt at a time
    orchestration  the tiered installer tying it together
"""

from winbootstrap.core.services.tool_install.data.recipes import (  # noqa: F401
    INSTALL_ORDER,
    TOOL_RECIPES,
)
from winbootstrap.core.services.tool_install.orchestration.installer import (  # noqa: F401
    TieredInstaller,
)
