"""
Tool installation service — package re-exports.

Each symbol lives in its single-responsibility module inside the
appropriate layer (data → detection → resolver → execution →
orchestration)::

    from toolshed.core.services.tool_install import build_registry
"""

# ── L0: Data ──
from toolshed.core.services.tool_install.data.catalog import TOOL_CATALOG  # noqa: F401

# ── L2: Resolver ──
from toolshed.core.services.tool_install.resolver.asset_selection import (  # noqa: F401
    pattern_for_platform,
    select_asset,
)
from toolshed.core.services.tool_install.resolver.release_resolution import (  # noqa: F401
    resolve_release,
    tag_candidates,
)

# ── L3: Detection ──
from toolshed.core.services.tool_install.detection.platform import (  # noqa: F401
    PlatformInfo,
    detect_platform,
)

# ── L4: Execution ──
from toolshed.core.services.tool_install.execution.asset_installer import (  # noqa: F401
    AssetInstaller,
)
from toolshed.core.services.tool_install.execution.base import Installer  # noqa: F401
from toolshed.core.services.tool_install.execution.native_installers import (  # noqa: F401
    CargoInstaller,
    GoInstaller,
    NpmInstaller,
    PipInstaller,
)

# ── Orchestration ──
from toolshed.core.services.tool_install.orchestration.package import Package  # noqa: F401
from toolshed.core.services.tool_install.registry import (  # noqa: F401
    PackageRegistry,
    build_registry,
)
