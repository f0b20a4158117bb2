"""
L3 Detection — host platform identification.

Produces the keys used to pick a per-platform asset pattern from the
catalog, most specific first::

    linux-x86_64-musl → linux-x86_64 → linux
"""

from __future__ import annotations

import glob
import logging
import platform
from dataclasses import dataclass
from functools import lru_cache

from toolshed.core.services.tool_install.data.constants import _IARCH_MAP, _OS_MAP

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlatformInfo:
    """Normalized os / arch / libc triple."""

    os: str
    arch: str
    libc: str | None = None

    @property
    def keys(self) -> tuple[str, ...]:
        """Catalog lookup keys, most specific first."""
        base = f"{self.os}-{self.arch}"
        if self.libc:
            return (f"{base}-{self.libc}", base, self.os)
        return (base, self.os)

    def __str__(self) -> str:
        return self.keys[0]


def _detect_libc() -> str | None:
    """``gnu`` or ``musl`` on Linux, None when undetermined."""
    name, _version = platform.libc_ver()
    if name == "glibc":
        return "gnu"
    if glob.glob("/lib/ld-musl-*"):
        return "musl"
    return None


@lru_cache(maxsize=1)
def detect_platform() -> PlatformInfo:
    """Identify the host platform (cached for the process)."""
    system = platform.system()
    machine = platform.machine()
    os_name = _OS_MAP.get(system, system.lower())
    arch = _IARCH_MAP.get(machine, machine.lower())
    libc = _detect_libc() if os_name == "linux" else None

    info = PlatformInfo(os=os_name, arch=arch, libc=libc)
    logger.debug("Detected platform %s", info)
    return info
