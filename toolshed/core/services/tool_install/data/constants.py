"""
L0 Data — Module-level constants.

Pure data. No logic. No imports beyond stdlib.
"""

from __future__ import annotations

import sys

# Interpreter used to create per-package virtualenvs for pip installs.
_PYTHON: str = sys.executable

# Architecture name normalization, ``platform.machine()`` → canonical.
#
# Release assets mix naming conventions (x86_64/amd64, aarch64/arm64);
# the catalog is keyed by the uname-style name and each pattern spells
# out whatever the upstream project uses.
_IARCH_MAP: dict[str, str] = {
    "x86_64": "x86_64",
    "amd64": "x86_64",
    "AMD64": "x86_64",     # Windows / WSL2
    "aarch64": "aarch64",
    "arm64": "aarch64",    # macOS (Darwin reports arm64)
    "armv7l": "armv7",
    "i686": "i686",
    "i386": "i686",
}

# OS name normalization, ``platform.system()`` → canonical.
_OS_MAP: dict[str, str] = {
    "Linux": "linux",
    "Darwin": "darwin",
    "Windows": "windows",
}

# Timeouts for native installer subprocesses (seconds).
NATIVE_INSTALL_TIMEOUT: int = 900
VENV_CREATE_TIMEOUT: int = 120

# Worker cap for the parallel latest-release check.
CHECK_MAX_WORKERS: int = 8
