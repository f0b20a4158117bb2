"""
L4 Execution — install through a language's own package manager.

    GoInstaller     GOBIN=<bin> go install <module>@<version>
    NpmInstaller    npm install --global --prefix <pkg>/<mod> <mod>@<version>
    PipInstaller    <pkg>/<mod>/venv + pip install <mod>==<version>
    CargoInstaller  cargo install --root <root> [--version X] <mod>

Each installer first checks that its toolchain is on PATH; a missing
toolchain raises ``MissingProgramError`` so the package can fall back.
Semantic versions are pinned; any other version kind installs latest.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, ClassVar

from toolshed.adapters.shell.filesystem import symlink
from toolshed.core.models.package import Dirs, PkgInfo
from toolshed.core.models.release import Release
from toolshed.core.models.version import SemanticVersion
from toolshed.core.services.errors import FilesystemError, InstallError
from toolshed.core.services.tool_install.data.constants import (
    _PYTHON,
    NATIVE_INSTALL_TIMEOUT,
    VENV_CREATE_TIMEOUT,
)
from toolshed.core.services.tool_install.execution.base import Installer
from toolshed.core.services.tool_install.execution.hooks import PostInstallHook
from toolshed.core.services.tool_install.execution.subprocess_runner import (
    _run_subprocess,
    failure_reason,
    require_program,
)

logger = logging.getLogger(__name__)


def _semantic(release: Release | None) -> SemanticVersion | None:
    if release is None:
        return None
    version = release.version
    return version if isinstance(version, SemanticVersion) else None


def _check(result: dict[str, Any], info: PkgInfo) -> None:
    if not result["ok"]:
        raise InstallError(info.name, failure_reason(result))


def _link(target: Path, link: Path, info: PkgInfo) -> None:
    try:
        symlink(target, link)
    except FilesystemError as e:
        raise InstallError(info.name, e.message) from e


# ── Go ──────────────────────────────────────────────────────────


@dataclass(frozen=True)
class GoInstaller(Installer):
    kind: ClassVar[str] = "go"

    def install(self, info: PkgInfo, dirs: Dirs, release: Release | None) -> None:
        go = require_program("go")
        version = _semantic(release)
        ref = version.render() if version else "latest"

        result = _run_subprocess(
            [go, "install", f"{info.mod_name}@{ref}"],
            timeout=NATIVE_INSTALL_TIMEOUT,
            env_overrides={"GOBIN": str(dirs.bin_dir)},
        )
        _check(result, info)


# ── npm ─────────────────────────────────────────────────────────


@dataclass(frozen=True)
class NpmInstaller(Installer):
    """Global npm install into a private prefix.

    Attributes:
        dependencies: Extra packages installed alongside (peer deps).
        link_binary: Symlink <prefix>/bin/<bin> into bin. Off for
            packages whose executables are all linked by the hook.
        hook: Runs after install and before uninstall.
    """

    kind: ClassVar[str] = "npm"

    dependencies: tuple[str, ...] = ()
    link_binary: bool = True
    hook: PostInstallHook = field(default_factory=PostInstallHook)

    def install(self, info: PkgInfo, dirs: Dirs, release: Release | None) -> None:
        npm = require_program("npm")
        version = _semantic(release)
        spec = f"{info.mod_name}@{version.plain}" if version else info.mod_name
        prefix = dirs.package_dir(info)

        result = _run_subprocess(
            [npm, "install", "--global", "--prefix", str(prefix), spec, *self.dependencies],
            timeout=NATIVE_INSTALL_TIMEOUT,
        )
        _check(result, info)

        if self.link_binary:
            _link(prefix / "bin" / info.bin_name, dirs.bin_path(info), info)
        try:
            self.hook.after_install(info, dirs, None)
        except FilesystemError as e:
            raise InstallError(info.name, e.message) from e

    def uninstall(self, info: PkgInfo, dirs: Dirs) -> None:
        self.hook.before_uninstall(info, dirs)
        super().uninstall(info, dirs)


# ── pip ─────────────────────────────────────────────────────────


@dataclass(frozen=True)
class PipInstaller(Installer):
    """pip install into a per-package virtualenv.

    Attributes:
        dependencies: Extra requirements (plugins, extras).
        python: Interpreter to create the venv with; defaults to the
            one running toolshed.
    """

    kind: ClassVar[str] = "pip"

    dependencies: tuple[str, ...] = ()
    python: str | None = None

    def install(self, info: PkgInfo, dirs: Dirs, release: Release | None) -> None:
        python = require_program(self.python) if self.python else _PYTHON
        venv = dirs.package_dir(info) / "venv"

        if not (venv / "bin" / "python").exists():
            result = _run_subprocess(
                [python, "-m", "venv", str(venv)],
                timeout=VENV_CREATE_TIMEOUT,
            )
            _check(result, info)

        version = _semantic(release)
        spec = f"{info.mod_name}=={version.plain}" if version else info.mod_name
        result = _run_subprocess(
            [str(venv / "bin" / "pip"), "install", "--upgrade", spec, *self.dependencies],
            timeout=NATIVE_INSTALL_TIMEOUT,
        )
        _check(result, info)

        _link(venv / "bin" / info.bin_name, dirs.bin_path(info), info)


# ── cargo ───────────────────────────────────────────────────────


@dataclass(frozen=True)
class CargoInstaller(Installer):
    kind: ClassVar[str] = "cargo"

    def install(self, info: PkgInfo, dirs: Dirs, release: Release | None) -> None:
        cargo = require_program("cargo")
        cmd = [cargo, "install", "--force", "--root", str(dirs.root_dir)]
        version = _semantic(release)
        if version:
            cmd += ["--version", version.plain]
        cmd.append(info.mod_name)

        result = _run_subprocess(cmd, timeout=NATIVE_INSTALL_TIMEOUT)
        _check(result, info)
