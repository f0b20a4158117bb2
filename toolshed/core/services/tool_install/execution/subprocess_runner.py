"""
L4 Execution — running package-manager commands.

Native installers (go, npm, pip, cargo) never call ``subprocess``
directly; they go through ``_run_subprocess`` and inspect the result
dict, so command logging and output capture live in one place.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import time
from typing import Any

from toolshed.core.services.errors import MissingProgramError

logger = logging.getLogger(__name__)

# Keep only the end of long npm/cargo output.
_OUTPUT_TAIL = 2000


def require_program(program: str) -> str:
    """Absolute path of ``program``, or ``MissingProgramError``."""
    path = shutil.which(program)
    if path is None:
        raise MissingProgramError(program)
    return path


def _tail(text: str | None) -> str:
    return text[-_OUTPUT_TAIL:] if text else ""


def _run_subprocess(
    cmd: list[str],
    *,
    timeout: int = 120,
    env_overrides: dict[str, str] | None = None,
) -> dict[str, Any]:
    """Run ``cmd`` with captured output.

    Args:
        cmd: Argument vector.
        timeout: Seconds to wait before giving up.
        env_overrides: Variables layered over the current environment
            (``GOBIN`` for go installs); ``$VAR`` references are expanded.

    Returns:
        ``ok`` plus ``stdout`` and ``elapsed_ms``; failures also carry
        ``error`` and, when the command ran, ``stderr``.
    """
    env = dict(os.environ)
    env.update({k: os.path.expandvars(v) for k, v in (env_overrides or {}).items()})

    logger.info("Running: %s", " ".join(cmd))
    started = time.monotonic()
    try:
        proc = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            timeout=timeout,
            env=env,
        )
    except subprocess.TimeoutExpired:
        return {"ok": False, "error": f"command timed out ({timeout}s)"}
    except OSError as e:
        logger.debug("Could not start %s", cmd[0], exc_info=True)
        return {"ok": False, "error": str(e)}

    result: dict[str, Any] = {
        "ok": proc.returncode == 0,
        "stdout": _tail(proc.stdout),
        "elapsed_ms": int((time.monotonic() - started) * 1000),
    }
    if result["ok"]:
        logger.debug("%s finished in %dms", cmd[0], result["elapsed_ms"])
    else:
        result["error"] = f"command failed (exit {proc.returncode})"
        result["stderr"] = _tail(proc.stderr)
    return result


def failure_reason(result: dict[str, Any]) -> str:
    """One-line description of a failed ``_run_subprocess`` result."""
    reason = result.get("error", "command failed")
    stderr = (result.get("stderr") or "").strip()
    if stderr:
        return f"{reason}: {stderr.splitlines()[-1]}"
    return reason
