"""
Manifest file persistence — atomic read/write for the Manifest.

The manifest is stored as JSON in <root>/manifest.json. Writes are
atomic (write to temp file, then rename) so a crash mid-write never
leaves a half-written manifest behind.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

from pydantic import ValidationError

from toolshed.core.models.manifest import Manifest
from toolshed.core.services.errors import DeserializationError, FilesystemError

logger = logging.getLogger(__name__)

MANIFEST_FILE = "manifest.json"


def default_manifest_path(root: Path) -> Path:
    """Get the manifest path for a toolshed root."""
    return root / MANIFEST_FILE


def load_manifest(path: Path) -> Manifest:
    """Load the manifest from a JSON file.

    Args:
        path: Path to the manifest JSON file.

    Returns:
        Manifest model. If the file doesn't exist, returns an empty manifest.

    Raises:
        FilesystemError: If the file exists but cannot be read.
        DeserializationError: If the file is not a valid manifest.
    """
    if not path.is_file():
        logger.info("No manifest at %s, starting empty", path)
        return Manifest()

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise FilesystemError(f"cannot read {path}: {e}") from e

    try:
        manifest = Manifest.model_validate(json.loads(raw))
    except (json.JSONDecodeError, ValidationError) as e:
        raise DeserializationError(f"corrupt manifest {path}: {e}") from e

    logger.debug("Loaded manifest from %s (%d packages)", path, manifest.installed_count())
    return manifest


def save_manifest(manifest: Manifest, path: Path) -> None:
    """Save the manifest to a JSON file (atomic write).

    Args:
        manifest: The manifest to save.
        path: Target path for the manifest file.

    Raises:
        FilesystemError: If the file cannot be written.
    """
    data = manifest.model_dump(mode="json")
    content = json.dumps(data, indent=2, ensure_ascii=False) + "\n"

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(
            dir=path.parent,
            prefix=".manifest_",
            suffix=".tmp",
        )
        os.close(fd)
        tmp = Path(tmp_path)
        try:
            tmp.write_text(content, encoding="utf-8")
            tmp.replace(path)
            logger.debug("Manifest saved to %s", path)
        except Exception:
            tmp.unlink(missing_ok=True)
            raise
    except OSError as e:
        logger.error("Failed to save manifest to %s: %s", path, e)
        raise FilesystemError(f"cannot write {path}: {e}") from e
