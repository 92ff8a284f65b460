from __future__ import annotations

import logging
import shutil
from pathlib import Path

from .types import CompilationUnit

logger = logging.getLogger(__name__)


def _remove_file(path: Path) -> None:
    """Delete one file, ignoring a missing path and logging other errors.

    Example:
        ```python
        _remove_file(Path("/tmp/java_code1/Test.class"))
        ```
    """
    try:
        path.unlink(missing_ok=True)
    except OSError as exc:
        logger.warning("Could not remove %s: %s", path, exc)


def _log_rmtree_error(function: object, path: str, exc: BaseException) -> None:
    """Log an rmtree error other than a missing path.

    Example:
        ```python
        shutil.rmtree(directory, onexc=_log_rmtree_error)
        ```
    """
    if isinstance(exc, FileNotFoundError):
        return
    logger.warning("Could not remove %s: %s", path, exc)


def cleanup_unit(unit: CompilationUnit) -> None:
    """Remove the unit's source, its artifact, then its directory.

    Best-effort and idempotent: missing paths are skipped, other errors are
    logged and swallowed. The directory goes last and recursively, taking
    nested-class artifacts with it.

    Example:
        ```python
        cleanup_unit(unit)
        cleanup_unit(unit)  # no-op
        ```
    """
    _remove_file(unit.source_path)
    _remove_file(unit.artifact_path)
    if unit.directory.exists():
        shutil.rmtree(unit.directory, onexc=_log_rmtree_error)
    logger.debug("Cleaned up %s", unit.directory)
