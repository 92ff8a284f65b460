from __future__ import annotations

import logging
import shutil
import tempfile
from pathlib import Path, PureWindowsPath

from .config import RunnerConfig
from .result import FailureKind, StageFailure
from .types import CompilationUnit

logger = logging.getLogger(__name__)


def identifier_from_filename(filename: str, config: RunnerConfig) -> str:
    """Return the unit identifier for a caller-supplied filename.

    Directory components are dropped so the file always lands in the request's
    own directory. The result is not checked against the declared class name.

    Example:
        ```python
        identifier_from_filename("src/Test.java", RunnerConfig())  # "Test"
        ```
    """
    name = PureWindowsPath(filename.strip()).name
    if name.endswith(config.source_suffix):
        name = name[: -len(config.source_suffix)]
    return name


def _is_plain_name(identifier: str) -> bool:
    """Return True when `identifier` names a single entry inside a directory.

    Example:
        ```python
        _is_plain_name("Test")  # True; "../x" is False
        ```
    """
    if not identifier or identifier in {".", ".."}:
        return False
    return not any(char in identifier for char in ("/", "\\", "\x00"))


def materialize_source(
    source_text: str,
    identifier: str,
    config: RunnerConfig,
) -> CompilationUnit | StageFailure:
    """Write `source_text` to `<fresh temp dir>/<identifier><suffix>`.

    Each call gets its own directory from `tempfile.mkdtemp`. Names that could
    point outside that directory are rejected before anything is created. On a
    failed write the directory is removed again and an IO failure is returned.

    Example:
        ```python
        unit = materialize_source(code, "Test", RunnerConfig())
        ```
    """
    if not _is_plain_name(identifier):
        return StageFailure(FailureKind.IO, f"Invalid compilation unit name: {identifier!r}")
    directory: Path | None = None
    try:
        directory = Path(tempfile.mkdtemp(prefix=config.temp_prefix, dir=config.temp_root))
        source_path = directory / f"{identifier}{config.source_suffix}"
        source_path.write_text(source_text, encoding="utf-8")
    except (OSError, ValueError) as exc:
        if directory is not None:
            shutil.rmtree(directory, ignore_errors=True)
        return StageFailure(FailureKind.IO, str(exc))
    logger.debug("Materialized %s", source_path)
    return CompilationUnit(
        identifier=identifier,
        source_path=source_path,
        directory=directory,
        artifact_suffix=config.artifact_suffix,
    )
