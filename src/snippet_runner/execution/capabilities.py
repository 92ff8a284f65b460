from __future__ import annotations

import shutil
from dataclasses import dataclass

from ..config import RunnerConfig


@dataclass(frozen=True, slots=True)
class ToolchainStatus:
    """Resolved compiler and runtime executables for a config.

    Example:
        ```python
        status = ToolchainStatus("/usr/bin/javac", "/usr/bin/java", None)
        ```
    """

    compiler_path: str | None
    runtime_path: str | None
    reason: str | None

    @property
    def available(self) -> bool:
        """Return True when both executables were found.

        Example:
            ```python
            if probe_toolchain(config).available: ...
            ```
        """
        return self.compiler_path is not None and self.runtime_path is not None


def probe_toolchain(config: RunnerConfig | None = None) -> ToolchainStatus:
    """Look up the configured compiler and runtime on PATH.

    Informational only: the pipeline itself reports a missing binary as a
    spawn failure when it tries to start it.

    Example:
        ```python
        status = probe_toolchain(RunnerConfig())
        ```
    """
    cfg = config or RunnerConfig()
    compiler_path = shutil.which(cfg.compiler[0])
    runtime_path = shutil.which(cfg.runtime[0])
    missing = [
        name
        for name, path in ((cfg.compiler[0], compiler_path), (cfg.runtime[0], runtime_path))
        if path is None
    ]
    reason = None
    if missing:
        reason = f"Not found on PATH: {', '.join(missing)}. Install a JDK and ensure it is on PATH."
    return ToolchainStatus(compiler_path, runtime_path, reason)
