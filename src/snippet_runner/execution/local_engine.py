from __future__ import annotations

import logging
import os
import signal
import subprocess
import time
from typing import Sequence

from ..config import RunnerConfig
from ..types import CompilationUnit
from .types import ProcessOutcome

logger = logging.getLogger(__name__)


def _force_kill(proc: subprocess.Popen[bytes]) -> None:
    """Kill a child non-cooperatively, taking its whole process group on POSIX.

    Example:
        ```python
        _force_kill(proc)
        ```
    """
    if os.name == "posix":
        try:
            os.killpg(proc.pid, signal.SIGKILL)
            return
        except (ProcessLookupError, PermissionError):
            pass
    try:
        proc.kill()
    except ProcessLookupError:
        pass


def spawn_and_wait(
    argv: Sequence[str],
    *,
    timeout: float | None = None,
    cwd: str | None = None,
) -> ProcessOutcome:
    """Spawn `argv`, wait for exit or deadline, and capture both streams in full.

    With `timeout=None` the wait is unbounded. On expiry the child is killed
    with SIGKILL and reaped before returning, so nothing is left running.
    OSError from spawning (missing binary, permission denied) propagates.

    Example:
        ```python
        outcome = spawn_and_wait(["java", "-cp", "/tmp/java_code1", "Test"], timeout=25)
        ```
    """
    start = time.monotonic()
    proc = subprocess.Popen(
        list(argv),
        stdin=subprocess.DEVNULL,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        cwd=cwd,
        start_new_session=os.name == "posix",
    )
    logger.debug("Spawned pid=%s argv=%s", proc.pid, list(argv))
    try:
        stdout, stderr = proc.communicate(timeout=timeout)
    except subprocess.TimeoutExpired:
        logger.warning("Process pid=%s exceeded %ss deadline; killing", proc.pid, timeout)
        _force_kill(proc)
        proc.communicate()
        return ProcessOutcome(
            returncode=None,
            timed_out=True,
            stdout=b"",
            stderr=b"",
            elapsed_ms=int((time.monotonic() - start) * 1000),
        )
    except BaseException:
        _force_kill(proc)
        proc.wait()
        raise
    return ProcessOutcome(
        returncode=proc.returncode,
        timed_out=False,
        stdout=stdout or b"",
        stderr=stderr or b"",
        elapsed_ms=int((time.monotonic() - start) * 1000),
    )


class LocalToolchain:
    """Compile and run Java units with the compiler and runtime found on PATH.

    Example:
        ```python
        engine = LocalToolchain(RunnerConfig(timeout_seconds=10))
        ```
    """

    def __init__(self, config: RunnerConfig | None = None) -> None:
        """Bind the toolchain to one config.

        Example:
            ```python
            engine = LocalToolchain()
            ```
        """
        self._config = config or RunnerConfig()

    @property
    def config(self) -> RunnerConfig:
        """Return the config this toolchain was built with.

        Example:
            ```python
            engine.config.timeout_seconds  # 25.0
            ```
        """
        return self._config

    def compile(self, unit: CompilationUnit) -> ProcessOutcome:
        """Run the compiler on the unit's source file; no deadline is applied.

        Example:
            ```python
            outcome = engine.compile(unit)
            ```
        """
        cmd = [*self._config.compiler, str(unit.source_path)]
        return spawn_and_wait(cmd, timeout=None)

    def run(self, unit: CompilationUnit) -> ProcessOutcome:
        """Run the compiled unit with its directory as the classpath.

        Example:
            ```python
            outcome = engine.run(unit)
            ```
        """
        cmd = [*self._config.runtime, "-cp", str(unit.directory), unit.identifier]
        return spawn_and_wait(cmd, timeout=self._config.timeout_seconds)
