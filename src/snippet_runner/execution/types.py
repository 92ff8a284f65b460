from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ProcessOutcome:
    """Captured result of one child process (compiler or runtime).

    `returncode` is None exactly when the process was killed at its deadline.

    Example:
        ```python
        out = ProcessOutcome(returncode=0, timed_out=False, stdout=b"hi\\n", stderr=b"", elapsed_ms=40)
        ```
    """

    returncode: int | None
    timed_out: bool
    stdout: bytes
    stderr: bytes
    elapsed_ms: int

    @property
    def ok(self) -> bool:
        """Return True when the process exited normally with status 0.

        Example:
            ```python
            if outcome.ok: ...
            ```
        """
        return not self.timed_out and self.returncode == 0

    @property
    def stdout_text(self) -> str:
        """Decode standard output as UTF-8, replacing invalid bytes.

        Example:
            ```python
            text = outcome.stdout_text
            ```
        """
        return self.stdout.decode("utf-8", errors="replace")

    @property
    def stderr_text(self) -> str:
        """Decode standard error as UTF-8, replacing invalid bytes.

        Example:
            ```python
            text = outcome.stderr_text
            ```
        """
        return self.stderr.decode("utf-8", errors="replace")
