from __future__ import annotations

import time
from dataclasses import dataclass
from enum import Enum
from typing import Any

NO_PUBLIC_CLASS_ERROR = "No public class found in code"
EXECUTION_TIMEOUT_ERROR = "Execution timeout"


class FailureKind(str, Enum):
    """Why a pipeline stage stopped the request.

    Example:
        ```python
        kind = FailureKind.TIMEOUT
        ```
    """

    EXTRACTION = "extraction"
    IO = "io"
    COMPILE = "compile"
    SPAWN = "spawn"
    TIMEOUT = "timeout"
    RUNTIME = "runtime"
    UNEXPECTED = "unexpected"


@dataclass(frozen=True, slots=True)
class StageFailure:
    """Failure value returned by a pipeline stage instead of raising.

    `output` carries whatever the failing process printed before it stopped.

    Example:
        ```python
        failure = StageFailure(FailureKind.COMPILE, "Test.java:1: error: ';' expected")
        ```
    """

    kind: FailureKind
    message: str
    output: str = ""


@dataclass(frozen=True, slots=True)
class ExecutionResult:
    """Final result of one request, mapped onto the response body contract.

    Example:
        ```python
        result = ExecutionResult(success=True, output="hi\\n", error="", execution_time_ms=12)
        ```
    """

    success: bool
    output: str
    error: str
    execution_time_ms: int
    memory_used_bytes: int = 0
    error_kind: FailureKind | None = None

    def to_body(self) -> dict[str, Any]:
        """Return the camelCase response body mapping.

        Example:
            ```python
            body = result.to_body()  # {"success": True, "output": "hi\\n", ...}
            ```
        """
        return {
            "success": self.success,
            "output": self.output,
            "error": self.error,
            "executionTimeMillis": self.execution_time_ms,
            "memoryUsedBytes": self.memory_used_bytes,
        }

    def to_response(self) -> dict[str, Any]:
        """Wrap the body in the response envelope; the status is always 200.

        Example:
            ```python
            response = result.to_response()  # {"statusCode": 200, "body": {...}}
            ```
        """
        return {"statusCode": 200, "body": self.to_body()}


def elapsed_ms(started_at: float, now: float | None = None) -> int:
    """Return whole milliseconds between two `time.monotonic()` readings, never negative.

    Example:
        ```python
        ms = elapsed_ms(time.monotonic() - 0.5)  # ~500
        ```
    """
    end = time.monotonic() if now is None else now
    return max(0, int((end - started_at) * 1000))


def assemble_result(
    started_at: float,
    *,
    success: bool,
    output: str = "",
    error: str = "",
    error_kind: FailureKind | None = None,
) -> ExecutionResult:
    """Build the final result; elapsed time runs from pipeline entry to now.

    Example:
        ```python
        result = assemble_result(started, success=True, output="Hello from Java!\\n")
        ```
    """
    return ExecutionResult(
        success=success,
        output=output,
        error=error,
        execution_time_ms=elapsed_ms(started_at),
        memory_used_bytes=0,
        error_kind=error_kind,
    )


def failure_result(failure: StageFailure, started_at: float) -> ExecutionResult:
    """Map a stage failure onto a failed result.

    Example:
        ```python
        result = failure_result(StageFailure(FailureKind.TIMEOUT, "Execution timeout"), started)
        ```
    """
    return assemble_result(
        started_at,
        success=False,
        output=failure.output,
        error=failure.message,
        error_kind=failure.kind,
    )
