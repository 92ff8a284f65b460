from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class ExecutionRequest:
    """Snippet submitted by a caller for one compile-and-run invocation.

    `language` is informational only. `filename` is read by the fixed-name
    pipeline and ignored by the derived-name pipeline.

    Example:
        ```python
        req = ExecutionRequest(source_text=code, language="java", filename="Test.java")
        ```
    """

    source_text: str
    language: str = "java"
    filename: str | None = None


@dataclass(frozen=True, slots=True)
class CompilationUnit:
    """Materialized source file plus the directory owned by one request.

    Example:
        ```python
        unit = CompilationUnit("Test", Path("/tmp/java_code1/Test.java"), Path("/tmp/java_code1"))
        ```
    """

    identifier: str
    source_path: Path
    directory: Path
    artifact_suffix: str = ".class"

    @property
    def artifact_path(self) -> Path:
        """Return the path the compiler writes the entry-point artifact to.

        Example:
            ```python
            unit.artifact_path  # /tmp/java_code1/Test.class
            ```
        """
        return self.directory / f"{self.identifier}{self.artifact_suffix}"
