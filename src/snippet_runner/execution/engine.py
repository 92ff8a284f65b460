from __future__ import annotations

from typing import Protocol

from ..types import CompilationUnit
from .types import ProcessOutcome


class ExecutionEngine(Protocol):
    def compile(self, unit: CompilationUnit) -> ProcessOutcome:
        """Compile one unit and return the compiler's captured outcome.

        Blocks until the compiler exits. Raises OSError when it cannot be spawned.

        Example:
            ```python
            outcome = engine.compile(unit)
            ```
        """
        ...

    def run(self, unit: CompilationUnit) -> ProcessOutcome:
        """Run the compiled unit under the engine's deadline.

        Raises OSError when the runtime cannot be spawned.

        Example:
            ```python
            outcome = engine.run(unit)
            ```
        """
        ...
