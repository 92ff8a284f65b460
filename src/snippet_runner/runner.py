from __future__ import annotations

import logging
import time
from enum import Enum

from .cleanup import cleanup_unit
from .config import RunnerConfig
from .execution.engine import ExecutionEngine
from .execution.local_engine import LocalToolchain
from .execution.types import ProcessOutcome
from .extractor import extract_public_type_name
from .materializer import identifier_from_filename, materialize_source
from .result import (
    EXECUTION_TIMEOUT_ERROR,
    NO_PUBLIC_CLASS_ERROR,
    ExecutionResult,
    FailureKind,
    StageFailure,
    assemble_result,
    failure_result,
)
from .types import CompilationUnit, ExecutionRequest

logger = logging.getLogger(__name__)


class NamingMode(str, Enum):
    """How the compilation unit's name is chosen.

    FIXED uses the caller's filename as-is, so a filename that differs from the
    declared public class fails to compile. DERIVED scans the source for the
    public class name.

    Example:
        ```python
        mode = NamingMode("derived")
        ```
    """

    FIXED = "fixed"
    DERIVED = "derived"


def _resolve_config(config: RunnerConfig | None, config_file: str | None) -> RunnerConfig:
    """Resolve the effective config object for a run.

    Example:
        ```python
        config = _resolve_config(None, "/tmp/runner.toml")
        ```
    """
    if config is not None and config_file is not None:
        raise ValueError("Provide either 'config' or 'config_file', not both")
    if config is None and config_file is not None:
        return RunnerConfig.from_file(config_file)
    if config is None:
        return RunnerConfig()
    return config


def _unit_identifier(
    request: ExecutionRequest,
    mode: NamingMode,
    config: RunnerConfig,
) -> str | StageFailure:
    """Pick the unit identifier for the request according to the naming mode.

    Example:
        ```python
        name = _unit_identifier(request, NamingMode.DERIVED, RunnerConfig())
        ```
    """
    if mode is NamingMode.DERIVED:
        name = extract_public_type_name(request.source_text, config.public_type_prefix)
        if name is None:
            return StageFailure(FailureKind.EXTRACTION, NO_PUBLIC_CLASS_ERROR)
        return name
    if not request.filename:
        return StageFailure(FailureKind.UNEXPECTED, "Missing required field: filename")
    return identifier_from_filename(request.filename, config)


def _compile_stage(engine: ExecutionEngine, unit: CompilationUnit) -> StageFailure | None:
    """Compile the unit; return a failure when the compiler cannot start or rejects it.

    Example:
        ```python
        failure = _compile_stage(engine, unit)
        ```
    """
    try:
        outcome = engine.compile(unit)
    except OSError as exc:
        return StageFailure(FailureKind.SPAWN, str(exc))
    if outcome.returncode != 0:
        logger.debug("Compiler exited %s for %s", outcome.returncode, unit.source_path)
        return StageFailure(FailureKind.COMPILE, outcome.stderr_text)
    return None


def _run_stage(engine: ExecutionEngine, unit: CompilationUnit) -> ProcessOutcome | StageFailure:
    """Run the compiled unit; return its outcome on exit 0, otherwise a failure.

    Example:
        ```python
        outcome = _run_stage(engine, unit)
        ```
    """
    try:
        outcome = engine.run(unit)
    except OSError as exc:
        return StageFailure(FailureKind.SPAWN, str(exc))
    if outcome.timed_out:
        return StageFailure(FailureKind.TIMEOUT, EXECUTION_TIMEOUT_ERROR)
    if outcome.returncode != 0:
        return StageFailure(FailureKind.RUNTIME, outcome.stderr_text, output=outcome.stdout_text)
    return outcome


def _pipeline(
    request: ExecutionRequest,
    mode: NamingMode,
    engine: ExecutionEngine,
    config: RunnerConfig,
    started_at: float,
) -> ExecutionResult:
    """Extract or take the name, materialize, compile, run, and always clean up.

    Example:
        ```python
        result = _pipeline(request, NamingMode.FIXED, engine, config, time.monotonic())
        ```
    """
    identifier = _unit_identifier(request, mode, config)
    if isinstance(identifier, StageFailure):
        return failure_result(identifier, started_at)

    unit = materialize_source(request.source_text, identifier, config)
    if isinstance(unit, StageFailure):
        return failure_result(unit, started_at)

    outcome: ProcessOutcome | StageFailure
    try:
        compile_failure = _compile_stage(engine, unit)
        if compile_failure is not None:
            outcome = compile_failure
        else:
            outcome = _run_stage(engine, unit)
    finally:
        cleanup_unit(unit)

    if isinstance(outcome, StageFailure):
        return failure_result(outcome, started_at)
    return assemble_result(
        started_at,
        success=True,
        output=outcome.stdout_text,
        error=outcome.stderr_text,
    )


def run_snippet(
    request: ExecutionRequest,
    *,
    mode: NamingMode | str = NamingMode.DERIVED,
    engine: ExecutionEngine | None = None,
    config: RunnerConfig | None = None,
    config_file: str | None = None,
) -> ExecutionResult:
    """Compile and run one snippet and return its result; never raises for pipeline errors.

    A fresh toolchain is built per call unless `engine` is given. Failures in
    any stage come back as `success=False` with a human-readable `error`, and
    the request's temp directory is removed on every path.

    Example:
        ```python
        from snippet_runner import ExecutionRequest, run_snippet
        result = run_snippet(ExecutionRequest(source_text=code), mode="derived")
        ```
    """
    started_at = time.monotonic()
    try:
        resolved_mode = NamingMode(mode)
        resolved_config = _resolve_config(config, config_file)
        active_engine = engine if engine is not None else LocalToolchain(resolved_config)
        result = _pipeline(request, resolved_mode, active_engine, resolved_config, started_at)
    except Exception as exc:
        logger.exception("Unexpected failure while running snippet")
        result = assemble_result(
            started_at,
            success=False,
            error=str(exc),
            error_kind=FailureKind.UNEXPECTED,
        )
    logger.info(
        "Snippet finished mode=%s success=%s kind=%s elapsed_ms=%s",
        getattr(mode, "value", mode),
        result.success,
        result.error_kind.value if result.error_kind else None,
        result.execution_time_ms,
    )
    return result


def run_fixed_name(
    code: str,
    filename: str,
    *,
    language: str = "java",
    engine: ExecutionEngine | None = None,
    config: RunnerConfig | None = None,
    config_file: str | None = None,
) -> ExecutionResult:
    """Run `code` saved under the caller's `filename`.

    Example:
        ```python
        result = run_fixed_name(code, "Test.java")
        ```
    """
    return run_snippet(
        ExecutionRequest(source_text=code, language=language, filename=filename),
        mode=NamingMode.FIXED,
        engine=engine,
        config=config,
        config_file=config_file,
    )


def run_derived_name(
    code: str,
    *,
    language: str = "java",
    engine: ExecutionEngine | None = None,
    config: RunnerConfig | None = None,
    config_file: str | None = None,
) -> ExecutionResult:
    """Run `code` saved under the name of its first public class.

    Example:
        ```python
        result = run_derived_name("public class Hi { ... }")
        ```
    """
    return run_snippet(
        ExecutionRequest(source_text=code, language=language),
        mode=NamingMode.DERIVED,
        engine=engine,
        config=config,
        config_file=config_file,
    )
