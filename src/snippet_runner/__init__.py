from .config import RunnerConfig
from .execution.capabilities import probe_toolchain
from .execution.local_engine import LocalToolchain
from .extractor import extract_public_type_name
from .handler import handle_event, parse_event
from .result import ExecutionResult, FailureKind
from .runner import NamingMode, run_derived_name, run_fixed_name, run_snippet
from .types import CompilationUnit, ExecutionRequest

__all__ = [
    "CompilationUnit",
    "ExecutionRequest",
    "ExecutionResult",
    "FailureKind",
    "LocalToolchain",
    "NamingMode",
    "RunnerConfig",
    "extract_public_type_name",
    "handle_event",
    "parse_event",
    "probe_toolchain",
    "run_derived_name",
    "run_fixed_name",
    "run_snippet",
]
