from .capabilities import ToolchainStatus, probe_toolchain
from .engine import ExecutionEngine
from .local_engine import LocalToolchain, spawn_and_wait
from .types import ProcessOutcome

__all__ = [
    "ExecutionEngine",
    "LocalToolchain",
    "ProcessOutcome",
    "ToolchainStatus",
    "probe_toolchain",
    "spawn_and_wait",
]
