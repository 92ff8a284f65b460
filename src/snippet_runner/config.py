from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any


def _default_config_path() -> Path:
    """Return bundled default runner config TOML path.

    Example:
        ```python
        path = _default_config_path()
        ```
    """
    return Path(__file__).with_name("default_config.toml")


def _read_config_toml(path: Path) -> dict[str, Any]:
    """Read runner TOML and return the normalized settings dictionary.

    Example:
        ```python
        raw = _read_config_toml(Path("/tmp/runner.toml"))
        ```
    """
    if not path.exists():
        return {
            "compiler": ["javac"],
            "runtime": ["java"],
            "timeout_seconds": 25,
            "source_suffix": ".java",
            "artifact_suffix": ".class",
            "public_type_prefix": "public class ",
            "temp_prefix": "java_code",
        }
    raw = tomllib.loads(path.read_text(encoding="utf-8"))
    runner_obj = raw.get("runner", raw)
    if not isinstance(runner_obj, dict):
        raise ValueError("Runner config must be a TOML table")
    return runner_obj


def _command(value: Any, field_name: str) -> tuple[str, ...]:
    """Validate a command prefix given as a string or list of strings.

    Example:
        ```python
        argv = _command(["java", "-Xmx64m"], "runtime")
        ```
    """
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple)) or not value:
        raise ValueError(f"'{field_name}' must be a non-empty list of strings")
    out: list[str] = []
    for item in value:
        if not isinstance(item, str) or not item:
            raise ValueError(f"'{field_name}' must contain only non-empty strings")
        out.append(item)
    return tuple(out)


_DEFAULT_CONFIG_RAW = _read_config_toml(_default_config_path())
DEFAULT_COMPILER = _command(_DEFAULT_CONFIG_RAW.get("compiler", ["javac"]), "compiler")
DEFAULT_RUNTIME = _command(_DEFAULT_CONFIG_RAW.get("runtime", ["java"]), "runtime")
DEFAULT_TIMEOUT_SECONDS = float(_DEFAULT_CONFIG_RAW.get("timeout_seconds", 25))
DEFAULT_SOURCE_SUFFIX = str(_DEFAULT_CONFIG_RAW.get("source_suffix", ".java"))
DEFAULT_ARTIFACT_SUFFIX = str(_DEFAULT_CONFIG_RAW.get("artifact_suffix", ".class"))
DEFAULT_PUBLIC_TYPE_PREFIX = str(
    _DEFAULT_CONFIG_RAW.get("public_type_prefix", "public class ")
)
DEFAULT_TEMP_PREFIX = str(_DEFAULT_CONFIG_RAW.get("temp_prefix", "java_code"))


@dataclass(frozen=True, slots=True)
class RunnerConfig:
    """Toolchain and deadline settings for one compile-and-run pipeline.

    Example:
        ```python
        config = RunnerConfig(timeout_seconds=5, runtime=("java", "-Xss1m"))
        ```
    """

    compiler: tuple[str, ...] = DEFAULT_COMPILER
    runtime: tuple[str, ...] = DEFAULT_RUNTIME
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    source_suffix: str = DEFAULT_SOURCE_SUFFIX
    artifact_suffix: str = DEFAULT_ARTIFACT_SUFFIX
    public_type_prefix: str = DEFAULT_PUBLIC_TYPE_PREFIX
    temp_prefix: str = DEFAULT_TEMP_PREFIX
    temp_root: str | None = None
    config_path: str | None = None

    def __post_init__(self) -> None:
        """Validate settings after dataclass initialization.

        Example:
            ```python
            RunnerConfig(timeout_seconds=1)
            ```
        """
        object.__setattr__(self, "compiler", _command(self.compiler, "compiler"))
        object.__setattr__(self, "runtime", _command(self.runtime, "runtime"))
        if self.timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be greater than zero")
        if not self.source_suffix.startswith("."):
            raise ValueError("source_suffix must start with '.'")
        if not self.artifact_suffix.startswith("."):
            raise ValueError("artifact_suffix must start with '.'")
        if not self.public_type_prefix.strip():
            raise ValueError("public_type_prefix must not be blank")

    @classmethod
    def from_file(cls, config_path: str) -> "RunnerConfig":
        """Create a config instance from a TOML file.

        Missing keys fall back to the bundled defaults.

        Example:
            ```python
            config = RunnerConfig.from_file("/etc/snippet-runner/runner.toml")
            ```
        """
        path = Path(config_path)
        if not path.exists():
            raise ValueError(f"Runner config file not found: {config_path}")
        raw = _read_config_toml(path)
        temp_root = raw.get("temp_root")
        return cls(
            compiler=_command(raw.get("compiler", list(DEFAULT_COMPILER)), "compiler"),
            runtime=_command(raw.get("runtime", list(DEFAULT_RUNTIME)), "runtime"),
            timeout_seconds=float(raw.get("timeout_seconds", DEFAULT_TIMEOUT_SECONDS)),
            source_suffix=str(raw.get("source_suffix", DEFAULT_SOURCE_SUFFIX)),
            artifact_suffix=str(raw.get("artifact_suffix", DEFAULT_ARTIFACT_SUFFIX)),
            public_type_prefix=str(
                raw.get("public_type_prefix", DEFAULT_PUBLIC_TYPE_PREFIX)
            ),
            temp_prefix=str(raw.get("temp_prefix", DEFAULT_TEMP_PREFIX)),
            temp_root=str(temp_root) if temp_root is not None else None,
            config_path=config_path,
        )
