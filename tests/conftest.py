from __future__ import annotations

import sys
from pathlib import Path

import pytest

from snippet_runner import RunnerConfig

FAKE_TOOLCHAIN = Path(__file__).resolve().parent / "fake_toolchain"

HELLO_SOURCE = (
    "public class Test { public static void main(String[] args) "
    '{ System.out.println("Hello from Java!"); } }'
)


def fake_config(temp_root: Path, timeout_seconds: float = 25) -> RunnerConfig:
    return RunnerConfig(
        compiler=(sys.executable, str(FAKE_TOOLCHAIN / "fake_javac.py")),
        runtime=(sys.executable, str(FAKE_TOOLCHAIN / "fake_java.py")),
        timeout_seconds=timeout_seconds,
        temp_root=str(temp_root),
    )


@pytest.fixture
def temp_root(tmp_path: Path) -> Path:
    root = tmp_path / "requests"
    root.mkdir()
    return root


@pytest.fixture
def config(temp_root: Path) -> RunnerConfig:
    return fake_config(temp_root)
