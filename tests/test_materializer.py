from pathlib import Path

import pytest

from snippet_runner import CompilationUnit, RunnerConfig
from snippet_runner.cleanup import cleanup_unit
from snippet_runner.materializer import identifier_from_filename, materialize_source
from snippet_runner.result import FailureKind, StageFailure


def test_writes_source_under_identifier(config: RunnerConfig, temp_root: Path) -> None:
    unit = materialize_source("public class Test {}", "Test", config)

    assert isinstance(unit, CompilationUnit)
    assert unit.directory.parent == temp_root
    assert unit.directory.name.startswith("java_code")
    assert unit.source_path == unit.directory / "Test.java"
    assert unit.source_path.read_text(encoding="utf-8") == "public class Test {}"
    assert unit.artifact_path == unit.directory / "Test.class"


def test_each_request_gets_its_own_directory(config: RunnerConfig) -> None:
    first = materialize_source("a", "Test", config)
    second = materialize_source("b", "Test", config)

    assert isinstance(first, CompilationUnit)
    assert isinstance(second, CompilationUnit)
    assert first.directory != second.directory
    assert first.source_path.read_text(encoding="utf-8") == "a"


def test_source_is_written_as_utf8(config: RunnerConfig) -> None:
    unit = materialize_source('System.out.println("héllo ✓");', "Test", config)
    assert isinstance(unit, CompilationUnit)
    assert unit.source_path.read_bytes() == 'System.out.println("héllo ✓");'.encode("utf-8")


def test_unwritable_root_is_io_failure(tmp_path: Path) -> None:
    config = RunnerConfig(temp_root=str(tmp_path / "missing" / "root"))
    failure = materialize_source("public class Test {}", "Test", config)

    assert isinstance(failure, StageFailure)
    assert failure.kind is FailureKind.IO
    assert failure.message


def test_failed_write_removes_directory(config: RunnerConfig, temp_root: Path) -> None:
    failure = materialize_source("x", "nested/Test", config)

    assert isinstance(failure, StageFailure)
    assert failure.kind is FailureKind.IO
    assert list(temp_root.iterdir()) == []


@pytest.mark.parametrize("identifier", ["", ".", ".."])
def test_rejects_unusable_identifier(config: RunnerConfig, identifier: str) -> None:
    failure = materialize_source("x", identifier, config)
    assert isinstance(failure, StageFailure)
    assert failure.kind is FailureKind.IO


@pytest.mark.parametrize(
    ("filename", "expected"),
    [
        ("Test.java", "Test"),
        ("Main", "Main"),
        ("src/pkg/Hello.java", "Hello"),
        ("..\\..\\Evil.java", "Evil"),
        ("Notes.txt", "Notes.txt"),
    ],
)
def test_identifier_from_filename(filename: str, expected: str) -> None:
    assert identifier_from_filename(filename, RunnerConfig()) == expected


def test_cleanup_removes_everything(config: RunnerConfig, temp_root: Path) -> None:
    unit = materialize_source("public class Test {}", "Test", config)
    assert isinstance(unit, CompilationUnit)
    unit.artifact_path.write_bytes(b"\xca\xfe\xba\xbe")
    (unit.directory / "Test$Inner.class").write_bytes(b"")

    cleanup_unit(unit)

    assert not unit.directory.exists()
    assert list(temp_root.iterdir()) == []


def test_cleanup_is_idempotent(config: RunnerConfig) -> None:
    unit = materialize_source("public class Test {}", "Test", config)
    assert isinstance(unit, CompilationUnit)

    cleanup_unit(unit)
    cleanup_unit(unit)

    assert not unit.directory.exists()


def test_cleanup_tolerates_missing_artifact(config: RunnerConfig) -> None:
    unit = materialize_source("public class Test {}", "Test", config)
    assert isinstance(unit, CompilationUnit)
    unit.source_path.unlink()

    cleanup_unit(unit)

    assert not unit.directory.exists()


@pytest.mark.parametrize("identifier", ["../../Escape", "/abs/Escape", "..\\Escape", "A\x00B"])
def test_rejects_names_that_leave_the_request_directory(
    config: RunnerConfig, temp_root: Path, identifier: str
) -> None:
    failure = materialize_source("public class Escape {}", identifier, config)

    assert isinstance(failure, StageFailure)
    assert failure.kind is FailureKind.IO
    assert list(temp_root.iterdir()) == []


def test_unencodable_source_removes_directory(config: RunnerConfig, temp_root: Path) -> None:
    failure = materialize_source("public class Test {} // \ud800", "Test", config)

    assert isinstance(failure, StageFailure)
    assert failure.kind is FailureKind.IO
    assert list(temp_root.iterdir()) == []
