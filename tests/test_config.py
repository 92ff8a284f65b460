from pathlib import Path

import pytest

from snippet_runner import RunnerConfig


def test_defaults_match_bundled_toml() -> None:
    config = RunnerConfig()
    assert config.compiler == ("javac",)
    assert config.runtime == ("java",)
    assert config.timeout_seconds == 25
    assert config.source_suffix == ".java"
    assert config.artifact_suffix == ".class"
    assert config.public_type_prefix == "public class "
    assert config.temp_root is None


def test_string_command_is_normalized() -> None:
    config = RunnerConfig(compiler="javac", runtime=["java", "-Xss1m"])  # type: ignore[arg-type]
    assert config.compiler == ("javac",)
    assert config.runtime == ("java", "-Xss1m")


def test_rejects_non_positive_timeout() -> None:
    with pytest.raises(ValueError, match="timeout_seconds"):
        RunnerConfig(timeout_seconds=0)


def test_rejects_empty_command() -> None:
    with pytest.raises(ValueError, match="compiler"):
        RunnerConfig(compiler=())


def test_rejects_suffix_without_dot() -> None:
    with pytest.raises(ValueError, match="source_suffix"):
        RunnerConfig(source_suffix="java")


def test_from_file_reads_runner_table(tmp_path: Path) -> None:
    path = tmp_path / "runner.toml"
    path.write_text(
        '[runner]\ncompiler = ["/opt/jdk/bin/javac"]\ntimeout_seconds = 3\ntemp_root = "/var/tmp"\n',
        encoding="utf-8",
    )
    config = RunnerConfig.from_file(str(path))
    assert config.compiler == ("/opt/jdk/bin/javac",)
    assert config.runtime == ("java",)
    assert config.timeout_seconds == 3
    assert config.temp_root == "/var/tmp"
    assert config.config_path == str(path)


def test_from_file_accepts_top_level_keys(tmp_path: Path) -> None:
    path = tmp_path / "runner.toml"
    path.write_text('runtime = "java"\ntimeout_seconds = 10\n', encoding="utf-8")
    config = RunnerConfig.from_file(str(path))
    assert config.runtime == ("java",)
    assert config.timeout_seconds == 10


def test_from_file_rejects_bad_command_type(tmp_path: Path) -> None:
    path = tmp_path / "runner.toml"
    path.write_text("[runner]\ncompiler = [1, 2]\n", encoding="utf-8")
    with pytest.raises(ValueError, match="compiler"):
        RunnerConfig.from_file(str(path))


def test_from_file_missing_path() -> None:
    with pytest.raises(ValueError, match="not found"):
        RunnerConfig.from_file("/nonexistent/runner.toml")
