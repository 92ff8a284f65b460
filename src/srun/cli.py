from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from functools import partial
from pathlib import Path
from typing import Any, Never, Sequence

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich_argparse import RawTextRichHelpFormatter
from snippet_runner import (
    ExecutionRequest,
    ExecutionResult,
    NamingMode,
    RunnerConfig,
    handle_event,
    probe_toolchain,
    run_snippet,
)

_CONSOLE = Console(no_color=False)


class _CLIHelpFormatter(RawTextRichHelpFormatter):
    """Rich formatter with explicit high-contrast CLI styles.

    Example:
        ```python
        parser = argparse.ArgumentParser(formatter_class=_CLIHelpFormatter)
        ```
    """

    styles = {
        "argparse.args": "bold cyan",
        "argparse.groups": "bold magenta",
        "argparse.help": "white",
        "argparse.metavar": "bold yellow",
        "argparse.prog": "bold bright_blue",
        "argparse.syntax": "bold bright_white",
        "argparse.text": "bright_white",
    }


_HELP_FORMATTER = partial(
    _CLIHelpFormatter,
    max_help_position=34,
    width=120,
)


class _RichArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that renders errors via Rich.

    Example:
        ```python
        parser = _RichArgumentParser(prog="python -m srun")
        ```
    """

    def error(self, message: str) -> Never:
        """Render parse errors with Rich and exit.

        Example:
            ```python
            # parser.error("invalid usage")
            ```
        """
        _CONSOLE.print(Panel.fit(f"[bold red]Error:[/bold red] {message}", border_style="red"))
        self.print_help()
        raise SystemExit(2)


def _configure_logging(verbose: bool) -> None:
    """Route library logs through Rich on stderr.

    Example:
        ```python
        _configure_logging(verbose=True)
        ```
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _add_config_options(parser: argparse.ArgumentParser) -> None:
    """Add the shared --config option to a subcommand parser.

    Example:
        ```python
        _add_config_options(run_cmd)
        ```
    """
    parser.add_argument(
        "--config",
        help="Path to a runner TOML file (settings may sit under a `runner` table).",
    )


def _add_mode_option(parser: argparse.ArgumentParser) -> None:
    """Add the shared --mode option to a subcommand parser.

    Example:
        ```python
        _add_mode_option(run_cmd)
        ```
    """
    parser.add_argument(
        "--mode",
        choices=[mode.value for mode in NamingMode],
        default=NamingMode.DERIVED.value,
        help=(
            "How the class file is named (default: derived).\n"
            "derived: use the first `public class` in the source.\n"
            "fixed: use --filename (or the file's own name) as-is."
        ),
    )


def build_parser() -> argparse.ArgumentParser:
    """Build CLI parser for snippet-runner.

    Example:
        ```python
        parser = build_parser()
        ```
    """
    parser = _RichArgumentParser(
        prog="python -m srun",
        description=(
            "snippet-runner CLI\n"
            "Compile and run one Java snippet with javac/java under a wall-clock deadline.\n"
            "Temporary files are removed after every run."
        ),
        epilog=(
            "Quick Examples:\n"
            "  python -m srun run Hello.java\n"
            "  python -m srun run snippet.txt --mode fixed --filename Hello.java\n"
            "  python -m srun run Loop.java --timeout-seconds 5 --json\n"
            "  python -m srun invoke event.json\n"
            "  python -m srun check"
        ),
        formatter_class=_HELP_FORMATTER,
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show debug logs for each pipeline stage.",
    )

    sub = parser.add_subparsers(
        dest="command",
        required=True,
        parser_class=_RichArgumentParser,
    )

    run_cmd = sub.add_parser(
        "run",
        help="Compile and run a Java source file.",
        description=(
            "Compile and run one source file.\n"
            "Prints captured output, error text, and elapsed time."
        ),
        epilog=(
            "Examples:\n"
            "  python -m srun run Hello.java\n"
            "  python -m srun run - < Hello.java"
        ),
        formatter_class=_HELP_FORMATTER,
    )
    run_cmd.add_argument("source", help="Source file path, or '-' to read stdin.")
    _add_mode_option(run_cmd)
    run_cmd.add_argument(
        "--filename",
        help="Filename used in fixed mode (default: the source file's name).",
    )
    run_cmd.add_argument(
        "--timeout-seconds",
        type=float,
        help="Override the execution deadline (default: 25).",
    )
    run_cmd.add_argument(
        "--json",
        action="store_true",
        help="Print the response body as JSON instead of panels.",
    )
    _add_config_options(run_cmd)

    invoke_cmd = sub.add_parser(
        "invoke",
        help="Handle a JSON request event and print the response.",
        description=(
            "Read a request event ({code, language, filename} or {body: ...})\n"
            "and print the {statusCode, body} response as JSON."
        ),
        epilog=(
            "Examples:\n"
            "  python -m srun invoke event.json\n"
            "  echo '{\"code\": \"...\"}' | python -m srun invoke -"
        ),
        formatter_class=_HELP_FORMATTER,
    )
    invoke_cmd.add_argument("event", help="Event JSON file path, or '-' to read stdin.")
    _add_mode_option(invoke_cmd)
    _add_config_options(invoke_cmd)

    check_cmd = sub.add_parser(
        "check",
        help="Check that the compiler and runtime are on PATH.",
        description="Resolve the configured compiler and runtime executables.",
        formatter_class=_HELP_FORMATTER,
    )
    _add_config_options(check_cmd)

    return parser


def _read_input(location: str) -> str:
    """Read text from a file path, or from stdin for '-'.

    Example:
        ```python
        code = _read_input("Hello.java")
        ```
    """
    if location == "-":
        return sys.stdin.read()
    return Path(location).read_text(encoding="utf-8")


def _load_config(args: argparse.Namespace) -> RunnerConfig:
    """Build the effective config from --config and --timeout-seconds.

    Example:
        ```python
        config = _load_config(args)
        ```
    """
    config = RunnerConfig.from_file(args.config) if args.config else RunnerConfig()
    timeout = getattr(args, "timeout_seconds", None)
    if timeout is not None:
        config = replace(config, timeout_seconds=timeout)
    return config


def _print_result(result: ExecutionResult) -> None:
    """Render a run result as output/error panels and a summary table.

    Example:
        ```python
        _print_result(result)
        ```
    """
    if result.output:
        _CONSOLE.print(Panel(Text(result.output.rstrip("\n")), title="Output", border_style="green"))
    if result.error:
        _CONSOLE.print(Panel(Text(result.error.rstrip("\n")), title="Error", border_style="red"))
    table = Table(title="Run Summary")
    table.add_column("Success", style="cyan")
    table.add_column("Failure", style="magenta")
    table.add_column("Time (ms)")
    table.add_column("Memory (bytes)")
    table.add_row(
        "yes" if result.success else "no",
        result.error_kind.value if result.error_kind else "-",
        str(result.execution_time_ms),
        str(result.memory_used_bytes),
    )
    _CONSOLE.print(table)


def _print_json(payload: dict[str, Any]) -> None:
    """Print a JSON payload without Rich markup processing.

    Example:
        ```python
        _print_json({"statusCode": 200})
        ```
    """
    _CONSOLE.print_json(json.dumps(payload))


def main(argv: Sequence[str] | None = None) -> int:
    """Run the `srun` CLI command handler.

    Example:
        ```python
        code = main(["run", "Hello.java"])
        ```
    """
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    _configure_logging(args.verbose)

    try:
        config = _load_config(args)
    except (OSError, ValueError) as exc:
        _CONSOLE.print(Panel.fit(f"[bold red]Invalid config:[/bold red] {exc}", border_style="red"))
        return 2

    if args.command == "run":
        try:
            code = _read_input(args.source)
        except (OSError, UnicodeDecodeError) as exc:
            _CONSOLE.print(Panel.fit(f"Could not read {args.source}: {exc}", style="bold red"))
            return 2
        filename = args.filename or (Path(args.source).name if args.source != "-" else None)
        result = run_snippet(
            ExecutionRequest(source_text=code, language="java", filename=filename),
            mode=args.mode,
            config=config,
        )
        if args.json:
            _print_json(result.to_body())
        else:
            _print_result(result)
        return 0 if result.success else 1
    if args.command == "invoke":
        try:
            event = json.loads(_read_input(args.event))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            _CONSOLE.print(Panel.fit(f"Could not load event: {exc}", style="bold red"))
            return 2
        if not isinstance(event, dict):
            _CONSOLE.print(Panel.fit("Event must be a JSON object", style="bold red"))
            return 2
        _print_json(handle_event(event, mode=args.mode, config=config))
        return 0
    if args.command == "check":
        status = probe_toolchain(config)
        table = Table(title="Toolchain")
        table.add_column("Role", style="cyan")
        table.add_column("Command", style="magenta")
        table.add_column("Resolved Path")
        table.add_row("compiler", " ".join(config.compiler), status.compiler_path or "missing")
        table.add_row("runtime", " ".join(config.runtime), status.runtime_path or "missing")
        _CONSOLE.print(table)
        if not status.available:
            _CONSOLE.print(Panel.fit(status.reason or "Toolchain unavailable", style="bold red"))
            return 1
        _CONSOLE.print(Panel.fit("Toolchain ready", style="bold green"))
        return 0

    parser.error("Unhandled command")
    return 2
