from __future__ import annotations

import json
import logging
import time
from collections.abc import Mapping
from typing import Any

from .config import RunnerConfig
from .execution.engine import ExecutionEngine
from .result import FailureKind, assemble_result
from .runner import NamingMode, run_snippet
from .types import ExecutionRequest

logger = logging.getLogger(__name__)


def _optional_str(data: Mapping[str, Any], key: str) -> str | None:
    """Read an optional string field, rejecting other types.

    Example:
        ```python
        filename = _optional_str({"filename": "Test.java"}, "filename")
        ```
    """
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"'{key}' must be a string")
    return value


def parse_event(event: Mapping[str, Any]) -> ExecutionRequest:
    """Decode a request event into an ExecutionRequest.

    The fields may sit at the top level or under `body`, which is either a
    mapping or a JSON-encoded string. Raises ValueError on malformed input.

    Example:
        ```python
        req = parse_event({"body": '{"code": "public class A {}", "language": "java"}'})
        ```
    """
    if not isinstance(event, Mapping):
        raise ValueError("Event must be a JSON object")
    data: Any = event
    if "body" in event:
        data = event["body"]
        if isinstance(data, (str, bytes, bytearray)):
            try:
                data = json.loads(data)
            except (ValueError, RecursionError) as exc:
                raise ValueError(f"Invalid JSON body: {exc}") from exc
        if not isinstance(data, Mapping):
            raise ValueError("'body' must be a JSON object")
    code = data.get("code")
    if not isinstance(code, str):
        raise ValueError("Missing required field: code")
    return ExecutionRequest(
        source_text=code,
        language=_optional_str(data, "language") or "java",
        filename=_optional_str(data, "filename"),
    )


def handle_event(
    event: Mapping[str, Any],
    *,
    mode: NamingMode | str = NamingMode.DERIVED,
    engine: ExecutionEngine | None = None,
    config: RunnerConfig | None = None,
    config_file: str | None = None,
) -> dict[str, Any]:
    """Handle one request event and return the `{statusCode, body}` response.

    The status is always 200; every failure, including a malformed event, is
    reported inside the body.

    Example:
        ```python
        response = handle_event({"code": code, "language": "java"}, mode="derived")
        ```
    """
    started_at = time.monotonic()
    try:
        request = parse_event(event)
    except ValueError as exc:
        logger.info("Rejected malformed event: %s", exc)
        return assemble_result(
            started_at,
            success=False,
            error=str(exc),
            error_kind=FailureKind.UNEXPECTED,
        ).to_response()
    result = run_snippet(
        request,
        mode=mode,
        engine=engine,
        config=config,
        config_file=config_file,
    )
    return result.to_response()
