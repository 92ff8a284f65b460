from __future__ import annotations

PUBLIC_CLASS_PREFIX = "public class "


def extract_public_type_name(source_text: str, prefix: str = PUBLIC_CLASS_PREFIX) -> str | None:
    """Return the identifier of the first public top-level class in `source_text`.

    The scan is textual, not a parse: the first line whose stripped text starts
    with `prefix` wins, and the name ends at the first whitespace or `{`.
    A prefix inside a comment or string literal still matches, and only the
    first declaration is seen. Returns None when no line matches or the
    matching line carries no name. An empty name such as `public class {` is
    reported as not found here instead of being handed to the compiler.

    Example:
        ```python
        extract_public_type_name("public class Test extends Base {")  # "Test"
        ```
    """
    for line in source_text.split("\n"):
        stripped = line.strip()
        if not stripped.startswith(prefix):
            continue
        name = stripped[len(prefix):]
        for index, char in enumerate(name):
            if char.isspace() or char == "{":
                name = name[:index]
                break
        return name.strip() or None
    return None
