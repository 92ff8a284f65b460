"""Stand-in for `java -cp <dir> <Name>` used by the test suite.

Interprets a handful of statements from the "class file" written by
fake_javac.py: println to stdout/stderr, System.exit(n) and `while (true)`.
"""

from __future__ import annotations

import os
import re
import sys
import time
from pathlib import Path

_, flag, classpath, name = sys.argv
assert flag == "-cp"

pid_file = os.environ.get("FAKE_JAVA_PIDFILE")
if pid_file:
    Path(pid_file).write_text(str(os.getpid()), encoding="utf-8")

class_file = Path(classpath) / f"{name}.class"
if not class_file.exists():
    sys.stderr.write(f"Error: Could not find or load main class {name}\n")
    raise SystemExit(1)

for line in class_file.read_text(encoding="utf-8").splitlines():
    out = re.search(r'System\.out\.println\("(.*)"\)', line)
    if out:
        sys.stdout.write(out.group(1) + "\n")
        sys.stdout.flush()
    err = re.search(r'System\.err\.println\("(.*)"\)', line)
    if err:
        sys.stderr.write(err.group(1) + "\n")
    if "while (true)" in line:
        while True:
            time.sleep(0.1)
    code = re.search(r"System\.exit\((\d+)\)", line)
    if code:
        raise SystemExit(int(code.group(1)))
