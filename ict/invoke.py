"""Print or execute an assembled runner command."""

from __future__ import annotations

import shutil
import subprocess
import sys
from typing import Sequence

from ict.assemble import format_command
from ict.shared.errors import RunnerExecutionError


def run(argv: Sequence[str], *, dry_run: bool = False) -> int:
    """Print the command, then run it unless this is a dry run.

    The child shares this process's stdout and stderr so its output
    streams live. Its exit status is returned unchanged.

    Raises:
        RunnerExecutionError: If the process cannot be started.
    """
    print("Raw Bazel command to be invoked: ")
    print(f"$ {format_command(argv)}", flush=True)
    if dry_run:
        return 0

    # On Windows, resolve the executable path to handle .cmd/.bat files
    resolved_cmd = list(argv)
    if sys.platform == "win32" and argv:
        resolved = shutil.which(argv[0])
        if resolved:
            resolved_cmd[0] = resolved

    try:
        process = subprocess.Popen(resolved_cmd)
    except OSError as e:
        raise RunnerExecutionError(e.strerror or str(e), argv) from e

    while True:
        try:
            return process.wait()
        except KeyboardInterrupt:
            # The child got the same interrupt; let it shut down and report
            continue
