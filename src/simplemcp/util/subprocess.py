from __future__ import annotations
import subprocess
from dataclasses import dataclass
from typing import Sequence, Optional

@dataclass
class CmdResult:
    returncode: int
    stdout: str
    stderr: str

def run_cmd(cmd: Sequence[str], cwd: str, timeout: Optional[float]=120) -> CmdResult:
    """Run an argument vector without a shell and capture its output.

    Raises OSError when the program cannot be spawned and
    subprocess.TimeoutExpired when it outlives timeout.
    """
    p = subprocess.run(
        list(cmd),
        cwd=cwd,
        text=True,
        capture_output=True,
        timeout=timeout,
        shell=False,
        stdin=subprocess.DEVNULL,
        errors="replace",
    )
    return CmdResult(p.returncode, p.stdout, p.stderr)
