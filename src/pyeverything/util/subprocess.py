from __future__ import annotations
import os
import subprocess
from dataclasses import dataclass
from typing import Sequence, Optional

@dataclass
class CmdResult:
    returncode: int
    stdout: str
    stderr: str

class CommandFailed(RuntimeError):
    """Non-zero exit of a shell command. Carries the captured streams."""

    def __init__(self, command: str, result: CmdResult):
        super().__init__(f"Command failed with exit code {result.returncode}: {command}")
        self.command = command
        self.returncode = result.returncode
        self.stdout = result.stdout
        self.stderr = result.stderr

def shell_argv(command: str) -> list[str]:
    if os.name == "nt":
        # Windows: let cmd.exe parse builtins and operators
        return ["cmd.exe", "/c", command]
    return ["/bin/sh", "-c", command]

def run_cmd(cmd: Sequence[str], cwd: Optional[str], timeout: Optional[int] = None) -> CmdResult:
    p = subprocess.run(
        list(cmd),
        cwd=cwd,
        text=True,
        encoding="utf-8",
        errors="replace",
        capture_output=True,
        timeout=timeout,
        shell=False,
    )
    return CmdResult(p.returncode, p.stdout, p.stderr)
