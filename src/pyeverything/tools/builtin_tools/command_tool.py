from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ..base import ToolSpec, ToolResult, ToolContext
from ...util.fs import resolve_path
from ...util.subprocess import CommandFailed, run_cmd, shell_argv

@dataclass
class RunCommandTool:
    # "report": a failed or unspawnable command is returned to the caller as
    # "Error: ..." text, never as a dispatch error.
    spec: ToolSpec = ToolSpec(
        name="run_command",
        description="Execute a system command",
        failure_policy="report",
        parameters={
            "type": "object",
            "properties": {
                "command": {"type": "string", "description": "Command to execute"},
                "cwd": {"type": "string", "description": "Working directory"},
            },
            "required": ["command"],
        },
    )

    def execute(self, ctx: ToolContext, args: dict[str, Any]) -> ToolResult:
        command = args["command"]
        cwd = args.get("cwd")
        workdir = str(resolve_path(Path(ctx.cwd), cwd)) if cwd else ctx.cwd

        res = run_cmd(shell_argv(command), cwd=workdir, timeout=None)
        if res.returncode != 0:
            raise CommandFailed(command, res)
        return ToolResult.text(res.stdout)
