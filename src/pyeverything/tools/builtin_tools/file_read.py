from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ..base import ToolSpec, ToolResult, ToolContext
from ...util.fs import resolve_path, read_text

@dataclass
class ReadFileTool:
    spec: ToolSpec = ToolSpec(
        name="read_file",
        description="Read contents of a file",
        parameters={
            "type": "object",
            "properties": {
                "path": {"type": "string", "description": "Path to the file"},
            },
            "required": ["path"],
        },
    )

    def execute(self, ctx: ToolContext, args: dict[str, Any]) -> ToolResult:
        p = resolve_path(Path(ctx.cwd), args["path"])
        # Missing files and directories surface as the native OSError.
        return ToolResult.text(read_text(p))
