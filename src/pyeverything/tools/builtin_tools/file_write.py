from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ..base import ToolSpec, ToolResult, ToolContext
from ...util.fs import resolve_path, write_text

@dataclass
class WriteFileTool:
    spec: ToolSpec = ToolSpec(
        name="write_file",
        description="Write content to a file",
        parameters={
            "type": "object",
            "properties": {
                "path": {"type": "string", "description": "Path to write the file"},
                "content": {"type": "string", "description": "Content to write"},
            },
            "required": ["path", "content"],
        },
    )

    def execute(self, ctx: ToolContext, args: dict[str, Any]) -> ToolResult:
        path = args["path"]
        write_text(resolve_path(Path(ctx.cwd), path), args["content"])
        return ToolResult.text(f"File written successfully: {path}")
