from __future__ import annotations
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ..base import ToolSpec, ToolResult, ToolContext
from ...util.fs import resolve_path

def list_entries(directory: Path, recursive: bool) -> list[str]:
    """Full paths under directory, in os.scandir order.

    When recursive, a subdirectory is replaced in place by the files found
    beneath it; directories never appear in the output themselves.
    """
    entries: list[str] = []
    with os.scandir(directory) as it:
        for entry in it:
            full = directory / entry.name
            if recursive and entry.is_dir(follow_symlinks=False):
                entries.extend(list_entries(full, recursive))
            else:
                entries.append(str(full))
    return entries

@dataclass
class ListDirTool:
    spec: ToolSpec = ToolSpec(
        name="list_directory",
        description="List contents of a directory",
        parameters={
            "type": "object",
            "properties": {
                "path": {"type": "string", "description": "Directory path"},
                "recursive": {"type": "boolean", "description": "Whether to list recursively"},
            },
            "required": ["path"],
        },
    )

    def execute(self, ctx: ToolContext, args: dict[str, Any]) -> ToolResult:
        p = resolve_path(Path(ctx.cwd), args["path"])
        recursive = bool(args.get("recursive", False))
        return ToolResult.text("\n".join(list_entries(p, recursive)))
