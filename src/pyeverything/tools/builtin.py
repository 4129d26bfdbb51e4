from __future__ import annotations

from .registry import ToolRegistry

from .builtin_tools.file_read import ReadFileTool
from .builtin_tools.file_write import WriteFileTool
from .builtin_tools.listdir import ListDirTool
from .builtin_tools.system_info_tool import SystemInfoTool
from .builtin_tools.http_tool import HttpRequestTool
from .builtin_tools.command_tool import RunCommandTool

def register_builtin_tools(registry: ToolRegistry) -> None:
    # Order here is the order tools/list reports.
    registry.register(ReadFileTool())
    registry.register(WriteFileTool())
    registry.register(ListDirTool())
    registry.register(SystemInfoTool())
    registry.register(HttpRequestTool())
    registry.register(RunCommandTool())

def build_registry() -> ToolRegistry:
    """The fixed tool catalog, frozen after registration."""
    registry = ToolRegistry()
    register_builtin_tools(registry)
    return registry.freeze()
