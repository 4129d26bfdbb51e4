from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .config.loader import load_server_config
from .config.models import ServerConfig
from .mcp.models import ServerInfo
from .mcp.server import StdioServer
from .tools.base import ToolContext
from .tools.builtin import build_registry
from .tools.dispatcher import Dispatcher
from .tools.registry import ToolRegistry

@dataclass
class AppContext:
    cwd: Path
    config: ServerConfig
    tools: ToolRegistry
    dispatcher: Dispatcher

    @staticmethod
    def from_env(
        cwd: Path | None = None,
        config_path: Path | None = None,
        trace: bool | None = None,
        max_workers: int | None = None,
    ) -> "AppContext":
        """Build the registry and dispatcher.

        Precedence: defaults < config files < explicit CLI values. Without an
        explicit cwd, config files are looked up in the process directory and
        may move the working directory themselves.
        """
        config = load_server_config(cwd=cwd or Path.cwd(), explicit_path=config_path)
        if cwd is None:
            cwd = config.cwd or Path.cwd()
        if trace is not None:
            config.trace = trace
        if max_workers is not None:
            config.max_workers = max_workers

        tools = build_registry()
        dispatcher = Dispatcher(registry=tools, ctx=ToolContext(cwd=str(cwd)))
        return AppContext(cwd=cwd, config=config, tools=tools, dispatcher=dispatcher)

    def build_server(self) -> StdioServer:
        return StdioServer(
            self.dispatcher,
            ServerInfo(name=self.config.name, version=self.config.version),
            trace=self.config.trace,
            max_workers=self.config.max_workers,
        )
