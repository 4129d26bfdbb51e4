from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Optional

from .base import Tool, ToolSpec

@dataclass
class ToolRegistry:
    _tools: Dict[str, Tool] = None  # type: ignore
    _frozen: bool = False

    def __post_init__(self):
        if self._tools is None:
            self._tools = {}

    def register(self, tool: Tool) -> None:
        if self._frozen:
            raise RuntimeError("Tool registry is frozen; tools can only be registered at startup")
        name = tool.spec.name
        if name in self._tools:
            raise ValueError(f"Tool already registered: {name}")
        self._tools[name] = tool

    def freeze(self) -> "ToolRegistry":
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def get(self, name: str) -> Tool:
        if name not in self._tools:
            raise KeyError(f"Unknown tool: {name}")
        return self._tools[name]

    def get_optional(self, name: str) -> Optional[Tool]:
        """Return a tool if registered, otherwise None."""
        return self._tools.get(name)

    def list_specs(self) -> list[ToolSpec]:
        return [t.spec for t in self._tools.values()]

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, name: object) -> bool:
        return name in self._tools
