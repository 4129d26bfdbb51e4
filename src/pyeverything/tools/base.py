from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Literal, Protocol

FailurePolicy = Literal["raise", "report"]

@dataclass(frozen=True)
class ToolSpec:
    name: str
    description: str
    parameters: dict[str, Any]   # JSONSchema
    # "raise": handler exceptions become INTERNAL_ERROR
    # "report": handler exceptions become an "Error: ..." text result
    failure_policy: FailurePolicy = "raise"

    def to_mcp(self) -> dict[str, Any]:
        return {"name": self.name, "description": self.description, "inputSchema": self.parameters}

class Tool(Protocol):
    spec: ToolSpec
    def execute(self, ctx: "ToolContext", args: dict[str, Any]) -> "ToolResult": ...

@dataclass(frozen=True)
class TextContent:
    text: str
    type: Literal["text"] = "text"

@dataclass
class ToolResult:
    content: list[TextContent] = field(default_factory=list)

    @staticmethod
    def text(text: str) -> "ToolResult":
        return ToolResult(content=[TextContent(text=text)])

    @property
    def joined_text(self) -> str:
        return "\n".join(part.text for part in self.content)

    def to_dict(self) -> dict[str, Any]:
        return {"content": [{"type": part.type, "text": part.text} for part in self.content]}

@dataclass
class ToolContext:
    # Base for relative paths and the default cwd of run_command.
    cwd: str
