from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .base import ToolContext, ToolResult, ToolSpec
from .errors import ErrorKind, ToolError
from .registry import ToolRegistry
from .validation import coerce_arguments


def format_reported_failure(exc: BaseException) -> str:
    """Text of a failure reported as tool output ("report" policy)."""
    stderr = getattr(exc, "stderr", "") or ""
    return f"Error: {exc}\n{stderr}"


@dataclass
class Dispatcher:
    """Routes a named call to its tool and normalizes the outcome.

    Every call resolves to exactly one ToolResult or one ToolError:
      - unknown name -> NOT_FOUND, before anything else runs
      - bad argument shape -> INVALID_ARGUMENTS, before the handler runs
      - handler exception -> INTERNAL_ERROR with the original message, or a
        text result for tools whose spec uses the "report" failure policy
    """

    registry: ToolRegistry
    ctx: ToolContext

    def list_tools(self) -> list[ToolSpec]:
        return self.registry.list_specs()

    def call_tool(self, name: str, arguments: Any = None) -> ToolResult:
        tool = self.registry.get_optional(name)
        if tool is None:
            raise ToolError(ErrorKind.NOT_FOUND, f"Unknown tool: {name}")

        args = coerce_arguments(tool.spec.parameters, arguments)

        try:
            return tool.execute(self.ctx, args)
        except ToolError:
            raise
        except Exception as e:
            if tool.spec.failure_policy == "report":
                return ToolResult.text(format_reported_failure(e))
            raise ToolError(ErrorKind.INTERNAL_ERROR, str(e) or type(e).__name__) from e
