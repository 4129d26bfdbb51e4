from __future__ import annotations

import json
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Iterable, TextIO

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from .models import ProtocolError, Request, ServerInfo, error_response, response
from ..tools.dispatcher import Dispatcher
from ..tools.errors import INTERNAL_ERROR, INVALID_PARAMS, METHOD_NOT_FOUND, ToolError

# stdout carries the protocol; diagnostics go to stderr.
console = Console(stderr=True)


class StdioServer:
    """Newline-delimited JSON-RPC 2.0 server for the tool dispatcher.

    Supported methods:
      - initialize -> {protocolVersion, capabilities, serverInfo}
      - ping -> {}
      - tools/list -> { tools: [{name, description, inputSchema}] }
      - tools/call -> { content: [{type: "text", text}] } or an error

    tools/call requests run on a thread pool, so a slow call does not hold up
    the requests read after it. Replies are written one line at a time under
    a lock and may come back in any order.
    """

    def __init__(
        self,
        dispatcher: Dispatcher,
        info: ServerInfo,
        *,
        trace: bool = False,
        max_workers: int = 8,
        diag: Console | None = None,
    ):
        self.dispatcher = dispatcher
        self.info = info
        self.trace = trace
        self.max_workers = max_workers
        self.diag = diag or console
        self._lock = threading.Lock()
        self._out: TextIO | None = None

    # ---- request handling ----

    def handle_request(self, req: Request) -> dict[str, Any]:
        """Produce the response for one parsed request. Never raises."""
        try:
            result = self._dispatch(req)
        except ToolError as e:
            return error_response(req.id, e.code, e.message)
        except ProtocolError as e:
            return error_response(req.id, e.code, e.message)
        except Exception as e:
            return error_response(req.id, INTERNAL_ERROR, str(e) or type(e).__name__)
        return response(req.id, result)

    def _dispatch(self, req: Request) -> Any:
        if req.method == "initialize":
            return self.info.initialize_result(req.params.get("protocolVersion"))
        if req.method == "ping":
            return {}
        if req.method == "tools/list":
            return {"tools": [spec.to_mcp() for spec in self.dispatcher.list_tools()]}
        if req.method == "tools/call":
            name = req.params.get("name")
            if not isinstance(name, str) or not name:
                raise ProtocolError(INVALID_PARAMS, "tools/call requires a tool name", req.id)
            return self.dispatcher.call_tool(name, req.params.get("arguments")).to_dict()
        raise ProtocolError(METHOD_NOT_FOUND, f"Unknown method: {req.method}", req.id)

    def handle_line(self, line: str) -> dict[str, Any] | None:
        """Parse and answer one input line. None means no reply is due."""
        line = line.strip()
        if not line:
            return None
        try:
            req = Request.from_obj(self._parse(line))
        except ProtocolError as e:
            return error_response(e.id, e.code, e.message)
        if req.is_notification:
            self._trace("notification", {"method": req.method})
            return None
        self._trace(f"request {req.id}", {"method": req.method, "params": req.params})
        msg = self.handle_request(req)
        self._trace(f"response {req.id}", msg)
        return msg

    @staticmethod
    def _parse(line: str) -> Any:
        try:
            return json.loads(line)
        except json.JSONDecodeError as e:
            raise ProtocolError.parse_error(str(e)) from e

    # ---- transport ----

    def _write(self, msg: dict[str, Any]) -> None:
        if self._out is None:
            raise RuntimeError("serve() has not been started")
        data = json.dumps(msg, ensure_ascii=False) + "\n"
        with self._lock:
            self._out.write(data)
            self._out.flush()

    def _answer(self, line: str) -> None:
        msg = self.handle_line(line)
        if msg is not None:
            self._write(msg)

    def serve(self, stdin: Iterable[str], stdout: TextIO) -> None:
        """Serve until stdin is exhausted, then wait for in-flight calls."""
        self._out = stdout
        self.diag.print(
            f"{self.info.name} {self.info.version} running on stdio "
            f"({len(self.dispatcher.list_tools())} tools)"
        )
        with ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix="tool") as pool:
            for line in stdin:
                if _is_tool_call(line):
                    pool.submit(self._answer, line).add_done_callback(self._report_crash)
                else:
                    self._answer(line)

    def _report_crash(self, fut: Future) -> None:
        exc = fut.exception()
        if exc is not None:
            self.diag.print(f"[red]Failed to write tool reply:[/red] {escape(str(exc))}")

    def _trace(self, title: str, data: Any) -> None:
        if not self.trace:
            return
        self.diag.print(
            Panel.fit(
                json.dumps(data, ensure_ascii=False, indent=2, default=str)[:4000],
                title=title,
                border_style="cyan",
            )
        )


def _is_tool_call(line: str) -> bool:
    # Cheap pre-check; the worker re-parses and handles malformed input.
    return '"tools/call"' in line
