from __future__ import annotations
import json
import tempfile
from pathlib import Path

from pyeverything.tools.base import ToolContext
from pyeverything.tools.builtin import build_registry
from pyeverything.tools.dispatcher import Dispatcher
from pyeverything.tools.errors import ToolError

def main():
    with tempfile.TemporaryDirectory() as td:
        cwd = Path(td)
        d = Dispatcher(registry=build_registry(), ctx=ToolContext(cwd=str(cwd)))

        # write (creates parents)
        print(d.call_tool("write_file", {"path": "a/b/c.txt", "content": "hello\nworld\n"}).joined_text)

        # read
        print("READ:", d.call_tool("read_file", {"path": "a/b/c.txt"}).joined_text.strip())

        # list
        print("LIST:", d.call_tool("list_directory", {"path": "a"}).joined_text)
        print("LIST -R:", d.call_tool("list_directory", {"path": "a", "recursive": True}).joined_text)

        # system info
        info = json.loads(d.call_tool("system_info", {}).joined_text)
        print("SYSTEM:", info["platform"], info["arch"], f"{len(info['cpus'])} cpus")

        # commands: failures come back as text
        print("CMD:", d.call_tool("run_command", {"command": "echo ok"}).joined_text, end="")
        print("CMD FAIL:", d.call_tool("run_command", {"command": "exit 1"}).joined_text)

        # errors
        for name, args in [("nope", {}), ("read_file", {}), ("read_file", {"path": "missing.txt"})]:
            try:
                d.call_tool(name, args)
            except ToolError as e:
                print(f"ERR {name}: {e.kind.name} {e.code} {e.message}")

if __name__ == "__main__":
    main()
