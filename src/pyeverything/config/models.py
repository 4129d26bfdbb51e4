from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any


@dataclass
class ServerConfig:
    """Settings of the stdio server and CLI.

    The dispatcher never reads these; they only shape how it is bootstrapped.
    """

    name: str = "EverythingServer"
    version: str = "0.1.0"
    cwd: Path | None = None
    trace: bool = False
    max_workers: int = 8

    loaded_from: Path | None = None

    def apply_obj(self, obj: Any, *, base_dir: Path) -> None:
        """Overlay values from a parsed YAML mapping. Ill-typed values are ignored."""
        if not isinstance(obj, dict):
            return
        server = obj.get("server", {})
        if isinstance(server, dict):
            name = server.get("name")
            if isinstance(name, str) and name.strip():
                self.name = name.strip()
            version = server.get("version")
            if isinstance(version, (str, int, float)) and not isinstance(version, bool):
                self.version = str(version)
            workers = server.get("max_workers")
            if isinstance(workers, int) and not isinstance(workers, bool) and workers > 0:
                self.max_workers = workers

        cwd = obj.get("cwd")
        if isinstance(cwd, str) and cwd.strip():
            p = Path(cwd).expanduser()
            self.cwd = p if p.is_absolute() else (base_dir / p)

        trace = obj.get("trace")
        if isinstance(trace, bool):
            self.trace = trace
