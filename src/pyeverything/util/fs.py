from __future__ import annotations
from pathlib import Path

def resolve_path(cwd: Path, path_str: str) -> Path:
    """Anchor a relative path at cwd. Absolute paths are returned as given.

    Paths are not confined to cwd and symlinks are not resolved.
    """
    p = Path(path_str)
    if not p.is_absolute():
        p = Path(cwd) / p
    return p

def read_text(path: Path) -> str:
    return path.read_text(encoding="utf-8", errors="replace")

def write_text(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
