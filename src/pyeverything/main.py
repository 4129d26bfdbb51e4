from __future__ import annotations

from pathlib import Path
import json
import sys
import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .app_context import AppContext
from .config.loader import ConfigError
from .tools.errors import ToolError


app = typer.Typer(add_completion=False, help="pyeverything: file, system, HTTP and shell tools over MCP stdio.")
# stdout is reserved for protocol/tool output
console = Console(stderr=True)


def _resolve_cwd(cwd: Path | None) -> Path | None:
    if cwd is None:
        return None
    cwd = Path(str(cwd)).expanduser()
    if not cwd.is_absolute():
        cwd = (Path.cwd() / cwd).resolve()
    if not cwd.is_dir():
        raise typer.BadParameter(f"--cwd must be an existing directory, got: {cwd}")
    return cwd


def _build_context(cwd: Path | None, config: Path | None, trace: bool | None = None, workers: int | None = None) -> AppContext:
    try:
        return AppContext.from_env(
            cwd=_resolve_cwd(cwd),
            config_path=config,
            trace=trace,
            max_workers=workers,
        )
    except ConfigError as e:
        raise typer.BadParameter(str(e), param_hint="--config")


def _parse_kv_args(items: list[str] | None) -> dict[str, str]:
    args: dict[str, str] = {}
    for it in (items or []):
        if "=" not in it:
            raise typer.BadParameter(f"Expected key=value, got: {it}", param_hint="--arg")
        k, v = it.split("=", 1)
        args[k.strip()] = v
    return args


@app.command()
def serve(
    config: Path = typer.Option(None, "--config", help="YAML config path (default: ./pyeverything.yaml if present)."),
    cwd: Path = typer.Option(None, "--cwd", help="Base directory for relative paths and commands. Defaults to current directory."),
    trace: bool = typer.Option(None, "--trace/--no-trace", help="Print every request and response to stderr."),
    workers: int = typer.Option(None, "--workers", min=1, help="Max concurrent tool calls."),
):
    """Serve the tool catalog over stdio (newline-delimited JSON-RPC)."""
    ctx = _build_context(cwd, config, trace, workers)
    server = ctx.build_server()
    if ctx.config.loaded_from:
        console.print(f"[dim]config: {ctx.config.loaded_from}[/dim]")
    try:
        server.serve(sys.stdin, sys.stdout)
    except KeyboardInterrupt:
        pass
    except Exception as e:
        console.print(f"[red]Server error:[/red] {escape(str(e))}")
        raise typer.Exit(code=1)


@app.command()
def tools(
    as_json: bool = typer.Option(False, "--json", help="Print the tools/list payload as JSON."),
):
    """List the available tools and their arguments."""
    ctx = _build_context(None, None)
    specs = ctx.dispatcher.list_tools()
    if as_json:
        typer.echo(json.dumps({"tools": [s.to_mcp() for s in specs]}, ensure_ascii=False, indent=2))
        return

    table = Table(title="pyeverything tools")
    table.add_column("name", style="bold", no_wrap=True)
    table.add_column("required")
    table.add_column("optional")
    table.add_column("description")
    for s in specs:
        props = s.parameters.get("properties", {})
        required = s.parameters.get("required", [])
        optional = [k for k in props if k not in required]
        table.add_row(
            s.name,
            ", ".join(f"{k}:{props[k].get('type')}" for k in required) or "-",
            ", ".join(f"{k}:{props[k].get('type')}" for k in optional) or "-",
            s.description,
        )
    Console().print(table)


@app.command()
def call(
    name: str = typer.Argument(..., help="Tool name (see `pyeverything tools`)."),
    arg: list[str] = typer.Option(None, "--arg", "-A", help="Tool argument as key=value. Repeatable."),
    json_args: str = typer.Option(None, "--json-args", help="Tool arguments as a JSON object; --arg values override."),
    cwd: Path = typer.Option(None, "--cwd", help="Base directory for relative paths and commands."),
    config: Path = typer.Option(None, "--config", help="YAML config path."),
):
    """Dispatch a single tool call in-process and print its text output."""
    args: dict = {}
    if json_args:
        try:
            parsed = json.loads(json_args)
        except json.JSONDecodeError as e:
            raise typer.BadParameter(f"Invalid JSON: {e}", param_hint="--json-args")
        if not isinstance(parsed, dict):
            raise typer.BadParameter("Expected a JSON object", param_hint="--json-args")
        args.update(parsed)
    args.update(_parse_kv_args(arg))

    ctx = _build_context(cwd, config)
    try:
        result = ctx.dispatcher.call_tool(name, args)
    except ToolError as e:
        console.print(f"[red]{e.kind.name}[/red] ({e.code}): {escape(e.message)}", highlight=False)
        raise typer.Exit(code=1)
    typer.echo(result.joined_text, nl=False)


if __name__ == "__main__":
    app()
