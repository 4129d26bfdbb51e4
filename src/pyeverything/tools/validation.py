"""Argument shape checking for tool calls.

The policy is loose on purpose: a scalar supplied where a string is expected
is converted with ``str()`` instead of being rejected, and booleans accept the
usual string spellings. Only structural problems are errors: a missing
required field, a non-object where an object is expected, or a value outside
an enum.
"""

from __future__ import annotations

from typing import Any

from .errors import ErrorKind, ToolError

_TRUE_STRINGS = {"true", "1", "yes", "on"}
_FALSE_STRINGS = {"false", "0", "no", "off", ""}


def _invalid(msg: str) -> ToolError:
    return ToolError(ErrorKind.INVALID_ARGUMENTS, msg)


def _coerce_string(name: str, value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list)):
        raise _invalid(f"Field '{name}' must be a string")
    return str(value)


def _coerce_boolean(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        v = value.strip().lower()
        if v in _TRUE_STRINGS:
            return True
        if v in _FALSE_STRINGS:
            return False
    return bool(value)


def _coerce_field(name: str, prop: dict[str, Any], value: Any) -> Any:
    kind = prop.get("type")
    if kind == "string":
        out = _coerce_string(name, value)
        allowed = prop.get("enum")
        if allowed:
            out = out.upper()
            if out not in allowed:
                raise _invalid(f"Field '{name}' must be one of {', '.join(allowed)}; got '{value}'")
        return out
    if kind == "boolean":
        return _coerce_boolean(value)
    if kind == "object":
        if not isinstance(value, dict):
            raise _invalid(f"Field '{name}' must be an object")
        return value
    return value


def coerce_arguments(schema: dict[str, Any], arguments: Any) -> dict[str, Any]:
    """Validate ``arguments`` against an object schema and return coerced args.

    Null values count as absent. Absent optional fields with a schema default
    get that default. Fields the schema does not declare are dropped.
    """
    if arguments is None:
        arguments = {}
    if not isinstance(arguments, dict):
        raise _invalid("Tool arguments must be an object")

    props: dict[str, Any] = schema.get("properties") or {}
    required = schema.get("required") or []

    missing = [r for r in required if arguments.get(r) is None]
    if missing:
        raise _invalid(f"Missing required argument(s): {', '.join(missing)}")

    out: dict[str, Any] = {}
    for name, prop in props.items():
        value = arguments.get(name)
        if value is None:
            if "default" in prop:
                out[name] = prop["default"]
            continue
        out[name] = _coerce_field(name, prop, value)
    return out
