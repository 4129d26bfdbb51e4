from __future__ import annotations

import json
import urllib.error
import urllib.parse
import urllib.request
from dataclasses import dataclass
from email.message import Message
from typing import Any

from ..base import ToolContext, ToolResult, ToolSpec

_SCHEMES = ("http", "https")


def _flatten_headers(headers: Message) -> dict[str, str]:
    # Repeated headers are joined with ", " and names lower-cased.
    out: dict[str, str] = {}
    for k, v in headers.items():
        key = k.lower()
        out[key] = f"{out[key]}, {v}" if key in out else v
    return out


class _FollowRedirects(urllib.request.HTTPRedirectHandler):
    """Follow redirects for every method, not only GET/HEAD.

    303 (and 301/302 after a POST) switch to a bodiless GET; anything else
    replays the original method and body.
    """

    def redirect_request(self, req, fp, code, msg, headers, newurl):
        method = req.get_method()
        if (code == 303 and method != "HEAD") or (code in (301, 302) and method == "POST"):
            method, data = "GET", None
        else:
            data = req.data
        hdrs = {
            k: v
            for k, v in req.headers.items()
            if data is not None or k.lower() not in ("content-length", "content-type")
        }
        return urllib.request.Request(
            newurl.replace(" ", "%20"),
            data=data,
            headers=hdrs,
            origin_req_host=req.origin_req_host,
            unverifiable=True,
            method=method,
        )

    # 308 only gained a handler in 3.11
    http_error_308 = urllib.request.HTTPRedirectHandler.http_error_302


_opener = urllib.request.build_opener(_FollowRedirects)


@dataclass
class HttpRequestTool:
    spec: ToolSpec = ToolSpec(
        name="http_request",
        description="Make an HTTP request",
        parameters={
            "type": "object",
            "properties": {
                "url": {"type": "string", "description": "URL to request"},
                "method": {
                    "type": "string",
                    "enum": ["GET", "POST", "PUT", "DELETE"],
                    "default": "GET",
                },
                "headers": {"type": "object", "description": "Request headers"},
                "body": {"type": "string", "description": "Request body"},
            },
            "required": ["url"],
        },
    )

    def execute(self, ctx: ToolContext, args: dict[str, Any]) -> ToolResult:
        url = args["url"]
        scheme = urllib.parse.urlsplit(url).scheme.lower()
        if scheme not in _SCHEMES:
            raise ValueError(f"Unsupported URL scheme: {scheme or url}")

        method = args.get("method") or "GET"
        headers = {str(k): str(v) for k, v in (args.get("headers") or {}).items()}
        body = args.get("body")
        data = body.encode("utf-8") if body else None

        req = urllib.request.Request(url, data=data, headers=headers, method=method)
        try:
            with _opener.open(req) as resp:
                status = resp.status
                resp_headers = _flatten_headers(resp.headers)
                raw = resp.read()
        except urllib.error.HTTPError as e:
            # 4xx/5xx are still a result here
            with e:
                status = e.code
                resp_headers = _flatten_headers(e.headers)
                raw = e.read()

        payload = {
            "status": status,
            "headers": resp_headers,
            "data": raw.decode("utf-8", errors="replace"),
        }
        return ToolResult.text(json.dumps(payload, ensure_ascii=False, indent=2))
