"""Tests for http_request against a local HTTP server."""

import json
import socket
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest

from pyeverything.tools.errors import ErrorKind, ToolError


class _Handler(BaseHTTPRequestHandler):
    def _send(self, status: int, body: str) -> None:
        data = body.encode("utf-8")
        self.send_response(status)
        self.send_header("Content-Type", "text/plain; charset=utf-8")
        self.send_header("Content-Length", str(len(data)))
        self.send_header("X-Echo-Method", self.command)
        self.end_headers()
        self.wfile.write(data)

    def _redirect(self) -> bool:
        # /redirect/<code> points at /echo
        if not self.path.startswith("/redirect/"):
            return False
        length = int(self.headers.get("Content-Length") or 0)
        if length:
            self.rfile.read(length)
        self.send_response(int(self.path.rsplit("/", 1)[1]))
        self.send_header("Location", "/echo")
        self.send_header("Content-Length", "0")
        self.end_headers()
        return True

    def do_GET(self):
        if self._redirect():
            return
        if self.path == "/missing":
            self._send(404, "not here")
        elif self.path == "/headers":
            self._send(200, self.headers.get("X-Token", ""))
        else:
            self._send(200, "hello")

    def _echo_body(self):
        if self._redirect():
            return
        length = int(self.headers.get("Content-Length") or 0)
        body = self.rfile.read(length).decode("utf-8") if length else ""
        self._send(201 if self.command == "POST" else 200, body)

    do_POST = _echo_body
    do_PUT = _echo_body
    do_DELETE = _echo_body

    def log_message(self, format, *args):
        pass


@pytest.fixture
def base_url(monkeypatch):
    for var in ("http_proxy", "HTTP_PROXY", "https_proxy", "HTTPS_PROXY", "all_proxy", "ALL_PROXY"):
        monkeypatch.delenv(var, raising=False)
    server = ThreadingHTTPServer(("127.0.0.1", 0), _Handler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        yield f"http://127.0.0.1:{server.server_address[1]}"
    finally:
        server.shutdown()
        server.server_close()


def _request(dispatcher, **args):
    return json.loads(dispatcher.call_tool("http_request", args).joined_text)


class TestHttpRequest:
    def test_get(self, dispatcher, base_url):
        out = _request(dispatcher, url=f"{base_url}/")
        assert out["status"] == 200
        assert out["data"] == "hello"
        assert out["headers"]["x-echo-method"] == "GET"
        assert out["headers"]["content-type"].startswith("text/plain")

    def test_not_found_is_a_result(self, dispatcher, base_url):
        result = dispatcher.call_tool("http_request", {"url": f"{base_url}/missing"})
        assert '"status": 404' in result.joined_text
        assert json.loads(result.joined_text)["data"] == "not here"

    def test_post_body(self, dispatcher, base_url):
        out = _request(dispatcher, url=f"{base_url}/echo", method="POST", body="payload")
        assert out["status"] == 201
        assert out["data"] == "payload"
        assert out["headers"]["x-echo-method"] == "POST"

    @pytest.mark.parametrize("method", ["PUT", "DELETE", "delete"])
    def test_other_methods(self, dispatcher, base_url, method):
        out = _request(dispatcher, url=f"{base_url}/echo", method=method)
        assert out["headers"]["x-echo-method"] == method.upper()

    def test_headers_are_sent(self, dispatcher, base_url):
        out = _request(dispatcher, url=f"{base_url}/headers", headers={"X-Token": "abc"})
        assert out["data"] == "abc"

    def test_unsupported_method(self, dispatcher, base_url):
        with pytest.raises(ToolError) as exc:
            dispatcher.call_tool("http_request", {"url": base_url, "method": "PATCH"})
        assert exc.value.kind is ErrorKind.INVALID_ARGUMENTS

    def test_unreachable_host(self, dispatcher):
        sock = socket.socket()
        sock.bind(("127.0.0.1", 0))
        port = sock.getsockname()[1]
        sock.close()
        with pytest.raises(ToolError) as exc:
            dispatcher.call_tool("http_request", {"url": f"http://127.0.0.1:{port}/"})
        assert exc.value.kind is ErrorKind.INTERNAL_ERROR
        assert exc.value.message

    def test_malformed_url(self, dispatcher):
        with pytest.raises(ToolError) as exc:
            dispatcher.call_tool("http_request", {"url": "not a url"})
        assert exc.value.kind is ErrorKind.INTERNAL_ERROR

    @pytest.mark.parametrize("code", [307, 308])
    def test_redirect_keeps_method_and_body(self, dispatcher, base_url, code):
        out = _request(dispatcher, url=f"{base_url}/redirect/{code}", method="PUT", body="payload")
        assert out["status"] == 200
        assert out["headers"]["x-echo-method"] == "PUT"
        assert out["data"] == "payload"

    def test_redirect_delete_is_followed(self, dispatcher, base_url):
        out = _request(dispatcher, url=f"{base_url}/redirect/302", method="DELETE")
        assert out["status"] == 200
        assert out["headers"]["x-echo-method"] == "DELETE"

    def test_see_other_switches_to_get(self, dispatcher, base_url):
        out = _request(dispatcher, url=f"{base_url}/redirect/303", method="POST", body="payload")
        assert out["status"] == 200
        assert out["headers"]["x-echo-method"] == "GET"
        assert out["data"] == "hello"

    @pytest.mark.parametrize("scheme", ["file", "data", "ftp"])
    def test_non_http_scheme_rejected(self, dispatcher, tmp_path, scheme):
        secret = tmp_path / "secret.txt"
        secret.write_text("local-file")
        url = {
            "file": secret.as_uri(),
            "data": "data:text/plain,local-file",
            "ftp": "ftp://127.0.0.1/secret.txt",
        }[scheme]
        with pytest.raises(ToolError) as exc:
            dispatcher.call_tool("http_request", {"url": url})
        assert exc.value.kind is ErrorKind.INTERNAL_ERROR
        assert "Unsupported URL scheme" in exc.value.message
