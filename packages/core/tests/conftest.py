"""Local HTTP stub server standing in for the GitHub and Slack APIs."""

import json
import threading
from http.server import BaseHTTPRequestHandler, HTTPServer

import pytest


class StubAPI:
    """Serves canned JSON responses keyed by request path and records every request."""

    def __init__(self):
        self.routes: dict[str, tuple[int, object]] = {}
        self.requests: list[dict] = []

    def route(self, path: str, status: int, body) -> None:
        self.routes[path] = (status, body)


def _handler_for(api: StubAPI):
    class Handler(BaseHTTPRequestHandler):
        def _respond(self):
            length = int(self.headers.get("Content-Length") or 0)
            body = self.rfile.read(length) if length else b""
            path = self.path.split("?", 1)[0]
            api.requests.append({"method": self.command, "path": path, "headers": self.headers, "body": body})
            status, payload = api.routes.get(path, (404, {"message": "Not Found"}))
            data = json.dumps(payload).encode()
            self.send_response(status)
            self.send_header("Content-Type", "application/json; charset=utf-8")
            self.send_header("Content-Length", str(len(data)))
            self.end_headers()
            self.wfile.write(data)

        do_GET = _respond
        do_POST = _respond

        def log_message(self, format, *args):
            pass

    return Handler


@pytest.fixture
def stub_api():
    api = StubAPI()
    server = HTTPServer(("127.0.0.1", 0), _handler_for(api))
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    api.url = f"http://127.0.0.1:{server.server_address[1]}"
    try:
        yield api
    finally:
        server.shutdown()
        server.server_close()
