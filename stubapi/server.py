"""HTTP front end: routing, CORS handling and the command that starts the server."""

from __future__ import annotations

import logging
import re
import sys
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path
from typing import Callable, Sequence
from urllib.parse import unquote, urlsplit

from .app import AppState
from .cli_args import parse_args
from .errors import AppError
from .transactions import (
    VERSION,
    Response,
    api_redirect,
    build_endpoints_from_spec,
    dynamic_handler,
    health_check,
    list_endpoints,
    show_openapi_spec,
    swagger_ui,
)

logger = logging.getLogger(__name__)

_GET_ROUTES: dict[str, Callable[[AppState], Response]] = {
    "/": lambda state: swagger_ui(),
    "/docs": lambda state: swagger_ui(),
    "/api/openapi.json": show_openapi_spec,
    "/api/endpoints": list_endpoints,
    "/health": lambda state: health_check(),
}
_DYNAMIC_ROUTE = re.compile(r"/([^/]+)/(.*)", re.DOTALL)
_NO_BODY_STATUSES = {204, 304}


def _empty(status: int) -> Response:
    return Response(status, "", b"")


def route(state: AppState, method: str, path: str) -> Response:
    """Dispatch one request to the handler its method and path select."""
    path = urlsplit(path).path or "/"
    if not path.startswith("/"):
        path = "/" + path
    method = method.upper()

    fixed = _GET_ROUTES.get(path)
    if fixed is not None:
        if method != "GET":
            return _empty(405)
        return fixed(state)

    if path.startswith("/api/"):
        return api_redirect(state, method, path)

    match = _DYNAMIC_ROUTE.fullmatch(path)
    if match is not None:
        return dynamic_handler(state, unquote(match.group(1)), unquote(match.group(2)))

    return _empty(404)


class _StubServer(ThreadingHTTPServer):
    daemon_threads = True

    def __init__(self, address: tuple[str, int], state: AppState) -> None:
        self.state = state
        super().__init__(address, StubRequestHandler)


class StubRequestHandler(BaseHTTPRequestHandler):
    """Serves the stub endpoints held by the server's application state."""

    server_version = f"stubapi/{VERSION}"
    protocol_version = "HTTP/1.1"

    def _discard_body(self) -> None:
        length = self.headers.get("Content-Length")
        if length and length.strip().isdigit() and int(length) > 0:
            self.rfile.read(int(length))

    def _send(self, response: Response, extra_headers: dict[str, str]) -> None:
        body = b"" if (
            response.status in _NO_BODY_STATUSES or 100 <= response.status < 200
        ) else response.body
        self.send_response(response.status)
        if response.content_type:
            self.send_header("Content-Type", response.content_type)
        for name, value in extra_headers.items():
            self.send_header(name, value)
        if response.status not in _NO_BODY_STATUSES and response.status >= 200:
            self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        if body and self.command != "HEAD":
            self.wfile.write(body)

    def _handle(self) -> None:
        self._discard_body()
        origin = self.headers.get("Origin")
        requested_method = self.headers.get("Access-Control-Request-Method")

        if self.command == "OPTIONS" and origin and requested_method:
            headers = {
                "Access-Control-Allow-Origin": origin,
                "Access-Control-Allow-Methods": requested_method,
                "Vary": "Origin, Access-Control-Request-Method, "
                "Access-Control-Request-Headers",
            }
            requested_headers = self.headers.get("Access-Control-Request-Headers")
            if requested_headers:
                headers["Access-Control-Allow-Headers"] = requested_headers
            self._send(_empty(200), headers)
            return

        response = route(self.server.state, self.command, self.path)
        headers = {}
        if origin:
            headers = {"Access-Control-Allow-Origin": origin, "Vary": "Origin"}
        self._send(response, headers)

    do_GET = do_POST = do_PUT = do_DELETE = do_PATCH = do_HEAD = do_OPTIONS = _handle

    def log_message(self, format: str, *args) -> None:  # noqa: A002
        logger.info("%s - %s", self.address_string(), format % args)


def create_server(state: AppState, host: str, port: int) -> ThreadingHTTPServer:
    """Bind a threaded HTTP server that answers from ``state``."""
    return _StubServer((host, port), state)


def main(argv: Sequence[str] | None = None) -> int:
    """Load the specification named on the command line and serve its stubs."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    args = parse_args(argv)
    spec_path = Path(args.spec)

    if not spec_path.exists():
        print(f"Spec file not found: {args.spec}", file=sys.stderr)
        return 1

    try:
        endpoints = build_endpoints_from_spec(spec_path)
        state = AppState.from_spec_path(endpoints, spec_path)
    except AppError as exc:
        print(f"Error building endpoints {exc}", file=sys.stderr)
        return 1

    logger.info("Loaded %d endpoints from OpenAPI spec", len(endpoints))
    bind_addr = f"{args.host}:{args.port}"
    logger.info("Starting server on %s", bind_addr)

    try:
        server = create_server(state, args.host, args.port)
    except OSError as exc:
        print(f"Failed to bind {bind_addr}: {exc}", file=sys.stderr)
        return 1

    with server:
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            pass
    return 0


if __name__ == "__main__":
    sys.exit(main())