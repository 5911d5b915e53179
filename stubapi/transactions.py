"""Request handlers and the construction of stub endpoints from a specification."""

from __future__ import annotations

import json
import logging
import os
import re
from dataclasses import dataclass
from typing import Any, Iterable

from .app import AppState, EndpointHandler, load_spec
from .errors import YamlError

logger = logging.getLogger(__name__)

VERSION = "0.1.0"
JSON_CONTENT_TYPE = "application/json"
HTML_CONTENT_TYPE = "text/html; charset=utf-8"
SWAGGER_UI_ASSETS = "https://unpkg.com/swagger-ui-dist@4.5.0"

_HTTP_METHODS = ("get", "post", "put", "delete")
_PATH_PARAM = re.compile(r"\{([^}]+)\}")
_STATUS_TEXT = re.compile(r"\+?[0-9]+")
_ESCAPED_CHARS = ".?+*()[]"
_DEFAULT_STUB = {"message": "This is a stub response", "status": "success"}

_SWAGGER_HTML = f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <title>Swagger UI</title>
  <link rel="stylesheet" type="text/css" href="{SWAGGER_UI_ASSETS}/swagger-ui.css" />
  <style>body {{ margin: 0; background: #fafafa; }}</style>
</head>
<body>
  <div id="swagger-ui"></div>
  <script src="{SWAGGER_UI_ASSETS}/swagger-ui-bundle.js"></script>
  <script src="{SWAGGER_UI_ASSETS}/swagger-ui-standalone-preset.js"></script>
  <script>
  window.onload = function() {{
    window.ui = SwaggerUIBundle({{
      url: "/api/openapi.json",
      requestInterceptor: (req) => {{
        if (req.url.startsWith('http://') || req.url.startsWith('https://')) {{
          req.url = '/api' + new URL(req.url).pathname;
        }}
        return req;
      }},
      dom_id: '#swagger-ui',
      deepLinking: true,
      presets: [SwaggerUIBundle.presets.apis, SwaggerUIStandalonePreset],
      plugins: [SwaggerUIBundle.plugins.DownloadUrl],
      layout: "StandaloneLayout"
    }});
  }};
  </script>
</body>
</html>"""


@dataclass(frozen=True)
class Response:
    """An HTTP reply: status, content type and raw body."""

    status: int
    content_type: str
    body: bytes

    def json_body(self) -> Any:
        """Decode the body as JSON."""
        return json.loads(self.body)


def _jsonable(value: Any) -> Any:
    if isinstance(value, dict):
        return {str(key): _jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(item) for item in value]
    return value


def _to_json_text(value: Any) -> str:
    return json.dumps(
        _jsonable(value), sort_keys=True, separators=(",", ":"), ensure_ascii=False
    )


def _json_response(value: Any, status: int = 200) -> Response:
    return Response(status, JSON_CONTENT_TYPE, _to_json_text(value).encode("utf-8"))


def _status_from_code(code: str) -> int:
    status = int(code) if _STATUS_TEXT.fullmatch(code) else 200
    if status > 65535:
        status = 200
    if not 100 <= status <= 999:
        raise ValueError(f"invalid HTTP status code: {status}")
    return status


def _reply_for(state: AppState, method: str, path: str) -> Response:
    for endpoint in state.endpoints:
        if endpoint.method.lower() == method and paths_match(
            endpoint.path, path, endpoint.path_params
        ):
            return _json_response(
                endpoint.response_body, _status_from_code(endpoint.response_code)
            )
    return _json_response(
        {"error": "Endpoint not found", "path": path, "method": method}, 404
    )


def health_check() -> Response:
    """Report that the server is up."""
    return _json_response({"status": "healthy", "version": VERSION})


def swagger_ui() -> Response:
    """Serve the interactive documentation page."""
    return Response(200, HTML_CONTENT_TYPE, _SWAGGER_HTML.encode("utf-8"))


def show_openapi_spec(state: AppState) -> Response:
    """Serve the loaded specification as JSON."""
    try:
        return _json_response(state.openapi_spec)
    except (TypeError, ValueError):
        return _json_response({"error": "Failed to serialize OpenAPI spec"})


def list_endpoints(state: AppState) -> Response:
    """List every stubbed endpoint with its status code."""
    endpoints = [
        {"path": ep.path, "method": ep.method, "status_code": ep.response_code}
        for ep in state.endpoints
    ]
    return _json_response({"endpoints": endpoints, "count": len(endpoints)})


def api_redirect(state: AppState, method: str, path: str) -> Response:
    """Answer a request made under the ``/api`` prefix."""
    while path.startswith("/api"):
        path = path[len("/api"):]
    method = method.lower()
    logger.info("API redirect: %s %s", method, path)
    return _reply_for(state, method, path)


def dynamic_handler(state: AppState, first_segment: str, rest: str) -> Response:
    """Answer a request routed as ``/{first_segment}/{rest}``.

    The first segment is taken as the path and the remainder as the method.
    """
    path_str = first_segment
    method_str = rest.lower()
    logger.info("Handling request: %s %s", method_str, path_str)
    return _reply_for(state, method_str, path_str)


def paths_match(api_path: str, request_path: str, path_params: Iterable[str]) -> bool:
    """Tell whether ``request_path`` matches the path template ``api_path``."""
    pattern = api_path
    for param in path_params:
        pattern = pattern.replace(f"{{{param}}}", "[^/]+")
    for char in _ESCAPED_CHARS:
        pattern = pattern.replace(char, "\\" + char)
    try:
        return re.search(rf"\A{pattern}\Z", request_path) is not None
    except re.error:
        return False


def build_endpoints_from_spec(spec_path: str | os.PathLike) -> list[EndpointHandler]:
    """Load a specification and build one endpoint per operation and response."""
    spec = load_spec(spec_path)
    paths = spec["paths"]
    logger.info("Processing OpenAPI spec with %d paths", len(paths))
    endpoints: list[EndpointHandler] = []
    for path, path_item in paths.items():
        if not isinstance(path_item, dict):
            raise YamlError(f"invalid path item for `{path}`")
        if "$ref" in path_item:
            logger.warning("References not supported yet, skipping path: %s", path)
            continue
        for method in _HTTP_METHODS:
            operation = path_item.get(method)
            if operation is not None:
                endpoints.extend(process_operation(str(path), method, operation))
    return endpoints


def process_operation(
    path: str, method: str, operation: dict[str, Any]
) -> list[EndpointHandler]:
    """Build the endpoints for each response of one operation."""
    path_params = _PATH_PARAM.findall(path)
    responses = operation.get("responses") or {}
    endpoints = []
    for status_code, response in responses.items():
        code = str(status_code)
        if code == "default":
            continue
        if isinstance(response, dict) and "$ref" in response:
            logger.warning("References not supported yet, skipping")
            continue
        stub = generate_stub_response(response or {})
        endpoints.append(
            EndpointHandler(
                path=path,
                method=method,
                response_code=code,
                response_body=_to_json_text(stub),
                path_params=list(path_params),
            )
        )
        logger.info(
            "Added endpoint: %s %s (status code: %s)", method.upper(), path, code
        )
    return endpoints


def generate_stub_response(response: dict[str, Any]) -> Any:
    """Pick the JSON example of a response, or a generic stub body."""
    content = response.get("content") or {}
    for content_type, media_type in content.items():
        if str(content_type).startswith("application/json") and isinstance(
            media_type, dict
        ):
            example = media_type.get("example")
            if example is not None:
                return example
    return dict(_DEFAULT_STUB)