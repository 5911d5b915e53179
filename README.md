# stubapi

A small HTTP server that reads an OpenAPI specification written in YAML and
answers its operations with canned JSON responses. It is meant as a stand-in
backend while a real service is being built.

## Installation

    pip install .

For running the tests:

    pip install .[test]
    pytest

## Running

    stubapi --spec api-spec.yaml --port 8080 --server 127.0.0.1

| Option            | Default          | Meaning                        |
|-------------------|------------------|--------------------------------|
| `--spec`          | `api-spec.yaml`  | Path to the OpenAPI YAML file  |
| `-p`, `--port`    | `8080`           | Port to listen on (0–65535)    |
| `-s`, `--server`  | `127.0.0.1`      | Host to bind to                |

The command prints an error to standard error and exits with status 1 when the
spec file does not exist, when it cannot be read or parsed, or when the address
cannot be bound. Otherwise it serves until interrupted (Ctrl+C). Progress is
logged at INFO level.

## Reading the specification

The spec must be a mapping with `openapi` (a string), `info` (with `title` and
`version`) and `paths` (a mapping); anything else raises
`stubapi.errors.YamlError`. An unreadable file raises `stubapi.errors.FileError`.
Both derive from `stubapi.errors.AppError`.

For every `get`, `post`, `put` and `delete` operation, one endpoint is
registered per declared response code, in the order they appear. `default`
responses and responses or path items given as `$ref` are skipped. Other
methods (`patch`, `options`, ...) are ignored.

The reply body comes from the `example` of the first `application/json` media
type that has one; without one, the generic stub is used:

    {"message":"This is a stub response","status":"success"}

The chosen body is stored as compact JSON text and is sent as a JSON **string**
holding that text, so a client decodes the reply twice to get the example
object back.

A numeric response code is used as the HTTP status; a non-numeric one (such as
`2XX`) is answered with 200.

Path templates such as `/users/{id}` match any single path segment in place of
each parameter. Matching is by lower-cased method and the first matching
endpoint wins.

## Routes

- `GET /` and `GET /docs`: a Swagger UI page pointed at `/api/openapi.json`
  (its scripts and styles load from a public CDN)
- `GET /api/openapi.json`: the loaded spec as JSON (keys sorted)
- `GET /api/endpoints`: `{"endpoints": [{"path", "method", "status_code"}, ...], "count": n}`
- `GET /health`: `{"status": "healthy", "version": "0.1.0"}`
- Any other method on the four routes above: 405 with an empty body
- `/api/<path>` with any method: the `/api` prefix is removed and the rest is
  matched against the spec's endpoints; unmatched requests get a 404 with
  `{"error": "Endpoint not found", "path": ..., "method": ...}`
- `/<first>/<rest>` for any other path: handed to `dynamic_handler`, which
  treats the first segment as the path and the remainder as the method.
  Since spec paths begin with `/`, these requests normally end in the same
  404 JSON reply; use the `/api/` prefix to reach the stubs.
- Anything else: 404 with an empty body

Every reply carries `Access-Control-Allow-Origin` set to the request's
`Origin` when one is sent, and CORS preflight `OPTIONS` requests are answered
with 200, echoing the requested method and headers.

## Using it from Python

    import json
    from stubapi.app import AppState
    from stubapi.transactions import build_endpoints_from_spec, api_redirect

    endpoints = build_endpoints_from_spec("api-spec.yaml")
    state = AppState.from_spec_path(endpoints, "api-spec.yaml")
    response = api_redirect(state, "GET", "/api/users/42")
    print(response.status, json.loads(response.json_body()))

Handlers return a `stubapi.transactions.Response` with `status`,
`content_type` and `body` (bytes). `stubapi.server.route(state, method, path)`
dispatches a request the way the server does, and
`stubapi.server.create_server(state, host, port)` binds a threaded HTTP server
for a state you have built yourself; call `serve_forever()` on it.

## What it does not do

Responses are fixed per endpoint: query strings, path parameter values and
request bodies are not looked at, and no response is generated from a schema.
Nothing is stored between requests.