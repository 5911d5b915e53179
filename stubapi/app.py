"""Application state: loaded specification and the stub endpoints built from it."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable

import yaml

from .errors import FileError, YamlError


@dataclass
class EndpointHandler:
    """One stubbed operation: a path template, a method and a canned reply."""

    path: str
    method: str
    response_code: str
    response_body: str
    path_params: list[str] = field(default_factory=list)


@dataclass
class AppState:
    """Everything the request handlers need to answer."""

    endpoints: list[EndpointHandler]
    openapi_spec: dict[str, Any]

    @classmethod
    def from_spec_path(
        cls, endpoints: Iterable[EndpointHandler], spec_path: str | os.PathLike
    ) -> AppState:
        """Build the state, loading the specification from ``spec_path``."""
        return cls(list(endpoints), load_spec(spec_path))


def load_spec(path: str | os.PathLike) -> dict[str, Any]:
    """Read and check an OpenAPI document written in YAML (or JSON)."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise FileError(str(exc)) from exc
    try:
        document = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise YamlError(str(exc)) from exc
    _check_document(document)
    return document


def _check_document(document: Any) -> None:
    if not isinstance(document, dict):
        raise YamlError("invalid type: expected an OpenAPI document mapping")
    for key in ("openapi", "info", "paths"):
        if key not in document:
            raise YamlError(f"missing field `{key}`")
    if not isinstance(document["openapi"], str):
        raise YamlError("invalid type: `openapi` must be a string")
    info = document["info"]
    if not isinstance(info, dict):
        raise YamlError("invalid type: `info` must be a mapping")
    for key in ("title", "version"):
        if key not in info:
            raise YamlError(f"missing field `{key}` in `info`")
    if not isinstance(document["paths"], dict):
        raise YamlError("invalid type: `paths` must be a mapping")