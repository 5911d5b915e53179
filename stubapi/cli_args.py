"""Command-line options of the stub server."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from typing import Sequence


@dataclass(frozen=True)
class Args:
    """Parsed command-line options."""

    spec: str = "api-spec.yaml"
    port: int = 8080
    host: str = "127.0.0.1"


def _port(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid port: {text!r}") from None
    if not 0 <= value <= 65535:
        raise argparse.ArgumentTypeError(f"port out of range: {value}")
    return value


def _parser() -> argparse.ArgumentParser:
    defaults = Args()
    parser = argparse.ArgumentParser(
        prog="stubapi", description="Generates a server from an OpenAPI spec"
    )
    parser.add_argument(
        "--spec",
        default=defaults.spec,
        help="Path to the OpenAPI YAML specification file",
    )
    parser.add_argument(
        "-p", "--port", type=_port, default=defaults.port, help="Port to listen on"
    )
    parser.add_argument(
        "-s", "--server", dest="host", default=defaults.host, help="Host to bind to"
    )
    return parser


def parse_args(argv: Sequence[str] | None = None) -> Args:
    """Parse ``argv`` (the process arguments when ``None``) into :class:`Args`."""
    namespace = _parser().parse_args(argv)
    return Args(spec=namespace.spec, port=namespace.port, host=namespace.host)