"""Stub HTTP server that answers the operations of an OpenAPI YAML specification."""

__version__ = "0.1.0"
__all__ = ["__version__"]