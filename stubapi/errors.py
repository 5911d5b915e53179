"""Errors raised while loading a specification or serving stubs."""


class AppError(Exception):
    """Base class for every error the stub server reports."""

    prefix = ""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"{self.prefix}{detail}")


class ParseError(AppError):
    """The OpenAPI specification could not be interpreted."""

    prefix = "Failed to pase OpenAPI spec: "


class FileError(AppError):
    """The specification file could not be read."""

    prefix = "Failed to read file: "


class YamlError(AppError):
    """The specification is not valid YAML or not an OpenAPI document."""

    prefix = "YAML parsing error: "