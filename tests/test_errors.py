import pytest

from stubapi.errors import AppError, FileError, ParseError, YamlError


@pytest.mark.parametrize(
    ("error_type", "prefix"),
    [
        (ParseError, "Failed to pase OpenAPI spec: "),
        (FileError, "Failed to read file: "),
        (YamlError, "YAML parsing error: "),
    ],
)
def test_message_carries_prefix_and_detail(error_type, prefix):
    error = error_type("boom")
    assert str(error) == prefix + "boom"
    assert error.detail == "boom"


@pytest.mark.parametrize(
    ("error_type", "message"),
    [
        (ParseError, "Failed to pase OpenAPI spec: detail"),
        (FileError, "Failed to read file: detail"),
        (YamlError, "YAML parsing error: detail"),
    ],
)
def test_all_errors_share_base(error_type, message):
    error = error_type("detail")
    try:
        raise error
    except AppError as caught:
        assert caught is error
        assert caught.detail == "detail"
        assert str(caught) == message
    else:
        pytest.fail("error was not caught as AppError")


def test_errors_are_distinct():
    error = FileError("missing")
    assert str(error) == "Failed to read file: missing"
    assert isinstance(error, YamlError) is False
    assert isinstance(error, ParseError) is False
    assert issubclass(FileError, YamlError) is False