import pytest

from stubapi.cli_args import Args, parse_args


def test_defaults():
    assert parse_args([]) == Args(spec="api-spec.yaml", port=8080, host="127.0.0.1")


def test_short_options():
    args = parse_args(["--spec", "other.yaml", "-p", "9000", "-s", "0.0.0.0"])
    assert args == Args(spec="other.yaml", port=9000, host="0.0.0.0")


def test_long_options():
    args = parse_args(["--port", "1234", "--server", "localhost"])
    assert args.port == 1234
    assert args.host == "localhost"
    assert args.spec == "api-spec.yaml"


@pytest.mark.parametrize("value", ["70000", "-1", "abc"])
def test_invalid_port(value):
    with pytest.raises(SystemExit) as info:
        parse_args(["--port", value])
    assert info.value.code == 2


def test_unknown_option():
    with pytest.raises(SystemExit) as info:
        parse_args(["--bogus"])
    assert info.value.code == 2