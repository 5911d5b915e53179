import pytest

from stubapi.app import AppState, EndpointHandler, load_spec
from stubapi.errors import FileError, YamlError

SPEC = """\
openapi: 3.0.0
info:
  title: Pets
  version: "1.0"
paths:
  /pets:
    get:
      responses:
        "200":
          description: ok
"""


@pytest.fixture
def spec_file(tmp_path):
    path = tmp_path / "api-spec.yaml"
    path.write_text(SPEC, encoding="utf-8")
    return path


def test_load_spec_returns_document(spec_file):
    spec = load_spec(spec_file)
    assert spec["openapi"] == "3.0.0"
    assert spec["info"]["title"] == "Pets"
    assert list(spec["paths"]) == ["/pets"]


def test_load_spec_accepts_str_path(spec_file):
    assert load_spec(str(spec_file)) == load_spec(spec_file)


def test_load_spec_missing_file(tmp_path):
    with pytest.raises(FileError):
        load_spec(tmp_path / "absent.yaml")


def test_load_spec_bad_yaml(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("paths: [unclosed\n", encoding="utf-8")
    with pytest.raises(YamlError):
        load_spec(path)


@pytest.mark.parametrize(
    "text",
    [
        "- just\n- a list\n",
        "info:\n  title: t\n  version: v\npaths: {}\n",
        "openapi: 3.0.0\npaths: {}\n",
        "openapi: 3.0.0\ninfo:\n  title: t\npaths: {}\n",
        "openapi: 3.0.0\ninfo:\n  title: t\n  version: v\npaths: []\n",
    ],
)
def test_load_spec_rejects_non_openapi(tmp_path, text):
    path = tmp_path / "spec.yaml"
    path.write_text(text, encoding="utf-8")
    with pytest.raises(YamlError):
        load_spec(path)


def test_from_spec_path_keeps_endpoints(spec_file):
    endpoint = EndpointHandler("/pets", "get", "200", "{}", [])
    state = AppState.from_spec_path([endpoint], spec_file)
    assert state.endpoints == [endpoint]
    assert state.openapi_spec == load_spec(spec_file)


def test_from_spec_path_missing_file(tmp_path):
    with pytest.raises(FileError):
        AppState.from_spec_path([], tmp_path / "nope.yaml")


def test_endpoint_handler_default_params():
    endpoint = EndpointHandler("/a", "get", "200", "{}")
    assert endpoint.path_params == []
    endpoint.path_params.append("id")
    assert EndpointHandler("/a", "get", "200", "{}").path_params == []