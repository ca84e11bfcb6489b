import io
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from appconfig import Param, ParamType
from appconfig.errors import (
    DocumentMalformedError,
    DocumentUnreadableError,
    RootNodeMissingError,
    UnrecognizedSwitchError,
)
from appconfig.sources import load_document, load_document_file, parse_command_line, read_environment


PARAMS = {
    "debug": Param(type=ParamType.BOOL, prefix_override="--"),
    "name": Param(),
    "timeout": Param(type=ParamType.INT),
}


def test_bare_switch_records_true():
    assert parse_command_line(PARAMS, ["--debug"]) == {"debug": "true"}


def test_value_split_on_first_equals_only():
    args = parse_command_line(PARAMS, ["-name=a=b=c"])
    assert args == {"name": "a=b=c"}


def test_empty_value_is_recorded():
    assert parse_command_line(PARAMS, ["-name="]) == {"name": ""}


def test_last_occurrence_wins():
    args = parse_command_line(PARAMS, ["-timeout=1", "-timeout=2"])
    assert args == {"timeout": "2"}


def test_unknown_switch_is_fatal():
    with pytest.raises(UnrecognizedSwitchError) as excinfo:
        parse_command_line(PARAMS, ["-name=x", "--bogus"])
    assert excinfo.value.token == "--bogus"
    assert "--bogus" in str(excinfo.value)


def test_name_must_match_exactly():
    with pytest.raises(UnrecognizedSwitchError):
        parse_command_line(PARAMS, ["-nam=x"])
    with pytest.raises(UnrecognizedSwitchError):
        parse_command_line(PARAMS, ["-names=x"])


def test_prefix_override_is_required():
    # "debug" uses "--"; a single dash leaves "-debug" which is not a name.
    with pytest.raises(UnrecognizedSwitchError):
        parse_command_line(PARAMS, ["-debug"])
    with pytest.raises(UnrecognizedSwitchError):
        parse_command_line(PARAMS, ["name=x"])


def test_environment_exact_names_and_non_empty():
    env = {"name": "svc", "timeout": "", "NAME": "ignored", "other": "x"}
    assert read_environment(PARAMS, env) == {"name": "svc"}


def test_environment_accepts_callable():
    env = {"timeout": "30"}
    assert read_environment(PARAMS, env.get) == {"timeout": "30"}


def test_document_without_root_node():
    stream = io.BytesIO(b'{"name": "svc", "nested": {"a": 1}}')
    assert load_document(stream, "test.json") == {"name": "svc", "nested": {"a": 1}}


def test_document_root_node_selects_nested_object():
    stream = io.BytesIO(b'{"app": {"port": ":9090"}, "other": {"port": ":1"}}')
    assert load_document(stream, "test.json", "app") == {"port": ":9090"}


@pytest.mark.parametrize("payload", [b'{"other": {}}', b'{"app": "not-an-object"}', b'{"app": null}'])
def test_document_root_node_missing(payload):
    with pytest.raises(RootNodeMissingError) as excinfo:
        load_document(io.BytesIO(payload), "test.json", "app")
    assert excinfo.value.node == "app"
    assert "test.json" in str(excinfo.value)


def test_document_malformed():
    with pytest.raises(DocumentMalformedError):
        load_document(io.BytesIO(b'{"name": '), "test.json")


def test_document_must_be_object():
    with pytest.raises(DocumentMalformedError):
        load_document(io.BytesIO(b'[1, 2, 3]'), "test.json")


def test_document_file_unreadable(tmp_path):
    missing = tmp_path / "missing.json"
    with pytest.raises(DocumentUnreadableError) as excinfo:
        load_document_file(str(missing))
    assert excinfo.value.source == str(missing)


def test_document_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_text('{"app": {"name": "svc"}}', encoding="utf-8")
    assert load_document_file(str(path), "app") == {"name": "svc"}
