import json

import pytest

from config_tree import serialization
from config_tree.exceptions import (
    ConfigFileNotFoundError,
    InvalidConfigurationError,
    SerializationError,
    UnsupportedFormatError,
)
from config_tree.formats import ConfigFormat
from config_tree.serialization import (
    JsonCodec,
    LiteralCodec,
    YamlCodec,
    decode,
    encode,
    get_codec,
    read_file,
    write_file,
)
from config_tree.serialization import yaml_codec

TREE = {
    "app": {"name": "demo", "debug": False, "ratio": 0.25},
    "database": {"host": "localhost", "port": 5432, "pool": {"size": 10}},
    "tags": ["a", "b"],
    "owner": None,
    "unicode": "café",
}


def test_format_coerce_and_from_path():
    assert ConfigFormat.coerce(ConfigFormat.JSON) is ConfigFormat.JSON
    assert ConfigFormat.coerce("json") is ConfigFormat.JSON
    assert ConfigFormat.coerce("YAML") is ConfigFormat.YAML
    assert ConfigFormat.coerce("structured") is ConfigFormat.STRUCTURED
    assert ConfigFormat.from_path("conf/settings.py") is ConfigFormat.STRUCTURED
    assert ConfigFormat.from_path("settings.JSON") is ConfigFormat.JSON
    assert ConfigFormat.from_path("settings.yml") is ConfigFormat.YAML
    with pytest.raises(UnsupportedFormatError):
        ConfigFormat.coerce("toml")
    with pytest.raises(UnsupportedFormatError):
        ConfigFormat.coerce(3)  # type: ignore[arg-type]
    with pytest.raises(UnsupportedFormatError):
        ConfigFormat.from_path("settings.ini")


def test_get_codec():
    assert isinstance(get_codec(ConfigFormat.STRUCTURED), LiteralCodec)
    assert isinstance(get_codec("json"), JsonCodec)
    assert isinstance(get_codec("yaml"), YamlCodec)
    assert isinstance(get_codec("json"), serialization.Codec)


@pytest.mark.parametrize("fmt", list(ConfigFormat))
def test_codec_round_trip(fmt):
    assert decode(encode(TREE, fmt), fmt) == TREE


def test_literal_encode_shape():
    text = LiteralCodec().encode({"app": {"name": "demo"}})
    assert text.startswith("# Generated by config_tree.")
    assert "CONFIG = {" in text
    assert "'app': {'name': 'demo'}" in text


def test_literal_decode_accepts_expression_and_assignments():
    codec = LiteralCodec()
    assert codec.decode("{'a': 1}") == {"a": 1}
    assert codec.decode("settings = {'a': {'b': [1, 2]}}") == {"a": {"b": [1, 2]}}
    assert codec.decode("CONFIG: dict = {'a': True}") == {"a": True}
    assert codec.decode('"""Settings for tests."""\n# comment\nCONFIG = {"a": None}\n') == {
        "a": None
    }


def test_literal_decode_never_executes_code(tmp_path):
    marker = tmp_path / "executed"
    codec = LiteralCodec()
    payload = f"CONFIG = {{'x': open({str(marker)!r}, 'w').write('boom')}}"
    with pytest.raises(SerializationError):
        codec.decode(payload)
    assert not marker.exists()

    with pytest.raises(SerializationError):
        codec.decode("import os\nCONFIG = {'a': 1}")
    with pytest.raises(SerializationError):
        codec.decode("CONFIG = {'a': some_name}")
    with pytest.raises(SerializationError):
        codec.decode("CONFIG = {k: 1 for k in 'ab'}")
    with pytest.raises(SerializationError):
        codec.decode("a = b = {'x': 1}")


def test_literal_decode_errors():
    codec = LiteralCodec()
    with pytest.raises(SerializationError):
        codec.decode("CONFIG = {'a': ")
    with pytest.raises(InvalidConfigurationError):
        codec.decode("CONFIG = [1, 2]")
    with pytest.raises(InvalidConfigurationError):
        codec.decode("")
    with pytest.raises(InvalidConfigurationError):
        codec.decode('"""only a docstring"""')


def test_literal_encode_rejects_non_literal_values():
    with pytest.raises(SerializationError):
        LiteralCodec().encode({"obj": object()})
    with pytest.raises(SerializationError):
        LiteralCodec().encode({"nan": float("nan")})


def test_json_encode_is_pretty_printed():
    text = JsonCodec().encode({"a": {"b": 1}})
    assert text == '{\n    "a": {\n        "b": 1\n    }\n}\n'


def test_json_errors():
    codec = JsonCodec()
    with pytest.raises(SerializationError):
        codec.decode("{not json")
    with pytest.raises(InvalidConfigurationError):
        codec.decode("[1, 2, 3]")
    with pytest.raises(SerializationError):
        codec.encode({"obj": object()})
    with pytest.raises(SerializationError):
        codec.encode({"nan": float("nan")})


def test_yaml_encode_and_errors():
    codec = YamlCodec()
    text = codec.encode({"app": {"name": "demo"}})
    assert "app:\n  name: demo\n" in text
    assert codec.decode("") == {}
    with pytest.raises(SerializationError):
        codec.decode("a: [1, 2")
    with pytest.raises(InvalidConfigurationError):
        codec.decode("- 1\n- 2\n")
    with pytest.raises(SerializationError):
        codec.encode({"obj": object()})


def test_yaml_unavailable(monkeypatch):
    monkeypatch.setattr(yaml_codec, "yaml", None)
    assert serialization.yaml_available() is False
    with pytest.raises(UnsupportedFormatError):
        encode({"a": 1}, ConfigFormat.YAML)
    with pytest.raises(UnsupportedFormatError):
        decode("a: 1", ConfigFormat.YAML)


def test_write_and_read_file(tmp_path):
    path = tmp_path / "settings.json"
    assert write_file(path, TREE) is ConfigFormat.JSON
    assert json.loads(path.read_text(encoding="utf-8")) == TREE
    assert read_file(path) == TREE


def test_read_file_missing(tmp_path):
    with pytest.raises(ConfigFileNotFoundError):
        read_file(tmp_path / "missing.json")
    with pytest.raises(FileNotFoundError):
        read_file(tmp_path / "missing.json")


def test_write_file_failure(tmp_path):
    with pytest.raises(SerializationError):
        write_file(tmp_path / "no" / "such" / "dir.json", TREE)


def test_write_file_encode_failure_leaves_no_file(tmp_path):
    path = tmp_path / "bad.json"
    with pytest.raises(SerializationError):
        write_file(path, {"obj": object()})
    assert not path.exists()


def test_write_file_charset_failure_keeps_existing_file(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text('{"old": 1}')
    with pytest.raises(SerializationError):
        write_file(path, {"name": "caf\u00e9"}, "json", encoding="ascii")
    assert path.read_text() == '{"old": 1}'


def test_unknown_encoding_is_serialization_error(tmp_path):
    path = tmp_path / "settings.json"
    with pytest.raises(SerializationError):
        write_file(path, TREE, encoding="no-such-codec")
    assert not path.exists()


def test_explicit_format_overrides_suffix(tmp_path):
    path = tmp_path / "settings.txt"
    write_file(path, TREE, "yaml")
    assert read_file(path, ConfigFormat.YAML) == TREE
    with pytest.raises(UnsupportedFormatError):
        read_file(path)
