import os
from pathlib import Path

import pytest
from pydantic import ValidationError

from nanoserde import DeJsonError, deserialize_json
from nanoserde.conf import CONFIG_YAML_ENV_VAR, DEFAULT_SETTINGS_FILEPATH, STRICT_SETTINGS_FILEPATH
from nanoserde.conf.get_settings import get_global_settings, get_settings_source
from nanoserde.conf.settings import CodecSettings
from nanoserde.utils.yaml import dict_from_extended_yaml, dict_from_yaml


def test_default_settings_match_model_defaults():
    assert CodecSettings.from_yaml(filepath=DEFAULT_SETTINGS_FILEPATH) == CodecSettings()


def test_strict_settings_extend_defaults():
    settings = CodecSettings.from_yaml(filepath=STRICT_SETTINGS_FILEPATH)

    assert settings.JSON_ALLOW_COMMENTS is False
    assert settings.JSON_ALLOW_TRAILING_COMMA is False
    assert settings.JSON_ALLOW_PLUS_SIGN is False
    # inherited from default.yml
    assert settings.JSON_SKIP_UNKNOWN_KEYS is True
    assert settings.RON_INDENT_WIDTH == 4


def test_global_settings_come_from_env_var():
    settings = get_global_settings()

    assert get_settings_source() == os.environ[CONFIG_YAML_ENV_VAR]
    assert settings is get_global_settings()
    assert settings == CodecSettings.from_yaml(filepath=os.environ[CONFIG_YAML_ENV_VAR])


def test_extends_is_relative_to_the_extending_file(tmp_path: Path):
    (tmp_path / 'base').mkdir()
    (tmp_path / 'base' / 'base.yml').write_text('RON_INDENT_WIDTH: 2\nJSON_ALLOW_COMMENTS: false\n')
    filepath = tmp_path / 'custom.yml'
    filepath.write_text('extends: base/base.yml\nRON_INDENT_WIDTH: 8\n')

    assert dict_from_extended_yaml(filepath=filepath) == dict(RON_INDENT_WIDTH=8, JSON_ALLOW_COMMENTS=False)
    settings = CodecSettings.from_yaml(filepath=filepath)
    assert settings.RON_INDENT_WIDTH == 8
    assert settings.JSON_ALLOW_COMMENTS is False
    assert settings.JSON_ALLOW_PLUS_SIGN is True


def test_extending_self_is_rejected(tmp_path: Path):
    filepath = tmp_path / 'loop.yml'
    filepath.write_text('extends: loop.yml\n')

    with pytest.raises(AssertionError):
        dict_from_extended_yaml(filepath=filepath)


def test_invalid_yaml_files(tmp_path: Path):
    with pytest.raises(ValueError) as e:
        dict_from_yaml(filepath='fake_file.yml')
    assert str(e.value) == "'fake_file.yml' is not a file"

    empty = tmp_path / 'empty.yml'
    empty.write_text('')
    assert dict_from_yaml(filepath=empty) == {}

    number = tmp_path / 'number.yml'
    number.write_text('123\n')
    with pytest.raises(ValueError) as e:
        dict_from_yaml(filepath=number)
    assert str(e.value) == f"'{number}' cannot be parsed as a dictionary"


def test_unknown_keys_are_forbidden(tmp_path: Path):
    filepath = tmp_path / 'typo.yml'
    filepath.write_text('JSON_ALLOW_COMMENT: false\n')

    with pytest.raises(ValidationError):
        CodecSettings.from_yaml(filepath=filepath)


def test_invalid_values():
    with pytest.raises(ValidationError):
        CodecSettings(RON_INDENT_WIDTH=-1)
    with pytest.raises(ValidationError):
        CodecSettings(MAX_LENGTH_PREFIX=-5)


def test_settings_are_frozen():
    settings = CodecSettings()

    with pytest.raises(ValidationError):
        settings.RON_INDENT_WIDTH = 2  # type: ignore[misc]


def test_settings_change_decoding():
    text = '{"a": 1, /* note */ "b": 2,}'

    assert deserialize_json(dict[str, int], text) == dict(a=1, b=2)
    with pytest.raises(DeJsonError):
        deserialize_json(dict[str, int], text, settings=CodecSettings(JSON_ALLOW_COMMENTS=False))
    with pytest.raises(DeJsonError):
        deserialize_json(dict[str, int], '{"a": 1,}', settings=CodecSettings(JSON_ALLOW_TRAILING_COMMA=False))
