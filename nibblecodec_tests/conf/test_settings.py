from pathlib import Path

import pytest
from pydantic import ValidationError

from nibblecodec.conf import DEFAULT_SETTINGS_FILEPATH, UNITTESTS_SETTINGS_FILEPATH, get_settings
from nibblecodec.conf.settings import NibbleCodecSettings


def test_default_settings_from_yaml() -> None:
    settings = NibbleCodecSettings.from_yaml(filepath=DEFAULT_SETTINGS_FILEPATH)
    assert settings == NibbleCodecSettings(BOUNDED_SERIALIZER_CAPACITY=2048, BYTES_MAX_LENGTH=65536)


def test_unittests_settings_extend_default() -> None:
    settings = NibbleCodecSettings.from_yaml(filepath=UNITTESTS_SETTINGS_FILEPATH)
    assert settings.BOUNDED_SERIALIZER_CAPACITY == 2048
    assert settings.BYTES_MAX_LENGTH == 1024


def test_global_settings_use_env_file() -> None:
    settings = get_settings.get_global_settings()
    assert get_settings.get_settings_source() == UNITTESTS_SETTINGS_FILEPATH
    assert settings.BYTES_MAX_LENGTH == 1024
    assert get_settings.get_global_settings() is settings


def test_global_settings_cannot_change_file(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    get_settings.get_global_settings()
    other = tmp_path / 'other.yml'
    other.write_text('BYTES_MAX_LENGTH: 10\n')
    monkeypatch.setenv('NIBBLECODEC_CONFIG_YAML', str(other))
    with pytest.raises(Exception, match='loading config twice with a different file'):
        get_settings.get_global_settings()


def test_global_settings_load_from_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    other = tmp_path / 'other.yml'
    other.write_text('BYTES_MAX_LENGTH: 10\n')
    monkeypatch.setattr(get_settings, '_settings_singleton', None)
    monkeypatch.setenv('NIBBLECODEC_CONFIG_YAML', str(other))
    settings = get_settings.get_global_settings()
    assert settings.BYTES_MAX_LENGTH == 10
    assert settings.BOUNDED_SERIALIZER_CAPACITY == 2048


def test_settings_are_frozen() -> None:
    settings = NibbleCodecSettings()
    with pytest.raises(ValidationError):
        settings.BYTES_MAX_LENGTH = 1  # type: ignore[misc]


@pytest.mark.parametrize('contents', ['BYTES_MAX_LENGTH: -1\n', 'UNKNOWN_SETTING: 1\n'])
def test_invalid_settings(tmp_path: Path, contents: str) -> None:
    filepath = tmp_path / 'invalid.yml'
    filepath.write_text(contents)
    with pytest.raises(ValidationError):
        NibbleCodecSettings.from_yaml(filepath=filepath)
