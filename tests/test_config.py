"""Tests for YAML loader configuration."""

import pytest

from rashader.capabilities import DEFAULT_RUNTIMES
from rashader.config import CONFIG_ENV_VAR, LoaderConfig, load_config
from rashader.errors import ConfigError


def test_from_dict_defaults():
    config = LoaderConfig.from_dict({})

    assert config.library is None
    assert config.runtimes == DEFAULT_RUNTIMES
    assert config.verbose is False


def test_from_dict_none():
    assert LoaderConfig.from_dict(None).runtimes == DEFAULT_RUNTIMES


def test_from_dict_values():
    config = LoaderConfig.from_dict({
        'library': '/usr/lib/librashader.so',
        'runtimes': ['vulkan'],
        'verbose': True,
    })

    assert config.library == '/usr/lib/librashader.so'
    assert config.runtimes == ('vulkan',)
    assert config.verbose is True
    assert 'vk_filter_chain_frame' in config.capabilities
    assert 'gl_filter_chain_frame' not in config.capabilities


def test_single_runtime_string():
    assert LoaderConfig.from_dict({'runtimes': 'opengl'}).runtimes == ('opengl',)


def test_empty_runtimes():
    config = LoaderConfig.from_dict({'runtimes': None})
    assert config.capabilities.groups == ('core', 'preset', 'error')


def test_invalid_runtime():
    with pytest.raises(ConfigError):
        LoaderConfig.from_dict({'runtimes': ['opengl', 'metal']})


def test_not_a_mapping():
    with pytest.raises(ConfigError):
        LoaderConfig.from_dict(['opengl'])


def test_load_config(tmp_path):
    path = tmp_path / 'rashader.yml'
    path.write_text("library: librashader.so.1\nruntimes: [opengl]\nverbose: true\n")

    config = load_config(path)

    assert config.library == 'librashader.so.1'
    assert config.runtimes == ('opengl',)
    assert config.verbose is True


def test_load_config_missing(tmp_path):
    assert load_config(tmp_path / 'missing.yml') is None


def test_load_config_invalid_yaml(tmp_path, capsys):
    path = tmp_path / 'rashader.yml'
    path.write_text("runtimes: [opengl\n")

    assert load_config(path) is None
    assert "Failed to load loader config" in capsys.readouterr().out


def test_load_config_from_env(tmp_path, monkeypatch):
    path = tmp_path / 'custom.yml'
    path.write_text("library: from-env.so\n")
    monkeypatch.setenv(CONFIG_ENV_VAR, str(path))

    assert load_config().library == 'from-env.so'


def test_load_config_default_location(tmp_path, monkeypatch):
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    monkeypatch.chdir(tmp_path)
    (tmp_path / 'rashader.yml').write_text("runtimes: [vulkan]\n")

    assert load_config().runtimes == ('vulkan',)


@pytest.mark.parametrize("config_dict", [
    {'library': 123},
    {'runtimes': 5},
    {'runtimes': ['opengl', 7]},
    {'verbose': 'false'},
    {'verbose': 1},
])
def test_wrong_value_types(config_dict):
    with pytest.raises(ConfigError):
        LoaderConfig.from_dict(config_dict)


def test_load_config_wrong_runtimes_type(tmp_path):
    path = tmp_path / 'rashader.yml'
    path.write_text("runtimes: 5\n")

    with pytest.raises(ConfigError, match="runtimes"):
        load_config(path)


def test_load_config_quoted_verbose(tmp_path):
    path = tmp_path / 'rashader.yml'
    path.write_text("verbose: 'false'\n")

    with pytest.raises(ConfigError, match="verbose"):
        load_config(path)
