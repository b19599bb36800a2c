"""Tests for the rashader-probe command."""

import pytest

from conftest import FakeLibrary, Opener, full_exports
from rashader import probe
from rashader.capabilities import CapabilitySet
from rashader.config import CONFIG_ENV_VAR


@pytest.fixture(autouse=True)
def no_ambient_config(tmp_path, monkeypatch):
    """Keep a rashader.yml or $RASHADER_CONFIG on the test machine out of the way."""
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    monkeypatch.chdir(tmp_path)


def test_probe_missing_library(capsys):
    code = probe.main(['--library', 'librashader-not-installed-anywhere.so'])

    out = capsys.readouterr().out
    assert code == 1
    assert "handle_open_failed" in out
    assert "ABI version:  0" in out
    assert "preset_create" in out


def test_probe_fully_loaded(monkeypatch, capsys):
    library = FakeLibrary(symbols=full_exports(CapabilitySet(['opengl'])))
    monkeypatch.setattr('rashader.loader.CtypesLibrary.open', Opener(library))

    code = probe.main(['--runtime', 'opengl'])

    out = capsys.readouterr().out
    assert code == 0
    assert "fully_loaded" in out
    assert "gl_filter_chain_frame" in out
    assert "vk_filter_chain_frame" not in out


def test_probe_bad_config(tmp_path, capsys):
    path = tmp_path / 'rashader.yml'
    path.write_text("runtimes: [metal]\n")

    assert probe.main(['--config', str(path)]) == 2
    assert "metal" in capsys.readouterr().out


def test_probe_wrong_config_type(tmp_path, capsys):
    path = tmp_path / 'rashader.yml'
    path.write_text("runtimes: 5\n")

    assert probe.main(['--config', str(path)]) == 2
    assert "runtimes" in capsys.readouterr().out
