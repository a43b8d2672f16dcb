import os
import socket
import tempfile

import pytest

from mediahub.cli import format_help, main
from mediahub.globalsettings import GlobalSettings, Option


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    for name in ("http_proxy", "https_proxy", "HTTP_PROXY", "HTTPS_PROXY"):
        monkeypatch.delenv(name, raising=False)
    return tmp_path


def test_format_help_starts_with_usage():
    text = format_help(GlobalSettings())
    assert text.startswith("Usage: sasquatch [-option value] [-option=value]\n\nOptions (default):\n")


def test_format_help_lists_every_option_with_default():
    settings = GlobalSettings()
    text = format_help(settings)
    for option in Option:
        assert f"  -{settings.name(option):<20} {settings.doc(option)}" in text
    assert "(shroomfluence)" in text


def test_format_help_reflects_changed_value():
    settings = GlobalSettings()
    settings.set_value(Option.KEYMAP, "remote")
    assert "(remote)" in format_help(settings)


@pytest.mark.parametrize("flag", ["--help", "-help", "-h"])
def test_main_help_prints_usage(flag, capsys):
    assert main([flag]) == 0
    out = capsys.readouterr().out
    assert "Usage: sasquatch" in out
    assert "-streamingPort" in out


def test_main_without_headless_fails():
    assert main(["-headless", "false"]) == 1


def test_main_sets_proxy_environment():
    assert main(["-proxy", "true", "-headless=false"]) == 1
    assert os.environ["http_proxy"] == "http://localhost:8080"


def test_main_redirects_log_to_error_file(tmp_path, monkeypatch):
    monkeypatch.setattr(tempfile, "tempdir", str(tmp_path))
    assert main(["-log", "true", "-headless", "false"]) == 1
    content = (tmp_path / "qmh-log-error.log").read_text(encoding="latin-1")
    assert "headless" in content


def test_main_headless_fails_when_port_taken():
    blocker = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    blocker.bind(("0.0.0.0", 0))
    blocker.listen(1)
    port = blocker.getsockname()[1]
    try:
        assert main(["-headless", "true", "-streamingPort", str(port)]) == 1
    finally:
        blocker.close()