import os

import pytest

from mediahub import libraryinfo
from mediahub.globalsettings import GlobalSettings, Option


@pytest.fixture
def env(monkeypatch, tmp_path):
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))
    monkeypatch.setattr(libraryinfo.sys, "platform", "linux")
    for suffix in ("SKINS", "APPS", "KEYMAPS", "IMPORTS", "RESOURCES", "TRANSLATIONS"):
        monkeypatch.delenv(f"QMH_{suffix}_PATH", raising=False)
    return home


def test_skin_paths_default_order(env):
    paths = libraryinfo.skin_paths(GlobalSettings(), "/opt/app/bin")
    assert paths[0] == "/opt/app/bin/../../skins/"
    assert paths[1] == "/opt/app/bin/../../share/sasquatch/skins/"
    assert paths[-1] == str(env) + "/.sasquatch/skins/"
    assert len(paths) == 5


def test_setting_path_comes_first(env, tmp_path):
    settings = GlobalSettings()
    settings.set_value(Option.KEYMAPS_PATH, str(tmp_path / "maps"))
    paths = libraryinfo.keyboard_map_paths(settings, "/opt/app/bin")
    assert paths[0] == os.path.abspath(str(tmp_path / "maps"))
    assert paths[1] == "/opt/app/bin/../keymaps/"


def test_environment_path_inserted(env, monkeypatch, tmp_path):
    monkeypatch.setenv("QMH_APPS_PATH", str(tmp_path / "envapps"))
    paths = libraryinfo.application_paths(GlobalSettings(), "/x")
    assert paths[0] == "/x/../../../apps/"
    assert paths[1] == os.path.abspath(str(tmp_path / "envapps"))
    assert len(paths) == 6


@pytest.mark.parametrize(
    "func, suffix",
    [
        (libraryinfo.translation_paths, "translations"),
        (libraryinfo.resource_paths, "resources"),
        (libraryinfo.qml_import_paths, "imports"),
    ],
)
def test_all_paths_end_with_suffix(env, func, suffix):
    paths = func(GlobalSettings(), "/a")
    assert all(path.endswith("/" + suffix + "/") for path in paths)


def test_plugin_paths_not_installed(env):
    paths = libraryinfo.plugin_paths(GlobalSettings(), "/a/bin")
    assert paths == ["/a/bin/../lib/sasquatch/", str(env) + "/.sasquatch/lib"]


def test_plugin_paths_installed(env):
    settings = GlobalSettings()
    settings.set_value(Option.INSTALLED, "true")
    paths = libraryinfo.plugin_paths(settings, "/a/bin")
    assert paths[0] == libraryinfo.PREFIX + "/lib/sasquatch/"


def test_thumbnail_path(env):
    settings = GlobalSettings()
    assert libraryinfo.thumbnail_path(settings, "sasquatch") == str(env) + "/.thumbnails/sasquatch/"
    settings.set_value(Option.THUMBNAIL_PATH, "/thumbs")
    assert libraryinfo.thumbnail_path(settings, "sasquatch") == "/thumbs"


def test_data_and_database_paths(env, monkeypatch, tmp_path):
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    expected = str(tmp_path / "data" / "MediaTrolls" / "sasquatch")
    assert libraryinfo.data_path() == expected
    assert libraryinfo.database_file_path() == expected + "/media.db"


def test_log_path_matches_temp_path(env):
    assert libraryinfo.log_path() == libraryinfo.temp_path()
    assert os.path.isdir(libraryinfo.temp_path())