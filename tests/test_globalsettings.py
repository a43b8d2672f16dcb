import pytest

from mediahub.globalsettings import GlobalSettings, Option


@pytest.fixture
def settings():
    return GlobalSettings()


def test_defaults_from_table(settings):
    assert settings.value(Option.SKIN) == "shroomfluence"
    assert settings.value(Option.KEYMAP) == "stdkeyboard"
    assert settings.value(Option.WINDOW_GEOMETRY) == "1080x720"
    assert settings.value(Option.STREAMING_PORT) == "1337"


def test_names_and_docs(settings):
    assert settings.name(Option.FULL_SCREEN) == "fullscreen"
    assert settings.doc(Option.FULL_SCREEN) == "<bool> toggle fullscreen"
    assert settings.name(Option.REDIRECT_DEBUG_OUTPUT) == "log"


def test_apps_path_options_share_name(settings):
    assert settings.name(Option.APPS_PATH) == settings.name(Option.APPLICATIONS_PATH) == "appsPath"
    assert settings.doc(Option.APPLICATIONS_PATH) == "<path> adds path to apps search paths"


def test_every_option_has_a_name(settings):
    names = [settings.name(option) for option in Option]
    assert all(names)
    assert len(Option) == len(names)


def test_is_enabled_defaults(settings):
    assert settings.is_enabled(Option.FULL_SCREEN) is True
    assert settings.is_enabled(Option.HEADLESS) is False
    assert settings.is_enabled(Option.SKINS_PATH) is False


def test_set_value_notifies(settings):
    seen = []
    settings.subscribe(lambda name, value: seen.append((name, value)))
    settings.set_value(Option.MOUSE, False)
    assert seen == [("mouse", False)]
    assert settings.is_enabled(Option.MOUSE) is False


def test_unsubscribe_stops_notifications(settings):
    seen = []
    unsubscribe = settings.subscribe(lambda name, value: seen.append(name))
    unsubscribe()
    settings.set_value(Option.FPS, True)
    assert seen == []
    assert settings.is_enabled(Option.FPS) is True


def test_parse_arguments_forms(settings):
    settings.parse_arguments(["sasquatch", "-skin=other", "-keymap", "mine", "--fps", "-headless"])
    assert settings.value(Option.SKIN) == "other"
    assert settings.value(Option.KEYMAP) == "mine"
    assert settings.is_enabled(Option.FPS)
    assert settings.is_enabled(Option.HEADLESS)


def test_parse_false_value(settings):
    settings.parse_arguments(["-fullscreen=false"])
    assert settings.is_enabled(Option.FULL_SCREEN) is False


def test_load_config_file(settings, tmp_path):
    config = tmp_path / "config"
    config.write_text("# comment\nskin = confskin\n\nproxy=true\n", encoding="utf-8")
    assert settings.load_config_file(config) is True
    assert settings.value(Option.SKIN) == "confskin"
    assert settings.is_enabled(Option.PROXY)


def test_arguments_override_config(settings, tmp_path):
    config = tmp_path / "config"
    config.write_text("skin=fromfile\n", encoding="utf-8")
    settings.load_config_file(config)
    settings.parse_arguments(["-skin", "fromargs"])
    assert settings.value(Option.SKIN) == "fromargs"


def test_missing_config_file(settings, tmp_path):
    assert settings.load_config_file(tmp_path / "absent") is False
    assert settings.value(Option.SKIN) == "shroomfluence"


def test_add_option_entry_overrides(settings):
    settings.add_option_entry(Option.SKIN, "alt", "skinName", "doc text")
    assert settings.name(Option.SKIN) == "skinName"
    assert settings.value(Option.SKIN) == "alt"
    assert settings.doc(Option.SKIN) == "doc text"