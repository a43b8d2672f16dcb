import pytest

from mediahub.actionmapper import (
    NO_MODIFIER,
    SHIFT_MODIFIER,
    Action,
    ActionMapper,
    Key,
    KeyEvent,
    action_from_name,
    key_from_name,
)
from mediahub.globalsettings import GlobalSettings, Option


@pytest.fixture
def env(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.delenv("QMH_KEYMAPS_PATH", raising=False)
    maps = tmp_path / "maps"
    maps.mkdir()
    (maps / "custom").write_text(
        "Left=Left,H\nMenu=M\nBogus=X\nEnter=Return,NoSuchKey\nNull=Q\n\n"
    )
    (maps / "other").write_text("Up=K\n")
    settings = GlobalSettings()
    settings.set_value(Option.KEYMAPS_PATH, str(maps))
    settings.set_value(Option.KEYMAP, "custom")
    return settings, str(tmp_path / "bin"), maps


def make_mapper(env):
    settings, app_dir, _ = env
    return ActionMapper(settings, app_dir=app_dir)


def test_name_lookup():
    assert key_from_name("PageUp") == Key.PAGE_UP
    assert key_from_name("7") == Key.DIGIT_7
    assert key_from_name("MediaTogglePlayPause") == Key.MEDIA_TOGGLE_PLAY_PAUSE
    assert key_from_name("NoSuchKey") is None
    assert action_from_name("ContextualDown") == Action.CONTEXTUAL_DOWN


def test_loads_configured_map(env):
    mapper = make_mapper(env)
    assert mapper.map_name == "custom"
    assert mapper.action_map == {
        Key.LEFT: Action.LEFT,
        Key.H: Action.LEFT,
        Key.M: Action.MENU,
        Key.RETURN: Action.ENTER,
    }


def test_null_and_unknown_actions_skipped(env):
    mapper = make_mapper(env)
    assert Key.Q not in mapper.action_map
    assert Key.X not in mapper.action_map


def test_event_filter_translates_and_skips_generated(env):
    mapper = make_mapper(env)
    received = []
    mapper.set_recipient(received.append)
    assert mapper.event_filter(KeyEvent(Key.H, pressed=True, text="h")) is True
    assert received == [KeyEvent(Key.LEFT, pressed=True, text="h")]
    # the generated event coming back is let through untouched
    assert mapper.event_filter(received[0]) is False
    assert mapper.event_filter(KeyEvent(Key.M, pressed=False)) is True
    assert received[-1] == KeyEvent(Key.MENU, pressed=False)


def test_unmapped_key_passes(env):
    mapper = make_mapper(env)
    received = []
    mapper.set_recipient(received.append)
    assert mapper.event_filter(KeyEvent(Key.Z)) is False
    assert received == []


def test_mapped_key_without_recipient_not_consumed(env):
    mapper = make_mapper(env)
    assert mapper.event_filter(KeyEvent(Key.H)) is False


def test_take_action_sends_press_and_release(env):
    mapper = make_mapper(env)
    received = []
    mapper.set_recipient(received.append)
    mapper.take_action(Action.ENTER)
    assert received == [KeyEvent(Key.ENTER, True), KeyEvent(Key.ENTER, False)]
    received.clear()
    mapper.take_action(int(Action.UP))
    assert [e.key for e in received] == [Key.UP, Key.UP]


def test_take_action_without_recipient_warns(env, caplog):
    mapper = make_mapper(env)
    with caplog.at_level("WARNING"):
        mapper.take_action(Action.LEFT)
    assert "no recipient" in caplog.text


def test_process_key_lower_and_upper(env):
    mapper = make_mapper(env)
    received = []
    mapper.set_recipient(received.append)
    mapper.process_key(ord("a"))
    assert received[0] == KeyEvent(Key.A, True, NO_MODIFIER, "a")
    assert received[1].pressed is False
    received.clear()
    mapper.process_key(ord("A"))
    assert received[0] == KeyEvent(Key.A, True, SHIFT_MODIFIER, "A")


def test_available_maps_and_set_map(env):
    mapper = make_mapper(env)
    maps = mapper.available_maps()
    assert {"custom", "other"} <= set(maps)
    assert len(maps) == len(set(maps))
    mapper.set_map("other")
    assert mapper.map_name == "other"
    assert mapper.action_map == {Key.K: Action.UP}


def test_load_map_missing_file(env, tmp_path):
    mapper = make_mapper(env)
    assert mapper.load_map(tmp_path / "absent") is False


def test_load_map_merges(env):
    mapper = make_mapper(env)
    _, _, maps = env
    assert mapper.load_map(maps / "other") is True
    assert mapper.action_map[Key.K] == Action.UP
    assert mapper.action_map[Key.H] == Action.LEFT