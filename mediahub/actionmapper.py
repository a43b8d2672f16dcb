"""Translation of raw key presses into navigation actions driven by keymap files."""

from __future__ import annotations

import dataclasses
import logging
import os
import re
from collections.abc import Callable
from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path

from . import libraryinfo
from .globalsettings import GlobalSettings, Option

logger = logging.getLogger(__name__)

NO_MODIFIER = 0x00000000
SHIFT_MODIFIER = 0x02000000


class Action(IntEnum):
    """Abstract user interface actions a key can be bound to."""

    NULL = -1
    LEFT = 0
    UP = 1
    RIGHT = 2
    DOWN = 3
    ENTER = 4
    MENU = 5
    CONTEXT = 6
    CONTEXTUAL_UP = 7
    CONTEXTUAL_DOWN = 8
    MEDIA_PLAY_PAUSE = 9
    MEDIA_STOP = 10
    MEDIA_PREVIOUS = 11
    MEDIA_NEXT = 12
    BACK = 13
    VOLUME_UP = 14
    VOLUME_DOWN = 15


_NAMED_KEYS = {
    "SPACE": 0x20,
    "PLUS": 0x2B,
    "COMMA": 0x2C,
    "MINUS": 0x2D,
    "PERIOD": 0x2E,
    "ESCAPE": 0x01000000,
    "TAB": 0x01000001,
    "BACKTAB": 0x01000002,
    "BACKSPACE": 0x01000003,
    "RETURN": 0x01000004,
    "ENTER": 0x01000005,
    "INSERT": 0x01000006,
    "DELETE": 0x01000007,
    "PAUSE": 0x01000008,
    "HOME": 0x01000010,
    "END": 0x01000011,
    "LEFT": 0x01000012,
    "UP": 0x01000013,
    "RIGHT": 0x01000014,
    "DOWN": 0x01000015,
    "PAGE_UP": 0x01000016,
    "PAGE_DOWN": 0x01000017,
    "MENU": 0x01000055,
    "BACK": 0x01000061,
    "FORWARD": 0x01000062,
    "STOP": 0x01000063,
    "VOLUME_DOWN": 0x01000070,
    "VOLUME_MUTE": 0x01000071,
    "VOLUME_UP": 0x01000072,
    "MEDIA_PLAY": 0x01000080,
    "MEDIA_STOP": 0x01000081,
    "MEDIA_PREVIOUS": 0x01000082,
    "MEDIA_NEXT": 0x01000083,
    "MEDIA_RECORD": 0x01000084,
    "MEDIA_PAUSE": 0x01000085,
    "MEDIA_TOGGLE_PLAY_PAUSE": 0x01000086,
    "CONTEXT1": 0x01100000,
}

Key = IntEnum(
    "Key",
    {
        **_NAMED_KEYS,
        **{f"F{n}": 0x01000030 + n - 1 for n in range(1, 13)},
        **{f"DIGIT_{d}": 0x30 + d for d in range(10)},
        **{chr(c): c for c in range(ord("A"), ord("Z") + 1)},
    },
    module=__name__,
)
Key.__doc__ = "Key codes understood in keymap files."

_ACTION_TO_KEY: dict[Action, int] = {
    Action.LEFT: Key.LEFT,
    Action.RIGHT: Key.RIGHT,
    Action.UP: Key.UP,
    Action.DOWN: Key.DOWN,
    Action.ENTER: Key.ENTER,
    Action.MENU: Key.MENU,
    Action.CONTEXT: Key.CONTEXT1,
    Action.CONTEXTUAL_UP: Key.PAGE_UP,
    Action.CONTEXTUAL_DOWN: Key.PAGE_DOWN,
    Action.MEDIA_PLAY_PAUSE: Key.MEDIA_TOGGLE_PLAY_PAUSE,
    Action.MEDIA_STOP: Key.MEDIA_STOP,
    Action.MEDIA_PREVIOUS: Key.MEDIA_PREVIOUS,
    Action.MEDIA_NEXT: Key.MEDIA_NEXT,
    Action.BACK: Key.BACK,
    Action.VOLUME_UP: Key.VOLUME_UP,
    Action.VOLUME_DOWN: Key.VOLUME_DOWN,
}

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def _member_name(name: str) -> str:
    name = name.strip()
    if name.isdigit():
        return f"DIGIT_{name}"
    return _CAMEL_BOUNDARY.sub("_", name).upper()


def key_from_name(name: str) -> Key | None:
    """Look up a key by its keymap spelling, e.g. ``PageUp`` or ``7``."""
    return Key.__members__.get(_member_name(name))


def action_from_name(name: str) -> Action | None:
    """Look up an action by its keymap spelling, e.g. ``MediaPlayPause``."""
    return Action.__members__.get(_member_name(name))


@dataclass(frozen=True)
class KeyEvent:
    """A key press or release."""

    key: int
    pressed: bool = True
    modifiers: int = NO_MODIFIER
    text: str = ""
    auto_repeat: bool = False
    count: int = 1


Recipient = Callable[[KeyEvent], object]


class ActionMapper:
    """Maps keys to actions using the keymap named in the settings."""

    def __init__(self, settings: GlobalSettings, app_dir: str | None = None) -> None:
        self._settings = settings
        self._app_dir = app_dir
        self._recipient: Recipient | None = None
        self._generated_event = False
        self._skip_generated_event = False
        self._action_map: dict[int, Action] = {}
        self._map_name = str(settings.value(Option.KEYMAP) or "")
        logger.debug("Available maps %s", self.available_maps())
        self._populate_map()

    @property
    def map_name(self) -> str:
        return self._map_name

    @property
    def action_map(self) -> dict[int, Action]:
        """Current key code to action bindings."""
        return dict(self._action_map)

    def _search_paths(self) -> list[str]:
        return libraryinfo.keyboard_map_paths(self._settings, self._app_dir)

    def available_maps(self) -> list[str]:
        """Names of keymap files found on the search paths, first occurrence wins."""
        maps: list[str] = []
        for directory in self._search_paths():
            try:
                entries = sorted(os.listdir(directory))
            except OSError:
                continue
            for entry in entries:
                if entry.startswith(".") or entry in maps:
                    continue
                if os.path.isfile(os.path.join(directory, entry)):
                    maps.append(entry)
        return maps

    def set_map(self, name: str) -> None:
        self._map_name = name
        self._populate_map()

    def _populate_map(self) -> None:
        self._action_map.clear()
        for directory in self._search_paths():
            keymap = directory + "/" + self._map_name
            logger.debug("Try to load keymap %s from keymap path %s", self._map_name, directory)
            if self.load_map(keymap):
                logger.debug("Using keymap %s", keymap)
                break

    def load_map(self, path: str | os.PathLike[str]) -> bool:
        """Merge ``Action=Key,Key`` bindings from a file; False if it cannot be read."""
        file = Path(path)
        try:
            if not file.is_file():
                raise FileNotFoundError(str(file))
            text = file.read_text(encoding="latin-1")
        except OSError:
            logger.warning("Could not load keymap: %s", file)
            return False

        for line in text.splitlines():
            if "=" not in line:
                continue
            action_name, key_list = line.split("=", 1)
            action = action_from_name(action_name)
            if action is None or action is Action.NULL:
                logger.warning("Mapped action is not defined, skipping: %s", action_name)
                continue
            for key_name in key_list.split(","):
                key = key_from_name(key_name)
                if key is None:
                    logger.warning("Key does not exist: Key_%s", key_name)
                    continue
                self._action_map[int(key)] = action
        return True

    def set_recipient(self, recipient: Recipient) -> None:
        """Deliver generated key events to ``recipient``, which feeds its events back here."""
        self._skip_generated_event = True
        self._recipient = recipient

    def _send_press_and_release(self, key: int, modifiers: int, text: str) -> None:
        assert self._recipient is not None
        self._recipient(KeyEvent(key, True, modifiers, text))
        self._recipient(KeyEvent(key, False, modifiers, text))

    def take_action(self, action: Action | int) -> None:
        """Send the key bound to ``action`` as a press and a release."""
        if self._recipient is None:
            logger.warning("Trying to send an action when no recipient is set")
            return
        try:
            key = _ACTION_TO_KEY.get(Action(action), 0)
        except ValueError:
            key = 0
        self._send_press_and_release(int(key), NO_MODIFIER, "")

    def process_key(self, key: int) -> None:
        """Send a character code as a key press and release, upper-casing letters."""
        if self._recipient is None:
            logger.warning("Trying to send a key when no recipient is set")
            return
        code = int(key)
        upper = False
        if ord("a") <= key <= ord("z"):
            code -= 32
        elif Key.A <= key <= Key.Z:
            upper = True
        modifiers = SHIFT_MODIFIER if upper else NO_MODIFIER
        self._send_press_and_release(code, modifiers, chr(int(key)))

    def event_filter(self, event: KeyEvent) -> bool:
        """Replace a mapped key by its action's key; True if the event was consumed."""
        if not (self._skip_generated_event and self._generated_event):
            action = self._action_map.get(event.key)
            if action is not None:
                if self._recipient is not None:
                    replacement = dataclasses.replace(event, key=int(_ACTION_TO_KEY.get(action, 0)))
                    self._generated_event = True
                    self._recipient(replacement)
                    return True
                logger.debug("The intended recipient is gone")
        self._generated_event = False
        return False