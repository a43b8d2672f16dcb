"""Application-wide settings with defaults, documentation and overrides."""

from __future__ import annotations

import os
from collections.abc import Callable, Iterable
from enum import IntEnum
from pathlib import Path
from typing import Any

Listener = Callable[[str, Any], None]


class Option(IntEnum):
    """Every setting known to the application."""

    SKIN = 0
    SKINS_PATH = 1
    SKIN_RESOLUTION = 2
    KEYMAP = 3
    KEYMAPS_PATH = 4
    APPLICATIONS_PATH = 5
    FULL_SCREEN = 6
    OVERLAY_MODE = 7
    HEADLESS = 8
    PROXY = 9
    PROXY_HOST = 10
    PROXY_PORT = 11
    MULTI_INSTANCE = 12
    MOUSE = 13
    MOUSE_TIMEOUT = 14
    STREAMING_ADDRESS = 15
    STREAMING_PORT = 16
    OVERSCAN = 17
    OVERSCAN_GEOMETRY = 18
    IDLE_TIMEOUT = 19
    SYSTEM_TRAY = 20
    WINDOW_GEOMETRY = 21
    RESIZE_DELAY = 22
    TRANSLATIONS_PATH = 23
    RESOURCES_PATH = 24
    APPS_PATH = 25
    IMPORTS_PATH = 26
    THUMBNAIL_PATH = 27
    THUMBNAIL_SIZE = 28
    MEDIA_REFRESH_INTERVAL = 29
    REMOTE_OVERRIDE = 30
    SCAN_DELAY = 31
    EXTRA_SNES_EXTENSIONS = 32
    EXTRA_VIDEO_EXTENSIONS = 33
    INSTALLED = 34
    MEMORY_CONSCIOUS = 35
    REDIRECT_DEBUG_OUTPUT = 36
    SWAP_LOG_POLL_INTERVAL = 37
    FPS = 38
    UNIFIED_TIMER = 39


_DEFAULTS: tuple[tuple[Option, str, str, str], ...] = (
    (Option.SKIN, "shroomfluence", "skin", "<name> specifies the skin"),
    (Option.SYSTEM_TRAY, "true", "systemTray", "<bool> toggle system tray icon"),
    (Option.SKINS_PATH, "", "skinsPath", "<path> adds path to skins search paths"),
    (Option.SKIN_RESOLUTION, "", "skinResolution", "<string> resolution name from skin manifest"),
    (Option.KEYMAP, "stdkeyboard", "keymap", "<name> specifies the keymap"),
    (Option.KEYMAPS_PATH, "", "keymapsPath", "<path> adds path to keymaps search paths"),
    (Option.APPLICATIONS_PATH, "", "appsPath", "<path> adds path to skins search paths"),
    (Option.FULL_SCREEN, "true", "fullscreen", "<bool> toggle fullscreen"),
    (Option.OVERLAY_MODE, "true", "overlayMode",
     "<bool> toggle overlay mode used for devices with other mediaplayers than QtMultimediaKit"),
    (Option.HEADLESS, "false", "headless",
     "<bool> toggle running with user interface, usable for streaming server usage"),
    (Option.PROXY, "false", "proxy", "<bool> use a proxy for network access"),
    (Option.PROXY_HOST, "localhost", "proxyHost", "<hostname> set proxy host, only used with -proxy=true"),
    (Option.PROXY_PORT, "8080", "proxyPort", "<port> set port number for proxy usage, only used with -proxy=true"),
    (Option.MULTI_INSTANCE, "false", "multiInstance", "<bool> allow running multiple instances"),
    (Option.MOUSE, "true", "mouse", "<bool> toggle mouse cursor"),
    (Option.MOUSE_TIMEOUT, "2", "mouseTimeout", "<int> hide idle mouse cursor timeout in seconds"),
    (Option.STREAMING_ADDRESS, "", "streamingAddress", "<string> specifies the streaming address"),
    (Option.STREAMING_PORT, "1337", "streamingPort", "<int> specifies the streaming port"),
    (Option.OVERSCAN, "false", "overscan", "<bool> use overscan mode, use also overscanGeometry"),
    (Option.OVERSCAN_GEOMETRY, "", "overscanGeometry", "<int>x<int> set the overscan dimension"),
    (Option.IDLE_TIMEOUT, "120", "idleTimeout", "<int> idle timeout in seconds"),
    (Option.WINDOW_GEOMETRY, "1080x720", "windowGeometry", "<int>x<int> set the window dimension"),
    (Option.RESIZE_DELAY, "25", "resizeDelay", "<int> wait n milliseconds to do actual resize"),
    (Option.TRANSLATIONS_PATH, "", "translationsPath", "<path> adds path to translations search paths"),
    (Option.RESOURCES_PATH, "", "resourcesPath", "<path> adds path to resources search paths"),
    (Option.APPS_PATH, "", "appsPath", "<path> adds path to apps search paths"),
    (Option.IMPORTS_PATH, "", "importsPath", "<path> adds path to qml imports paths"),
    (Option.THUMBNAIL_PATH, "", "thumbnailPath", "<path> set path for thumbnail storage"),
    (Option.THUMBNAIL_SIZE, "256", "thumbnailSize", "<int> edge size for thumbnails"),
    (Option.MEDIA_REFRESH_INTERVAL, "1000", "mediaRefreshInterval", "<int> media model refresh interval"),
    (Option.REMOTE_OVERRIDE, "false", "remoteOverride", "<bool> force to run as remote control"),
    (Option.SCAN_DELAY, "0", "scanDelay", "<int> delay scanner for n ms to keep user interface responsive"),
    (Option.EXTRA_SNES_EXTENSIONS, "", "extraSNESExtensions",
     "<stringlist> comma separated list of additional SNES file extensions"),
    (Option.EXTRA_VIDEO_EXTENSIONS, "", "extraVideoExtensions",
     "<stringlist> comma separated list of additional video file extensions"),
    (Option.INSTALLED, "false", "installed", "<bool> assume installed to correct prefix"),
    (Option.MEMORY_CONSCIOUS, "false", "memoryConscious", "<bool> constrain footprint"),
    (Option.REDIRECT_DEBUG_OUTPUT, "false", "log", "<bool> log debug messenging to file!"),
    (Option.SWAP_LOG_POLL_INTERVAL, "1000", "swaplogInterval", "<int> Interval at which to sample the swap log!"),
    (Option.FPS, "false", "fps", "<bool> show fps counter!"),
    (Option.UNIFIED_TIMER, "false", "utimer", "<bool> Use a unified animation timer"),
)


def _to_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() not in ("", "0", "false")
    return bool(value)


def default_config_path() -> Path:
    """Location of the configuration file read when no path is given."""
    return Path.home() / ".sasquatch" / "config"


class GlobalSettings:
    """Named options with defaults, overridable from a config file and the command line."""

    def __init__(self) -> None:
        self._table: dict[Option, str] = {}
        self._values: dict[str, Any] = {}
        self._docs: dict[str, str] = {}
        self._listeners: list[Listener] = []
        for option, value, name, doc in _DEFAULTS:
            self.add_option_entry(option, value, name, doc)

    def is_enabled(self, option: Option) -> bool:
        """Whether the option's value reads as true."""
        return _to_bool(self.value(option))

    def value(self, option: Option) -> Any:
        return self._values.get(self._table[option])

    def name(self, option: Option) -> str:
        return self._table[option]

    def doc(self, option: Option) -> str:
        return self._docs.get(self.name(option), "")

    def set_value(self, option: Option, value: Any) -> None:
        self._set(self._table[option], value)

    def add_option_entry(self, option: Option, value: Any, name: str, doc: str) -> None:
        """Register an option with its default value, command-line name and help text."""
        self._table[option] = name
        self._values[name] = value
        self._docs[name] = doc

    def parse_arguments(self, arguments: Iterable[str]) -> None:
        """Apply ``-name value``, ``-name=value`` and bare ``-name`` (true) arguments."""
        tokens = list(arguments)
        position = 0
        while position < len(tokens):
            token = tokens[position]
            position += 1
            if not token.startswith("-") or token.strip("-") == "":
                continue
            body = token.lstrip("-")
            if "=" in body:
                name, value = body.split("=", 1)
            elif position < len(tokens) and not tokens[position].startswith("-"):
                name, value = body, tokens[position]
                position += 1
            else:
                name, value = body, "true"
            self._set(name, value)

    def load_config_file(self, path: str | os.PathLike[str] | None = None) -> bool:
        """Read ``name=value`` lines from a file; returns False if it cannot be read."""
        config = Path(path) if path is not None else default_config_path()
        try:
            text = config.read_text(encoding="utf-8")
        except OSError:
            return False
        for raw in text.splitlines():
            line = raw.strip()
            if not line or line.startswith(("#", ";", "[")) or "=" not in line:
                continue
            name, value = line.split("=", 1)
            self._set(name.strip(), value.strip())
        return True

    def subscribe(self, callback: Listener) -> Callable[[], None]:
        """Call ``callback(name, value)`` on every change; returns an unsubscribe function."""
        self._listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def _set(self, name: str, value: Any) -> None:
        self._values[name] = value
        for listener in list(self._listeners):
            listener(name, value)