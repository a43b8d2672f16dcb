"""Search paths for skins, applications, keymaps and other resources."""

from __future__ import annotations

import os
import sys
import tempfile
from pathlib import Path

from .globalsettings import GlobalSettings, Option

APPLICATION_NAME = "sasquatch"
ORGANIZATION_NAME = "MediaTrolls"
PREFIX = sys.prefix
PROJECT_ROOT = str(Path(__file__).resolve().parent.parent)


def _is_mac() -> bool:
    return sys.platform == "darwin"


def _home() -> str:
    return str(Path.home())


def _application_dir(app_dir: str | None) -> str:
    if app_dir is not None:
        return app_dir
    return os.path.dirname(os.path.abspath(sys.argv[0] if sys.argv and sys.argv[0] else "."))


def _standard_resource_paths(
    settings: GlobalSettings,
    option: Option,
    suffix: str,
    app_dir: str | None,
    relative_offset: str = "/../",
) -> list[str]:
    # The order of the returned paths is relevant.
    if _is_mac():
        bin_offset = "/../Resources/" if settings.is_enabled(Option.INSTALLED) else "/../../../"
    else:
        bin_offset = ""
    base = _application_dir(app_dir)

    paths: list[str] = []
    configured = settings.value(option)
    if configured:
        paths.append(os.path.abspath(str(configured)))

    paths.append(base + relative_offset + bin_offset + suffix + "/")

    env_path = os.environ.get(f"QMH_{suffix.upper()}_PATH", "")
    if env_path:
        paths.append(os.path.abspath(env_path))

    paths.append(base + relative_offset + bin_offset + "/share/sasquatch/" + suffix + "/")
    paths.append(PROJECT_ROOT + "/hub/share/sasquatch/" + suffix + "/")
    paths.append(PREFIX + "/share/sasquatch/" + suffix + "/")
    paths.append(_home() + "/.sasquatch/" + suffix + "/")
    return paths


def skin_paths(settings: GlobalSettings, app_dir: str | None = None) -> list[str]:
    return _standard_resource_paths(settings, Option.SKINS_PATH, "skins", app_dir, "/../../")


def application_paths(settings: GlobalSettings, app_dir: str | None = None) -> list[str]:
    return _standard_resource_paths(settings, Option.APPS_PATH, "apps", app_dir, "/../../../")


def translation_paths(settings: GlobalSettings, app_dir: str | None = None) -> list[str]:
    return _standard_resource_paths(settings, Option.TRANSLATIONS_PATH, "translations", app_dir)


def resource_paths(settings: GlobalSettings, app_dir: str | None = None) -> list[str]:
    return _standard_resource_paths(settings, Option.RESOURCES_PATH, "resources", app_dir)


def keyboard_map_paths(settings: GlobalSettings, app_dir: str | None = None) -> list[str]:
    return _standard_resource_paths(settings, Option.KEYMAPS_PATH, "keymaps", app_dir)


def qml_import_paths(settings: GlobalSettings, app_dir: str | None = None) -> list[str]:
    return _standard_resource_paths(settings, Option.IMPORTS_PATH, "imports", app_dir)


def plugin_paths(settings: GlobalSettings, app_dir: str | None = None) -> list[str]:
    base = _application_dir(app_dir)
    if settings.is_enabled(Option.INSTALLED):
        first = base + "../Resources/sasquatch" if _is_mac() else PREFIX + "/lib/sasquatch/"
    else:
        first = base + ("/../../../lib/sasquatch/" if _is_mac() else "/../lib/sasquatch/")
    return [first, _home() + "/.sasquatch/lib"]


def thumbnail_path(settings: GlobalSettings, app_name: str = APPLICATION_NAME) -> str:
    configured = settings.value(Option.THUMBNAIL_PATH)
    if configured:
        return str(configured)
    return _home() + "/.thumbnails/" + app_name + "/"


def data_path() -> str:
    """Writable per-user data directory, or /tmp if none can be determined."""
    try:
        if _is_mac():
            root = Path.home() / "Library" / "Application Support"
        elif os.name == "nt":
            root = Path(os.environ.get("LOCALAPPDATA") or Path.home() / "AppData" / "Local")
        else:
            root = Path(os.environ.get("XDG_DATA_HOME") or Path.home() / ".local" / "share")
    except RuntimeError:
        return "/tmp"
    return str(root / ORGANIZATION_NAME / APPLICATION_NAME)


def temp_path() -> str:
    return tempfile.gettempdir() or "/tmp"


def log_path() -> str:
    return temp_path()


def database_file_path() -> str:
    return data_path() + "/media.db"