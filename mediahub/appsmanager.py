"""Discovery of installed applications on the application search paths."""

from __future__ import annotations

import os

from . import libraryinfo
from .globalsettings import GlobalSettings

MANIFEST_NAME = "qmhmanifest.qml"


class AppsManager:
    """Finds application directories that carry a manifest."""

    def __init__(self, settings: GlobalSettings, app_dir: str | None = None) -> None:
        self._settings = settings
        self._app_dir = app_dir

    def find_applications(self) -> list[str]:
        """Absolute paths, with a trailing slash, of every ``<path>/<app>/`` holding a manifest."""
        apps: list[str] = []
        for search_path in libraryinfo.application_paths(self._settings, self._app_dir):
            try:
                entries = sorted(os.listdir(search_path))
            except OSError:
                continue
            for subdir in entries:
                if subdir.startswith("."):
                    continue
                app_path = search_path + "/" + subdir + "/"
                if not os.path.isdir(app_path):
                    continue
                if os.path.exists(app_path + MANIFEST_NAME):
                    apps.append(os.path.abspath(app_path) + "/")
        return apps