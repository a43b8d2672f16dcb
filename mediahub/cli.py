"""Command-line entry point: help output, settings and the headless streaming server."""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Sequence

from . import libraryinfo
from .globalsettings import GlobalSettings, Option
from .httpserver.server import HttpServer

logger = logging.getLogger(__name__)

_HELP_FLAGS = ("--help", "-help", "-h")


def format_help(settings: GlobalSettings) -> str:
    """Usage text listing every option with its documentation and current value."""
    lines = [
        "Usage: sasquatch [-option value] [-option=value]",
        "",
        "Options (default):",
    ]
    for option in Option:
        value = settings.value(option)
        lines.append(
            "  -%-20s %s \t (%s)" % (settings.name(option), settings.doc(option), "" if value is None else value)
        )
    lines.append("")
    return "\n".join(lines) + "\n"


def _setup_network(settings: GlobalSettings) -> None:
    if not settings.is_enabled(Option.PROXY):
        return
    host = str(settings.value(Option.PROXY_HOST))
    port = int(settings.value(Option.PROXY_PORT))
    proxy = f"http://{host}:{port}"
    for name in ("http_proxy", "https_proxy", "HTTP_PROXY", "HTTPS_PROXY"):
        os.environ[name] = proxy
    logger.warning("Using proxy host %s on port %s", host, port)


class _LogFileHandler(logging.Handler):
    """Writes debug and warning messages to one file and everything else to another."""

    def __init__(self, directory: str) -> None:
        super().__init__(logging.DEBUG)
        self._base = os.path.join(directory, "qmh-log")

    def emit(self, record: logging.LogRecord) -> None:
        suffix = "-debug.log" if record.levelno <= logging.WARNING else "-error.log"
        try:
            with open(self._base + suffix, "a", encoding="latin-1", errors="replace") as handle:
                handle.write(self.format(record) + "\n")
        except OSError:
            self.handleError(record)


def _run_headless(settings: GlobalSettings) -> int:
    try:
        server = HttpServer(settings, int(settings.value(Option.STREAMING_PORT)))
    except OSError:
        return 1
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        pass
    finally:
        server.shutdown()
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    arguments = list(sys.argv[1:] if argv is None else argv)
    settings = GlobalSettings()

    if any(flag in arguments for flag in _HELP_FLAGS):
        print(format_help(settings))
        return 0

    # Config file first, the command line wins.
    settings.load_config_file()
    settings.parse_arguments(arguments)

    _setup_network(settings)

    handler: logging.Handler | None = None
    if settings.is_enabled(Option.REDIRECT_DEBUG_OUTPUT):
        handler = _LogFileHandler(libraryinfo.log_path())
        logging.getLogger().addHandler(handler)
    try:
        if not settings.is_enabled(Option.HEADLESS):
            logger.error("No graphical user interface is available; run with -headless true")
            return 1
        return _run_headless(settings)
    finally:
        if handler is not None:
            logging.getLogger().removeHandler(handler)


if __name__ == "__main__":
    raise SystemExit(main())