"""Per-connection handling of media and remote QML requests for the streaming server."""

from __future__ import annotations

import logging
import os
import re
import socketserver
import sqlite3
from dataclasses import dataclass
from typing import BinaryIO
from urllib.parse import unquote, urlparse

logger = logging.getLogger(__name__)

CHUNK_SIZE = 16 * 1024
MEDIA_TYPES = ("music", "picture", "video")
_MAX_LINE = 65536
_TOKEN_SPLIT = re.compile(r"[ \r\n]+")
_INTEGER = re.compile(r"[+-]?\d+")
_FORMAT_HELP = (
    "the right format is: /<type>/[thumbnail/]<id> or /<type>/<id> for media and "
    "/qml/<skin>/<qml-file> for qml files (supported types: picture, music, video); "
    "<id> must be convertible to int"
)


class RequestFormatError(ValueError):
    """A request path that does not follow the supported layout."""

    def __init__(self, path: str, reason: str = "") -> None:
        detail = f"{reason}; " if reason else ""
        super().__init__(f"the http-request was of wrong format: {path!r}; {detail}{_FORMAT_HELP}")
        self.path = path


@dataclass(frozen=True)
class MediaRequest:
    """A request for a media file or its thumbnail."""

    media_type: str
    media_id: int
    thumbnail: bool = False


def parse_request(data: bytes) -> tuple[str, str, dict[str, str]]:
    """Split a request head into method, path and the ``Name: value`` headers.

    Header lines holding more than one colon are ignored.
    """
    text = data.decode("latin-1")
    first, _, rest = text.partition("\n")
    tokens = _TOKEN_SPLIT.split(first)
    method = tokens[0] if tokens else ""
    path = tokens[1] if len(tokens) > 1 else ""
    headers: dict[str, str] = {}
    for line in rest.split("\n"):
        parts = line.split(":")
        if len(parts) == 2:
            headers[parts[0]] = parts[1].strip().replace("\r\n", "")
    return method, path, headers


def _parse_int(text: str) -> int | None:
    text = text.strip()
    if not _INTEGER.fullmatch(text):
        return None
    value = int(text)
    if not -(2**31) <= value < 2**31:
        return None
    return value


def parse_media_path(path: str) -> MediaRequest:
    """Interpret ``/<type>/<id>`` or ``/<type>/thumbnail/<id>``."""
    tokens = [token for token in path.split("/") if token]
    if not tokens or tokens[0].lower() not in MEDIA_TYPES:
        raise RequestFormatError(path, "unsupported media type")
    media_type = tokens[0]
    thumbnail = False
    id_text = ""
    if len(tokens) == 3:
        if tokens[1].lower() != "thumbnail":
            raise RequestFormatError(path, "expected 'thumbnail'")
        if media_type.lower() == "music":
            raise RequestFormatError(path, "thumbnails for music are currently not supported")
        thumbnail = True
        id_text = tokens[2]
    elif len(tokens) == 2:
        id_text = tokens[1]
    media_id = _parse_int(id_text)
    if media_id is None:
        raise RequestFormatError(path, "invalid id")
    return MediaRequest(media_type, media_id, thumbnail)


def answer_ok(length: int) -> bytes:
    """Response head announcing a whole file of ``length`` bytes."""
    return (
        "HTTP/1.1 200 OK \r\n"
        "Server: QtMediaHub (Unix) \r\n"
        f"Content-Length: {length}\r\n"
        "Connection: close \r\n"
        "Content-Type: application/octet-stream \r\n"
        "Accept-Ranges: bytes \r\n"
        "\r\n"
    ).encode("latin-1")


def answer_not_found() -> bytes:
    return (
        "HTTP/1.1 404 Not Found \r\n"
        "Server: QtMediaHub (Unix) \r\n"
        "Connection: close \r\n"
        "\r\n"
    ).encode("latin-1")


def answer_partial(offset: int, size: int) -> bytes:
    """Response head for the tail of a ``size`` byte file starting at ``offset``."""
    return (
        "HTTP/1.1 206 Partial content \r\n"
        "Server: QtMediaHub (Unix) \r\n"
        f"Content-Length: {size - offset}\r\n"
        "Connection: close \r\n"
        f"Content-Range: bytes {offset}-{size - 1}/{size} \t\n"
        "Content-Type: application/octet-stream \r\n"
        "Accept-Ranges: bytes \r\n"
        "\r\n"
    ).encode("latin-1")


def _range_offset(value: str) -> int:
    start = value[6:].split("-")[0].strip()
    return int(start) if _INTEGER.fullmatch(start) else 0


def _to_local_file(url: str) -> str:
    parsed = urlparse(url)
    if parsed.scheme.lower() != "file":
        return ""
    path = unquote(parsed.path)
    if parsed.netloc and parsed.netloc != "localhost":
        return "//" + parsed.netloc + path
    return path


class HttpClientHandler(socketserver.StreamRequestHandler):
    """Answers one request for a media file, a thumbnail or a skin's remote QML file.

    The owning server provides ``skins`` (name to directory) and ``database`` (path).
    """

    def handle(self) -> None:
        head = self._read_head()
        if not head:
            return
        method, path, headers = parse_request(head)
        self.request_headers = headers
        if method != "GET":
            return
        if path.startswith("/qml"):
            self._serve_qml(path)
        else:
            self._serve_media(path)

    def _read_head(self) -> bytes:
        lines: list[bytes] = []
        while True:
            line = self.rfile.readline(_MAX_LINE)
            if not line:
                break
            lines.append(line)
            if line in (b"\r\n", b"\n"):
                break
        return b"".join(lines)

    def _serve_qml(self, path: str) -> None:
        tokens = [token for token in path.split("/") if token]
        if len(tokens) != 3:
            logger.warning("%s", RequestFormatError(path))
            return
        skin_name, file_name = tokens[1], tokens[2]
        skins = getattr(self.server, "skins", {}) or {}
        skin_path = skins.get(skin_name)
        if skin_path is None:
            logger.warning("requested skin %s, but this skin is unknown", skin_name)
            return
        self.send_file(str(skin_path) + "/remoteqml/" + file_name)

    def _serve_media(self, path: str) -> None:
        try:
            request = parse_media_path(path)
        except RequestFormatError as error:
            logger.warning("%s", error)
            return
        headers = getattr(self, "request_headers", {})
        if "Range" in headers:
            if request.media_type.lower() == "picture":
                logger.warning("picture requests do not support Range parameters")
                return
            offset = _range_offset(headers["Range"])
            self.send_partial(self.media_path(request.media_type, request.media_id), offset)
        else:
            field = "thumbnail" if request.thumbnail else "filepath"
            self.send_file(self.media_path(request.media_type, request.media_id, field))

    def media_path(self, media_type: str, media_id: int, field: str = "uri") -> str:
        """Local file named by ``field`` of the media record, or "" if there is none."""
        if media_type.lower() not in MEDIA_TYPES:
            raise RequestFormatError(f"/{media_type}/{media_id}", "unsupported media type")
        database = getattr(self.server, "database", None)
        if not database:
            logger.warning("No media database configured")
            return ""
        query = f"SELECT * FROM {media_type} WHERE id = ?"
        try:
            connection = sqlite3.connect(os.fspath(database))
        except sqlite3.Error as error:
            logger.warning("Error opening database: %s", error)
            return ""
        try:
            connection.row_factory = sqlite3.Row
            row = connection.execute(query, (int(media_id),)).fetchone()
        except sqlite3.Error as error:
            logger.warning("Error executing query: %s (%s)", query, error)
            return ""
        finally:
            connection.close()
        if row is None:
            logger.warning("No records found: %s", query)
            return ""
        try:
            value = row[field]
        except (IndexError, KeyError):
            return ""
        if value is None:
            return ""
        if isinstance(value, bytes):
            value = value.decode("utf-8", errors="replace")
        return _to_local_file(str(value))

    def _write(self, data: bytes) -> bool:
        try:
            self.wfile.write(data)
        except OSError:
            return False
        return True

    def _stream(self, handle: BinaryIO) -> None:
        while chunk := handle.read(CHUNK_SIZE):
            if not self._write(chunk):
                break

    def send_file(self, filename: str) -> bool:
        """Send the whole file, or a 404 answer if it cannot be opened."""
        try:
            handle = open(filename, "rb")
        except OSError:
            logger.debug("could not open file %s", filename)
            self._write(answer_not_found())
            return False
        with handle:
            size = os.fstat(handle.fileno()).st_size
            self._write(answer_ok(size))
            self._stream(handle)
        return True

    def send_partial(self, filename: str, offset: int) -> bool:
        """Send the file from ``offset`` on, or a 404 answer if it cannot be opened."""
        try:
            handle = open(filename, "rb")
        except OSError:
            logger.debug("could not open file %s", filename)
            self._write(answer_not_found())
            return False
        with handle:
            if offset < 0:
                logger.debug("could not seek to offset")
                return False
            handle.seek(offset)
            size = os.fstat(handle.fileno()).st_size
            self._write(answer_partial(offset, size))
            self._stream(handle)
        return True