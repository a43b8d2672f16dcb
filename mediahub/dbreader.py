"""Reads query results from a media database on its own connection."""

from __future__ import annotations

import logging
import os
import sqlite3
from collections.abc import Callable, Iterable
from typing import Any

logger = logging.getLogger(__name__)

Record = dict[str, Any]


class _Signal:
    """A list of callbacks invoked together."""

    def __init__(self) -> None:
        self._slots: list[Callable[..., Any]] = []

    def connect(self, slot: Callable[..., Any]) -> None:
        self._slots.append(slot)

    def disconnect(self, slot: Callable[..., Any]) -> None:
        if slot in self._slots:
            self._slots.remove(slot)

    def emit(self, *args: Any) -> None:
        for slot in list(self._slots):
            slot(*args)


class DbReader:
    """Runs queries on a private connection and hands the rows to ``data_ready`` listeners."""

    def __init__(self) -> None:
        self._connection: sqlite3.Connection | None = None
        self._stop = False
        self.data_ready = _Signal()

    def __enter__(self) -> DbReader:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def stop(self) -> None:
        """Stop reading; no further results are delivered."""
        self._stop = True

    def initialize(self, database: str | os.PathLike[str]) -> None:
        """Open a connection of this reader's own to the database file."""
        self.close()
        try:
            self._connection = sqlite3.connect(os.fspath(database), check_same_thread=False)
        except sqlite3.Error as error:
            raise sqlite3.OperationalError(f"Error opening database: {error}") from error
        self._connection.row_factory = sqlite3.Row

    def execute(
        self, query: str, bindings: Iterable[str] = (), user_data: Any = None
    ) -> list[Record] | None:
        """Run ``query`` with positional bindings; returns the rows, or None if it failed.

        Unless stopped, ``data_ready(reader, rows, user_data)`` is emitted with the rows.
        """
        if self._connection is None:
            raise RuntimeError("DbReader used before initialize()")
        try:
            cursor = self._connection.execute(query, tuple(bindings))
        except sqlite3.Error as error:
            logger.warning("Error executing query: %s (%s)", query, error)
            return None
        try:
            data = self.read_records(cursor)
        finally:
            cursor.close()
        logger.debug("Read %d records", len(data))
        if not self._stop:
            self.data_ready.emit(self, data, user_data)
        return data

    def read_records(self, cursor: sqlite3.Cursor) -> list[Record]:
        """Fetch rows as name-to-value mappings until exhausted or stopped."""
        names = [column[0] for column in cursor.description or ()]
        data: list[Record] = []
        for row in cursor:
            if self._stop:
                break
            data.append(dict(zip(names, tuple(row))))
        return data

    def close(self) -> None:
        if self._connection is not None:
            self._connection.close()
            self._connection = None