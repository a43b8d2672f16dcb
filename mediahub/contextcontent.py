"""Relay of context content between a remote control and the user interface."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any


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


class ContextContentRpc:
    """Forwards context content announcements and item selections to listeners."""

    def __init__(self) -> None:
        self.object_name = "contextContent"
        self.send_new_context_content = _Signal()
        self.send_invalidate_context_content = _Signal()
        self.item_selected_by_id = _Signal()

    def new_context_content(self, skin_name: str, content_name: str, id_list: Iterable[int]) -> None:
        """Announce new content of a skin with the ids of its items."""
        self.send_new_context_content.emit(skin_name, content_name, [int(i) for i in id_list])

    def invalidate_context_content(self) -> None:
        self.send_invalidate_context_content.emit()

    def select_item_by_id(self, item_id: int) -> None:
        self.item_selected_by_id.emit(int(item_id))