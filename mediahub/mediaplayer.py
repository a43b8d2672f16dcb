"""Media player interface used by the user interface, plus a logging backend."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from enum import IntEnum
from typing import Any

logger = logging.getLogger(__name__)


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


class Status(IntEnum):
    """Loading state of the current media."""

    UNKNOWN_STATUS = 0
    NO_MEDIA = 1
    LOADING = 2
    LOADED = 3
    STALLED = 4
    BUFFERING = 5
    BUFFERED = 6
    END_OF_MEDIA = 7
    INVALID_MEDIA = 8


class AbstractMediaPlayer(ABC):
    """Playback controls and state that every media player backend offers."""

    def __init__(self) -> None:
        self._status = Status.UNKNOWN_STATUS
        self.source_changed = _Signal()
        self.status_changed = _Signal()
        self.has_audio_changed = _Signal()
        self.has_video_changed = _Signal()
        self.playing_changed = _Signal()
        self.volume_changed = _Signal()
        self.position_changed = _Signal()
        self.seekable_changed = _Signal()
        self.paused_changed = _Signal()
        self.playback_rate_changed = _Signal()
        self.duration_changed = _Signal()

    @property
    def source(self) -> str:
        return ""

    @property
    def status(self) -> Status:
        return self._status

    @property
    def has_video(self) -> bool:
        return False

    @property
    def has_audio(self) -> bool:
        return False

    @property
    def playing(self) -> bool:
        return False

    @property
    def volume(self) -> float:
        return 0.0

    @property
    def position(self) -> int:
        return 0

    @property
    def seekable(self) -> bool:
        return False

    @property
    def paused(self) -> bool:
        return False

    @property
    def playback_rate(self) -> float:
        return 1.0

    @property
    def duration(self) -> int:
        return 0

    def set_status(self, status: Status) -> None:
        """Record a new status and notify listeners."""
        self._status = Status(status)
        self.status_changed.emit()

    def set_source(self, source: str) -> None:
        """Select the media to play; ignored unless a backend supports it."""

    def set_playing(self, playing: bool) -> None:
        if playing:
            self.play()
        else:
            self.stop()

    def set_volume(self, volume: float) -> None:
        """Set the volume; ignored unless a backend supports it."""

    def set_paused(self, paused: bool) -> None:
        if paused:
            self.pause()
        else:
            self.resume()

    def set_playback_rate(self, rate: float) -> None:
        """Set the playback rate; ignored unless a backend supports it."""

    @abstractmethod
    def play(self) -> None: ...

    @abstractmethod
    def stop(self) -> None: ...

    @abstractmethod
    def pause(self) -> None: ...

    @abstractmethod
    def resume(self) -> None: ...

    @abstractmethod
    def mute(self, on: bool = True) -> None: ...

    @abstractmethod
    def set_position(self, position: int) -> None: ...

    @abstractmethod
    def set_position_percent(self, position: float) -> None: ...

    @abstractmethod
    def set_volume_percent(self, volume: float) -> None: ...


class TestingPlayer(AbstractMediaPlayer):
    """A backend that plays nothing and only logs and records each request."""

    __test__ = False

    def __init__(self) -> None:
        super().__init__()
        self.calls: list[tuple[Any, ...]] = []

    def _record(self, name: str, *args: Any) -> None:
        self.calls.append((name, *args))
        if args:
            logger.debug("%s %s", name, " ".join(repr(a) for a in args))
        else:
            logger.debug("%s", name)

    def set_source(self, source: str) -> None:
        self._record("set_source", source)

    def set_playing(self, playing: bool) -> None:
        self._record("set_playing", playing)

    def set_volume(self, volume: float) -> None:
        self._record("set_volume", volume)

    def set_paused(self, paused: bool) -> None:
        self._record("set_paused", paused)

    def set_playback_rate(self, rate: float) -> None:
        self._record("set_playback_rate", rate)

    def play(self) -> None:
        self._record("play")

    def stop(self) -> None:
        self._record("stop")

    def pause(self) -> None:
        self._record("pause")

    def resume(self) -> None:
        self._record("resume")

    def mute(self, on: bool = True) -> None:
        self._record("mute", on)

    def set_position(self, position: int) -> None:
        self._record("set_position", position)

    def set_position_percent(self, position: float) -> None:
        self._record("set_position_percent", position)

    def set_volume_percent(self, volume: float) -> None:
        self._record("set_volume_percent", volume)