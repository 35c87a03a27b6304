"""Playback engine boundary.

An engine decodes one media source at a time. It takes fire-and-forget
commands (load, play, pause, seek) and reports what actually happened through
a small fixed set of signals.
"""

import itertools
from enum import Enum


class EngineSignal(str, Enum):
    METADATA_READY = "metadata_ready"
    TIME_ADVANCED = "time_advanced"  # callback(current_seconds)
    PLAY = "play"
    PAUSE = "pause"
    ENDED = "ended"


class PlaybackEngine:
    """Base class for engines: owns the signal registry, subclasses do the media work."""

    def __init__(self):
        self._handles = itertools.count(1)
        self._callbacks = {}  # handle -> (signal, callback)

    # Signals

    def connect(self, signal: EngineSignal, callback) -> int:
        """Subscribe `callback` to `signal`.

        Returns:
            Handle to pass to `disconnect`
        """
        handle = next(self._handles)
        self._callbacks[handle] = (EngineSignal(signal), callback)
        return handle

    def disconnect(self, handle: int) -> None:
        self._callbacks.pop(handle, None)

    def disconnect_all(self) -> None:
        self._callbacks.clear()

    def listener_count(self, signal: EngineSignal) -> int:
        return sum(1 for connected, _ in self._callbacks.values() if connected == signal)

    def emit(self, signal: EngineSignal, *args) -> None:
        """Deliver `signal` to its subscribers, in subscription order."""
        signal = EngineSignal(signal)
        for handle in sorted(self._callbacks):
            entry = self._callbacks.get(handle)
            # A handler may disconnect others while we iterate
            if entry is None or entry[0] != signal:
                continue
            entry[1](*args)

    # Commands

    def load(self, source: str, loop: bool = False, autoplay: bool = True) -> None:
        raise NotImplementedError

    def unload(self) -> None:
        raise NotImplementedError

    def play(self) -> None:
        raise NotImplementedError

    def pause(self) -> None:
        raise NotImplementedError

    def seek_to(self, seconds: float) -> None:
        raise NotImplementedError

    def set_loop(self, loop: bool) -> None:
        raise NotImplementedError

    @property
    def current_time(self) -> float:
        raise NotImplementedError


__all__ = ["EngineSignal", "PlaybackEngine"]
