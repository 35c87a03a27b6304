import vlc
from eliot import log_message, start_action
from podplayer.config import VLC_ARGS
from podplayer.engine import EngineSignal, PlaybackEngine
from podplayer.logging import engine_logger, log_error


def _call_now(callback, *args):
    callback(*args)


class VLCEngine(PlaybackEngine):
    """Playback engine backed by libVLC.

    VLC reports events from its own thread and must not be driven from inside
    those callbacks. Every event is handed to `dispatch(callback, *args)`,
    which should schedule the call on the UI thread, e.g.
    ``lambda fn, *a: root.after(0, fn, *a)`` for Tk. The default runs the
    handler immediately, which is only safe for tests and headless use.
    """

    def __init__(self, dispatch=None, vlc_args=None):
        super().__init__()
        self.dispatch = dispatch or _call_now
        self.instance = vlc.Instance(*(vlc_args if vlc_args is not None else VLC_ARGS))
        self.media_player = self.instance.media_player_new()
        self.media = None
        self.source = None
        self.loop = False
        # Identifies the current load; events queued for an older one are dropped.
        # None while media is being swapped.
        self._loads = 0
        self._load_token = 0
        self._metadata_announced = False

        events = self.media_player.event_manager()
        events.event_attach(vlc.EventType.MediaPlayerLengthChanged, self._on_length_changed)
        events.event_attach(vlc.EventType.MediaPlayerTimeChanged, self._on_time_changed)
        events.event_attach(vlc.EventType.MediaPlayerPlaying, self._on_playing)
        events.event_attach(vlc.EventType.MediaPlayerPaused, self._on_paused)
        events.event_attach(vlc.EventType.MediaPlayerEndReached, self._on_end_reached)
        events.event_attach(vlc.EventType.MediaPlayerEncounteredError, self._on_error)

    # Commands

    def load(self, source: str, loop: bool = False, autoplay: bool = True) -> None:
        with start_action(engine_logger, "engine_load", source=source, loop=loop, autoplay=autoplay):
            self._load_token = None
            self.source = source
            self.loop = loop
            self._metadata_announced = False
            self.media = self.instance.media_new(source)
            self.media_player.set_media(self.media)
            self._start_load()
            if autoplay:
                self.media_player.play()

    def unload(self) -> None:
        log_message(message_type="engine_unload", source=self.source)
        self._load_token = None
        self.media_player.stop()
        self.media_player.set_media(None)
        self._start_load()
        self.media = None
        self.source = None
        self._metadata_announced = False

    def play(self) -> None:
        if self.media_player.get_media() is None:
            return
        self.media_player.play()

    def pause(self) -> None:
        if self.media_player.get_media() is None:
            return
        self.media_player.set_pause(1)

    def seek_to(self, seconds: float) -> None:
        self.media_player.set_time(int(max(0, seconds) * 1000))

    def set_loop(self, loop: bool) -> None:
        self.loop = loop

    @property
    def current_time(self) -> float:
        return max(0, self.media_player.get_time()) / 1000

    def release(self) -> None:
        """Free libVLC resources. The engine is unusable afterwards."""
        try:
            self.disconnect_all()
            self.media_player.stop()
            self.media_player.release()
            self.instance.release()
        except Exception as e:
            log_error(engine_logger, e, operation="vlc_release")

    # VLC thread -> dispatch

    def _on_length_changed(self, event):
        self.dispatch(self._announce_metadata, self._load_token)

    def _on_time_changed(self, event):
        self.dispatch(self._emit_for_load, self._load_token, EngineSignal.TIME_ADVANCED, event.u.new_time / 1000)

    def _on_playing(self, event):
        self.dispatch(self._emit_for_load, self._load_token, EngineSignal.PLAY)

    def _on_paused(self, event):
        self.dispatch(self._emit_for_load, self._load_token, EngineSignal.PAUSE)

    def _on_end_reached(self, event):
        self.dispatch(self._handle_end, self._load_token)

    def _on_error(self, event):
        # No signal: a failed source simply leaves the player where it is
        log_message(message_type="engine_error", source=self.source, description=f"VLC could not play {self.source}")

    # UI thread

    def _start_load(self):
        self._loads += 1
        self._load_token = self._loads

    def _is_current(self, token):
        return token is not None and token == self._load_token

    def _emit_for_load(self, token, signal, *args):
        if not self._is_current(token):
            log_message(message_type="stale_signal_ignored", signal=signal.value, source=self.source)
            return
        self.emit(signal, *args)

    def _announce_metadata(self, token):
        # LengthChanged can repeat for one media; announce once per load
        if not self._is_current(token) or self._metadata_announced or self.media is None:
            return
        self._metadata_announced = True
        self.emit(EngineSignal.METADATA_READY)

    def _handle_end(self, token):
        if not self._is_current(token):
            return
        if self.loop and self.media is not None:
            log_message(message_type="engine_loop_restart", source=self.source)
            # An ended player only restarts after its media is set again
            self.media_player.set_media(self.media)
            self.media_player.play()
            return
        self.emit(EngineSignal.ENDED)
