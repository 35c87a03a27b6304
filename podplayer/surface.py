from dataclasses import dataclass
from eliot import log_message, start_action
from podplayer.config import AUTOPLAY, BUTTON_ICONS, BUTTON_SYMBOLS, EMPTY_PROMPT, PLAYER_HEADER
from podplayer.controller import PlaybackController
from podplayer.engine import EngineSignal, PlaybackEngine
from podplayer.logging import log_engine_signal, log_player_action, surface_logger
from podplayer.models import Track
from podplayer.progress import ProgressState
from podplayer.utils.formatting import format_duration


@dataclass
class ControlState:
    """Rendering state of one player button."""

    enabled: bool
    active: bool = False
    label: str = ""
    icon: str = ""


@dataclass
class SurfaceView:
    """Everything the player widget needs to draw itself."""

    header: str
    header_icon: str
    track: Track | None
    empty_prompt: str | None
    elapsed_label: str
    duration_label: str
    slider_max: float
    slider_value: int
    shuffle: ControlState
    previous: ControlState
    play: ControlState
    next: ControlState
    loop: ControlState


class Binding:
    """One selected track attached to the engine, plus its signal handles."""

    def __init__(self, track: Track, generation: int):
        self.track = track
        self.generation = generation
        self.handles = {}  # EngineSignal -> engine handle


class PlayerSurface:
    """Drives a playback engine from a PlaybackController and reports back.

    State flows from the controller to the engine (load, play, pause, loop);
    engine signals flow back as controller calls (playing state, end of
    track) and as progress updates. At most one binding is active; it is
    replaced whenever the controller selects a track.
    """

    def __init__(self, controller: PlaybackController, engine: PlaybackEngine, autoplay: bool = AUTOPLAY):
        self.controller = controller
        self.engine = engine
        self.autoplay = autoplay
        self.progress = ProgressState()
        self.binding = None
        self._seen_generation = None
        self._seen_playing = controller.is_playing
        self._seen_looping = controller.is_looping
        self._remove_listener = controller.add_listener(self._on_controller_change)
        self._on_controller_change(controller)

    # Controller -> engine

    def _on_controller_change(self, controller: PlaybackController) -> None:
        track = controller.current_track

        if track is None:
            if self.binding is not None:
                self._unbind()
            self._seen_generation = controller.track_generation
            self._seen_playing = controller.is_playing
            self._seen_looping = controller.is_looping
            return

        if self.binding is None or controller.track_generation != self._seen_generation:
            self._seen_generation = controller.track_generation
            self._seen_playing = controller.is_playing
            self._seen_looping = controller.is_looping
            self._bind(track, controller.track_generation)
            return

        if controller.is_looping != self._seen_looping:
            self._seen_looping = controller.is_looping
            self.engine.set_loop(controller.is_looping)

        if controller.is_playing != self._seen_playing:
            self._seen_playing = controller.is_playing
            if controller.is_playing:
                self.engine.play()
            else:
                self.engine.pause()

    def _bind(self, track: Track, generation: int) -> None:
        with start_action(surface_logger, "bind_track", track=track.title, generation=generation):
            self._drop_binding()
            binding = Binding(track, generation)
            self.binding = binding

            for signal, handler in (
                (EngineSignal.METADATA_READY, self._handle_metadata_ready),
                (EngineSignal.PLAY, self._handle_play),
                (EngineSignal.PAUSE, self._handle_pause),
                (EngineSignal.ENDED, self._handle_ended),
            ):
                binding.handles[signal] = self.engine.connect(signal, self._guarded(binding, signal, handler))

            self.engine.load(track.source, loop=self.controller.is_looping, autoplay=self.autoplay)
            if not self.autoplay and self.controller.is_playing and self.binding is binding:
                self.engine.play()

    def _unbind(self) -> None:
        log_player_action(
            "unbind_track",
            trigger_source="automatic",
            track=self.binding.track.title,
            description="No current track, player stopped",
        )
        self._drop_binding()
        self.progress.reset()
        self.engine.unload()

    def _drop_binding(self) -> None:
        if self.binding is None:
            return
        for handle in self.binding.handles.values():
            self.engine.disconnect(handle)
        self.binding.handles.clear()
        self.binding = None

    def _guarded(self, binding: Binding, signal: EngineSignal, handler):
        """Wrap `handler` so it only runs while `binding` is still current."""

        def callback(*args):
            if binding is not self.binding:
                log_message(
                    message_type="stale_signal_ignored",
                    signal=signal.value,
                    track=binding.track.title,
                    description=f"stale {signal.value} from {binding.track.title} ignored",
                )
                return
            handler(binding, *args)

        return callback

    # Engine -> controller

    def _handle_metadata_ready(self, binding: Binding) -> None:
        log_engine_signal(EngineSignal.METADATA_READY.value, track=binding.track.title)
        self.progress.reset()
        self.engine.seek_to(0)

        # One tick handler per binding, even if metadata is announced again
        old_handle = binding.handles.pop(EngineSignal.TIME_ADVANCED, None)
        if old_handle is not None:
            self.engine.disconnect(old_handle)
        binding.handles[EngineSignal.TIME_ADVANCED] = self.engine.connect(
            EngineSignal.TIME_ADVANCED,
            self._guarded(binding, EngineSignal.TIME_ADVANCED, self._handle_time_advanced),
        )

    def _handle_time_advanced(self, binding: Binding, current_seconds: float) -> None:
        self.progress.update(current_seconds)

    def _handle_play(self, binding: Binding) -> None:
        log_engine_signal(EngineSignal.PLAY.value, track=binding.track.title)
        # The engine is already playing; no command to send back
        self._seen_playing = True
        self.controller.set_playing_state(True)

    def _handle_pause(self, binding: Binding) -> None:
        log_engine_signal(EngineSignal.PAUSE.value, track=binding.track.title)
        self._seen_playing = False
        self.controller.set_playing_state(False)

    def _handle_ended(self, binding: Binding) -> None:
        log_engine_signal(
            EngineSignal.ENDED.value,
            track=binding.track.title,
            has_next=self.controller.has_next,
            description=f"Finished: {binding.track.title}",
        )
        if self.controller.has_next:
            self.controller.play_next()
        else:
            self.controller.clear_player_state()

    # User gestures

    def seek(self, seconds: float) -> None:
        """Jump to `seconds` and show it right away, without waiting for a tick."""
        if self.binding is None:
            log_player_action("seek_ignored", trigger_source="gui", reason="no_track")
            return

        duration = self.binding.track.duration
        target = max(0, min(seconds, duration))
        log_player_action(
            "seek",
            trigger_source="gui",
            old_position=self.progress.elapsed_seconds,
            new_position=target,
            duration=duration,
            description=f"Seeked to {format_duration(target)}",
        )
        self.engine.seek_to(target)
        self.progress.update(target)

    @property
    def can_toggle_shuffle(self) -> bool:
        return self.controller.current_track is not None and len(self.controller.playlist) != 1

    @property
    def can_play_previous(self) -> bool:
        return self.controller.current_track is not None and self.controller.has_previous

    @property
    def can_play_next(self) -> bool:
        return self.controller.current_track is not None and self.controller.has_next

    @property
    def can_toggle_play(self) -> bool:
        return self.controller.current_track is not None

    can_toggle_loop = can_toggle_play

    def toggle_shuffle(self) -> None:
        if self.can_toggle_shuffle:
            self.controller.toggle_shuffle()

    def play_previous(self) -> None:
        if self.can_play_previous:
            self.controller.play_previous()

    def play_next(self) -> None:
        if self.can_play_next:
            self.controller.play_next()

    def toggle_play(self) -> None:
        if self.can_toggle_play:
            self.controller.toggle_play()

    def toggle_loop(self) -> None:
        if self.can_toggle_loop:
            self.controller.toggle_loop()

    # Rendering

    def view(self) -> SurfaceView:
        controller = self.controller
        track = controller.current_track
        duration = track.duration if track is not None else 0

        return SurfaceView(
            header=PLAYER_HEADER,
            header_icon=BUTTON_ICONS['now_playing'] if controller.is_playing and track is not None else "",
            track=track,
            empty_prompt=None if track is not None else EMPTY_PROMPT,
            elapsed_label=format_duration(self.progress.elapsed_seconds),
            duration_label=format_duration(duration),
            slider_max=duration,
            slider_value=self.progress.elapsed_seconds,
            shuffle=ControlState(self.can_toggle_shuffle, controller.is_shuffling, icon=BUTTON_ICONS['shuffle']),
            previous=ControlState(self.can_play_previous, label=BUTTON_SYMBOLS['prev']),
            play=ControlState(
                self.can_toggle_play,
                controller.is_playing,
                BUTTON_SYMBOLS['pause'] if controller.is_playing else BUTTON_SYMBOLS['play'],
            ),
            next=ControlState(self.can_play_next, label=BUTTON_SYMBOLS['next']),
            loop=ControlState(self.can_toggle_loop, controller.is_looping, icon=BUTTON_ICONS['loop']),
        )

    def close(self) -> None:
        """Detach from the controller and release the engine binding."""
        self._remove_listener()
        if self.binding is not None:
            self._drop_binding()
            self.engine.unload()
