import random
from eliot import start_action
from podplayer import navigation
from podplayer.config import SHUFFLE_SEED
from podplayer.logging import controller_logger, log_error, log_navigation, log_player_action
from podplayer.models import Track


class PlaybackController:
    """Owns the playlist, the current index and the playing/looping/shuffling flags.

    One instance is created per player and handed to every consumer. All
    operations are synchronous; registered listeners are called after each
    mutation so consumers can react to the new state.
    """

    def __init__(self, rng: random.Random | None = None):
        self.playlist: list[Track] = []
        self.current_index = 0
        self.is_playing = False
        self.is_looping = False
        self.is_shuffling = False
        # Bumped whenever a track is (re)selected; consumers rebind on change
        self.track_generation = 0
        self._rng = rng if rng is not None else random.Random(SHUFFLE_SEED)
        self._listeners = []

    # Derived state

    @property
    def has_previous(self) -> bool:
        return navigation.has_previous(self.current_index)

    @property
    def has_next(self) -> bool:
        return navigation.has_next(self.current_index, len(self.playlist), self.is_shuffling)

    @property
    def current_track(self) -> Track | None:
        if not self.playlist:
            return None
        return self.playlist[self.current_index]

    @property
    def episode_list(self) -> list[Track]:
        return self.playlist

    @property
    def current_episode_index(self) -> int:
        return self.current_index

    def snapshot(self) -> dict:
        """Plain-dict view of the state and derived predicates, for logs and debugging.

        Tracks appear by title only; use `episode_list` for the Track objects.
        """
        return {
            "episode_titles": [track.title for track in self.playlist],
            "current_episode_index": self.current_index,
            "is_playing": self.is_playing,
            "is_looping": self.is_looping,
            "is_shuffling": self.is_shuffling,
            "has_next": self.has_next,
            "has_previous": self.has_previous,
        }

    # Listeners

    def add_listener(self, callback):
        """Register `callback(controller)` to run after every state change.

        Returns:
            A zero-argument function that removes the listener again
        """
        self._listeners.append(callback)

        def remove():
            if callback in self._listeners:
                self._listeners.remove(callback)

        return remove

    def _notify(self) -> None:
        for callback in list(self._listeners):
            callback(self)

    # Intents

    def play(self, track: Track) -> None:
        """Replace the playlist with a single track and start playing it."""
        with start_action(controller_logger, "play"):
            log_player_action(
                "play",
                trigger_source="catalog",
                track=track.title,
                replaced_count=len(self.playlist),
                description=f"Playing: {track.title}",
            )
            self.playlist = [track]
            self.current_index = 0
            self.is_playing = True
            self.track_generation += 1
        self._notify()

    def play_list(self, tracks: list[Track], index: int) -> None:
        """Replace the playlist and start playing at `index`.

        The caller must pass an index inside `tracks` (or 0 for an empty
        list). An out-of-range index is a contract violation and is not
        corrected here.
        """
        tracks = list(tracks)
        in_range = 0 <= index < len(tracks) if tracks else index == 0
        if not in_range:
            message = f"play_list index {index} out of range for {len(tracks)} tracks"
            log_error(controller_logger, IndexError(message), operation="play_list", index=index, length=len(tracks))
            assert in_range, message

        with start_action(controller_logger, "play_list"):
            log_player_action(
                "play_list",
                trigger_source="catalog",
                count=len(tracks),
                start_index=index,
                description=f"Playing list of {len(tracks)} from index {index}",
            )
            self.playlist = tracks
            self.current_index = index
            self.is_playing = True
            self.track_generation += 1
        self._notify()

    def toggle_play(self) -> None:
        """Flip `is_playing`. With no track loaded this changes nothing audible."""
        old_state = self.is_playing
        self.is_playing = not old_state
        log_player_action(
            "toggle_play",
            trigger_source="gui",
            old_state="playing" if old_state else "paused",
            new_state="playing" if self.is_playing else "paused",
            description=f"{'Pausing' if old_state else 'Resuming'} playback",
        )
        self._notify()

    def toggle_loop(self) -> None:
        self.is_looping = not self.is_looping
        log_player_action(
            "toggle_loop",
            trigger_source="gui",
            new_state=self.is_looping,
            description=f"Loop mode {'enabled' if self.is_looping else 'disabled'}",
        )
        self._notify()

    def toggle_shuffle(self) -> None:
        self.is_shuffling = not self.is_shuffling
        log_player_action(
            "toggle_shuffle",
            trigger_source="gui",
            new_state=self.is_shuffling,
            description=f"Shuffle mode {'enabled' if self.is_shuffling else 'disabled'}",
        )
        self._notify()

    def set_playing_state(self, state: bool) -> None:
        """Reconcile `is_playing` with what the engine reports."""
        if state != self.is_playing:
            log_player_action(
                "set_playing_state",
                trigger_source="engine",
                new_state="playing" if state else "paused",
                description=f"Engine reports {'playing' if state else 'paused'}",
            )
        self.is_playing = state
        self._notify()

    def play_next(self) -> None:
        """Advance: random draw when shuffling, else the next index, else nothing."""
        with start_action(controller_logger, "play_next"):
            target = navigation.next_index(self.current_index, len(self.playlist), self.is_shuffling, self._rng)
            if target is None:
                log_navigation(
                    "next_ignored",
                    trigger_source="gui",
                    reason="empty_playlist" if not self.playlist else "last_track",
                    current_index=self.current_index,
                )
                return

            log_navigation(
                "next",
                trigger_source="gui",
                old_index=self.current_index,
                new_index=target,
                shuffling=self.is_shuffling,
                description=f"Next: {self.playlist[target].title}",
            )
            self.current_index = target
            self.track_generation += 1
        self._notify()

    def play_previous(self) -> None:
        """Step back one track; no-op on the first track."""
        with start_action(controller_logger, "play_previous"):
            target = navigation.previous_index(self.current_index)
            if target is None or not self.playlist:
                log_navigation("previous_ignored", trigger_source="gui", current_index=self.current_index)
                return

            log_navigation(
                "previous",
                trigger_source="gui",
                old_index=self.current_index,
                new_index=target,
                description=f"Previous: {self.playlist[target].title}",
            )
            self.current_index = target
            self.track_generation += 1
        self._notify()

    def clear_player_state(self) -> None:
        """Empty the playlist. Playback stops because no track is current."""
        log_player_action(
            "clear_player_state",
            trigger_source="automatic",
            cleared_count=len(self.playlist),
            description="Player state cleared",
        )
        self.playlist = []
        self.current_index = 0
        self.track_generation += 1
        self._notify()
