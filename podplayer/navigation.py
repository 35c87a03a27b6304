"""Navigation policy for the playlist.

Pure functions over (current_index, playlist length, shuffle flag). They never
touch controller state, so the rules can be checked without any engine or UI.
"""

import random


def has_previous(current_index: int) -> bool:
    return current_index > 0


def has_next(current_index: int, length: int, shuffling: bool) -> bool:
    """Shuffling makes "next" always available: the pick is a fresh draw."""
    return shuffling or current_index + 1 < length


def next_index(current_index: int, length: int, shuffling: bool, rng=random) -> int | None:
    """Pick the index `play_next` should move to.

    Args:
        current_index: Index of the current track
        length: Number of tracks in the playlist
        shuffling: Whether shuffle mode is on
        rng: Anything with `randrange` (the `random` module or a `random.Random`)

    Returns:
        The new index, or None when navigation is a no-op
    """
    if length == 0:
        return None

    if shuffling:
        # Uniform over the whole playlist, current index included
        return rng.randrange(length)

    if has_next(current_index, length, shuffling):
        return current_index + 1

    return None


def previous_index(current_index: int) -> int | None:
    """Previous navigation is always sequential, shuffle or not."""
    if has_previous(current_index):
        return current_index - 1
    return None
