"""Unit tests for the navigation policy.

The policy is a set of pure functions, so these tests need no controller,
engine or mocks beyond a scripted random source.
"""

import pytest
from podplayer import navigation


class ScriptedRandom:
    """Random source that returns a fixed sequence of draws."""

    def __init__(self, *draws):
        self.draws = list(draws)
        self.calls = []

    def randrange(self, stop):
        self.calls.append(stop)
        return self.draws.pop(0)


class TestPredicates:
    """Test has_next / has_previous."""

    @pytest.mark.parametrize("index,expected", [(0, False), (1, True), (5, True)])
    def test_has_previous(self, index, expected):
        assert navigation.has_previous(index) is expected

    def test_has_next_in_middle(self):
        assert navigation.has_next(0, 3, shuffling=False) is True
        assert navigation.has_next(1, 3, shuffling=False) is True

    def test_has_next_on_last_track(self):
        assert navigation.has_next(2, 3, shuffling=False) is False

    def test_has_next_empty_playlist(self):
        assert navigation.has_next(0, 0, shuffling=False) is False

    def test_shuffle_always_has_next(self):
        assert navigation.has_next(2, 3, shuffling=True) is True
        assert navigation.has_next(0, 0, shuffling=True) is True


class TestNextIndex:
    """Test next_index branches: shuffle, sequential, exhausted."""

    def test_sequential_advance(self):
        assert navigation.next_index(0, 3, shuffling=False) == 1

    def test_sequential_on_last_track_is_noop(self):
        assert navigation.next_index(2, 3, shuffling=False) is None

    def test_empty_playlist_is_noop(self):
        rng = ScriptedRandom()
        assert navigation.next_index(0, 0, shuffling=True, rng=rng) is None
        assert rng.calls == []

    def test_shuffle_draws_over_whole_playlist(self):
        rng = ScriptedRandom(2)
        assert navigation.next_index(0, 5, shuffling=True, rng=rng) == 2
        assert rng.calls == [5]

    def test_shuffle_may_reselect_current_index(self):
        rng = ScriptedRandom(1)
        assert navigation.next_index(1, 3, shuffling=True, rng=rng) == 1

    def test_shuffle_on_last_track_still_draws(self):
        rng = ScriptedRandom(0)
        assert navigation.next_index(2, 3, shuffling=True, rng=rng) == 0

    def test_default_rng_is_random_module(self):
        assert 0 <= navigation.next_index(0, 4, shuffling=True) < 4


class TestPreviousIndex:
    """Test previous_index."""

    def test_first_track_is_noop(self):
        assert navigation.previous_index(0) is None

    def test_steps_back_one(self):
        assert navigation.previous_index(3) == 2
