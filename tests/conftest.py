import pytest
import random
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# Hypothesis configuration for property-based testing
from hypothesis import settings
from podplayer.controller import PlaybackController
from podplayer.surface import PlayerSurface
from tests.helpers.factories import make_track
from tests.mocks import MockEngine

# Register Hypothesis profiles
settings.register_profile("fast", max_examples=50, deadline=None)
settings.register_profile("thorough", max_examples=1000, deadline=None)
settings.load_profile("fast")  # Default to fast profile


def pytest_collection_modifyitems(items):
    """Automatically order tests: unit tests first, then property tests.

    Individual tests marked with @pytest.mark.order("last") will run at the very end.
    """
    for item in items:
        # Skip if item already has explicit order marker
        if hasattr(item, 'get_closest_marker') and item.get_closest_marker('order'):
            continue

        test_file = str(item.path)
        if 'test_unit_' in test_file:
            item.add_marker(pytest.mark.order(1))
        elif 'test_props_' in test_file:
            item.add_marker(pytest.mark.order(2))


@pytest.fixture
def tracks():
    """Three episodes: A, B, C."""
    return [make_track(1), make_track(2), make_track(3)]


@pytest.fixture
def controller():
    """Controller with a seeded RNG so shuffle runs are repeatable."""
    return PlaybackController(rng=random.Random(1234))


@pytest.fixture
def engine():
    return MockEngine()


@pytest.fixture
def surface(controller, engine):
    """Surface with autoplay on, bound to the mock engine."""
    player_surface = PlayerSurface(controller, engine, autoplay=True)
    yield player_surface
    player_surface.close()
