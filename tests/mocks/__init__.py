from tests.mocks.engine_mock import MockEngine
from tests.mocks.vlc_mock import (
    MockEvent,
    MockEventManager,
    MockEventType,
    MockInstance,
    MockMedia,
    MockMediaPlayer,
)

__all__ = [
    'MockEngine',
    'MockEvent',
    'MockEventManager',
    'MockEventType',
    'MockInstance',
    'MockMedia',
    'MockMediaPlayer',
]
