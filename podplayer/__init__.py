from podplayer.controller import PlaybackController
from podplayer.engine import EngineSignal, PlaybackEngine
from podplayer.models import Track
from podplayer.surface import PlayerSurface

__all__ = [
    'EngineSignal',
    'PlaybackController',
    'PlaybackEngine',
    'PlayerSurface',
    'Track',
]
