from decouple import config

# Logging
LOG_LEVEL = config('PODPLAYER_LOG_LEVEL', default='INFO')
LOG_FILE = config('PODPLAYER_LOG_FILE', default=None)

# Playback
AUTOPLAY = config('PODPLAYER_AUTOPLAY', default=True, cast=bool)
SHUFFLE_SEED = config('PODPLAYER_SHUFFLE_SEED', default=None, cast=lambda v: int(v) if v not in (None, '') else None)
VLC_ARGS = config('PODPLAYER_VLC_ARGS', default='--no-video --quiet').split()

# Display strings
PLAYER_HEADER = config('PODPLAYER_PLAYER_HEADER', default="Now playing")
EMPTY_PROMPT = config('PODPLAYER_EMPTY_PROMPT', default="Select a podcast to listen to")

# Text symbols for the player widget's buttons
BUTTON_SYMBOLS = {
    'play': '▶',
    'pause': '⏸',
    'prev': '⏮',
    'next': '⏭',
}

# Image icons, relative to the widget's static root
BUTTON_ICONS = {
    'loop': '/repeat.svg',
    'shuffle': '/shuffle.svg',
    'now_playing': '/playing.svg',
}
