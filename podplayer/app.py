from eliot import log_message, start_action
from podplayer.config import LOG_FILE, LOG_LEVEL
from podplayer.controller import PlaybackController
from podplayer.logging import controller_logger, setup_logging
from podplayer.surface import PlayerSurface


def create_player(dispatch=None, engine=None, configure_logging: bool = True) -> tuple[PlaybackController, PlayerSurface]:
    """Build a controller and a surface bound to a VLC engine.

    Args:
        dispatch: Callable used by the VLC engine to run its events on the UI thread
        engine: Use this engine instead of creating a VLCEngine
        configure_logging: Install eliot destinations from PODPLAYER_LOG_LEVEL / PODPLAYER_LOG_FILE;
            only the first call in a process installs them

    Returns:
        (controller, surface); pass the controller to every UI element that needs it
    """
    if configure_logging:
        setup_logging(LOG_LEVEL, LOG_FILE)

    with start_action(controller_logger, "create_player"):
        if engine is None:
            from podplayer.engine.vlc_engine import VLCEngine

            engine = VLCEngine(dispatch=dispatch)

        controller = PlaybackController()
        surface = PlayerSurface(controller, engine)
        log_message(message_type="player_ready", engine=type(engine).__name__, message="Player ready")

    return controller, surface
