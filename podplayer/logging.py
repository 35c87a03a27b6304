"""
Logging configuration for the podplayer playback core using eliot.

Every controller operation, surface reaction and engine signal is recorded as
a structured eliot message. Nothing is written until `setup_logging()` adds a
destination, so library consumers decide where logs go.
"""

import eliot
import logging
import sys
from eliot import FileDestination, log_message, write_traceback
from eliot.stdlib import EliotHandler
from pathlib import Path


class HumanReadableDestination:
    """Destination that formats eliot messages as one readable line each."""

    # Per-tick noise; still present in the JSON log file
    skip_messages = {
        "time_advanced",
    }

    def __init__(self, file):
        self.file = file

    def __call__(self, message):
        # Skip eliot's own action start/finish bookkeeping
        if message.get("action_status") in ("started", "succeeded", "failed") and not message.get("message_type"):
            return

        msg_type = message.get("message_type", "")
        if msg_type in self.skip_messages or message.get("signal") in self.skip_messages:
            return

        action = message.get("action", msg_type)
        description = message.get("description", "")
        trigger = message.get("trigger_source", "")

        if msg_type in ("player_action", "navigation"):
            if description:
                output = f"[{trigger.upper() or 'CORE'}] {description}"
            else:
                output = f"[{trigger.upper() or 'CORE'}] {action}"
        elif msg_type == "engine_signal":
            output = f"[ENGINE] {message.get('signal', '')}"
            if description:
                output += f": {description}"
        elif msg_type == "error_occurred":
            output = f"[ERROR] {message.get('error_type', '')}: {message.get('error_message', '')}"
        elif description:
            output = description
        elif "message" in message:
            output = message["message"]
        else:
            return

        if output and output.strip():
            self.file.write(output + "\n")
            self.file.flush()


# Destinations and root handler installed by setup_logging(), if it has run
_installed = None


def setup_logging(log_level: str = "INFO", log_file: str = None) -> None:
    """
    Set up eliot logging for podplayer.

    Only the first call installs destinations; later calls are no-ops until
    `teardown_logging()` removes them again.

    Args:
        log_level: Logging level for the stdlib bridge (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path for raw JSON logs (stdout always gets the readable form)
    """
    global _installed
    if _installed is not None:
        return

    destinations = [HumanReadableDestination(sys.stdout)]
    log_handle = None
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        log_handle = open(log_file, "a")
        destinations.append(FileDestination(file=log_handle))
    eliot.add_destinations(*destinations)

    # Route stdlib logging (python-vlc, pydantic) through eliot too
    handler = EliotHandler()
    logger = logging.getLogger()
    logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    logger.addHandler(handler)

    _installed = (destinations, handler, log_handle)

    log_message(
        message_type="logging_setup", log_level=log_level, log_file=log_file or "stdout", message="Eliot logging configured"
    )


def teardown_logging() -> None:
    """Remove what `setup_logging()` installed and close the JSON log file."""
    global _installed
    if _installed is None:
        return

    destinations, handler, log_handle = _installed
    _installed = None
    for destination in destinations:
        eliot.remove_destination(destination)
    logging.getLogger().removeHandler(handler)
    if log_handle is not None:
        log_handle.close()


def get_logger(name: str):
    """
    Get an eliot logger instance for a component.

    The returned Logger is meant for `start_action()`; it has no `.log()`
    method. Use the `log_*` helpers below for individual messages.

    Args:
        name: Component name

    Returns:
        Eliot Logger instance
    """
    from eliot import Logger

    return Logger()


controller_logger = get_logger("podplayer_controller")
surface_logger = get_logger("podplayer_surface")
engine_logger = get_logger("podplayer_engine")


def log_player_action(action: str, **context):
    """
    Log a playback intent (play, toggle, clear, seek, ...) with context.

    Args:
        action: Player action name
        **context: Additional context data
    """
    log_message(message_type="player_action", action=action, **context)


def log_navigation(action: str, **context):
    """
    Log a navigation decision (next/previous) with the indices involved.

    Args:
        action: Navigation action name
        **context: Additional context data
    """
    log_message(message_type="navigation", action=action, **context)


def log_engine_signal(signal: str, **context):
    """
    Log an engine signal as received by the surface.

    Args:
        signal: Signal name
        **context: Additional context data
    """
    log_message(message_type="engine_signal", signal=signal, **context)


def log_error(logger: eliot.Logger, error: Exception, **context):
    """
    Log errors with full context, plus the error's own traceback once it
    has been raised.

    Args:
        logger: Eliot logger instance
        error: Exception that occurred (or is about to be raised)
        **context: Additional context data
    """
    if error.__traceback__ is not None:
        write_traceback(logger, exc_info=(type(error), error, error.__traceback__))
    log_message(message_type="error_occurred", error_message=str(error), error_type=type(error).__name__, **context)


__all__ = [
    "controller_logger",
    "engine_logger",
    "get_logger",
    "log_engine_signal",
    "log_error",
    "log_navigation",
    "log_player_action",
    "setup_logging",
    "surface_logger",
    "teardown_logging",
]
