import math
from dataclasses import dataclass


@dataclass
class ProgressState:
    """Elapsed playback time of the bound track, in whole seconds."""

    elapsed_seconds: int = 0

    def reset(self) -> None:
        self.elapsed_seconds = 0

    def update(self, seconds: float) -> None:
        self.elapsed_seconds = max(0, math.floor(seconds))
