"""Track model supplied by the catalog."""

from pydantic import BaseModel, ConfigDict, Field


class Track(BaseModel):
    """One playable episode. Immutable once built."""

    model_config = ConfigDict(frozen=True)

    title: str
    subtitle: str = ""  # attribution, e.g. the episode's members
    artwork: str = ""
    duration: float = Field(default=0, ge=0)  # seconds
    source: str
