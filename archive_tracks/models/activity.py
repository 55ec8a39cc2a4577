from datetime import datetime

from pydantic import BaseModel, ConfigDict


class ActivityRecord(BaseModel):
    """One row of the export's activity index.

    An empty ``filename`` marks a stationary activity (indoor row, gym
    session) that has no route file.
    """

    model_config = ConfigDict(frozen=True)

    date: datetime | None
    title: str
    activity_type: str
    description: str = ""
    filename: str = ""
    distance: float | None = None
    elapsed_time: int | None = None
    moving_time: int | None = None
    elevation_gain: float | None = None
    elevation_loss: float | None = None
    elevation_min: float | None = None
    elevation_max: float | None = None

    @property
    def has_route(self) -> bool:
        return self.filename != ""
