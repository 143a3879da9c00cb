"""Feature request schemas."""

from enum import StrEnum
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict

from featurefest.schemas.common import OptionalTimestamp, Timestamp


class FeatureStatus(StrEnum):
    IDEAS = "ideas"
    IN_PROGRESS = "in_progress"
    RELEASED = "released"

    @property
    def display_name(self) -> str:
        return _STATUS_DISPLAY_NAMES[self]

    @classmethod
    def from_wire(cls, value: Any) -> Any:
        """Map unknown status strings to ``IDEAS``; leave anything else to validation."""
        if isinstance(value, str) and value not in cls._value2member_map_:
            return cls.IDEAS
        return value


_STATUS_DISPLAY_NAMES = {
    FeatureStatus.IDEAS: "Ideas",
    FeatureStatus.IN_PROGRESS: "In Progress",
    FeatureStatus.RELEASED: "Released",
}


class Feature(BaseModel):
    """A feature request with the vote counts computed by the backend."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    description: str
    status: Annotated[FeatureStatus, BeforeValidator(FeatureStatus.from_wire)]
    board_id: str
    user_id: str | None = None  # creator
    created_at: Timestamp
    updated_at: OptionalTimestamp = None
    # Plain ``features`` rows carry no counts; only the view computes them.
    upvotes: int = 0
    downvotes: int = 0
    total_votes: int = 0


class FeatureCreate(BaseModel):
    title: str
    description: str
    status: FeatureStatus = FeatureStatus.IDEAS
    board_id: str
    user_id: str | None = None
