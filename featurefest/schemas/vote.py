"""Vote schemas."""

from enum import StrEnum
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict

from featurefest.schemas.common import OptionalTimestamp, Timestamp


class VoteType(StrEnum):
    UP = "up"

    @property
    def display_name(self) -> str:
        return "Upvote"

    @property
    def emoji(self) -> str:
        return "\N{THUMBS UP SIGN}"

    @classmethod
    def from_wire(cls, value: Any) -> Any:
        if isinstance(value, str) and value not in cls._value2member_map_:
            return cls.UP
        return value


class Vote(BaseModel):
    """A single user's endorsement of a feature."""

    model_config = ConfigDict(frozen=True)

    id: str
    feature_id: str
    user_id: str
    vote_type: Annotated[VoteType, BeforeValidator(VoteType.from_wire)]
    created_at: Timestamp
    updated_at: OptionalTimestamp = None


class VoteCreate(BaseModel):
    feature_id: str
    user_id: str
    vote_type: VoteType = VoteType.UP


class VoteUpdate(BaseModel):
    vote_type: VoteType


class VoteOutcome(StrEnum):
    TOGGLED_ON = "toggled_on"
    TOGGLED_OFF = "toggled_off"


class VoteToggle(BaseModel):
    """Result of toggling a vote: the new vote when added, ``None`` when retracted."""

    outcome: VoteOutcome
    vote: Vote | None = None

    @property
    def voted(self) -> bool:
        return self.outcome is VoteOutcome.TOGGLED_ON
