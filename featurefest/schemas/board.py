"""Board schema."""

from pydantic import BaseModel, ConfigDict

from featurefest.schemas.common import OptionalTimestamp, Timestamp


class Board(BaseModel):
    """A named collection of feature requests, owned by a user."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str | None = None
    user_id: str
    created_at: Timestamp
    updated_at: OptionalTimestamp = None
