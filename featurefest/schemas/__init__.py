from featurefest.schemas.board import Board
from featurefest.schemas.common import ErrorBody
from featurefest.schemas.feature import Feature, FeatureCreate, FeatureStatus
from featurefest.schemas.vote import (
    Vote,
    VoteCreate,
    VoteOutcome,
    VoteToggle,
    VoteType,
    VoteUpdate,
)

__all__ = [
    "Board",
    "ErrorBody",
    "Feature",
    "FeatureCreate",
    "FeatureStatus",
    "Vote",
    "VoteCreate",
    "VoteOutcome",
    "VoteToggle",
    "VoteType",
    "VoteUpdate",
]
