"""Featurefest: client SDK for feature-request boards with upvoting."""

from featurefest.board import FeatureBoard, filter_by_status
from featurefest.client import FeaturefestClient
from featurefest.errors import (
    APIError,
    BoardNotFoundError,
    DecodingError,
    FeatureNotFoundError,
    FeaturefestError,
    HTTPStatusError,
    InvalidAPIKeyError,
    InvalidRequestError,
    InvalidResponseError,
    NetworkError,
    UserAlreadyVotedError,
)
from featurefest.schemas import (
    Board,
    Feature,
    FeatureStatus,
    Vote,
    VoteOutcome,
    VoteToggle,
    VoteType,
)

__version__ = "0.1.0"

__all__ = [
    "FeaturefestClient",
    "FeatureBoard",
    "filter_by_status",
    "Board",
    "Feature",
    "FeatureStatus",
    "Vote",
    "VoteOutcome",
    "VoteToggle",
    "VoteType",
    "FeaturefestError",
    "APIError",
    "BoardNotFoundError",
    "DecodingError",
    "FeatureNotFoundError",
    "HTTPStatusError",
    "InvalidAPIKeyError",
    "InvalidRequestError",
    "InvalidResponseError",
    "NetworkError",
    "UserAlreadyVotedError",
]
