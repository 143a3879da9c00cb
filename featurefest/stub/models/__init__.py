from featurefest.stub.models.board import Board
from featurefest.stub.models.feature import FeatureRequest, FeatureVote

__all__ = [
    "Board",
    "FeatureRequest",
    "FeatureVote",
]
