"""Headless state for the feature board widget.

``FeatureBoard`` holds what a board view renders: the loaded features, the
selected status tab, which features the current user has upvoted, and the
last error message. Any UI (the CLI included) drives it through ``load`` and
``upvote`` and reads the rest as plain attributes.
"""

import logging
import uuid
from collections.abc import Iterable

from featurefest.client import FeaturefestClient
from featurefest.errors import FeaturefestError
from featurefest.schemas import Feature, FeatureStatus

logger = logging.getLogger(__name__)

_EMPTY_STATE_MESSAGES = {
    FeatureStatus.IDEAS: "Be the first to request a feature!",
    FeatureStatus.IN_PROGRESS: "No features are currently in progress",
    FeatureStatus.RELEASED: "No features have been released yet",
}


def filter_by_status(features: Iterable[Feature], status: FeatureStatus) -> list[Feature]:
    """Keep features with the given status, preserving order."""
    return [feature for feature in features if feature.status == status]


class FeatureBoard:
    def __init__(
        self,
        client: FeaturefestClient,
        user_id: str | None = None,
        selected_status: FeatureStatus = FeatureStatus.IDEAS,
    ) -> None:
        self.client = client
        # Anonymous boards get a fresh identity per instance.
        self.user_id: str = user_id or str(uuid.uuid4())
        self.selected_status = selected_status

        self.features: list[Feature] = []
        self.voted_features: set[str] = set()
        self.is_loading = False
        self.error_message: str | None = None

    @property
    def filtered_features(self) -> list[Feature]:
        return filter_by_status(self.features, self.selected_status)

    @property
    def empty_state(self) -> tuple[str, str]:
        """Title and message shown when the selected tab has no features."""
        title = f"No {self.selected_status.display_name.lower()}"
        return title, _EMPTY_STATE_MESSAGES[self.selected_status]

    def has_voted(self, feature: Feature) -> bool:
        return feature.id in self.voted_features

    async def load(self) -> None:
        self.is_loading = True
        self.error_message = None
        try:
            self.features = await self.client.get_features()
            await self._check_user_votes()
        except FeaturefestError as exc:
            logger.warning("Loading board %s failed: %s", self.client.api_key, exc)
            self.error_message = f"Failed to load: {exc}"
        finally:
            self.is_loading = False

    async def upvote(self, feature: Feature) -> None:
        try:
            result = await self.client.upvote(feature.id, user_id=self.user_id)
        except FeaturefestError as exc:
            logger.warning("Voting on %s failed: %s", feature.id, exc)
            self.error_message = f"Failed to vote: {exc}"
            return

        if result.voted:
            self.voted_features.add(feature.id)
        else:
            self.voted_features.discard(feature.id)
        await self.load()

    async def _check_user_votes(self) -> None:
        voted: set[str] = set()
        for feature in self.features:
            try:
                vote = await self.client.get_user_vote(feature.id, self.user_id)
            except FeaturefestError as exc:
                # One unreadable vote should not blank the whole board.
                logger.debug("Vote lookup for %s failed: %s", feature.id, exc)
                continue
            if vote is not None:
                voted.add(feature.id)
        self.voted_features = voted
