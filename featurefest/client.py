"""Async client for the Featurefest REST API.

The backend is PostgREST-shaped: tables and views are addressed by path and
filtered with ``column=eq.<value>`` query parameters. Every public method is
one logical operation; ``vote`` is the only one that issues several calls.

Usage::

    async with FeaturefestClient(api_key=board_id) as client:
        features = await client.get_features()
        result = await client.upvote(features[0].id, user_id="u1")
"""

import logging
from functools import lru_cache
from typing import Any

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from featurefest.config import settings
from featurefest.errors import (
    APIError,
    DecodingError,
    HTTPStatusError,
    InvalidAPIKeyError,
    InvalidRequestError,
    InvalidResponseError,
    NetworkError,
)
from featurefest.schemas import (
    Board,
    ErrorBody,
    Feature,
    FeatureCreate,
    FeatureStatus,
    Vote,
    VoteCreate,
    VoteOutcome,
    VoteToggle,
    VoteType,
    VoteUpdate,
)

logger = logging.getLogger(__name__)

PREFER_REPRESENTATION = {"Prefer": "return=representation"}
FEATURE_ORDER = "total_votes.desc,created_at.desc"


@lru_cache(maxsize=None)
def _adapter(response_type: Any) -> TypeAdapter:
    return TypeAdapter(response_type)


def _eq(value: str) -> str:
    return f"eq.{value}"


class FeaturefestClient:
    """Typed wrapper around ``httpx.AsyncClient`` for one board.

    ``api_key`` is the board id. Arguments left as ``None`` fall back to
    :data:`featurefest.config.settings`.
    """

    def __init__(
        self,
        api_key: str | None = None,
        *,
        base_url: str | None = None,
        service_key: str | None = None,
        default_user_id: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        api_key = api_key or settings.board_id
        if not api_key:
            raise InvalidAPIKeyError()

        self.api_key: str = api_key
        self.base_url: str = (base_url or settings.base_url).rstrip("/")
        self.default_user_id: str = default_user_id or settings.default_user_id
        self._http = httpx.AsyncClient(
            base_url=self.base_url,
            headers={
                "apikey": service_key if service_key is not None else settings.service_key,
                "Content-Type": "application/json",
            },
            timeout=timeout if timeout is not None else settings.timeout,
            transport=transport,
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "FeaturefestClient":
        return self

    async def __aexit__(self, exc_type, exc_value, traceback) -> None:
        await self.aclose()

    # ------------------------------------------------------------------
    # Features
    # ------------------------------------------------------------------

    async def get_features(self) -> list[Feature]:
        """Fetch every feature on the board, most voted first, then newest first."""
        return await self._request(
            "GET",
            "/features_with_votes",
            list[Feature],
            params={"board_id": _eq(self.api_key), "order": FEATURE_ORDER},
        )

    async def create_feature(
        self,
        title: str,
        description: str,
        user_id: str | None = None,
        status: FeatureStatus = FeatureStatus.IDEAS,
    ) -> Feature:
        """Create a feature request on the board and return the stored row."""
        payload = FeatureCreate(
            title=title,
            description=description,
            status=status,
            board_id=self.api_key,
            user_id=user_id,
        )
        features = await self._request(
            "POST",
            "/features",
            list[Feature],
            json=payload,
            headers=PREFER_REPRESENTATION,
            allow_empty=True,
        )
        if not features:
            raise InvalidResponseError()
        logger.info("Created feature %s on board %s", features[0].id, self.api_key)
        return features[0]

    # ------------------------------------------------------------------
    # Votes
    # ------------------------------------------------------------------

    async def vote(
        self,
        feature_id: str,
        vote_type: VoteType | str,
        user_id: str | None = None,
    ) -> VoteToggle:
        """Toggle a vote: remove the user's vote if present, otherwise cast one.

        Only upvotes are supported; any other type raises
        :class:`InvalidRequestError` before a request is sent. Lookup and
        write failures propagate unchanged.
        """
        if vote_type != VoteType.UP:
            raise InvalidRequestError()

        user_id = user_id or self.default_user_id
        existing = await self.get_user_vote(feature_id, user_id)
        if existing is not None:
            await self.remove_vote(feature_id, user_id)
            logger.debug("Retracted vote on %s for %s", feature_id, user_id)
            return VoteToggle(outcome=VoteOutcome.TOGGLED_OFF)

        vote = await self._create_vote(feature_id, VoteType.UP, user_id)
        logger.debug("Cast vote %s on %s for %s", vote.id, feature_id, user_id)
        return VoteToggle(outcome=VoteOutcome.TOGGLED_ON, vote=vote)

    async def upvote(self, feature_id: str, user_id: str | None = None) -> VoteToggle:
        return await self.vote(feature_id, VoteType.UP, user_id=user_id)

    async def get_user_vote(self, feature_id: str, user_id: str) -> Vote | None:
        """Return the user's vote on a feature, or ``None`` if they have not voted."""
        votes = await self._request(
            "GET",
            "/votes",
            list[Vote],
            params={"feature_id": _eq(feature_id), "user_id": _eq(user_id), "select": "*"},
        )
        return votes[0] if votes else None

    async def remove_vote(self, feature_id: str, user_id: str) -> None:
        """Delete the user's vote. Deleting a vote that does not exist is a no-op."""
        await self._request(
            "DELETE",
            "/votes",
            params={"feature_id": _eq(feature_id), "user_id": _eq(user_id)},
        )

    async def update_vote(self, vote_id: str, vote_type: VoteType) -> Vote:
        votes = await self._request(
            "PATCH",
            "/votes",
            list[Vote],
            params={"id": _eq(vote_id)},
            json=VoteUpdate(vote_type=vote_type),
            headers=PREFER_REPRESENTATION,
            allow_empty=True,
        )
        if not votes:
            raise InvalidResponseError()
        return votes[0]

    async def _create_vote(self, feature_id: str, vote_type: VoteType, user_id: str) -> Vote:
        payload = VoteCreate(feature_id=feature_id, user_id=user_id, vote_type=vote_type)
        votes = await self._request(
            "POST",
            "/votes",
            list[Vote],
            json=payload,
            headers=PREFER_REPRESENTATION,
            allow_empty=True,
        )
        if votes:
            return votes[0]

        # Some deployments ignore Prefer and answer with an empty array.
        logger.warning("Vote insert on %s returned no rows, retrying without Prefer", feature_id)
        return await self._request("POST", "/votes", Vote, json=payload)

    # ------------------------------------------------------------------
    # Boards
    # ------------------------------------------------------------------

    async def validate_api_key(self) -> Board:
        """Fetch the board the API key points at; raise if there is none."""
        boards = await self._request(
            "GET",
            "/boards",
            list[Board],
            params={"id": _eq(self.api_key), "select": "*"},
        )
        if not boards:
            raise InvalidAPIKeyError()
        return boards[0]

    # ------------------------------------------------------------------
    # Request plumbing
    # ------------------------------------------------------------------

    async def _request(
        self,
        method: str,
        path: str,
        response_type: Any = None,
        *,
        params: dict[str, str] | None = None,
        json: BaseModel | None = None,
        headers: dict[str, str] | None = None,
        allow_empty: bool = False,
    ) -> Any:
        """Send one request and decode the body as ``response_type``.

        With ``response_type=None`` the body is ignored and ``None`` returned.
        With ``allow_empty`` an empty 2xx body decodes as ``[]``, which is what a
        write answers when the backend ignores ``Prefer: return=representation``.
        """
        body = json.model_dump(mode="json", exclude_none=True) if json is not None else None
        try:
            response = await self._http.request(
                method, path, params=params, json=body, headers=headers
            )
        except httpx.TransportError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise NetworkError() from exc

        logger.debug("%s %s -> %d", method, response.request.url, response.status_code)

        if not response.is_success:
            raise _error_from_response(response)

        if response_type is None:
            return None

        if allow_empty and not response.content.strip():
            return []

        try:
            return _adapter(response_type).validate_json(response.content)
        except ValidationError as exc:
            logger.warning("Could not decode %s %s: %s", method, path, exc)
            raise DecodingError() from exc


def _error_from_response(response: httpx.Response) -> Exception:
    try:
        error = ErrorBody.model_validate_json(response.content)
    except ValidationError:
        return HTTPStatusError(response.status_code)
    return APIError(error.message, status_code=response.status_code)
