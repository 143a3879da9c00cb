"""Tests for the upvote toggle and vote creation fallback."""

import httpx
import pytest

from featurefest.errors import APIError, DecodingError, HTTPStatusError, InvalidRequestError
from featurefest.schemas import VoteOutcome, VoteType
from tests.conftest import (
    Recorder,
    empty_response,
    json_response,
    mock_client,
    request_json,
    vote_payload,
)


@pytest.mark.parametrize("vote_type", ["down", "sideways", ""])
async def test_non_upvote_rejected_without_network(vote_type):
    recorder = Recorder()
    async with mock_client(recorder) as client:
        with pytest.raises(InvalidRequestError):
            await client.vote("feat-1", vote_type, user_id="u1")
    assert recorder.requests == []


async def test_vote_accepts_plain_up_string():
    recorder = Recorder(json_response([]), json_response([vote_payload()], status_code=201))
    async with mock_client(recorder) as client:
        result = await client.vote("feat-1", "up", user_id="u1")
    assert result.outcome is VoteOutcome.TOGGLED_ON


async def test_upvote_without_prior_vote_creates_one():
    recorder = Recorder(json_response([]), json_response([vote_payload()], status_code=201))
    async with mock_client(recorder) as client:
        result = await client.upvote("feat-1", user_id="u1")

    assert result.outcome is VoteOutcome.TOGGLED_ON
    assert result.voted
    assert result.vote.id == "vote-1"
    assert recorder.methods == ["GET", "POST"]

    create = recorder.requests[1]
    assert create.url.path == "/rest/v1/votes"
    assert create.headers["prefer"] == "return=representation"
    assert request_json(create) == {"feature_id": "feat-1", "user_id": "u1", "vote_type": "up"}


async def test_upvote_with_prior_vote_removes_it():
    recorder = Recorder(json_response([vote_payload()]), empty_response(204))
    async with mock_client(recorder) as client:
        result = await client.upvote("feat-1", user_id="u1")

    assert result.outcome is VoteOutcome.TOGGLED_OFF
    assert result.vote is None
    assert not result.voted
    assert recorder.methods == ["GET", "DELETE"]


async def test_default_user_id_is_fixed_placeholder():
    recorder = Recorder(json_response([]), json_response([vote_payload()], status_code=201))
    async with mock_client(recorder) as client:
        await client.vote("feat-1", VoteType.UP)

    assert recorder.requests[0].url.params["user_id"] == "eq.external-user"
    assert request_json(recorder.requests[1])["user_id"] == "external-user"


async def test_client_default_user_id_can_be_overridden():
    recorder = Recorder(json_response([]), json_response([vote_payload()], status_code=201))
    async with mock_client(recorder, default_user_id="device-42") as client:
        await client.upvote("feat-1")

    assert recorder.requests[0].url.params["user_id"] == "eq.device-42"


async def test_empty_representation_retries_without_prefer():
    recorder = Recorder(
        json_response([]),
        json_response([], status_code=201),
        json_response(vote_payload(id="vote-9"), status_code=201),
    )
    async with mock_client(recorder) as client:
        result = await client.upvote("feat-1", user_id="u1")

    assert result.vote.id == "vote-9"
    assert recorder.methods == ["GET", "POST", "POST"]
    assert "prefer" not in recorder.requests[2].headers


async def test_empty_body_retries_without_prefer():
    recorder = Recorder(
        json_response([]),
        empty_response(201),
        json_response(vote_payload(id="vote-7"), status_code=201),
    )
    async with mock_client(recorder) as client:
        result = await client.upvote("feat-1", user_id="u1")

    assert result.vote.id == "vote-7"
    assert recorder.methods == ["GET", "POST", "POST"]
    assert recorder.requests[1].headers["prefer"] == "return=representation"
    assert "prefer" not in recorder.requests[2].headers


async def test_failed_retry_propagates_instead_of_fabricating():
    recorder = Recorder(
        json_response([]),
        json_response([], status_code=201),
        empty_response(201),
    )
    async with mock_client(recorder) as client:
        with pytest.raises(DecodingError):
            await client.upvote("feat-1", user_id="u1")


async def test_create_failure_propagates():
    recorder = Recorder(
        json_response([]),
        json_response({"message": "duplicate key value"}, status_code=409),
    )
    async with mock_client(recorder) as client:
        with pytest.raises(APIError, match="duplicate key value"):
            await client.upvote("feat-1", user_id="u1")


async def test_lookup_failure_propagates_without_creating():
    recorder = Recorder(httpx.Response(500, content=b"boom"))
    async with mock_client(recorder) as client:
        with pytest.raises(HTTPStatusError):
            await client.upvote("feat-1", user_id="u1")
    assert recorder.methods == ["GET"]


async def test_remove_failure_propagates():
    recorder = Recorder(
        json_response([vote_payload()]),
        json_response({"message": "permission denied"}, status_code=403),
    )
    async with mock_client(recorder) as client:
        with pytest.raises(APIError):
            await client.upvote("feat-1", user_id="u1")
