"""Vote endpoints."""

import logging
import uuid
from datetime import UTC, datetime

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from featurefest.schemas import VoteCreate, VoteUpdate
from featurefest.stub.api.postgrest import (
    PostgrestError,
    check_select,
    eq_filters,
    order_by,
    write_response,
)
from featurefest.stub.db import get_db
from featurefest.stub.models import FeatureRequest, FeatureVote

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/votes", tags=["votes"])

VOTE_COLUMNS = {
    "id": FeatureVote.id,
    "feature_id": FeatureVote.feature_id,
    "user_id": FeatureVote.user_id,
    "vote_type": FeatureVote.vote_type,
    "created_at": FeatureVote.created_at,
}


def vote_row(vote: FeatureVote) -> dict:
    return {
        "id": vote.id,
        "feature_id": vote.feature_id,
        "user_id": vote.user_id,
        "vote_type": vote.vote_type,
        "created_at": vote.created_at,
        "updated_at": vote.updated_at,
    }


async def _matching_votes(request: Request, db: AsyncSession) -> list[FeatureVote]:
    query = select(FeatureVote).where(*eq_filters(request, VOTE_COLUMNS))
    result = await db.execute(query)
    return list(result.scalars())


@router.get("")
async def list_votes(request: Request, db: AsyncSession = Depends(get_db)) -> list[dict]:
    check_select(request)
    query = (
        select(FeatureVote)
        .where(*eq_filters(request, VOTE_COLUMNS))
        .order_by(*order_by(request, VOTE_COLUMNS))
    )
    result = await db.execute(query)
    return [vote_row(vote) for vote in result.scalars()]


@router.post("")
async def create_vote(
    data: VoteCreate,
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> Response:
    feature = await db.execute(select(FeatureRequest).where(FeatureRequest.id == data.feature_id))
    if feature.scalar_one_or_none() is None:
        raise PostgrestError(
            409,
            'insert or update on table "votes" violates foreign key constraint '
            '"votes_feature_id_fkey"',
            code="23503",
            details=f'Key (feature_id)=({data.feature_id}) is not present in table "features".',
        )

    # One vote per user per feature
    existing = await db.execute(
        select(FeatureVote).where(
            FeatureVote.feature_id == data.feature_id,
            FeatureVote.user_id == data.user_id,
        )
    )
    if existing.scalar_one_or_none() is not None:
        raise PostgrestError(
            409,
            'duplicate key value violates unique constraint "votes_feature_id_user_id_key"',
            code="23505",
            details=f"Key (feature_id, user_id)=({data.feature_id}, {data.user_id}) already exists.",
        )

    vote = FeatureVote(
        id=str(uuid.uuid4()),
        feature_id=data.feature_id,
        user_id=data.user_id,
        vote_type=data.vote_type.value,
        created_at=datetime.now(UTC).isoformat(),
    )
    db.add(vote)
    await db.flush()
    logger.debug("Vote %s cast on %s by %s", vote.id, vote.feature_id, vote.user_id)

    return write_response(request, [vote_row(vote)], status_code=201)


@router.patch("")
async def update_votes(
    data: VoteUpdate,
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> Response:
    now = datetime.now(UTC).isoformat()
    votes = await _matching_votes(request, db)
    for vote in votes:
        vote.vote_type = data.vote_type.value
        vote.updated_at = now
    await db.flush()

    return write_response(request, [vote_row(vote) for vote in votes], status_code=200)


@router.delete("")
async def delete_votes(request: Request, db: AsyncSession = Depends(get_db)) -> Response:
    if not eq_filters(request, VOTE_COLUMNS):
        raise PostgrestError(
            400,
            "DELETE requires a WHERE clause",
            code="21000",
            hint="Filter by feature_id, user_id or id",
        )
    votes = await _matching_votes(request, db)
    rows = [vote_row(vote) for vote in votes]
    for vote in votes:
        await db.delete(vote)
    await db.flush()

    return write_response(request, rows, status_code=200)
