"""Feature request endpoints: the ``features`` table and the ``features_with_votes`` view."""

import logging
import uuid
from datetime import UTC, datetime

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response
from sqlalchemy import case, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from featurefest.schemas import FeatureCreate
from featurefest.stub.api.postgrest import (
    PostgrestError,
    check_select,
    eq_filters,
    order_by,
    write_response,
)
from featurefest.stub.db import get_db
from featurefest.stub.models import Board, FeatureRequest, FeatureVote

logger = logging.getLogger(__name__)

router = APIRouter(tags=["features"])

FEATURE_COLUMNS = {
    "id": FeatureRequest.id,
    "title": FeatureRequest.title,
    "status": FeatureRequest.status,
    "board_id": FeatureRequest.board_id,
    "user_id": FeatureRequest.user_id,
    "created_at": FeatureRequest.created_at,
    "updated_at": FeatureRequest.updated_at,
}


def feature_row(feature: FeatureRequest, upvotes: int = 0, downvotes: int = 0) -> dict:
    return {
        "id": feature.id,
        "title": feature.title,
        "description": feature.description,
        "status": feature.status,
        "board_id": feature.board_id,
        "user_id": feature.user_id,
        "created_at": feature.created_at,
        "updated_at": feature.updated_at,
        "upvotes": upvotes,
        "downvotes": downvotes,
        "total_votes": upvotes - downvotes,
    }


def _vote_count(vote_type: str):
    return func.coalesce(func.sum(case((FeatureVote.vote_type == vote_type, 1), else_=0)), 0)


@router.get("/features_with_votes")
async def list_features_with_votes(
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> list[dict]:
    check_select(request)
    upvotes = _vote_count("up")
    downvotes = _vote_count("down")
    sortable = {
        **FEATURE_COLUMNS,
        "upvotes": upvotes,
        "downvotes": downvotes,
        "total_votes": upvotes - downvotes,
    }

    query = (
        select(FeatureRequest, upvotes.label("upvotes"), downvotes.label("downvotes"))
        .outerjoin(FeatureVote, FeatureRequest.id == FeatureVote.feature_id)
        .where(*eq_filters(request, FEATURE_COLUMNS))
        .group_by(FeatureRequest.id)
        .order_by(*order_by(request, sortable))
    )
    result = await db.execute(query)
    return [feature_row(feature, up, down) for feature, up, down in result.all()]


@router.post("/features")
async def create_feature(
    data: FeatureCreate,
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> Response:
    board = await db.execute(select(Board).where(Board.id == data.board_id))
    if board.scalar_one_or_none() is None:
        raise PostgrestError(
            409,
            'insert or update on table "features" violates foreign key constraint '
            '"features_board_id_fkey"',
            code="23503",
            details=f'Key (board_id)=({data.board_id}) is not present in table "boards".',
        )

    feature = FeatureRequest(
        id=str(uuid.uuid4()),
        title=data.title,
        description=data.description,
        status=data.status.value,
        board_id=data.board_id,
        user_id=data.user_id,
        created_at=datetime.now(UTC).isoformat(),
    )
    db.add(feature)
    await db.flush()
    logger.info("Created feature %s on board %s", feature.id, feature.board_id)

    return write_response(request, [feature_row(feature)], status_code=201)
