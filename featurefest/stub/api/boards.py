"""Board endpoints."""

from fastapi import APIRouter, Depends, Request
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from featurefest.stub.api.postgrest import check_select, eq_filters, order_by
from featurefest.stub.db import get_db
from featurefest.stub.models import Board

router = APIRouter(prefix="/boards", tags=["boards"])

BOARD_COLUMNS = {
    "id": Board.id,
    "name": Board.name,
    "user_id": Board.user_id,
    "created_at": Board.created_at,
}


def board_row(board: Board) -> dict:
    return {
        "id": board.id,
        "name": board.name,
        "description": board.description,
        "user_id": board.user_id,
        "created_at": board.created_at,
        "updated_at": board.updated_at,
    }


@router.get("")
async def list_boards(request: Request, db: AsyncSession = Depends(get_db)) -> list[dict]:
    check_select(request)
    query = (
        select(Board)
        .where(*eq_filters(request, BOARD_COLUMNS))
        .order_by(*order_by(request, BOARD_COLUMNS))
    )
    result = await db.execute(query)
    return [board_row(board) for board in result.scalars()]
