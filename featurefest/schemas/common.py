"""Shared field types for wire models.

Timestamps arrive as ISO 8601 strings. Parsing is lenient: an unreadable
``created_at`` becomes the current time and an unreadable ``updated_at``
becomes ``None``. A missing or non-string value is still a validation error.
"""

import logging
from datetime import UTC, datetime
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator

logger = logging.getLogger(__name__)


def _parse_iso(value: str) -> datetime | None:
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        logger.debug("Unparsable timestamp %r", value)
        return None


def _timestamp_or_now(value: Any) -> Any:
    if isinstance(value, str):
        return _parse_iso(value) or datetime.now(UTC)
    return value


def _timestamp_or_none(value: Any) -> Any:
    if isinstance(value, str):
        return _parse_iso(value)
    return value


Timestamp = Annotated[datetime, BeforeValidator(_timestamp_or_now)]
OptionalTimestamp = Annotated[datetime | None, BeforeValidator(_timestamp_or_none)]


class ErrorBody(BaseModel):
    """PostgREST error payload."""

    message: str
    code: str | None = None
    details: Any = None
    hint: Any = None
