# sitecms/utils/pagination.py
from __future__ import annotations

from datetime import datetime
from typing import Optional, Tuple, TypedDict, Type, Any

from sqlalchemy.sql import or_, and_

from sitecms.domain.exceptions import ValidationError


class CursorMeta(TypedDict):
    has_more: bool
    next_cursor: Optional[str]


def encode_cursor(created_at: datetime, row_id: Any) -> str:
    """
    Encode a cursor using a stable, deterministic sort key.

    Format: ISO8601|<id>
    """
    if not isinstance(created_at, datetime) or row_id is None:
        raise ValueError("created_at and row_id are required to encode cursor")

    return f"{created_at.isoformat()}|{row_id}"


def decode_cursor(cursor: str) -> Tuple[datetime, str]:
    if not cursor or "|" not in cursor:
        raise ValidationError({"cursor": "Invalid cursor format"})

    ts_str, row_id = cursor.split("|", 1)
    try:
        return datetime.fromisoformat(ts_str), row_id
    except ValueError as exc:
        raise ValidationError({"cursor": "Invalid cursor format"}) from exc


def paginate_cursor(
    query,
    *,
    model: Type[Any],
    limit: int,
    cursor: Optional[str] = None,
) -> tuple[list[Any], CursorMeta]:
    """
    Execute a newest-first cursor-paginated query.

    Ordering contract: ORDER BY created_at DESC, id DESC.
    Fetches limit + 1 rows to detect continuation.
    """
    if limit <= 0:
        raise ValidationError({"limit": "Limit must be greater than zero"})

    if cursor:
        cursor_ts, cursor_id = decode_cursor(cursor)
        query = query.filter(
            or_(
                model.created_at < cursor_ts,
                and_(
                    model.created_at == cursor_ts,
                    model.id < cursor_id,
                ),
            )
        )

    rows = (
        query.order_by(model.created_at.desc(), model.id.desc())
        .limit(limit + 1)
        .all()
    )

    has_more = len(rows) > limit
    items = rows[:limit]

    next_cursor: Optional[str] = None
    if items and has_more:
        last = items[-1]
        next_cursor = encode_cursor(last.created_at, last.id)

    return items, {
        "has_more": has_more,
        "next_cursor": next_cursor,
    }
