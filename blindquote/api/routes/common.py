"""Shared helpers for session routes."""

from typing import Any, Dict

from ...services.session import QuoteSession
from ...utils import ErrorCode, raise_error


def snapshot_response(session: QuoteSession, message: str) -> Dict[str, Any]:
    """
    Build the standard response carrying the session snapshot.

    Notifications raised since the last response are attached and drained.
    """
    notifications = session.drain_notifications()
    return {
        "success": True,
        "message": message,
        "data": session.snapshot(notifications).to_dict(),
    }


def ensure_row(session: QuoteSession, row_index: int) -> None:
    """
    Raises:
        APIError: If the row does not exist
    """
    if session.quote_service.get_item(row_index) is None:
        raise_error(
            ErrorCode.ROW_NOT_FOUND,
            f"找不到第 {row_index + 1} 列",
            details={"row_index": row_index, "row_count": session.quote_service.row_count()},
        )
