import json
import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends

from db.database import append_row, get_db
from models.attempt import QuizAttemptCreate
from models.event import UserEventCreate
from utils.results import result_response
from utils.values import cell_text, now_iso

logger = logging.getLogger(__name__)
router = APIRouter()


def _payload_text(value: Any) -> str:
    if value is None or isinstance(value, str):
        return cell_text(value)
    return json.dumps(value)


def record_quiz_attempt(conn, attempt: QuizAttemptCreate) -> Dict[str, Any]:
    """Append one quiz attempt with defaults for missing fields."""
    try:
        append_row(
            conn,
            "quiz_analytics",
            (
                now_iso(),
                attempt.user_id or "anonymous",
                attempt.video_title or "",
                attempt.overlay_id or "",
                attempt.quiz_type or "quiz",
                "TRUE" if attempt.was_correct else "FALSE",
                attempt.selected_option or "",
                attempt.time_to_answer or 0,
                attempt.session_id or "",
            ),
        )
    except Exception as exc:
        logger.exception("Failed to record quiz attempt")
        return {"error": f"Failed to record quiz data: {exc}"}
    return {"success": True, "message": "Quiz data recorded successfully"}


def record_user_event(conn, event: UserEventCreate) -> Dict[str, Any]:
    """Append one viewing event with defaults for missing fields."""
    try:
        append_row(
            conn,
            "user_data",
            (
                now_iso(),
                event.session_id or "",
                event.user_id or "anonymous",
                event.video_title or "",
                event.event_type or "",
                _payload_text(event.event_data),
                event.browser or "",
                event.device or "",
            ),
        )
    except Exception as exc:
        logger.exception("Failed to record user event")
        return {"error": f"Failed to record user event: {exc}"}
    return {"success": True, "message": "User event recorded successfully"}


@router.post("/quiz-attempts")
async def create_quiz_attempt(attempt: QuizAttemptCreate, conn=Depends(get_db)):
    return result_response(record_quiz_attempt(conn, attempt), error_status=500)


@router.post("/events")
async def create_user_event(event: UserEventCreate, conn=Depends(get_db)):
    return result_response(record_user_event(conn, event), error_status=500)
