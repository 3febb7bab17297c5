import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, Query

from db.database import append_row, fetch_rows, get_db
from db.schema import TABLE_COLUMNS
from models.note import Note, NoteCreate
from utils.results import result_response
from utils.values import cell_text, now_iso, parse_float

logger = logging.getLogger(__name__)
router = APIRouter()

NOTE = {name: index for index, name in enumerate(TABLE_COLUMNS["user_notes"])}


def save_user_note(conn, note: NoteCreate) -> Dict[str, Any]:
    try:
        append_row(
            conn,
            "user_notes",
            (
                now_iso(),
                note.user_id or "anonymous",
                note.video_title or "",
                note.video_time or 0,
                note.note_content or "",
                note.session_id or "",
            ),
        )
    except Exception as exc:
        logger.exception("Failed to save note")
        return {"error": f"Failed to save note: {exc}"}
    return {"success": True, "message": "Note saved successfully"}


def get_user_notes(conn, video_title: str, user_id: str = "anonymous") -> Dict[str, Any]:
    """Notes one user took on one video, in the order they were saved."""
    try:
        rows = fetch_rows(conn, "user_notes")
    except Exception as exc:
        logger.exception("Failed to read notes")
        return {"error": f"Failed to retrieve notes: {exc}"}
    notes = [
        Note(
            timestamp=cell_text(values[NOTE["ts"]]),
            video_time=parse_float(values[NOTE["video_time"]]),
            content=cell_text(values[NOTE["note_content"]]),
        ).model_dump()
        for _, values in rows
        if values[NOTE["video_title"]] == video_title and values[NOTE["user_id"]] == user_id
    ]
    return {"notes": notes}


@router.post("")
async def create_note(note: NoteCreate, conn=Depends(get_db)):
    return result_response(save_user_note(conn, note), error_status=500)


@router.get("/{video_title}")
async def list_notes(video_title: str, user_id: str = Query("anonymous"), conn=Depends(get_db)):
    return result_response(get_user_notes(conn, video_title, user_id), error_status=500)
