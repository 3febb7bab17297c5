import logging
import sqlite3
from typing import Any, Dict, List, Sequence, Tuple

from fastapi import APIRouter, Depends

from db.database import fetch_rows, get_db
from routes.settings import get_app_settings
from utils.errors import DataAbsenceError, MalformedInputError, OverlayToolError
from utils.results import result_response
from utils.values import cell_text, is_true_flag
from utils.youtube import extract_youtube_video_id

logger = logging.getLogger(__name__)
router = APIRouter()

NO_ACTIVE_VIDEO = (
    "No active video found. Please set at least one video to Active=TRUE in the Videos table."
)


def find_active_video(rows: List[Tuple[int, Sequence[Any]]]) -> Tuple[str, str]:
    """Return (title, url) of the first video flagged active."""
    for _, (title, url, _description, active) in rows:
        if is_true_flag(active):
            return cell_text(title), cell_text(url)
    raise DataAbsenceError(NO_ACTIVE_VIDEO)


def resolve_default_video(conn) -> Dict[str, Any]:
    try:
        title, url = find_active_video(fetch_rows(conn, "videos"))
        video_id = extract_youtube_video_id(url)
        if not video_id:
            raise MalformedInputError("Invalid YouTube URL in the active video row.")
        return {
            "video_id": video_id,
            "video_title": title,
            "settings": get_app_settings(conn),
        }
    except OverlayToolError as exc:
        logger.warning("Default video unavailable: %s", exc)
        return {"error": str(exc)}
    except sqlite3.Error as exc:
        logger.exception("Error getting default video")
        return {"error": f"Error getting video: {exc}"}
    except Exception as exc:
        logger.exception("Unexpected error resolving default video")
        return {"error": f"Error getting video: {exc}"}


@router.get("/default")
async def default_video(conn=Depends(get_db)):
    """Active video, its platform id and the app settings."""
    return result_response(resolve_default_video(conn))
