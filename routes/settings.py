import logging
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends

from db.database import fetch_rows, get_db, replace_rows
from utils.results import result_response
from utils.settings import default_settings, deserialize_settings, serialize_settings

logger = logging.getLogger(__name__)
router = APIRouter()


def get_app_settings(conn) -> Dict[str, Any]:
    """Read settings from the store; the defaults apply when none are stored or the read fails."""
    try:
        rows = [values for _, values in fetch_rows(conn, "settings")]
    except Exception:
        logger.exception("Failed to read settings, using defaults")
        return default_settings()
    settings = deserialize_settings(rows)
    return settings or default_settings()


def update_app_settings(conn, settings: Dict[str, Any]) -> Dict[str, Any]:
    """Replace all stored settings with ``settings`` (one transaction)."""
    try:
        replace_rows(conn, "settings", serialize_settings(settings))
    except Exception as exc:
        logger.exception("Failed to update settings")
        return {"error": f"Failed to update settings: {exc}"}
    logger.info("Settings updated (%d entries)", len(settings))
    return {"success": True, "message": "Settings updated successfully"}


@router.get("")
async def read_settings(conn=Depends(get_db)):
    return get_app_settings(conn)


@router.put("")
async def write_settings(settings: Dict[str, Any] = Body(...), conn=Depends(get_db)):
    return result_response(update_app_settings(conn, settings), error_status=500)
