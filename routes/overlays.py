import logging
import random
import sqlite3
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends

from config import AppConfig, get_app_config
from db.database import fetch_rows, get_db
from utils.overlay_graph import build_overlay_graph
from utils.results import result_response
from utils.row_parser import parse_overlay_rows
from utils.shuffle import shuffle_options

logger = logging.getLogger(__name__)
router = APIRouter()


def get_overlays_for_video(
    conn,
    video_title: str,
    shuffle: bool = True,
    rng: Optional[random.Random] = None,
) -> Dict[str, Any]:
    """Parse, order and link the overlays of one video."""
    try:
        overlays = parse_overlay_rows(fetch_rows(conn, "overlays"), video_title)
        if shuffle:
            overlays = [
                overlay.with_options(shuffle_options(overlay.options, rng)) if overlay.options else overlay
                for overlay in overlays
            ]
        graph = build_overlay_graph(overlays)
    except sqlite3.Error as exc:
        logger.exception("Error getting overlays for %r", video_title)
        return {"error": f"Error getting overlays: {exc}"}
    except Exception as exc:
        logger.exception("Unexpected error building overlays for %r", video_title)
        return {"error": f"Error getting overlays: {exc}"}
    if graph.duplicate_titles:
        logger.warning(
            "Video %r has duplicate overlay titles %s; title lookup keeps the last one",
            video_title,
            graph.duplicate_titles,
        )
    return graph.to_dict()


@router.get("/{video_title}")
async def video_overlays(
    video_title: str,
    conn=Depends(get_db),
    config: AppConfig = Depends(get_app_config),
):
    return result_response(get_overlays_for_video(conn, video_title, shuffle=config.shuffle_options))
