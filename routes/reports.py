import csv
import io
import logging
import sqlite3
from pathlib import Path
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse, StreamingResponse
from fastapi.templating import Jinja2Templates

from db.database import fetch_rows, get_db
from utils.analytics import build_performance_report, build_student_report, default_report_summary
from utils.errors import DataAbsenceError, OverlayToolError
from utils.results import is_error, result_response

logger = logging.getLogger(__name__)
router = APIRouter()
base_dir = Path(__file__).resolve().parent.parent
templates = Jinja2Templates(directory=str(base_dir / "templates"))

NO_ANALYTICS = "No quiz analytics data available"


def _table_values(conn, table: str, required: bool = False) -> List[List[Any]]:
    """Row values of an analytics table; a missing optional table reads as empty."""
    try:
        return [values for _, values in fetch_rows(conn, table)]
    except sqlite3.OperationalError as exc:
        if required:
            raise DataAbsenceError(NO_ANALYTICS) from exc
        logger.warning("Table %s unavailable (%s); treating it as empty", table, exc)
        return []


def get_student_report(conn, video_title: str, session_id: str, user_id: str = "anonymous") -> Dict[str, Any]:
    try:
        return build_student_report(
            video_title,
            session_id,
            user_id,
            attempt_rows=_table_values(conn, "quiz_analytics", required=True),
            event_rows=_table_values(conn, "user_data"),
            note_rows=_table_values(conn, "user_notes"),
        )
    except OverlayToolError as exc:
        logger.warning("Student report unavailable: %s", exc)
        return {"error": str(exc), "summary": default_report_summary()}
    except Exception as exc:
        logger.exception("Failed to generate student report")
        return {
            "error": f"Failed to generate student report: {exc}",
            "summary": default_report_summary(),
        }


def get_quiz_performance_report(conn, video_title: Optional[str] = None) -> Dict[str, Any]:
    try:
        return build_performance_report(
            _table_values(conn, "quiz_analytics", required=True),
            video_title=video_title,
        )
    except OverlayToolError as exc:
        logger.warning("Performance report unavailable: %s", exc)
        return {"error": str(exc)}
    except Exception as exc:
        logger.exception("Failed to generate performance report")
        return {"error": f"Failed to generate report: {exc}"}


@router.get("/student")
async def student_report(
    video_title: str,
    session_id: str,
    user_id: str = Query("anonymous"),
    conn=Depends(get_db),
):
    return result_response(get_student_report(conn, video_title, session_id, user_id))


@router.get("/performance")
async def performance_report(video_title: Optional[str] = None, conn=Depends(get_db)):
    return result_response(get_quiz_performance_report(conn, video_title))


@router.get("/performance/view", response_class=HTMLResponse)
async def performance_report_view(
    request: Request,
    video_title: Optional[str] = None,
    conn=Depends(get_db),
):
    report = get_quiz_performance_report(conn, video_title)
    return templates.TemplateResponse(
        request,
        "reports/performance.html",
        {
            "report": report,
            "video_title": video_title,
        },
        status_code=404 if is_error(report) else 200,
    )


@router.get("/performance/export")
async def performance_report_export(video_title: Optional[str] = None, conn=Depends(get_db)):
    report = get_quiz_performance_report(conn, video_title)
    if is_error(report):
        return result_response(report)
    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(["Metric", "Value"])
    writer.writerow(["Video", video_title or "All videos"])
    writer.writerow(["Total Attempts", report["total_attempts"]])
    writer.writerow(["Correct Attempts", report["correct_attempts"]])
    writer.writerow(["Incorrect Attempts", report["incorrect_attempts"]])
    writer.writerow(["Correct Percentage", report["correct_percentage"]])
    writer.writerow(["Average Time To Answer", round(report["average_time_to_answer"], 2)])
    writer.writerow([])
    writer.writerow(["Overlay ID", "Attempts", "Correct", "Incorrect", "Correct Percentage"])
    for overlay_id, tally in report["quizzes_by_overlay"].items():
        writer.writerow([
            overlay_id,
            tally["total_attempts"],
            tally["correct_attempts"],
            tally["incorrect_attempts"],
            tally["correct_percentage"],
        ])
    writer.writerow([])
    writer.writerow(["User ID", "Attempts", "Correct", "Incorrect", "Correct Percentage"])
    for user_id, tally in report["user_performance"].items():
        writer.writerow([
            user_id,
            tally["total_attempts"],
            tally["correct_attempts"],
            tally["incorrect_attempts"],
            tally["correct_percentage"],
        ])
    data = output.getvalue().encode("utf-8")
    filename = "vidoverlay-performance-report.csv"
    return StreamingResponse(
        io.BytesIO(data),
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )
