"""Reducers that fold quiz attempts, viewing events and notes into reports.

All functions are pure: they take the rows of the analytics tables (values in
column order, see ``db.schema.TABLE_COLUMNS``) and return plain dicts ready to
be serialized.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Sequence

from db.schema import TABLE_COLUMNS
from utils.values import cell_text, is_true_flag, parse_float, parse_timestamp, percent

ATTEMPT = {name: index for index, name in enumerate(TABLE_COLUMNS["quiz_analytics"])}
EVENT = {name: index for index, name in enumerate(TABLE_COLUMNS["user_data"])}
NOTE = {name: index for index, name in enumerate(TABLE_COLUMNS["user_notes"])}

EVENT_STARTED = "activity_started"
EVENT_PAUSED = "video_paused"
EVENT_COMPLETED = "video_completed"

NO_QUIZ_FEEDBACK = "No quiz data available for this session."

# (minimum accuracy, feedback), checked in order
FEEDBACK_TIERS = (
    (90, "Excellent work! You demonstrated a strong understanding of the material."),
    (75, "Good job! You have a solid grasp of most concepts."),
    (60, "You're on the right track, but may want to review the material again to strengthen your understanding."),
)
LOWEST_TIER_FEEDBACK = (
    "It looks like you might need to revisit this content. "
    "Consider rewatching the video and paying close attention to the key points."
)


def _get(row: Sequence[Any], index: int) -> Any:
    return row[index] if index < len(row) else None


def _matches(row: Sequence[Any], columns: Dict[str, int], session_id: str, video_title: str) -> bool:
    return _get(row, columns["session_id"]) == session_id and _get(row, columns["video_title"]) == video_title


def default_report_summary() -> Dict[str, str]:
    return {
        "title": "Activity Completed",
        "message": "You have completed this video activity.",
        "grade": "N/A",
        "feedback": NO_QUIZ_FEEDBACK,
    }


def feedback_for_accuracy(accuracy: float) -> str:
    for threshold, feedback in FEEDBACK_TIERS:
        if accuracy >= threshold:
            return feedback
    return LOWEST_TIER_FEEDBACK


def generate_report_summary(report: Dict[str, Any]) -> Dict[str, str]:
    """Human-readable title, message, grade and feedback for a session report."""
    performance = report["quiz_performance"]
    summary = {
        "title": "Activity Completed",
        "message": f'You have completed "{report["video_title"]}".',
        "grade": "N/A",
        "feedback": NO_QUIZ_FEEDBACK,
    }
    if performance["total_questions"] > 0:
        accuracy = performance["accuracy_percentage"]
        summary["grade"] = f"{accuracy:.1f}%"
        summary["feedback"] = feedback_for_accuracy(accuracy)
        summary["message"] += (
            f" You answered {performance['correct_answers']} out of "
            f"{performance['total_questions']} questions correctly."
        )
    notes_count = report["notes_count"]
    if notes_count > 0:
        plural = "" if notes_count == 1 else "s"
        summary["message"] += f" You took {notes_count} note{plural} during the video."
    return summary


def summarize_quiz_attempts(attempt_rows: Iterable[Sequence[Any]], session_id: str, video_title: str) -> Dict[str, Any]:
    total = correct = 0
    total_time = 0.0
    details: List[Dict[str, Any]] = []
    for row in attempt_rows:
        if not _matches(row, ATTEMPT, session_id, video_title):
            continue
        was_correct = is_true_flag(_get(row, ATTEMPT["was_correct"]))
        time_to_answer = parse_float(_get(row, ATTEMPT["time_to_answer"]))
        total += 1
        correct += int(was_correct)
        total_time += time_to_answer
        details.append(
            {
                "overlay_id": cell_text(_get(row, ATTEMPT["overlay_id"])),
                "quiz_type": cell_text(_get(row, ATTEMPT["quiz_type"])),
                "was_correct": was_correct,
                "selected_option": cell_text(_get(row, ATTEMPT["selected_option"])),
                "time_to_answer": time_to_answer,
            }
        )
    return {
        "total_questions": total,
        "correct_answers": correct,
        "incorrect_answers": total - correct,
        "accuracy_percentage": percent(correct, total),
        "average_time_to_answer": (total_time / total) if total else 0,
        "quiz_details": details,
    }


def summarize_viewing(event_rows: Iterable[Sequence[Any]], session_id: str, video_title: str) -> Dict[str, Any]:
    started = None
    completed = None
    pause_count = 0
    for row in event_rows:
        if not _matches(row, EVENT, session_id, video_title):
            continue
        event_type = _get(row, EVENT["event_type"])
        if event_type == EVENT_PAUSED:
            pause_count += 1
            continue
        ts = parse_timestamp(_get(row, EVENT["ts"]))
        if ts is None:
            continue
        if event_type == EVENT_STARTED and (started is None or ts < started):
            started = ts
        elif event_type == EVENT_COMPLETED and (completed is None or ts > completed):
            completed = ts

    viewing = {
        "start_time": None,
        "end_time": None,
        "total_time_spent": 0,
        "completion_percentage": 0,
        "pause_count": pause_count,
    }
    if started is not None and completed is not None:
        viewing.update(
            start_time=started.isoformat(),
            end_time=completed.isoformat(),
            total_time_spent=(completed - started).total_seconds(),
            # A completion event means the video was watched to the end
            completion_percentage=100,
        )
    return viewing


def count_notes(note_rows: Iterable[Sequence[Any]], session_id: str, video_title: str) -> int:
    return sum(1 for row in note_rows if _matches(row, NOTE, session_id, video_title))


def build_student_report(
    video_title: str,
    session_id: str,
    user_id: str,
    attempt_rows: Iterable[Sequence[Any]],
    event_rows: Iterable[Sequence[Any]] = (),
    note_rows: Iterable[Sequence[Any]] = (),
) -> Dict[str, Any]:
    """Per-session report for one video: quiz performance, viewing window, notes."""
    report: Dict[str, Any] = {
        "video_title": video_title,
        "user_id": user_id,
        "session_id": session_id,
        "quiz_performance": summarize_quiz_attempts(attempt_rows, session_id, video_title),
        "viewing_statistics": summarize_viewing(event_rows, session_id, video_title),
        "notes_count": count_notes(note_rows, session_id, video_title),
    }
    report["summary"] = generate_report_summary(report)
    return report


def _empty_tally() -> Dict[str, Any]:
    return {"total_attempts": 0, "correct_attempts": 0, "incorrect_attempts": 0}


def _add_attempt(tally: Dict[str, Any], was_correct: bool) -> None:
    tally["total_attempts"] += 1
    if was_correct:
        tally["correct_attempts"] += 1
    else:
        tally["incorrect_attempts"] += 1


def _finish_tally(tally: Dict[str, Any]) -> Dict[str, Any]:
    tally["correct_percentage"] = percent(tally["correct_attempts"], tally["total_attempts"])
    return tally


def build_performance_report(
    attempt_rows: Iterable[Sequence[Any]],
    video_title: Optional[str] = None,
) -> Dict[str, Any]:
    """Cohort report across sessions, optionally limited to one video."""
    report = _empty_tally()
    by_overlay: Dict[str, Dict[str, Any]] = {}
    by_user: Dict[str, Dict[str, Any]] = {}
    total_time = 0.0
    for row in attempt_rows:
        if video_title and _get(row, ATTEMPT["video_title"]) != video_title:
            continue
        was_correct = is_true_flag(_get(row, ATTEMPT["was_correct"]))
        total_time += parse_float(_get(row, ATTEMPT["time_to_answer"]))
        _add_attempt(report, was_correct)
        overlay_id = cell_text(_get(row, ATTEMPT["overlay_id"]))
        _add_attempt(by_overlay.setdefault(overlay_id, _empty_tally()), was_correct)
        user_id = cell_text(_get(row, ATTEMPT["user_id"]))
        _add_attempt(by_user.setdefault(user_id, _empty_tally()), was_correct)

    _finish_tally(report)
    report["video_title"] = video_title
    report["average_time_to_answer"] = (total_time / report["total_attempts"]) if report["total_attempts"] else 0
    report["quizzes_by_overlay"] = {key: _finish_tally(tally) for key, tally in by_overlay.items()}
    report["user_performance"] = {key: _finish_tally(tally) for key, tally in by_user.items()}
    return report
