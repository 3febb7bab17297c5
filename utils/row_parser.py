from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Sequence, Tuple

from utils.next_action import NextAction, parse_next_action
from utils.values import cell_text, parse_int

logger = logging.getLogger(__name__)

INFO = "info"
QUIZ = "quiz"
TRUE_FALSE = "true_false"
MATCHING = "matching"
OVERLAY_TYPES = (INFO, QUIZ, TRUE_FALSE, MATCHING)

AUTO_SIZE = "auto"
DEFAULT_CORRECT_FEEDBACK = "Correct!"
DEFAULT_INCORRECT_FEEDBACK = "Incorrect."

# Column positions in an overlays row
COL_VIDEO_TITLE = 0
COL_TIMESTAMP = 1
COL_TITLE = 2
COL_CONTENT = 3
COL_TYPE = 4
COL_NEXT_ACTION = 5
COL_CORRECT_ANSWER = 6
COL_INCORRECT_ANSWERS = (7, 8, 9)
COL_GROUP_NAME = 10
COL_EXPLANATION = 11
COL_CORRECT_FEEDBACK = 12
COL_INCORRECT_FEEDBACK = 13
COL_IMAGE_URL = 14
COL_IMAGE_WIDTH = 15
COL_IMAGE_HEIGHT = 16


@dataclass(frozen=True)
class Option:
    text: str
    is_correct: bool
    feedback: str

    def to_dict(self) -> Dict[str, Any]:
        return {"text": self.text, "is_correct": self.is_correct, "feedback": self.feedback}


@dataclass(frozen=True)
class ImageRef:
    url: str
    width: Any = AUTO_SIZE
    height: Any = AUTO_SIZE

    def to_dict(self) -> Dict[str, Any]:
        return {"url": self.url, "width": self.width, "height": self.height}


@dataclass(frozen=True)
class Overlay:
    id: str
    video_title: str
    timestamp: int
    title: str
    content: str
    type: str = INFO
    next_action: NextAction = field(default_factory=NextAction)
    options: Tuple[Option, ...] = ()
    explanation: str = ""
    correct_feedback: str = ""
    incorrect_feedback: str = ""
    group_name: str = ""
    image: Optional[ImageRef] = None

    @property
    def is_question(self) -> bool:
        return is_quiz_type(self.type)

    def with_options(self, options: Sequence[Option]) -> "Overlay":
        return replace(self, options=tuple(options))

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "id": self.id,
            "video_title": self.video_title,
            "timestamp": self.timestamp,
            "title": self.title,
            "content": self.content,
            "type": self.type,
            "next_action": self.next_action.kind.value,
            "action_param": self.next_action.param,
            "options": [option.to_dict() for option in self.options],
            "explanation": self.explanation,
            "correct_feedback": self.correct_feedback,
            "incorrect_feedback": self.incorrect_feedback,
            "group_name": self.group_name,
        }
        if self.image is not None:
            data["image"] = self.image.to_dict()
        return data


def is_quiz_type(overlay_type: str) -> bool:
    """Quiz family: multiple choice and true/false (matching is not included)."""
    return QUIZ in overlay_type or TRUE_FALSE in overlay_type


def _cell(row: Sequence[Any], index: int) -> Any:
    return row[index] if index < len(row) else None


def _text(row: Sequence[Any], index: int) -> str:
    return cell_text(_cell(row, index))


def _normalize_type(raw: Any) -> str:
    overlay_type = cell_text(raw).strip().lower()
    return overlay_type if overlay_type in OVERLAY_TYPES else INFO


def _build_options(row: Sequence[Any], correct_feedback: str, incorrect_feedback: str) -> List[Option]:
    correct_answer = _text(row, COL_CORRECT_ANSWER)
    options = [
        Option(text=piece.strip(), is_correct=True, feedback=correct_feedback or DEFAULT_CORRECT_FEEDBACK)
        for piece in correct_answer.split("|")
        if piece.strip()
    ]
    # Incorrect answers keep their cell text as written; correct ones are trimmed per piece
    for index in COL_INCORRECT_ANSWERS:
        answer = _text(row, index)
        if answer.strip():
            options.append(
                Option(text=answer, is_correct=False, feedback=incorrect_feedback or DEFAULT_INCORRECT_FEEDBACK)
            )
    return options


def normalize_true_false(options: List[Option], incorrect_feedback: str) -> List[Option]:
    """Make sure both TRUE and FALSE are offered; missing ones are added as incorrect."""
    texts = {option.text.upper() for option in options}
    normalized = list(options)
    for value in ("TRUE", "FALSE"):
        if value not in texts:
            normalized.append(
                Option(text=value, is_correct=False, feedback=incorrect_feedback or DEFAULT_INCORRECT_FEEDBACK)
            )
    return normalized


def parse_overlay_row(row: Sequence[Any], row_id: int, video_title: str) -> Optional[Overlay]:
    """Parse one overlays row for ``video_title``; None when the row is skipped."""
    if not _text(row, COL_VIDEO_TITLE) or _cell(row, COL_VIDEO_TITLE) != video_title:
        return None

    timestamp = parse_int(_cell(row, COL_TIMESTAMP))
    title = _text(row, COL_TITLE)
    content = _text(row, COL_CONTENT)
    if not timestamp or not title or not content:
        logger.debug("Skipping overlay row %s: timestamp, title and content are required", row_id)
        return None

    overlay_type = _normalize_type(_cell(row, COL_TYPE))
    next_action = parse_next_action(_text(row, COL_NEXT_ACTION) or "continue")
    correct_feedback = _text(row, COL_CORRECT_FEEDBACK)
    incorrect_feedback = _text(row, COL_INCORRECT_FEEDBACK)

    options: List[Option] = []
    if is_quiz_type(overlay_type) and _text(row, COL_CORRECT_ANSWER).strip():
        options = _build_options(row, correct_feedback, incorrect_feedback)
        if overlay_type == TRUE_FALSE:
            options = normalize_true_false(options, incorrect_feedback)

    image = None
    image_url = _text(row, COL_IMAGE_URL)
    if image_url:
        image = ImageRef(
            url=image_url,
            width=_cell(row, COL_IMAGE_WIDTH) or AUTO_SIZE,
            height=_cell(row, COL_IMAGE_HEIGHT) or AUTO_SIZE,
        )

    return Overlay(
        id=f"overlay-{row_id}",
        video_title=video_title,
        timestamp=timestamp,
        title=title,
        content=content,
        type=overlay_type,
        next_action=next_action,
        options=tuple(options),
        explanation=_text(row, COL_EXPLANATION),
        correct_feedback=correct_feedback,
        incorrect_feedback=incorrect_feedback,
        group_name=_text(row, COL_GROUP_NAME),
        image=image,
    )


def parse_overlay_rows(rows: Sequence[Tuple[int, Sequence[Any]]], video_title: str) -> List[Overlay]:
    """Parse (row id, row) pairs, keeping only valid overlays of ``video_title``."""
    overlays = []
    for row_id, row in rows:
        overlay = parse_overlay_row(row, row_id, video_title)
        if overlay is not None:
            overlays.append(overlay)
    return overlays
