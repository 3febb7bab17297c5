from pydantic import BaseModel, field_validator
from typing import Any, Optional
from utils.values import parse_float

class QuizAttemptCreate(BaseModel):
    user_id: Optional[str] = None
    video_title: Optional[str] = None
    overlay_id: Optional[str] = None
    quiz_type: Optional[str] = None
    was_correct: bool = False
    selected_option: Optional[str] = None
    time_to_answer: float = 0
    session_id: Optional[str] = None

    @field_validator('time_to_answer', mode='before')
    @classmethod
    def coerce_time_to_answer(cls, v: Any) -> float:
        return parse_float(v)
