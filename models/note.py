from pydantic import BaseModel, field_validator
from typing import Any, Optional
from utils.values import parse_float

class NoteCreate(BaseModel):
    user_id: Optional[str] = None
    video_title: Optional[str] = None
    video_time: float = 0
    note_content: Optional[str] = None
    session_id: Optional[str] = None

    @field_validator('video_time', mode='before')
    @classmethod
    def coerce_video_time(cls, v: Any) -> float:
        return parse_float(v)

class Note(BaseModel):
    timestamp: str
    video_time: float
    content: str
