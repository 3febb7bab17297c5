from pydantic import BaseModel
from typing import Any, Optional

class UserEventCreate(BaseModel):
    session_id: Optional[str] = None
    user_id: Optional[str] = None
    video_title: Optional[str] = None
    event_type: Optional[str] = None
    event_data: Optional[Any] = None  # free-form payload, stored as text
    browser: Optional[str] = None
    device: Optional[str] = None
