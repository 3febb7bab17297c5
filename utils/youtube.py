from __future__ import annotations

import re
from typing import Optional

# watch?v=, /embed/, /v/, /e/, nested /user/<x>/<id> paths and youtu.be short links
_VIDEO_ID_RE = re.compile(
    r"(?:youtube\.com/(?:[^/]+/.+/|(?:v|e(?:mbed)?)/|.*[?&]v=)|youtu\.be/)([^\"&?/\s]{11})"
)


def extract_youtube_video_id(url: Optional[str]) -> Optional[str]:
    """Return the 11-character video id from a YouTube URL, or None."""
    if not url:
        return None
    match = _VIDEO_ID_RE.search(str(url))
    return match.group(1) if match else None
