from __future__ import annotations

import math
import re
from datetime import datetime, timezone
from typing import Any, Optional

_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")
_LEADING_FLOAT_RE = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def cell_text(value: Any) -> str:
    """Render a raw cell as text; None becomes an empty string."""
    if value is None:
        return ""
    return str(value)


def parse_int(value: Any) -> Optional[int]:
    """Read the leading integer of a cell ("12.5" -> 12); None when there is none."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    match = _LEADING_INT_RE.match(cell_text(value))
    if not match:
        return None
    return int(match.group(1))


def parse_float(value: Any, default: float = 0.0) -> float:
    """Read the leading number of a cell, falling back to ``default``."""
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        match = _LEADING_FLOAT_RE.match(cell_text(value))
        if not match:
            return default
        number = float(match.group(1))
    return number if math.isfinite(number) else default


def is_true_flag(value: Any) -> bool:
    """Checkbox semantics: only True, 1 or the literal string "TRUE" count."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value == 1
    return value == "TRUE"


def parse_timestamp(value: Any) -> Optional[datetime]:
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    text = cell_text(value).strip()
    if not text:
        return None
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def percent(part: int, total: int) -> float:
    if total <= 0:
        return 0.0
    return round((part / total) * 100, 1)


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()
