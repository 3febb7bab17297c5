from typing import Any, Dict, Iterable, List, Sequence, Tuple

# name -> (default value, description)
DEFAULT_SETTINGS: Dict[str, Tuple[Any, str]] = {
    "TeacherModeEnabled": (True, "Enable teacher mode toggle in the web app"),
    "AllowNotes": (True, "Allow students to take notes during the video"),
    "ShowProgressBar": (True, "Show progress bar with overlay markers"),
    "ShowStudentReport": (True, "Show performance report at the end of the video"),
    "PrimaryColor": ("#4285f4", "Primary theme color (hex code)"),
    "SecondaryColor": ("#34a853", "Secondary theme color (hex code)"),
    "AllowSkipping": (False, "Allow students to skip ahead in the video"),
    "RequireCorrectAnswers": (False, "Require correct answers to continue"),
    "ShowCorrectAnswers": (True, "Show correct answers after quiz attempt"),
}


def default_settings() -> Dict[str, Any]:
    return {name: value for name, (value, _) in DEFAULT_SETTINGS.items()}


def serialize_value(value: Any) -> str:
    """Booleans become the literal "TRUE"/"FALSE"; everything else its string form."""
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if value is None:
        return ""
    return str(value)


def deserialize_value(value: Any) -> Any:
    if value == "TRUE":
        return True
    if value == "FALSE":
        return False
    return value


def serialize_settings(settings: Dict[str, Any]) -> List[Tuple[str, str, str]]:
    """Turn a settings mapping into (name, value, description) rows."""
    rows = []
    for name, value in settings.items():
        description = DEFAULT_SETTINGS.get(name, (None, ""))[1]
        rows.append((str(name), serialize_value(value), description))
    return rows


def deserialize_settings(rows: Iterable[Sequence[Any]]) -> Dict[str, Any]:
    """Build a settings mapping from (name, value, ...) rows; later rows win."""
    settings: Dict[str, Any] = {}
    for row in rows:
        if not row or row[0] in (None, ""):
            continue
        settings[str(row[0])] = deserialize_value(row[1] if len(row) > 1 else "")
    return settings
