from typing import Any, Dict

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def is_error(result: Dict[str, Any]) -> bool:
    return "error" in result


def result_response(result: Dict[str, Any], error_status: int = 404):
    """Return ``result`` as-is, or with ``error_status`` when it carries an error."""
    if is_error(result):
        return JSONResponse(status_code=error_status, content=jsonable_encoder(result))
    return result
