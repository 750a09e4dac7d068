# garage/utils/responses.py
"""ServiceResult -> JSON response with the matching HTTP status."""

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from garage.errors import ServiceResult


def respond(result: ServiceResult, key: str = "data", **extra) -> JSONResponse:
    """
    Success: 200 {"success": true, <key>: result.data, **extra}
    Failure: 4xx/5xx {"success": false, "error": "..."}
    """
    if not result.success:
        return JSONResponse(status_code=result.status_code,
                            content={"success": False, "error": result.error})
    body = {"success": True, **extra}
    if result.data is not None:
        body[key] = result.data
    return JSONResponse(status_code=200, content=jsonable_encoder(body))
