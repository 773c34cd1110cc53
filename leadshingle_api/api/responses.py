from fastapi import Response
from fastapi.responses import JSONResponse

from leadshingle_api.api.schemas.forms import ApiResponse
from leadshingle_api.core.config import Settings

ALLOWED_METHODS = "POST,OPTIONS"
ALLOWED_HEADERS = "Content-Type"


def cors_headers(settings: Settings, preflight: bool = False) -> dict[str, str]:
    headers = {"Access-Control-Allow-Origin": settings.allow_origin}
    if preflight:
        headers["Access-Control-Allow-Methods"] = ALLOWED_METHODS
        headers["Access-Control-Allow-Headers"] = ALLOWED_HEADERS
    return headers


def preflight_response(settings: Settings) -> Response:
    return Response(status_code=204, headers=cors_headers(settings, preflight=True))


def json_response(settings: Settings, status_code: int = 200, error: str | None = None) -> JSONResponse:
    body = ApiResponse(ok=error is None, error=error)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(exclude_none=True),
        headers=cors_headers(settings),
    )
