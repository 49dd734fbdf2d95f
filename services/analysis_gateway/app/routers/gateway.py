import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from ..config import CORS_HEADERS, HEALTH_PATH, get_api_key
from ..logic.operations import HANDLERS
from ..schemas.analysis import Operation

logger = logging.getLogger(__name__)

router = APIRouter()

# OPTIONS never gets here and other methods are dispatched by the middleware
ROUTED_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD"]


def json_response(content, status_code: int = 200) -> JSONResponse:
    return JSONResponse(content=content, status_code=status_code, headers=CORS_HEADERS)


@router.api_route("/{path:path}", methods=ROUTED_METHODS)
async def dispatch(path: str, request: Request):
    """Route by path: introspection, then operation lookup, then method check."""
    if path in ("", HEALTH_PATH):
        return json_response({"status": "ok", "endpoints": [op.value for op in Operation]})

    try:
        operation = Operation(path)
    except ValueError:
        return json_response({"error": "Endpoint not found"}, status_code=404)

    if request.method != "POST":
        return json_response({"error": "Method not allowed"}, status_code=405)

    try:
        body = await request.json()
        if not isinstance(body, dict):
            raise ValueError("Request body must be a JSON object")
        api_key = get_api_key()
        result = await HANDLERS[operation](body, api_key)
    except Exception as exc:
        logger.error("%s failed: %s: %s", operation.value, exc.__class__.__name__, exc)
        return json_response({"error": str(exc) or "Internal server error"}, status_code=500)

    return json_response(result)
