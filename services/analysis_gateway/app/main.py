import logging

from fastapi import FastAPI, Request
from fastapi.responses import Response

from .config import CORS_HEADERS, LOG_LEVEL
from .routers import gateway as gateway_router

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# Built-in docs routes would shadow the catch-all 404, so they are off
app = FastAPI(
    title="Complaint Analysis Gateway",
    version="0.1.0",
    docs_url=None,
    redoc_url=None,
    openapi_url=None,
)


@app.middleware("http")
async def cors(request: Request, call_next):
    # Preflight on any path succeeds before routing
    if request.method == "OPTIONS":
        return Response(status_code=200, headers={**CORS_HEADERS, "Content-Type": "application/json"})
    # Starlette would answer its own 405 for methods the route does not list
    if request.method not in gateway_router.ROUTED_METHODS:
        return await gateway_router.dispatch(request.url.path[1:], request)
    response = await call_next(request)
    response.headers.update(CORS_HEADERS)
    return response


app.include_router(gateway_router.router)
