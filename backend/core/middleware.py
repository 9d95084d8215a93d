import logging

from fastapi import Request, Response, status
from fastapi.responses import JSONResponse, PlainTextResponse

logger = logging.getLogger(__name__)

PREFLIGHT_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


async def api_gateway(request: Request, call_next):
    """Answer preflight requests, enforce the rate limit and hide internal errors"""
    if request.method == "OPTIONS":
        return Response(status_code=status.HTTP_200_OK, headers=PREFLIGHT_HEADERS)

    path = request.url.path
    if path.startswith("/api/"):
        limiter = request.app.state.rate_limiter
        if not limiter.limit(path):
            logger.warning("Rate limit exceeded for %s", path)
            return PlainTextResponse(
                f"429 Failure – rate limit exceeded for {path}",
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                headers={"Access-Control-Allow-Origin": "*"},
            )

    try:
        response = await call_next(request)
    except Exception:
        logger.exception("Error handling %s %s", request.method, path)
        response = JSONResponse(
            {"error": "Something went wrong!"},
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    response.headers.setdefault("Access-Control-Allow-Origin", "*")
    return response
