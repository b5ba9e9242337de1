"""Security headers for API responses."""

from fastapi import FastAPI, Request
from fastapi.responses import Response


SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
}


def setup_security_headers(app: FastAPI) -> None:
    """Add nosniff and anti-clickjacking headers."""

    @app.middleware("http")
    async def add_security_headers(request: Request, call_next) -> Response:
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response
