"""API error type and its JSON rendering.

모든 에러 응답은 {"error": "<code>"} 형식입니다.
"""
from fastapi import Request
from fastapi.responses import JSONResponse


class ApiError(Exception):
    """Raised by handlers and dependencies to return an error code."""

    def __init__(self, status_code: int, code: str):
        super().__init__(code)
        self.status_code = status_code
        self.code = code


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.code})
