"""Application middleware."""
import time

import structlog
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from .config import SESSION_COOKIE
from .database import create_connection
from .dependencies import get_auth_service

logger = structlog.get_logger(__name__)


class AuthMiddleware(BaseHTTPMiddleware):
    """Resolve the session cookie into ``request.state.user``.

    Requests without a valid session pass through anonymously; routes
    decide whether that is acceptable via ``require_user``/``require_admin``.
    """

    async def dispatch(self, request: Request, call_next):
        request.state.user = None

        session_id = request.cookies.get(SESSION_COOKIE)
        if session_id:
            db = create_connection()
            try:
                session = get_auth_service(db).get_session(session_id)
            finally:
                db.close()

            if session:
                request.state.user = {
                    "id": session["user_id"],
                    "name": session["name"],
                    "role_id": session["role_id"],
                    "role": session["role_name"],
                    "session_id": session_id,
                }

        return await call_next(request)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every request with its outcome and duration."""

    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "request_failed",
                method=request.method,
                path=request.url.path,
                error=str(e),
            )
            raise

        user = getattr(request.state, "user", None)
        logger.info(
            "request_completed",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            user_id=user["id"] if user else None,
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
        )
        return response
