"""
HIPAA-compliant audit logging middleware.
Auto-logs all requests to PHI endpoints (clinical assessments).
"""
import logging
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from .config import settings

logger = logging.getLogger("app.audit")

# Endpoints that touch PHI - requests to these paths are logged
PHI_PATH_PREFIXES = (
    f"{settings.API_V1_PREFIX}/assessments",
)


class AuditMiddleware(BaseHTTPMiddleware):
    """Middleware that auto-logs access to PHI endpoints."""

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)

        if not settings.AUDIT_LOGGING_ENABLED:
            return response

        path = request.url.path
        if not any(path.startswith(prefix) for prefix in PHI_PATH_PREFIXES):
            return response

        # Derive the assessment action from the path, e.g. ".../assessments/analyze"
        parts = [p for p in path.split("/") if p]
        action = parts[-1] if len(parts) >= 4 else "unknown"

        ip_address = request.client.host if request.client else None

        logger.info(
            "PHI access: action=%s method=%s path=%s ip=%s status=%s",
            action, request.method, path, ip_address, response.status_code,
        )
        return response
