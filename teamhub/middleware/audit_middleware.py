# teamhub/middleware/audit_middleware.py
from __future__ import annotations

import logging
import uuid
from typing import Callable

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from teamhub.utils.audit import write_audit_event

logger = logging.getLogger(__name__)


def _client_ip(request: Request) -> str:
    xff = request.headers.get("x-forwarded-for")
    if xff:
        return xff.split(",")[0].strip()
    return request.client.host if request.client else ""


def _request_ctx(request: Request, request_id: str) -> dict:
    return {
        "request_id": request_id,
        "method": request.method,
        "path": request.url.path,
        "ip": _client_ip(request),
        "ua": request.headers.get("user-agent", ""),
    }


class AuditMiddleware(BaseHTTPMiddleware):
    """
    Tags every request with a request id and records the security-relevant
    outcomes (401, 403, unhandled errors) in the audit collection.
    Successful requests are not recorded; entity changes go to interactions.
    """

    async def dispatch(self, request: Request, call_next: Callable):
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        request.state.request_id = request_id
        db = request.app.state.db

        try:
            response = await call_next(request)
        except Exception as e:
            logger.exception("unhandled error on %s %s", request.method, request.url.path)
            await write_audit_event(
                db,
                action="server_error",
                ok=False,
                actor=getattr(request.state, "actor", None),
                err=repr(e),
                request_ctx=_request_ctx(request, request_id),
            )
            raise

        response.headers["x-request-id"] = request_id

        if response.status_code in (401, 403):
            await write_audit_event(
                db,
                action="permission_denied" if response.status_code == 403 else "auth_missing_or_invalid",
                ok=False,
                actor=getattr(request.state, "actor", None),
                err=f"HTTP {response.status_code}",
                request_ctx=_request_ctx(request, request_id),
            )

        return response
