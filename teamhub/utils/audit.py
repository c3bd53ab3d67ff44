# teamhub/utils/audit.py
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from teamhub.db import AUDIT_EVENTS

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


async def write_audit_event(
    db,
    *,
    action: str,
    ok: bool,
    actor: Optional[dict] = None,
    err: Optional[str] = None,
    meta: Optional[Dict[str, Any]] = None,
    request_ctx: Optional[Dict[str, Any]] = None,
) -> None:
    """
    Write one audit event. Best-effort: a failed write is logged, never raised.

    Event schema:
    {
      ts, action, ok, err,
      actor: {user_id, role, name, email},
      meta: {...},
      request: {request_id, method, path, ip, ua}
    }
    """
    doc = {
        "ts": _utcnow(),
        "action": action,
        "ok": ok,
        "err": err,
        "actor": actor or {},
        "meta": meta or {},
        "request": request_ctx or {},
    }
    try:
        await db[AUDIT_EVENTS].insert_one(doc)
    except Exception:
        logger.warning("audit event %s not written", action, exc_info=True)
