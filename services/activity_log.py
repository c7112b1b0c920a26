# services/activity_log.py
"""
Activity log - append-only audit rows describing who changed what.
"""
import json
import logging
from typing import Any, Optional

from fastapi import Request
from sqlalchemy.orm import Session

from models import ActivityLog

logger = logging.getLogger(__name__)

_MAX_LEN = {
     "action": 255,
     "target_table": 100,
     "target_id": 100,
     "endpoint": 255,
     "http_method": 10,
     "ip_address": 45,
     "user_agent": 500,
}


def _truncate(field: str, value: Optional[str]) -> Optional[str]:
     if value is None:
          return None
     limit = _MAX_LEN.get(field)
     return value[:limit] if limit else value


def _to_json(value: Any) -> Optional[str]:
     if value is None:
          return None
     if isinstance(value, str):
          return value
     return json.dumps(value, default=str)


def detect_device_type(user_agent: Optional[str]) -> str:
     ua = (user_agent or "").lower()
     if "ipad" in ua or "tablet" in ua:
          return "tablet"
     if "mobi" in ua or "android" in ua or "iphone" in ua:
          return "mobile"
     return "web"


def client_ip(request: Optional[Request]) -> Optional[str]:
     if request is None:
          return None
     forwarded = request.headers.get("x-forwarded-for")
     if forwarded:
          return forwarded.split(",")[0].strip()
     return request.client.host if request.client else None


def record_activity(
     db: Session,
     user_id: Optional[int],
     action: str,
     description: Optional[str] = None,
     target_table: Optional[str] = None,
     target_id: Any = None,
     old_value: Any = None,
     new_value: Any = None,
     request: Optional[Request] = None,
     status_code: Optional[int] = None,
) -> ActivityLog:
     user_agent = request.headers.get("user-agent") if request is not None else None
     entry = ActivityLog(
          user_id=user_id,
          action=_truncate("action", action),
          description=description,
          target_table=_truncate("target_table", target_table),
          target_id=_truncate("target_id", str(target_id)) if target_id is not None else None,
          old_value=_to_json(old_value),
          new_value=_to_json(new_value),
          endpoint=_truncate("endpoint", request.url.path) if request is not None else None,
          http_method=_truncate("http_method", request.method) if request is not None else None,
          status_code=status_code,
          ip_address=_truncate("ip_address", client_ip(request)),
          user_agent=_truncate("user_agent", user_agent),
          device_type=detect_device_type(user_agent),
     )
     db.add(entry)
     logger.debug("Activity '%s' recorded for user_id=%s", action, user_id)
     return entry
