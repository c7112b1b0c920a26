# services/notification_service.py
import logging
from typing import Iterable, Optional

from sqlalchemy.orm import Session

from models import Notification

logger = logging.getLogger(__name__)


def notify(db: Session, user_id: Optional[int], title: str, body: str, url: Optional[str] = None) -> Optional[Notification]:
     """Queue an in-app notification in the caller's transaction."""
     if user_id is None:
          return None
     notification = Notification(user_id=user_id, title=title, body=body, url=url, is_read=False)
     db.add(notification)
     logger.info("Notification '%s' queued for user_id=%s", title, user_id)
     return notification


def notify_many(db: Session, user_ids: Iterable[int], title: str, body: str, url: Optional[str] = None) -> int:
     count = 0
     for user_id in set(user_ids):
          if notify(db, user_id, title, body, url) is not None:
               count += 1
     return count
