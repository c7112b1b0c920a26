# models/notification.py
from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey, func
from .base import Base


class Notification(Base):
     """
     Notification model - in-app message shown in a user's notification bell.
     url is the portal page the notification links to.
     """
     __tablename__ = "notifications"

     id = Column(Integer, primary_key=True, autoincrement=True)
     user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
     title = Column(String(255), nullable=False)
     body = Column(Text, nullable=False)
     url = Column(String(500), nullable=True)
     is_read = Column(Boolean, default=False, nullable=False)
     created_at = Column(DateTime, server_default=func.now(), nullable=False)

     def __repr__(self):
          return f"<Notification(id={self.id}, user_id={self.user_id}, title='{self.title}')>"
