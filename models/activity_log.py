# models/activity_log.py
"""
ActivityLog model - append-only audit trail of user actions.
Rows are inserted by services.activity_log and never updated.
"""
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, func
from .base import Base


class ActivityLog(Base):
     __tablename__ = "activity_logs"

     log_id = Column(Integer, primary_key=True, autoincrement=True)
     user_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
     action = Column(String(255), nullable=False)
     description = Column(Text, nullable=True)
     target_table = Column(String(100), nullable=True)
     target_id = Column(String(100), nullable=True)
     old_value = Column(Text, nullable=True)  # JSON
     new_value = Column(Text, nullable=True)  # JSON
     endpoint = Column(String(255), nullable=True)
     http_method = Column(String(10), nullable=True)
     status_code = Column(Integer, nullable=True)
     ip_address = Column(String(45), nullable=True)
     user_agent = Column(String(500), nullable=True)
     device_type = Column(String(20), nullable=True)  # web, mobile, tablet
     timestamp = Column(DateTime, server_default=func.now(), nullable=False, index=True)

     def __repr__(self):
          return f"<ActivityLog(log_id={self.log_id}, user_id={self.user_id}, action='{self.action}')>"
