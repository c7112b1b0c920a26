# models/maintenance.py
import enum
from sqlalchemy import Column, Integer, String, Text, Date, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from .base import Base


class MaintenanceStatus(str, enum.Enum):
     PENDING = "pending"
     APPROVED = "approved"
     SCHEDULED = "scheduled"
     IN_PROGRESS = "in-progress"
     COMPLETED = "completed"
     REJECTED = "rejected"


class MaintenanceRequest(Base):
     """
     MaintenanceRequest model - repair request a tenant files for their unit.
     """
     __tablename__ = "maintenance_requests"

     request_id = Column(Integer, primary_key=True, autoincrement=True)
     tenant_id = Column(Integer, ForeignKey("tenants.tenant_id"), nullable=False, index=True)
     unit_id = Column(Integer, ForeignKey("units.unit_id"), nullable=False, index=True)
     subject = Column(String(255), nullable=False)
     description = Column(Text, nullable=False)
     category = Column(String(100), nullable=False)
     status = Column(String(20), default=MaintenanceStatus.PENDING.value, nullable=False, index=True)
     schedule_date = Column(Date, nullable=True)
     completion_date = Column(Date, nullable=True)

     created_at = Column(DateTime, server_default=func.now(), nullable=False)
     updated_at = Column(DateTime, onupdate=func.now(), nullable=True)

     # Relationships
     tenant = relationship("Tenant")
     unit = relationship("Unit")
     photos = relationship("MaintenancePhoto", back_populates="request", cascade="all, delete-orphan")

     def __repr__(self):
          return f"<MaintenanceRequest(request_id={self.request_id}, subject='{self.subject}', status='{self.status}')>"


class MaintenancePhoto(Base):
     __tablename__ = "maintenance_photos"

     id = Column(Integer, primary_key=True, autoincrement=True)
     request_id = Column(
          Integer,
          ForeignKey("maintenance_requests.request_id", ondelete="CASCADE"),
          nullable=False,
          index=True
     )
     photo_url = Column(String(500), nullable=False)
     created_at = Column(DateTime, server_default=func.now(), nullable=False)

     request = relationship("MaintenanceRequest", back_populates="photos")
