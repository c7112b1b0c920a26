# models/prospective_tenant.py
"""
ProspectiveTenant model - a tenant's application to rent a unit.

Landlords move an application from pending to approved or disapproved;
an approved applicant then answers whether they proceed with the lease.
"""
import enum
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from .base import Base


class ApplicationStatus(str, enum.Enum):
     """Screening outcome of an application."""
     PENDING = "pending"
     APPROVED = "approved"
     DISAPPROVED = "disapproved"


class ProspectiveTenant(Base):
     __tablename__ = "prospective_tenants"

     id = Column(Integer, primary_key=True, autoincrement=True)
     unit_id = Column(Integer, ForeignKey("units.unit_id", ondelete="CASCADE"), nullable=False, index=True)
     tenant_id = Column(Integer, ForeignKey("tenants.tenant_id", ondelete="CASCADE"), nullable=False, index=True)
     status = Column(String(20), default=ApplicationStatus.PENDING.value, nullable=False, index=True)
     message = Column(Text, nullable=True)  # applicant note, replaced by the disapproval reason
     proceeded = Column(String(3), nullable=True)  # yes, no

     created_at = Column(DateTime, server_default=func.now(), nullable=False)
     updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

     # Relationships
     unit = relationship("Unit", back_populates="applications")
     tenant = relationship("Tenant", back_populates="applications")

     def __repr__(self):
          return f"<ProspectiveTenant(id={self.id}, unit_id={self.unit_id}, status='{self.status}')>"
