# models/renewal_request.py
from sqlalchemy import Column, Integer, String, Text, Date, DateTime, ForeignKey, func
from .base import Base


class RenewalRequest(Base):
     """
     RenewalRequest model - a tenant's request to continue a lease
     for a new period. Decided once by the landlord (approved or declined).
     """
     __tablename__ = "renewal_requests"

     id = Column(Integer, primary_key=True, autoincrement=True)
     agreement_id = Column(String(32), ForeignKey("lease_agreements.agreement_id"), nullable=False, index=True)
     tenant_id = Column(Integer, ForeignKey("tenants.tenant_id"), nullable=False)
     unit_id = Column(Integer, ForeignKey("units.unit_id"), nullable=False)
     requested_start_date = Column(Date, nullable=False)
     requested_end_date = Column(Date, nullable=False)
     notes = Column(Text, nullable=True)
     status = Column(String(20), default="pending", nullable=False)  # pending, approved, declined

     created_at = Column(DateTime, server_default=func.now(), nullable=False)
     updated_at = Column(DateTime, onupdate=func.now(), nullable=True)

     def __repr__(self):
          return f"<RenewalRequest(id={self.id}, agreement_id='{self.agreement_id}', status='{self.status}')>"
