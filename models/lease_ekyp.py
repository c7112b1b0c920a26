# models/lease_ekyp.py
"""
LeaseEKyp model - the digital tenant ID card issued for an active lease.

qr_payload is the JSON the card encodes; qr_hash is its SHA-256 so a
scanned card can be matched against the issued one.
"""
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from .base import Base


class LeaseEKyp(Base):
     __tablename__ = "lease_ekyp"

     ekyp_id = Column(String(36), primary_key=True)
     agreement_id = Column(
          String(32),
          ForeignKey("lease_agreements.agreement_id", ondelete="CASCADE"),
          nullable=False,
          unique=True
     )
     tenant_id = Column(Integer, ForeignKey("tenants.tenant_id"), nullable=False)
     unit_id = Column(Integer, ForeignKey("units.unit_id"), nullable=False)
     landlord_id = Column(Integer, ForeignKey("landlords.landlord_id"), nullable=False)
     qr_payload = Column(Text, nullable=False)
     qr_hash = Column(String(64), nullable=False)
     status = Column(String(20), default="active", nullable=False)  # active, revoked
     issued_at = Column(DateTime, nullable=False)
     revoked_at = Column(DateTime, nullable=True)
     updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

     lease = relationship("LeaseAgreement", back_populates="ekyp")

     def __repr__(self):
          return f"<LeaseEKyp(ekyp_id='{self.ekyp_id}', agreement_id='{self.agreement_id}', status='{self.status}')>"
