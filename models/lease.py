# models/lease.py
import enum
from datetime import date
from sqlalchemy import (
     Column, Integer, String, Numeric, Date, Boolean, DateTime, ForeignKey,
     UniqueConstraint, func,
)
from sqlalchemy.orm import relationship
from .base import Base


class LeaseStatus(str, enum.Enum):
     """Lifecycle of a lease agreement."""
     DRAFT = "draft"
     PENDING_SIGNATURE = "pending_signature"
     ACTIVE = "active"
     EXPIRED = "expired"
     COMPLETED = "completed"
     CANCELLED = "cancelled"


class SignatureStatus(str, enum.Enum):
     PENDING = "pending"
     SIGNED = "signed"


class LeaseAgreement(Base):
     """
     LeaseAgreement model - rental agreement between a tenant and a unit.

     The agreement_id is an opaque string key handed to the portals.
     A renewal is a new agreement pointing back through is_renewal_of.
     """
     __tablename__ = "lease_agreements"

     agreement_id = Column(String(32), primary_key=True)
     is_renewal_of = Column(String(32), ForeignKey("lease_agreements.agreement_id"), nullable=True)
     tenant_id = Column(Integer, ForeignKey("tenants.tenant_id"), nullable=True, index=True)
     unit_id = Column(Integer, ForeignKey("units.unit_id"), nullable=False, index=True)
     lease_type = Column(String(20), default="residential", nullable=False)  # residential, commercial

     # Lease period
     start_date = Column(Date, nullable=True)
     end_date = Column(Date, nullable=True)
     status = Column(String(30), default=LeaseStatus.DRAFT.value, nullable=False, index=True)

     # Terms
     rent_amount = Column(Numeric(12, 2), nullable=True)
     security_deposit_amount = Column(Numeric(12, 2), default=0, nullable=False)
     advance_payment_amount = Column(Numeric(12, 2), default=0, nullable=False)
     billing_due_day = Column(Integer, default=1, nullable=False)
     grace_period_days = Column(Integer, default=3, nullable=False)
     late_penalty_amount = Column(Numeric(12, 2), default=0, nullable=False)
     is_security_deposit_paid = Column(Boolean, default=False, nullable=False)
     is_advance_payment_paid = Column(Boolean, default=False, nullable=False)

     agreement_url = Column(String(500), nullable=True)

     # Timestamps
     created_at = Column(DateTime, server_default=func.now(), nullable=False)
     updated_at = Column(DateTime, onupdate=func.now(), nullable=True)

     # Relationships
     tenant = relationship("Tenant", back_populates="leases")
     unit = relationship("Unit", back_populates="leases")
     signatures = relationship("LeaseSignature", back_populates="lease", cascade="all, delete-orphan")
     security_deposit = relationship("SecurityDeposit", back_populates="lease", uselist=False)
     advance_payment = relationship("AdvancePayment", back_populates="lease", uselist=False)
     pdcs = relationship("PostDatedCheck", back_populates="lease")
     billings = relationship("Billing", back_populates="lease")
     ekyp = relationship("LeaseEKyp", back_populates="lease", uselist=False)

     def __repr__(self):
          return f"<LeaseAgreement(agreement_id='{self.agreement_id}', status='{self.status}')>"

     @property
     def has_ended(self) -> bool:
          """True once today is on or after the end date."""
          return self.end_date is not None and self.end_date <= date.today()

     def signature_for(self, role: str):
          for signature in self.signatures:
               if signature.role == role:
                    return signature
          return None


class LeaseSignature(Base):
     """
     LeaseSignature model - OTP-backed e-signature of one party on a lease.
     One row per (agreement, role).
     """
     __tablename__ = "lease_signatures"
     __table_args__ = (UniqueConstraint("agreement_id", "role", name="uq_lease_signature_role"),)

     id = Column(Integer, primary_key=True, autoincrement=True)
     agreement_id = Column(
          String(32),
          ForeignKey("lease_agreements.agreement_id", ondelete="CASCADE"),
          nullable=False,
          index=True
     )
     role = Column(String(20), nullable=False)  # landlord, tenant
     email = Column(String(255), nullable=True)
     otp_code = Column(String(10), nullable=True)
     otp_sent_at = Column(DateTime, nullable=True)
     otp_expires_at = Column(DateTime, nullable=True)
     status = Column(String(20), default=SignatureStatus.PENDING.value, nullable=False)
     signed_at = Column(DateTime, nullable=True)

     lease = relationship("LeaseAgreement", back_populates="signatures")

     def __repr__(self):
          return f"<LeaseSignature(agreement_id='{self.agreement_id}', role='{self.role}', status='{self.status}')>"
