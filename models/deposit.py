# models/deposit.py
"""
Move-in money owed on a lease: the security deposit and the advance rent.
Both start unpaid and are settled by an approved or gateway-confirmed payment.
"""
from sqlalchemy import Column, Integer, String, Numeric, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from .base import Base


class SecurityDeposit(Base):
     __tablename__ = "security_deposits"

     deposit_id = Column(Integer, primary_key=True, autoincrement=True)
     lease_id = Column(String(32), ForeignKey("lease_agreements.agreement_id"), nullable=False, index=True)
     tenant_id = Column(Integer, ForeignKey("tenants.tenant_id"), nullable=True)
     amount = Column(Numeric(12, 2), nullable=False)
     status = Column(String(20), default="unpaid", nullable=False)  # unpaid, paid
     received_at = Column(DateTime, nullable=True)
     created_at = Column(DateTime, server_default=func.now(), nullable=False)

     lease = relationship("LeaseAgreement", back_populates="security_deposit")

     def __repr__(self):
          return f"<SecurityDeposit(lease_id='{self.lease_id}', amount={self.amount}, status='{self.status}')>"


class AdvancePayment(Base):
     __tablename__ = "advance_payments"

     advance_id = Column(Integer, primary_key=True, autoincrement=True)
     lease_id = Column(String(32), ForeignKey("lease_agreements.agreement_id"), nullable=False, index=True)
     tenant_id = Column(Integer, ForeignKey("tenants.tenant_id"), nullable=True)
     amount = Column(Numeric(12, 2), nullable=False)
     months_covered = Column(Integer, default=1, nullable=False)
     status = Column(String(20), default="unpaid", nullable=False)  # unpaid, paid
     received_at = Column(DateTime, nullable=True)
     created_at = Column(DateTime, server_default=func.now(), nullable=False)

     lease = relationship("LeaseAgreement", back_populates="advance_payment")

     def __repr__(self):
          return f"<AdvancePayment(lease_id='{self.lease_id}', amount={self.amount}, status='{self.status}')>"
