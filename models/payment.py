# models/payment.py
import enum
from sqlalchemy import Column, Integer, String, Numeric, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from .base import Base


class PaymentStatus(str, enum.Enum):
     PENDING = "pending"
     CONFIRMED = "confirmed"
     FAILED = "failed"


class PayoutStatus(str, enum.Enum):
     """Whether the landlord has received the money for this payment."""
     UNPAID = "unpaid"
     IN_PAYOUT = "in_payout"
     PAID = "paid"


class Payment(Base):
     """
     Payment model - money a tenant paid (or claims to have paid) on a lease.

     Proof-of-payment uploads start pending until the landlord reviews them;
     gateway payments arrive confirmed. Confirmed payments are appended to
     the payment ledger and later disbursed to the landlord.
     """
     __tablename__ = "payments"

     payment_id = Column(Integer, primary_key=True, autoincrement=True)
     bill_id = Column(String(20), ForeignKey("billings.billing_id"), nullable=True, index=True)
     agreement_id = Column(String(32), ForeignKey("lease_agreements.agreement_id"), nullable=False, index=True)

     # billing, monthly_billing, security_deposit, advance_rent, advance_payment, initial_payment
     payment_type = Column(String(30), nullable=False)
     amount_paid = Column(Numeric(12, 2), nullable=False)
     gross_amount = Column(Numeric(12, 2), nullable=True)
     net_amount = Column(Numeric(12, 2), nullable=True)
     gateway_fee = Column(Numeric(12, 2), nullable=True)
     gateway_vat = Column(Numeric(12, 2), nullable=True)
     payment_method = Column(String(50), nullable=True)
     payment_status = Column(String(20), default=PaymentStatus.PENDING.value, nullable=False, index=True)
     payout_status = Column(String(20), default=PayoutStatus.UNPAID.value, nullable=False, index=True)
     proof_of_payment = Column(String(500), nullable=True)
     receipt_reference = Column(String(100), nullable=True, unique=True)
     gateway_transaction_ref = Column(String(100), nullable=True, index=True)
     payment_date = Column(DateTime, nullable=True)

     created_at = Column(DateTime, server_default=func.now(), nullable=False)
     updated_at = Column(DateTime, onupdate=func.now(), nullable=True)

     # Relationships
     billing = relationship("Billing", back_populates="payments")
     lease = relationship("LeaseAgreement")
     ledger_entry = relationship(
          "PaymentLedger",
          back_populates="payment",
          uselist=False,
          cascade="all, delete-orphan"
     )

     def __repr__(self):
          return f"<Payment(payment_id={self.payment_id}, type='{self.payment_type}', amount={self.amount_paid}, status='{self.payment_status}')>"
