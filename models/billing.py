# models/billing.py
import enum
from datetime import date, datetime
from sqlalchemy import Column, Integer, String, Numeric, Date, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from .base import Base


class BillingStatus(str, enum.Enum):
     """Enumeration for billing payment status."""
     UNPAID = "unpaid"
     PAID = "paid"
     OVERDUE = "overdue"


class Billing(Base):
     """
     Billing model - the monthly statement for a unit under a lease.

     There is at most one billing per unit per calendar month. Submetered
     units carry water and electricity totals; every billing carries its
     additional charges and discounts as child rows.
     """
     __tablename__ = "billings"

     billing_id = Column(String(20), primary_key=True)  # UPKYPBILL + 6 digits

     # Foreign keys
     lease_id = Column(
          String(32),
          ForeignKey("lease_agreements.agreement_id", ondelete="CASCADE"),
          nullable=False,
          index=True
     )
     unit_id = Column(Integer, ForeignKey("units.unit_id"), nullable=False, index=True)

     # Billing details
     billing_period = Column(Date, nullable=False, index=True)
     total_water_amount = Column(Numeric(12, 2), default=0, nullable=False)
     total_electricity_amount = Column(Numeric(12, 2), default=0, nullable=False)
     total_amount_due = Column(Numeric(12, 2), nullable=False)
     due_date = Column(Date, nullable=False, index=True)
     status = Column(String(20), default=BillingStatus.UNPAID.value, nullable=False, index=True)
     paid_at = Column(DateTime, nullable=True)

     # Timestamps
     created_at = Column(DateTime, server_default=func.now(), nullable=False)
     updated_at = Column(DateTime, onupdate=func.now(), nullable=True)

     # Relationships
     lease = relationship("LeaseAgreement", back_populates="billings")
     unit = relationship("Unit")
     charges = relationship(
          "BillingAdditionalCharge",
          back_populates="billing",
          cascade="all, delete-orphan"
     )
     payments = relationship("Payment", back_populates="billing")

     def __repr__(self):
          return f"<Billing(billing_id='{self.billing_id}', total={self.total_amount_due}, status='{self.status}')>"

     @property
     def is_overdue(self) -> bool:
          """Check if billing is past due date and unpaid."""
          return self.status == BillingStatus.UNPAID.value and self.due_date < date.today()

     def mark_as_paid(self) -> None:
          """Mark the billing as paid, keeping the first paid_at."""
          self.status = BillingStatus.PAID.value
          if self.paid_at is None:
               self.paid_at = datetime.utcnow()

     def mark_as_unpaid(self) -> None:
          self.status = BillingStatus.UNPAID.value

     def mark_as_overdue(self) -> None:
          """Mark the billing as overdue."""
          self.status = BillingStatus.OVERDUE.value


class BillingAdditionalCharge(Base):
     """One extra line on a billing: an added fee or a discount."""
     __tablename__ = "billing_additional_charges"

     id = Column(Integer, primary_key=True, autoincrement=True)
     billing_id = Column(
          String(20),
          ForeignKey("billings.billing_id", ondelete="CASCADE"),
          nullable=False,
          index=True
     )
     charge_category = Column(String(20), nullable=False)  # additional, discount
     charge_type = Column(String(100), nullable=False)
     amount = Column(Numeric(12, 2), nullable=False)

     billing = relationship("Billing", back_populates="charges")

     def __repr__(self):
          return f"<BillingAdditionalCharge(billing_id='{self.billing_id}', {self.charge_category}:{self.charge_type}={self.amount})>"


class MeterReading(Base):
     """Monthly submeter reading per unit and utility (water, electricity)."""
     __tablename__ = "meter_readings"

     reading_id = Column(Integer, primary_key=True, autoincrement=True)
     unit_id = Column(Integer, ForeignKey("units.unit_id"), nullable=False, index=True)
     utility_type = Column(String(20), nullable=False)
     reading_date = Column(Date, nullable=False)
     previous_reading = Column(Numeric(12, 2), nullable=False)
     current_reading = Column(Numeric(12, 2), nullable=False)
     created_at = Column(DateTime, server_default=func.now(), nullable=False)
     updated_at = Column(DateTime, onupdate=func.now(), nullable=True)

     @property
     def consumption(self):
          return self.current_reading - self.previous_reading

     def __repr__(self):
          return f"<MeterReading(unit_id={self.unit_id}, {self.utility_type} {self.previous_reading}->{self.current_reading})>"
