# models/payout.py
from sqlalchemy import Column, Integer, String, Numeric, Boolean, Text, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from .base import Base


class LandlordPayoutAccount(Base):
     """
     Where a landlord receives disbursements. Only one account per landlord
     is active at a time; saving a new one deactivates the rest.
     """
     __tablename__ = "landlord_payout_accounts"

     id = Column(Integer, primary_key=True, autoincrement=True)
     landlord_id = Column(Integer, ForeignKey("landlords.landlord_id"), nullable=False, index=True)
     payout_method = Column(String(20), nullable=False)  # bank_transfer, gcash, maya
     channel_code = Column(String(50), nullable=False)  # Xendit channel, e.g. PH_GCASH, PH_BDO
     account_name = Column(String(255), nullable=False)
     account_number = Column(String(100), nullable=False)
     bank_name = Column(String(100), nullable=True)
     is_active = Column(Boolean, default=True, nullable=False)
     created_at = Column(DateTime, server_default=func.now(), nullable=False)
     updated_at = Column(DateTime, onupdate=func.now(), nullable=True)

     landlord = relationship("Landlord", back_populates="payout_accounts")

     def __repr__(self):
          return f"<LandlordPayoutAccount(landlord_id={self.landlord_id}, method='{self.payout_method}', active={self.is_active})>"


class LandlordPayoutHistory(Base):
     """One disbursement sent to a landlord, covering one or more payments."""
     __tablename__ = "landlord_payout_history"

     payout_id = Column(Integer, primary_key=True, autoincrement=True)
     landlord_id = Column(Integer, ForeignKey("landlords.landlord_id"), nullable=False, index=True)
     amount = Column(Numeric(12, 2), nullable=False)
     included_payments = Column(Text, nullable=False)  # JSON list of payment_ids
     payout_method = Column(String(20), nullable=False)
     channel_code = Column(String(50), nullable=False)
     account_name = Column(String(255), nullable=False)
     account_number = Column(String(100), nullable=False)
     bank_name = Column(String(100), nullable=True)
     status = Column(String(20), nullable=False)  # ACCEPTED, SUCCEEDED, FAILED
     external_id = Column(String(100), nullable=False, unique=True)
     xendit_disbursement_id = Column(String(100), nullable=True)
     created_at = Column(DateTime, server_default=func.now(), nullable=False)

     def __repr__(self):
          return f"<LandlordPayoutHistory(payout_id={self.payout_id}, landlord_id={self.landlord_id}, amount={self.amount})>"
