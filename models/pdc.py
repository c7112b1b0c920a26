# models/pdc.py
"""
PostDatedCheck model - checks a tenant hands over in advance for future rent.

A check starts pending and is moved by the landlord to cleared, bounced
or replaced; each of those transitions stamps its own timestamp column.
"""
import enum
from sqlalchemy import Column, Integer, String, Numeric, Date, Text, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from .base import Base


class PDCStatus(str, enum.Enum):
     """Clearing state of a post-dated check."""
     PENDING = "pending"
     CLEARED = "cleared"
     BOUNCED = "bounced"
     REPLACED = "replaced"


class PostDatedCheck(Base):
     __tablename__ = "post_dated_checks"

     pdc_id = Column(Integer, primary_key=True, autoincrement=True)
     lease_id = Column(
          String(32),
          ForeignKey("lease_agreements.agreement_id", ondelete="CASCADE"),
          nullable=False,
          index=True
     )
     check_number = Column(String(50), nullable=True)
     bank_name = Column(String(100), nullable=True)
     amount = Column(Numeric(12, 2), nullable=False)
     due_date = Column(Date, nullable=True, index=True)
     status = Column(String(20), default=PDCStatus.PENDING.value, nullable=False, index=True)
     uploaded_image_url = Column(String(500), nullable=True)
     notes = Column(Text, nullable=True)

     cleared_at = Column(DateTime, nullable=True)
     bounced_at = Column(DateTime, nullable=True)
     replaced_at = Column(DateTime, nullable=True)
     created_at = Column(DateTime, server_default=func.now(), nullable=False)
     updated_at = Column(DateTime, onupdate=func.now(), nullable=True)

     lease = relationship("LeaseAgreement", back_populates="pdcs")

     def __repr__(self):
          return f"<PostDatedCheck(pdc_id={self.pdc_id}, check_number='{self.check_number}', status='{self.status}')>"
