# models/landlord.py
"""
Landlord model - links users with role 'landlord' to their landlord profile.
Properties, payout accounts and payouts hang off landlord_id.
"""
from sqlalchemy import Column, Integer, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from .base import Base


class Landlord(Base):
     """Landlord profile - one per landlord user."""
     __tablename__ = "landlords"

     landlord_id = Column(Integer, primary_key=True, autoincrement=True)
     user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True)
     created_at = Column(DateTime, server_default=func.now(), nullable=False)

     # Relationships
     user = relationship("User", back_populates="landlord")
     properties = relationship("Property", back_populates="landlord")
     payout_accounts = relationship("LandlordPayoutAccount", back_populates="landlord")

     def __repr__(self):
          return f"<Landlord(landlord_id={self.landlord_id}, user_id={self.user_id})>"
