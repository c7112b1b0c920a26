# models/tenant.py
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from .base import Base


class Tenant(Base):
     """
     Tenant model - extended profile for users with role='tenant'.
     Names and email live on the linked users row.
     """
     __tablename__ = "tenants"

     tenant_id = Column(Integer, primary_key=True, autoincrement=True)
     user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True)

     contact_number = Column(String(50), nullable=True)

     # Address
     street = Column(String(255), nullable=True)
     barangay = Column(String(100), nullable=True)
     city = Column(String(100), nullable=True)
     province = Column(String(100), nullable=True)

     # Occupation
     occupation_status = Column(String(100), nullable=True)
     employer_name = Column(String(255), nullable=True)
     monthly_income = Column(String(50), nullable=True)

     # Timestamps
     created_at = Column(DateTime, server_default=func.now(), nullable=False)
     updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

     # Relationships
     user = relationship("User", back_populates="tenant")
     leases = relationship("LeaseAgreement", back_populates="tenant")
     applications = relationship("ProspectiveTenant", back_populates="tenant")

     @property
     def full_name(self) -> str:
          return self.user.full_name if self.user else ""

     def __repr__(self):
          return f"<Tenant(tenant_id={self.tenant_id}, user_id={self.user_id})>"
