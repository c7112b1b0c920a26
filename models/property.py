# models/property.py
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from .base import Base


class Property(Base):
     """
     Property model - a building or lot a landlord rents out by unit.
     """
     __tablename__ = "properties"

     property_id = Column(Integer, primary_key=True, autoincrement=True)
     landlord_id = Column(Integer, ForeignKey("landlords.landlord_id"), nullable=False, index=True)
     property_name = Column(String(255), nullable=False)
     property_type = Column(String(50), nullable=True)  # apartment, condominium, house, dormitory
     description = Column(Text, nullable=True)

     # Address
     street = Column(String(255), nullable=True)
     barangay = Column(String(100), nullable=True)
     city = Column(String(100), nullable=True)
     province = Column(String(100), nullable=True)
     zip_code = Column(String(10), nullable=True)

     # Timestamps
     created_at = Column(DateTime, server_default=func.now(), nullable=False)
     updated_at = Column(DateTime, onupdate=func.now(), nullable=True)

     # Relationships
     landlord = relationship("Landlord", back_populates="properties")
     units = relationship("Unit", back_populates="property", cascade="all, delete-orphan")
     announcements = relationship("Announcement", back_populates="property")

     @property
     def address(self) -> str:
          parts = [self.street, self.barangay, self.city, self.province]
          return ", ".join(p for p in parts if p)

     def __repr__(self):
          return f"<Property(property_id={self.property_id}, name='{self.property_name}')>"
