# models/unit.py
import enum
from sqlalchemy import Column, Integer, String, Numeric, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from .base import Base


class UnitStatus(str, enum.Enum):
     """Occupancy of a rentable unit."""
     UNOCCUPIED = "unoccupied"
     OCCUPIED = "occupied"


class Unit(Base):
     """
     Unit model - individual rentable units within a property.
     """
     __tablename__ = "units"

     unit_id = Column(Integer, primary_key=True, autoincrement=True)
     property_id = Column(Integer, ForeignKey("properties.property_id", ondelete="CASCADE"), nullable=False, index=True)
     unit_name = Column(String(50), nullable=False)
     unit_size = Column(Numeric(10, 2), nullable=True)
     furnish = Column(String(50), nullable=True)
     rent_amount = Column(Numeric(12, 2), nullable=True)
     status = Column(String(20), default=UnitStatus.UNOCCUPIED.value, nullable=False)

     # Timestamps
     created_at = Column(DateTime, server_default=func.now(), nullable=False)
     updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

     # Relationships
     property = relationship("Property", back_populates="units")
     leases = relationship("LeaseAgreement", back_populates="unit")
     applications = relationship("ProspectiveTenant", back_populates="unit")

     def __repr__(self):
          return f"<Unit(unit_id={self.unit_id}, unit_name='{self.unit_name}', status='{self.status}')>"
