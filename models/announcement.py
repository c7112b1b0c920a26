# models/announcement.py
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from .base import Base


class Announcement(Base):
     """
     Announcement model - a notice a landlord posts to one property's tenants.
     """
     __tablename__ = "announcements"

     announcement_id = Column(Integer, primary_key=True, autoincrement=True)
     property_id = Column(Integer, ForeignKey("properties.property_id", ondelete="CASCADE"), nullable=False, index=True)
     landlord_id = Column(Integer, ForeignKey("landlords.landlord_id"), nullable=False, index=True)
     subject = Column(String(255), nullable=False)
     description = Column(Text, nullable=False)
     created_at = Column(DateTime, server_default=func.now(), nullable=False)
     updated_at = Column(DateTime, onupdate=func.now(), nullable=True)

     # Relationships
     property = relationship("Property", back_populates="announcements")
     photos = relationship("AnnouncementPhoto", back_populates="announcement", cascade="all, delete-orphan")

     def __repr__(self):
          return f"<Announcement(announcement_id={self.announcement_id}, subject='{self.subject}')>"


class AnnouncementPhoto(Base):
     __tablename__ = "announcement_photos"

     id = Column(Integer, primary_key=True, autoincrement=True)
     announcement_id = Column(
          Integer,
          ForeignKey("announcements.announcement_id", ondelete="CASCADE"),
          nullable=False,
          index=True
     )
     photo_url = Column(Text, nullable=False)  # encrypted
     created_at = Column(DateTime, server_default=func.now(), nullable=False)

     announcement = relationship("Announcement", back_populates="photos")
