# schemas/announcement.py
from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel


class AnnouncementResponse(BaseModel):
     announcement_id: int
     property_id: int
     property_name: Optional[str] = None
     subject: str
     description: str
     photo_urls: List[str] = []
     created_at: datetime
