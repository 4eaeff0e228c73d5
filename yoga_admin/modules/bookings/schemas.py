from enum import Enum
from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class BookingStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class BookingStatusUpdate(BaseModel):
    status: BookingStatus


class BookingResponse(BaseModel):
    id: str
    user_id: Optional[str] = None
    class_name: str
    instructor: Optional[str] = None
    class_date: Optional[str] = None
    class_time: Optional[str] = None
    first_name: str
    last_name: Optional[str] = None
    email: str
    phone: Optional[str] = None
    experience_level: Optional[str] = None
    special_requests: Optional[str] = None
    emergency_contact: Optional[str] = None
    emergency_phone: Optional[str] = None
    status: BookingStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
