from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class MessageUpdate(BaseModel):
    status: Optional[str] = Field(None, max_length=32)


class QueryUpdate(MessageUpdate):
    response: Optional[str] = None


class InquiryResponse(BaseModel):
    id: str
    name: Optional[str] = None
    email: str
    phone: Optional[str] = None
    subject: Optional[str] = None
    message: Optional[str] = None
    status: Optional[str] = None
    response: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
