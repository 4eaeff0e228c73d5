from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class ArticleCreate(BaseModel):
    title: str = Field(..., min_length=1)
    content: str
    excerpt: Optional[str] = None
    category: Optional[str] = None
    image_url: Optional[str] = None


class ArticleUpdate(BaseModel):
    title: Optional[str] = None
    content: Optional[str] = None
    excerpt: Optional[str] = None
    category: Optional[str] = None
    image_url: Optional[str] = None


class ArticleResponse(BaseModel):
    id: str
    title: str
    content: Optional[str] = None
    excerpt: Optional[str] = None
    category: Optional[str] = None
    image_url: Optional[str] = None
    author_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
