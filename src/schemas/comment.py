from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class CommentCreate(BaseModel):
    """Schema for comment creation"""
    text: str = Field(..., min_length=1)


class CommentAuthor(BaseModel):
    id: int
    name: str
    email: str

    class Config:
        from_attributes = True


class CommentResponse(BaseModel):
    """Schema for comment response, includes the author"""
    id: int
    text: str
    card_id: int
    user_id: int
    created_at: datetime
    user: Optional[CommentAuthor] = None

    class Config:
        from_attributes = True
