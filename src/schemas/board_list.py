from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field


class ListBase(BaseModel):
    """Base schema for list data"""
    name: str = Field(..., min_length=1)
    color: Optional[str] = None


class ListCreate(ListBase):
    """Schema for list creation; no position appends to the board"""
    position: Optional[int] = Field(None, ge=0)


class ListUpdate(BaseModel):
    """Schema for list update"""
    name: Optional[str] = Field(None, min_length=1)
    color: Optional[str] = None
    position: Optional[int] = Field(None, ge=0)


class ListResponse(ListBase):
    """Schema for list response"""
    id: int
    board_id: int
    position: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ListCollection(BaseModel):
    """Schema for lists of a board"""
    lists: List[ListResponse]
