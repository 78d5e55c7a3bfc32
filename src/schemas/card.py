from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field, validator

from src.schemas.comment import CommentResponse


class CardBase(BaseModel):
    """Base schema for card data"""
    name: str = Field(..., min_length=1)
    description: Optional[str] = None

    @validator('name')
    def strip_name(cls, value):
        value = value.strip()
        if not value:
            raise ValueError("Name is required")
        return value


class CardCreate(CardBase):
    """Schema for card creation; no position appends to the list"""
    list_id: int
    position: Optional[int] = Field(None, ge=0)


class CardUpdate(BaseModel):
    """Schema for card update; position or list_id triggers a reposition"""
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    position: Optional[int] = Field(None, ge=0)
    list_id: Optional[int] = None


class CardResponse(CardBase):
    """Schema for card response"""
    id: int
    board_id: int
    list_id: int
    position: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class CardDetailResponse(CardResponse):
    """Card with its comments, oldest first"""
    comments: List[CommentResponse] = []


class CardList(BaseModel):
    """Schema for list of cards"""
    cards: List[CardResponse]


class CardMove(BaseModel):
    """One entry of a batch reposition"""
    id: int
    position: int = Field(..., ge=0)
    list_id: Optional[int] = None


class CardBatchUpdate(BaseModel):
    """Schema for moving many cards of one board at once"""
    board_id: int
    cards: List[CardMove] = Field(..., min_length=1)
