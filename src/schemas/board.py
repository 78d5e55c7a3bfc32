from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field

from src.schemas.board_list import ListResponse

HEX_COLOR_PATTERN = r"^#[0-9a-fA-F]{6}$"


class BoardBase(BaseModel):
    """Base schema for board data"""
    name: str = Field(..., min_length=1)
    description: Optional[str] = ""
    is_private: bool = True
    background_color: str = Field("#ffffff", pattern=HEX_COLOR_PATTERN)


class BoardCreate(BoardBase):
    """Schema for board creation"""
    pass


class BoardUpdate(BaseModel):
    """Schema for board update; the owner cannot be changed"""
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    is_private: Optional[bool] = None
    background_color: Optional[str] = Field(None, pattern=HEX_COLOR_PATTERN)


class BoardResponse(BoardBase):
    """Schema for board response"""
    id: int
    owner_id: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class BoardDetailResponse(BoardResponse):
    """Board with its lists in display order"""
    lists: List[ListResponse] = []


class BoardList(BaseModel):
    """Schema for list of boards"""
    boards: List[BoardResponse]
    total: int = 0
