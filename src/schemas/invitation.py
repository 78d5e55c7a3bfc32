from datetime import datetime
from typing import List
from pydantic import BaseModel, EmailStr

from src.models.invitation import InvitationStatus


class InvitationCreate(BaseModel):
    """Schema for inviting a user by email"""
    email: EmailStr


class InvitationRespond(BaseModel):
    """Schema for answering an invitation"""
    accept: bool


class InvitationBoard(BaseModel):
    id: int
    name: str

    class Config:
        from_attributes = True


class InvitationUser(BaseModel):
    id: int
    name: str
    email: str

    class Config:
        from_attributes = True


class InvitationResponse(BaseModel):
    """Schema for invitation response"""
    id: int
    board_id: int
    inviter_id: int
    invitee_id: int
    status: InvitationStatus
    created_at: datetime

    class Config:
        from_attributes = True


class InvitationDetailResponse(InvitationResponse):
    """Pending invitation with the board and the inviter"""
    board: InvitationBoard
    inviter: InvitationUser


class InvitationList(BaseModel):
    invitations: List[InvitationDetailResponse]
