from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.db.database import get_async_session
from src.api.dependencies.auth import get_current_user
from src.api.dependencies.permissions import check_board_access
from src.models.user import User
from src.services.invitation_service import InvitationService
from src.services.user_service import UserService
from src.schemas.invitation import (
    InvitationCreate,
    InvitationRespond,
    InvitationResponse,
    InvitationList
)

# Invitations sent from a board
board_invitations_router = APIRouter(
    prefix="/boards/{board_id}/invitations",
    tags=["invitations"],
)

# Invitations received by the current user
router = APIRouter(
    prefix="/invitations",
    tags=["invitations"],
)


@board_invitations_router.post("", response_model=InvitationResponse, status_code=status.HTTP_201_CREATED)
async def invite_user(
    board_id: int,
    invitation_data: InvitationCreate,
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(get_current_user),
):
    """Invite a user to the board by email (owner only)"""
    await check_board_access(board_id, db, current_user, require_owner=True)

    invitee = await UserService.get_by_email(db=db, email=invitation_data.email)
    if not invitee:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )

    return await InvitationService.create(
        db=db,
        board_id=board_id,
        inviter_id=current_user.id,
        invitee_id=invitee.id
    )


@router.get("", response_model=InvitationList)
async def get_invitations(
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(get_current_user),
):
    """Get pending invitations of the current user"""
    invitations = await InvitationService.get_pending_for_user(db=db, user_id=current_user.id)
    return {"invitations": invitations}


@router.post("/{invitation_id}/respond", response_model=InvitationResponse)
async def respond_to_invitation(
    invitation_id: int,
    response_data: InvitationRespond,
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(get_current_user),
):
    """Accept or reject an invitation; accepting adds the user to the board"""
    invitation = await InvitationService.get_by_id(db=db, invitation_id=invitation_id)
    if not invitation:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Invitation not found"
        )

    return await InvitationService.respond(
        db=db,
        invitation=invitation,
        user_id=current_user.id,
        accept=response_data.accept
    )
