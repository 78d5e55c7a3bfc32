from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.orm import selectinload
from datetime import datetime

from src.core.exceptions import AuthorizationError, ValidationError
from src.db.transaction import transaction
from src.models.invitation import Invitation, InvitationStatus
from src.services.board_service import BoardService
from src.logs import debug_logger


class InvitationService:
    """Board invitations: create, list pending, accept or reject"""

    @staticmethod
    async def create(
        db: AsyncSession,
        board_id: int,
        inviter_id: int,
        invitee_id: int
    ) -> Invitation:
        """
        Invite a user to a board

        Raises:
            ValidationError: the invitee is already on the board, or a pending
                             invitation for them already exists
        """
        if await BoardService.get_user_role(db, board_id, invitee_id) is not None:
            raise ValidationError("User is already a member of this board")

        existing = await InvitationService.get_pending(db, board_id, invitee_id)
        if existing:
            raise ValidationError("Invitation already sent to this user")

        invitation = Invitation(
            board_id=board_id,
            inviter_id=inviter_id,
            invitee_id=invitee_id,
            status=InvitationStatus.PENDING
        )
        db.add(invitation)
        await db.commit()
        await db.refresh(invitation)
        debug_logger.info(f"Пользователь {invitee_id} приглашен на доску {board_id}")
        return invitation

    @staticmethod
    async def get_by_id(
        db: AsyncSession,
        invitation_id: int
    ) -> Optional[Invitation]:
        query = select(Invitation).where(Invitation.id == invitation_id)
        result = await db.execute(query)
        return result.scalars().first()

    @staticmethod
    async def get_pending(
        db: AsyncSession,
        board_id: int,
        invitee_id: int
    ) -> Optional[Invitation]:
        query = select(Invitation).where(
            Invitation.board_id == board_id,
            Invitation.invitee_id == invitee_id,
            Invitation.status == InvitationStatus.PENDING
        )
        result = await db.execute(query)
        return result.scalars().first()

    @staticmethod
    async def get_pending_for_user(
        db: AsyncSession,
        user_id: int
    ) -> List[Invitation]:
        """Pending invitations addressed to the user, with board and inviter loaded"""
        query = select(Invitation).options(
            selectinload(Invitation.board),
            selectinload(Invitation.inviter)
        ).where(
            Invitation.invitee_id == user_id,
            Invitation.status == InvitationStatus.PENDING
        ).order_by(Invitation.created_at)
        result = await db.execute(query)
        return list(result.scalars().all())

    @staticmethod
    async def respond(
        db: AsyncSession,
        invitation: Invitation,
        user_id: int,
        accept: bool
    ) -> Invitation:
        """
        Accept or reject an invitation

        The status change and the collaborator insert are committed together.
        An answered invitation is never reopened.

        Raises:
            AuthorizationError: user is not the invitee
            ValidationError: invitation was already answered
        """
        if invitation.invitee_id != user_id:
            raise AuthorizationError("Not authorized to respond to this invitation")

        if invitation.status != InvitationStatus.PENDING:
            raise ValidationError(f"Invitation already {invitation.status.value}")

        async with transaction(db, "Error responding to invitation"):
            invitation.status = InvitationStatus.ACCEPTED if accept else InvitationStatus.REJECTED
            invitation.updated_at = datetime.utcnow()
            if accept:
                await BoardService.add_collaborator(db, invitation.board_id, user_id)

        debug_logger.info(f"Приглашение {invitation.id}: {invitation.status.value}")
        return invitation
