import pytest
from unittest.mock import AsyncMock, MagicMock, patch
from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.v1.invitations import invite_user, get_invitations, respond_to_invitation
from src.core.exceptions import AuthorizationError, TransactionAbortError, ValidationError
from src.models.board import Board, BoardUserRole
from src.models.invitation import Invitation, InvitationStatus
from src.models.user import User
from src.schemas.invitation import InvitationCreate, InvitationRespond
from src.services.board_service import BoardService
from src.services.invitation_service import InvitationService


class TestInvitationService:
    """Тесты для InvitationService"""

    def setup_method(self):
        self.mock_db = AsyncMock(spec=AsyncSession)
        self.invitation = Invitation(
            id=1,
            board_id=10,
            inviter_id=1,
            invitee_id=2,
            status=InvitationStatus.PENDING
        )

    @pytest.mark.asyncio
    async def test_create(self):
        with patch.object(BoardService, 'get_user_role', return_value=None), \
             patch.object(InvitationService, 'get_pending', return_value=None):
            invitation = await InvitationService.create(self.mock_db, 10, 1, 2)

        assert invitation.status == InvitationStatus.PENDING
        self.mock_db.add.assert_called_once_with(invitation)
        self.mock_db.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_create_for_member(self):
        with patch.object(BoardService, 'get_user_role', return_value=BoardUserRole.COLLABORATOR):
            with pytest.raises(ValidationError) as exc_info:
                await InvitationService.create(self.mock_db, 10, 1, 2)

        assert exc_info.value.message == "User is already a member of this board"
        self.mock_db.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_create_duplicate_pending(self):
        with patch.object(BoardService, 'get_user_role', return_value=None), \
             patch.object(InvitationService, 'get_pending', return_value=self.invitation):
            with pytest.raises(ValidationError):
                await InvitationService.create(self.mock_db, 10, 1, 2)

    @pytest.mark.asyncio
    async def test_accept_adds_collaborator(self):
        with patch.object(BoardService, 'add_collaborator', return_value=True) as mock_add:
            result = await InvitationService.respond(self.mock_db, self.invitation, user_id=2, accept=True)

        assert result.status == InvitationStatus.ACCEPTED
        mock_add.assert_called_once_with(self.mock_db, 10, 2)
        self.mock_db.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_reject(self):
        with patch.object(BoardService, 'add_collaborator') as mock_add:
            result = await InvitationService.respond(self.mock_db, self.invitation, user_id=2, accept=False)

        assert result.status == InvitationStatus.REJECTED
        mock_add.assert_not_called()

    @pytest.mark.asyncio
    async def test_only_invitee_can_respond(self):
        with pytest.raises(AuthorizationError):
            await InvitationService.respond(self.mock_db, self.invitation, user_id=3, accept=True)

        assert self.invitation.status == InvitationStatus.PENDING

    @pytest.mark.asyncio
    async def test_answered_invitation_cannot_be_reopened(self):
        self.invitation.status = InvitationStatus.REJECTED

        with pytest.raises(ValidationError) as exc_info:
            await InvitationService.respond(self.mock_db, self.invitation, user_id=2, accept=True)

        assert exc_info.value.message == "Invitation already rejected"

    @pytest.mark.asyncio
    async def test_failed_accept_rolls_back(self):
        with patch.object(BoardService, 'add_collaborator', side_effect=RuntimeError("insert failed")):
            with pytest.raises(TransactionAbortError):
                await InvitationService.respond(self.mock_db, self.invitation, user_id=2, accept=True)

        self.mock_db.rollback.assert_awaited_once()
        self.mock_db.commit.assert_not_awaited()


class TestInvitationEndpoints:
    """Тесты для эндпоинтов приглашений"""

    def setup_method(self):
        self.mock_db = AsyncMock(spec=AsyncSession)
        self.owner = MagicMock(spec=User)
        self.owner.id = 1
        self.invitee = MagicMock(spec=User)
        self.invitee.id = 2
        self.board = MagicMock(spec=Board)
        self.board.id = 10

    @pytest.mark.asyncio
    async def test_invite_requires_owner(self):
        with patch('src.api.v1.invitations.check_board_access', return_value=self.board) as mock_access, \
             patch('src.api.v1.invitations.UserService.get_by_email', return_value=self.invitee), \
             patch('src.api.v1.invitations.InvitationService.create') as mock_create:

            await invite_user(10, InvitationCreate(email="friend@example.com"), self.mock_db, self.owner)

        mock_access.assert_called_once_with(10, self.mock_db, self.owner, require_owner=True)
        mock_create.assert_called_once_with(db=self.mock_db, board_id=10, inviter_id=1, invitee_id=2)

    @pytest.mark.asyncio
    async def test_invite_unknown_email(self):
        with patch('src.api.v1.invitations.check_board_access', return_value=self.board), \
             patch('src.api.v1.invitations.UserService.get_by_email', return_value=None):

            with pytest.raises(HTTPException) as exc_info:
                await invite_user(10, InvitationCreate(email="ghost@example.com"), self.mock_db, self.owner)

        assert exc_info.value.status_code == status.HTTP_404_NOT_FOUND
        assert exc_info.value.detail == "User not found"

    @pytest.mark.asyncio
    async def test_get_invitations(self):
        with patch('src.api.v1.invitations.InvitationService.get_pending_for_user', return_value=[]) as mock_get:
            result = await get_invitations(self.mock_db, self.invitee)

        assert result == {"invitations": []}
        mock_get.assert_called_once_with(db=self.mock_db, user_id=2)

    @pytest.mark.asyncio
    async def test_respond_missing_invitation(self):
        with patch('src.api.v1.invitations.InvitationService.get_by_id', return_value=None):
            with pytest.raises(HTTPException) as exc_info:
                await respond_to_invitation(5, InvitationRespond(accept=True), self.mock_db, self.invitee)

        assert exc_info.value.status_code == status.HTTP_404_NOT_FOUND
