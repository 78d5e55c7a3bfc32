import pytest
from unittest.mock import AsyncMock, MagicMock, patch
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.v1.comments import add_comment, delete_comment
from src.core.exceptions import AuthorizationError, NotFoundError
from src.models.board import Board
from src.models.card import Card, Comment
from src.models.user import User
from src.schemas.comment import CommentCreate
from src.services.comment_service import CommentService


class TestCommentService:
    """Тесты для CommentService"""

    def setup_method(self):
        self.mock_db = AsyncMock(spec=AsyncSession)
        self.board = MagicMock(spec=Board)
        self.board.id = 10
        self.board.owner_id = 1
        self.comment = Comment(id=7, text="Looks good", card_id=100, user_id=2)

    @pytest.mark.asyncio
    async def test_create(self):
        comment = await CommentService.create(self.mock_db, text="Hi", card_id=100, user_id=2)

        assert comment.text == "Hi"
        assert comment.user_id == 2
        self.mock_db.add.assert_called_once_with(comment)
        self.mock_db.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_author_can_delete(self):
        with patch.object(CommentService, 'get_by_id', return_value=self.comment):
            await CommentService.delete(self.mock_db, 100, 7, user_id=2, board=self.board)

        self.mock_db.delete.assert_awaited_once_with(self.comment)
        self.mock_db.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_board_owner_can_delete(self):
        with patch.object(CommentService, 'get_by_id', return_value=self.comment):
            await CommentService.delete(self.mock_db, 100, 7, user_id=1, board=self.board)

        self.mock_db.delete.assert_awaited_once_with(self.comment)

    @pytest.mark.asyncio
    async def test_other_member_cannot_delete(self):
        with patch.object(CommentService, 'get_by_id', return_value=self.comment):
            with pytest.raises(AuthorizationError) as exc_info:
                await CommentService.delete(self.mock_db, 100, 7, user_id=3, board=self.board)

        assert exc_info.value.status_code == 403
        self.mock_db.delete.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_comment_of_another_card(self):
        with patch.object(CommentService, 'get_by_id', return_value=self.comment):
            with pytest.raises(NotFoundError):
                await CommentService.delete(self.mock_db, 101, 7, user_id=2, board=self.board)

    @pytest.mark.asyncio
    async def test_missing_comment(self):
        with patch.object(CommentService, 'get_by_id', return_value=None):
            with pytest.raises(NotFoundError) as exc_info:
                await CommentService.delete(self.mock_db, 100, 7, user_id=2, board=self.board)

        assert exc_info.value.message == "Comment not found"


class TestCommentEndpoints:
    """Тесты для эндпоинтов комментариев"""

    def setup_method(self):
        self.mock_db = AsyncMock(spec=AsyncSession)
        self.user = MagicMock(spec=User)
        self.user.id = 2
        self.board = MagicMock(spec=Board)
        self.board.owner_id = 1
        self.card = MagicMock(spec=Card)
        self.card.id = 100

    @pytest.mark.asyncio
    async def test_add_comment_returns_card_with_comments(self):
        with patch('src.api.v1.comments.check_card_access', return_value=(self.card, self.board)), \
             patch('src.api.v1.comments.CommentService.create') as mock_create, \
             patch('src.api.v1.comments.CardService.get_by_id', return_value=self.card) as mock_get:

            result = await add_comment(100, CommentCreate(text="Done?"), self.mock_db, self.user)

        assert result == self.card
        mock_create.assert_called_once_with(db=self.mock_db, text="Done?", card_id=100, user_id=2)
        mock_get.assert_called_once_with(db=self.mock_db, card_id=100, load_comments=True)

    @pytest.mark.asyncio
    async def test_delete_comment_passes_board(self):
        with patch('src.api.v1.comments.check_card_access', return_value=(self.card, self.board)), \
             patch('src.api.v1.comments.CommentService.delete') as mock_delete, \
             patch('src.api.v1.comments.CardService.get_by_id', return_value=self.card):

            result = await delete_comment(100, 7, self.mock_db, self.user)

        assert result == self.card
        mock_delete.assert_called_once_with(
            db=self.mock_db, card_id=100, comment_id=7, user_id=2, board=self.board
        )
