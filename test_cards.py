import pytest
from unittest.mock import AsyncMock, MagicMock, patch
from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.v1.cards import (
    check_card_access,
    get_cards,
    create_card,
    update_cards_batch,
    get_card,
    update_card,
    delete_card
)
from src.core.exceptions import NotFoundError
from src.models.user import User
from src.models.board import Board
from src.models.card import Card
from src.schemas.card import CardCreate, CardUpdate, CardBatchUpdate, CardMove


@pytest.fixture
def mock_db():
    return AsyncMock(spec=AsyncSession)


@pytest.fixture
def user():
    user = MagicMock(spec=User)
    user.id = 1
    return user


@pytest.fixture
def board():
    board = MagicMock(spec=Board)
    board.id = 10
    board.owner_id = 1
    return board


@pytest.fixture
def card():
    card = MagicMock(spec=Card)
    card.id = 100
    card.board_id = 10
    card.list_id = 5
    card.position = 2
    return card


class TestCheckCardAccess:
    """Тесты для функции check_card_access"""

    @pytest.mark.asyncio
    async def test_card_not_found(self, mock_db, user):
        with patch('src.api.v1.cards.CardService.get_by_id', return_value=None):
            with pytest.raises(HTTPException) as exc_info:
                await check_card_access(100, mock_db, user)

        assert exc_info.value.status_code == status.HTTP_404_NOT_FOUND
        assert exc_info.value.detail == "Card not found"

    @pytest.mark.asyncio
    async def test_checks_access_to_card_board(self, mock_db, user, board, card):
        with patch('src.api.v1.cards.CardService.get_by_id', return_value=card), \
             patch('src.api.v1.cards.check_board_access', return_value=board) as mock_access:

            result = await check_card_access(100, mock_db, user)

        assert result == (card, board)
        mock_access.assert_called_once_with(10, mock_db, user)

    @pytest.mark.asyncio
    async def test_outsider_is_rejected(self, mock_db, user, card):
        forbidden = HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not authorized to access this board")
        with patch('src.api.v1.cards.CardService.get_by_id', return_value=card), \
             patch('src.api.v1.cards.check_board_access', side_effect=forbidden):

            with pytest.raises(HTTPException) as exc_info:
                await check_card_access(100, mock_db, user)

        assert exc_info.value.status_code == status.HTTP_403_FORBIDDEN


class TestBoardCards:
    """Тесты для эндпоинтов карточек доски"""

    @pytest.mark.asyncio
    async def test_get_cards(self, mock_db, user, board, card):
        with patch('src.api.v1.cards.check_board_access', return_value=board) as mock_access, \
             patch('src.api.v1.cards.CardService.get_by_board_id', return_value=[card]) as mock_get:

            result = await get_cards(10, mock_db, user)

        assert result == {"cards": [card]}
        mock_access.assert_called_once_with(10, mock_db, user)
        mock_get.assert_called_once_with(db=mock_db, board_id=10)

    @pytest.mark.asyncio
    async def test_create_card(self, mock_db, user, board, card):
        data = CardCreate(name="  Task  ", list_id=5, position=0)

        with patch('src.api.v1.cards.check_board_access', return_value=board), \
             patch('src.api.v1.cards.CardService.create', return_value=card) as mock_create:

            result = await create_card(10, data, mock_db, user)

        assert result == card
        mock_create.assert_called_once_with(
            db=mock_db,
            board_id=10,
            list_id=5,
            name="Task",
            description=None,
            position=0
        )

    @pytest.mark.asyncio
    async def test_create_card_in_foreign_list(self, mock_db, user, board):
        data = CardCreate(name="Task", list_id=77)

        with patch('src.api.v1.cards.check_board_access', return_value=board), \
             patch('src.api.v1.cards.CardService.create',
                   side_effect=NotFoundError("List not found on this board")):

            with pytest.raises(NotFoundError):
                await create_card(10, data, mock_db, user)


class TestBatchUpdate:
    """Тесты для эндпоинта update_cards_batch"""

    @pytest.mark.asyncio
    async def test_batch_success(self, mock_db, user, board, card):
        batch = CardBatchUpdate(board_id=10, cards=[CardMove(id=100, position=0, list_id=5)])

        with patch('src.api.v1.cards.check_board_access', return_value=board) as mock_access, \
             patch('src.api.v1.cards.CardService.reposition_cards', return_value=[card]) as mock_batch:

            result = await update_cards_batch(batch, mock_db, user)

        assert result == [card]
        mock_access.assert_called_once_with(10, mock_db, user)
        mock_batch.assert_called_once_with(db=mock_db, board_id=10, moves=batch.cards)

    @pytest.mark.asyncio
    async def test_batch_requires_board_access(self, mock_db, user):
        batch = CardBatchUpdate(board_id=10, cards=[CardMove(id=100, position=0)])
        not_found = HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Board not found")

        with patch('src.api.v1.cards.check_board_access', side_effect=not_found), \
             patch('src.api.v1.cards.CardService.reposition_cards') as mock_batch:

            with pytest.raises(HTTPException) as exc_info:
                await update_cards_batch(batch, mock_db, user)

        assert exc_info.value.status_code == status.HTTP_404_NOT_FOUND
        mock_batch.assert_not_called()


class TestSingleCard:
    """Тесты для эндпоинтов одной карточки"""

    @pytest.mark.asyncio
    async def test_get_card_loads_comments(self, mock_db, user, board, card):
        with patch('src.api.v1.cards.CardService.get_by_id', return_value=card) as mock_get, \
             patch('src.api.v1.cards.check_board_access', return_value=board):

            result = await get_card(100, mock_db, user)

        assert result == card
        mock_get.assert_called_once_with(db=mock_db, card_id=100, load_comments=True)

    @pytest.mark.asyncio
    async def test_update_text_only(self, mock_db, user, board, card):
        with patch('src.api.v1.cards.check_card_access', return_value=(card, board)), \
             patch('src.api.v1.cards.CardService.update', return_value=card) as mock_update, \
             patch('src.api.v1.cards.CardService.reposition_card') as mock_reposition:

            result = await update_card(100, CardUpdate(name="Renamed"), mock_db, user)

        assert result == card
        mock_update.assert_called_once_with(db=mock_db, card_id=100, name="Renamed", description=None)
        mock_reposition.assert_not_called()

    @pytest.mark.asyncio
    async def test_update_position_repositions(self, mock_db, user, board, card):
        with patch('src.api.v1.cards.check_card_access', return_value=(card, board)), \
             patch('src.api.v1.cards.CardService.update') as mock_update, \
             patch('src.api.v1.cards.CardService.reposition_card', return_value=card) as mock_reposition:

            await update_card(100, CardUpdate(position=0), mock_db, user)

        mock_update.assert_not_called()
        mock_reposition.assert_called_once_with(db=mock_db, card_id=100, new_position=0, new_list_id=None)

    @pytest.mark.asyncio
    async def test_update_list_only_keeps_current_position(self, mock_db, user, board, card):
        with patch('src.api.v1.cards.check_card_access', return_value=(card, board)), \
             patch('src.api.v1.cards.CardService.reposition_card', return_value=card) as mock_reposition:

            await update_card(100, CardUpdate(list_id=6), mock_db, user)

        mock_reposition.assert_called_once_with(db=mock_db, card_id=100, new_position=2, new_list_id=6)

    @pytest.mark.asyncio
    async def test_update_missing_target_list(self, mock_db, user, board, card):
        with patch('src.api.v1.cards.check_card_access', return_value=(card, board)), \
             patch('src.api.v1.cards.CardService.reposition_card',
                   side_effect=NotFoundError("List not found on this board")):

            with pytest.raises(NotFoundError) as exc_info:
                await update_card(100, CardUpdate(position=1, list_id=99), mock_db, user)

        assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_card(self, mock_db, user, board, card):
        with patch('src.api.v1.cards.check_card_access', return_value=(card, board)), \
             patch('src.api.v1.cards.CardService.delete', return_value=True) as mock_delete:

            result = await delete_card(100, mock_db, user)

        assert result is None
        mock_delete.assert_called_once_with(db=mock_db, card_id=100)
