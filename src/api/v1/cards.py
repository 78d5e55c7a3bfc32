from typing import List, Tuple
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.db.database import get_async_session
from src.api.dependencies.auth import get_current_user
from src.api.dependencies.permissions import check_board_access
from src.models.user import User
from src.models.board import Board
from src.models.card import Card
from src.services.card_service import CardService
from src.schemas.card import (
    CardCreate,
    CardResponse,
    CardDetailResponse,
    CardUpdate,
    CardList,
    CardBatchUpdate
)
from src.logs import debug_logger, api_logger

# Board-level card operations
board_cards_router = APIRouter(
    prefix="/boards/{board_id}/cards",
    tags=["cards"],
)

# Operations on cards by id
router = APIRouter(
    prefix="/cards",
    tags=["cards"],
)


async def check_card_access(
    card_id: int,
    db: AsyncSession,
    current_user: User,
    load_comments: bool = False
) -> Tuple[Card, Board]:
    """
    Check that the card exists and the user is a member of its board

    Returns:
        The card and its board
    """
    card = await CardService.get_by_id(db=db, card_id=card_id, load_comments=load_comments)
    if not card:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Card not found"
        )

    board = await check_board_access(card.board_id, db, current_user)
    return card, board


@board_cards_router.get("", response_model=CardList)
async def get_cards(
    board_id: int,
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(get_current_user),
):
    """Get all cards of a board, list by list in display order"""
    await check_board_access(board_id, db, current_user)

    cards = await CardService.get_by_board_id(db=db, board_id=board_id)
    return {"cards": cards}


@board_cards_router.post("", response_model=CardResponse, status_code=status.HTTP_201_CREATED)
async def create_card(
    board_id: int,
    card_create: CardCreate,
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(get_current_user),
):
    """Create a card in a list of the board"""
    await check_board_access(board_id, db, current_user)

    card = await CardService.create(
        db=db,
        board_id=board_id,
        list_id=card_create.list_id,
        name=card_create.name,
        description=card_create.description,
        position=card_create.position
    )
    debug_logger.debug(f"Пользователь {current_user.id} создал карточку {card.id}")
    return card


@router.put("/batch", response_model=List[CardResponse])
async def update_cards_batch(
    batch: CardBatchUpdate,
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(get_current_user),
):
    """Move many cards of one board in a single transaction"""
    await check_board_access(batch.board_id, db, current_user)

    cards = await CardService.reposition_cards(
        db=db,
        board_id=batch.board_id,
        moves=batch.cards
    )
    api_logger.info(
        f"Batch reposition: board {batch.board_id}, {len(cards)} cards, user {current_user.id}"
    )
    return cards


@router.get("/{card_id}", response_model=CardDetailResponse)
async def get_card(
    card_id: int,
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(get_current_user),
):
    """Get a card with its comments"""
    card, _ = await check_card_access(card_id, db, current_user, load_comments=True)
    return card


@router.put("/{card_id}", response_model=CardResponse)
async def update_card(
    card_id: int,
    card_update: CardUpdate,
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(get_current_user),
):
    """Update a card; a new position or list moves it and renumbers the lists involved"""
    card, _ = await check_card_access(card_id, db, current_user)

    if card_update.name is not None or card_update.description is not None:
        card = await CardService.update(
            db=db,
            card_id=card_id,
            name=card_update.name,
            description=card_update.description
        )

    if card_update.position is not None or card_update.list_id is not None:
        card = await CardService.reposition_card(
            db=db,
            card_id=card_id,
            new_position=card_update.position if card_update.position is not None else card.position,
            new_list_id=card_update.list_id
        )

    return card


@router.delete("/{card_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_card(
    card_id: int,
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(get_current_user),
):
    """Delete a card"""
    await check_card_access(card_id, db, current_user)

    deleted = await CardService.delete(db=db, card_id=card_id)
    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Card not found"
        )
