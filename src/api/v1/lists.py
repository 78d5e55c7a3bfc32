from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.db.database import get_async_session
from src.api.dependencies.auth import get_current_user
from src.api.dependencies.permissions import check_board_access
from src.models.user import User
from src.services.list_service import ListService
from src.services.card_service import CardService
from src.schemas.board_list import (
    ListCreate,
    ListResponse,
    ListUpdate,
    ListCollection
)
from src.schemas.card import CardList

# Lists scoped to a board
board_lists_router = APIRouter(
    prefix="/boards/{board_id}/lists",
    tags=["lists"],
)

# Operations on a single list
router = APIRouter(
    prefix="/lists",
    tags=["lists"],
)


async def check_list_access(
    list_id: int,
    db: AsyncSession,
    current_user: User
):
    """
    Check that the list exists and the user is a member of its board

    Returns:
        The list
    """
    board_list = await ListService.get_by_id(db=db, list_id=list_id)
    if not board_list:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="List not found"
        )

    await check_board_access(board_list.board_id, db, current_user)
    return board_list


@board_lists_router.get("", response_model=ListCollection)
async def get_lists(
    board_id: int,
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(get_current_user),
):
    """Get the lists of a board in display order"""
    await check_board_access(board_id, db, current_user)

    lists = await ListService.get_by_board_id(db=db, board_id=board_id)
    return {"lists": lists}


@board_lists_router.post("", response_model=ListResponse, status_code=status.HTTP_201_CREATED)
async def create_list(
    board_id: int,
    list_create: ListCreate,
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(get_current_user),
):
    """Create a list; without a position it is appended"""
    await check_board_access(board_id, db, current_user)

    return await ListService.create(
        db=db,
        board_id=board_id,
        name=list_create.name,
        color=list_create.color,
        position=list_create.position
    )


@router.put("/{list_id}", response_model=ListResponse)
async def update_list(
    list_id: int,
    list_update: ListUpdate,
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(get_current_user),
):
    """Rename, recolor or move a list"""
    await check_list_access(list_id, db, current_user)

    updated_list = await ListService.update(
        db=db,
        list_id=list_id,
        name=list_update.name,
        color=list_update.color,
        position=list_update.position
    )
    if not updated_list:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="List not found"
        )
    return updated_list


@router.delete("/{list_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_list(
    list_id: int,
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(get_current_user),
):
    """Delete a list and every card in it"""
    await check_list_access(list_id, db, current_user)

    deleted = await ListService.delete(db=db, list_id=list_id)
    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="List not found"
        )


@router.get("/{list_id}/cards", response_model=CardList)
async def get_list_cards(
    list_id: int,
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(get_current_user),
):
    """Get the cards of a list in display order"""
    await check_list_access(list_id, db, current_user)

    cards = await CardService.get_by_list_id(db=db, list_id=list_id)
    return {"cards": cards}
