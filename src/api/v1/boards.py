from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.ext.asyncio import AsyncSession

from src.db.database import get_async_session
from src.api.dependencies.auth import get_current_user
from src.api.dependencies.permissions import check_board_access
from src.models.user import User
from src.schemas.board import (
    BoardCreate,
    BoardResponse,
    BoardUpdate,
    BoardList,
    BoardDetailResponse
)
from src.services.board_service import BoardService
from src.logs import debug_logger

router = APIRouter(
    prefix="/boards",
    tags=["boards"],
)


@router.post("", response_model=BoardResponse, status_code=status.HTTP_201_CREATED)
async def create_board(
    board_create: BoardCreate,
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(get_current_user),
):
    """Create a new board owned by the current user"""
    board = await BoardService.create(
        db=db,
        name=board_create.name,
        description=board_create.description,
        is_private=board_create.is_private,
        background_color=board_create.background_color,
        owner_id=current_user.id,
    )
    return board


@router.get("", response_model=BoardList)
async def get_boards(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=100),
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(get_current_user),
):
    """Get the boards the current user owns or collaborates on"""
    boards = await BoardService.get_boards_by_user(
        db=db,
        user_id=current_user.id,
        skip=skip,
        limit=limit,
    )
    return {
        "boards": boards,
        "total": len(boards)
    }


@router.get("/{board_id}", response_model=BoardDetailResponse)
async def get_board(
    board_id: int,
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(get_current_user),
):
    """Get a board with its lists (owner and collaborators)"""
    return await check_board_access(board_id, db, current_user, load_lists=True)


@router.put("/{board_id}", response_model=BoardResponse)
async def update_board(
    board_id: int,
    board_update: BoardUpdate,
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(get_current_user),
):
    """Update a board (owner and collaborators)"""
    await check_board_access(board_id, db, current_user)

    updated_board = await BoardService.update(
        db=db,
        board_id=board_id,
        name=board_update.name,
        description=board_update.description,
        is_private=board_update.is_private,
        background_color=board_update.background_color
    )
    if not updated_board:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Board not found"
        )

    return updated_board


@router.delete("/{board_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_board(
    board_id: int,
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(get_current_user),
):
    """Delete a board with all its lists and cards (owner only)"""
    await check_board_access(board_id, db, current_user, require_owner=True)

    deleted = await BoardService.delete(db=db, board_id=board_id)
    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete board"
        )
    debug_logger.info(f"Доска {board_id} удалена пользователем {current_user.id}")
