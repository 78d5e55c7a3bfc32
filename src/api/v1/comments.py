from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.db.database import get_async_session
from src.api.dependencies.auth import get_current_user
from src.api.v1.cards import check_card_access
from src.models.user import User
from src.services.card_service import CardService
from src.services.comment_service import CommentService
from src.schemas.comment import CommentCreate
from src.schemas.card import CardDetailResponse

router = APIRouter(
    prefix="/cards/{card_id}/comments",
    tags=["comments"],
)


@router.post("", response_model=CardDetailResponse, status_code=status.HTTP_201_CREATED)
async def add_comment(
    card_id: int,
    comment_data: CommentCreate,
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(get_current_user),
):
    """Add a comment to a card (any board member); returns the card with its comments"""
    await check_card_access(card_id, db, current_user)

    await CommentService.create(
        db=db,
        text=comment_data.text,
        card_id=card_id,
        user_id=current_user.id
    )

    return await CardService.get_by_id(db=db, card_id=card_id, load_comments=True)


@router.delete("/{comment_id}", response_model=CardDetailResponse)
async def delete_comment(
    card_id: int,
    comment_id: int,
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(get_current_user),
):
    """Delete a comment (its author or the board owner); returns the card with its comments"""
    _, board = await check_card_access(card_id, db, current_user)

    await CommentService.delete(
        db=db,
        card_id=card_id,
        comment_id=comment_id,
        user_id=current_user.id,
        board=board
    )

    return await CardService.get_by_id(db=db, card_id=card_id, load_comments=True)
