from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from src.core.exceptions import AuthorizationError, NotFoundError
from src.models.board import Board
from src.models.card import Comment
from src.logs import debug_logger


class CommentService:
    """Comments attached to a card"""

    @staticmethod
    async def create(
        db: AsyncSession,
        text: str,
        card_id: int,
        user_id: int
    ) -> Comment:
        """Append a comment; the author is the authenticated user"""
        comment = Comment(
            text=text,
            card_id=card_id,
            user_id=user_id
        )

        db.add(comment)
        await db.commit()
        await db.refresh(comment)
        debug_logger.debug(f"Пользователь {user_id} добавил комментарий {comment.id} к карточке {card_id}")
        return comment

    @staticmethod
    async def get_by_id(
        db: AsyncSession,
        comment_id: int
    ) -> Optional[Comment]:
        """Get comment by id"""
        query = select(Comment).where(Comment.id == comment_id)
        result = await db.execute(query)
        return result.scalars().first()

    @staticmethod
    async def delete(
        db: AsyncSession,
        card_id: int,
        comment_id: int,
        user_id: int,
        board: Board
    ) -> None:
        """
        Remove a comment from a card

        Allowed for the comment's author and for the board owner.

        Raises:
            NotFoundError: no such comment on this card
            AuthorizationError: user is neither the author nor the board owner
        """
        comment = await CommentService.get_by_id(db, comment_id)
        if not comment or comment.card_id != card_id:
            raise NotFoundError("Comment not found")

        if comment.user_id != user_id and board.owner_id != user_id:
            raise AuthorizationError("Not authorized to delete this comment")

        await db.delete(comment)
        await db.commit()
        debug_logger.debug(f"Комментарий {comment_id} удален пользователем {user_id}")
