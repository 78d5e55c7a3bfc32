from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete, or_
from sqlalchemy.orm import selectinload
from datetime import datetime

from src.models.board import Board, BoardUserRole, board_collaborators
from src.logs import debug_logger


class BoardService:
    """CRUD operations service for Board model"""

    @staticmethod
    async def create(
        db: AsyncSession,
        name: str,
        owner_id: int,
        description: Optional[str] = None,
        is_private: bool = True,
        background_color: Optional[str] = None
    ) -> Board:
        """Create a new board owned by owner_id"""
        board = Board(
            name=name,
            description=description or "",
            is_private=is_private,
            background_color=background_color or "#ffffff",
            owner_id=owner_id
        )
        db.add(board)
        await db.commit()
        await db.refresh(board)
        debug_logger.info(f"Создана доска {board.id} пользователем {owner_id}")
        return board

    @staticmethod
    async def get_by_id(
        db: AsyncSession,
        board_id: int,
        load_lists: bool = False
    ) -> Optional[Board]:
        """Get board by id, optionally with its lists in display order"""
        query = select(Board).where(Board.id == board_id)

        if load_lists:
            query = query.options(selectinload(Board.lists))

        result = await db.execute(query)
        return result.scalars().first()

    @staticmethod
    async def get_boards_by_user(
        db: AsyncSession,
        user_id: int,
        skip: int = 0,
        limit: int = 100
    ) -> List[Board]:
        """Boards the user owns or collaborates on"""
        collaborations = select(board_collaborators.c.board_id).where(
            board_collaborators.c.user_id == user_id
        )
        query = select(Board).where(
            or_(Board.owner_id == user_id, Board.id.in_(collaborations))
        ).order_by(Board.created_at).offset(skip).limit(limit)

        result = await db.execute(query)
        return list(result.scalars().all())

    @staticmethod
    async def update(
        db: AsyncSession,
        board_id: int,
        name: Optional[str] = None,
        description: Optional[str] = None,
        is_private: Optional[bool] = None,
        background_color: Optional[str] = None
    ) -> Optional[Board]:
        """Update a board's details; the owner is never changed here"""
        board = await BoardService.get_by_id(db, board_id)
        if not board:
            return None

        if name is not None:
            board.name = name
        if description is not None:
            board.description = description
        if is_private is not None:
            board.is_private = is_private
        if background_color is not None:
            board.background_color = background_color

        board.updated_at = datetime.utcnow()
        await db.commit()
        return board

    @staticmethod
    async def delete(
        db: AsyncSession,
        board_id: int
    ) -> bool:
        """Delete a board; lists, cards, comments and invitations go with it"""
        stmt = delete(Board).where(Board.id == board_id)
        result = await db.execute(stmt)
        await db.commit()
        return result.rowcount > 0

    @staticmethod
    async def add_collaborator(
        db: AsyncSession,
        board_id: int,
        user_id: int
    ) -> bool:
        """Add a collaborator unless they are already on the board; the caller commits"""
        role = await BoardService.get_user_role(db, board_id, user_id)
        if role is not None:
            return False

        stmt = board_collaborators.insert().values(user_id=user_id, board_id=board_id)
        await db.execute(stmt)
        return True

    @staticmethod
    async def get_user_role(
        db: AsyncSession,
        board_id: int,
        user_id: int,
        board: Optional[Board] = None
    ) -> Optional[BoardUserRole]:
        """Get a user's relation to a board

        Args:
            db: Database session
            board_id: Board ID
            user_id: User ID
            board: Already loaded board, saves one query

        Returns:
            BoardUserRole.OWNER, BoardUserRole.COLLABORATOR, or None if the
            user is not a member
        """
        if board is None:
            board = await BoardService.get_by_id(db, board_id)
            if board is None:
                return None

        if board.owner_id == user_id:
            return BoardUserRole.OWNER

        query = select(board_collaborators.c.user_id).where(
            board_collaborators.c.user_id == user_id,
            board_collaborators.c.board_id == board_id
        )
        result = await db.execute(query)
        return BoardUserRole.COLLABORATOR if result.first() else None
