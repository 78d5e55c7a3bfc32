from typing import List, Optional, Sequence
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete
from datetime import datetime

from src.models.board_list import BoardList
from src.models.card import Card
from src.services.ordering import resequence
from src.logs import debug_logger


class ListService:
    """CRUD operations service for BoardList model"""

    @staticmethod
    async def create(
        db: AsyncSession,
        board_id: int,
        name: str,
        color: Optional[str] = None,
        position: Optional[int] = None
    ) -> BoardList:
        """Create a list on a board; no position means append at the end"""
        siblings = await ListService.get_by_board_id(db, board_id)

        board_list = BoardList(
            name=name,
            color=color,
            board_id=board_id
        )
        db.add(board_list)
        ListService._apply_resequence(siblings, pinned=board_list, index=position)

        await db.commit()
        await db.refresh(board_list)
        debug_logger.info(f"Создан список {board_list.id} на доске {board_id}")
        return board_list

    @staticmethod
    async def get_by_id(
        db: AsyncSession,
        list_id: int
    ) -> Optional[BoardList]:
        query = select(BoardList).where(BoardList.id == list_id)
        result = await db.execute(query)
        return result.scalars().first()

    @staticmethod
    async def get_by_board_id(
        db: AsyncSession,
        board_id: int
    ) -> List[BoardList]:
        """Lists of a board in display order"""
        query = select(BoardList).where(BoardList.board_id == board_id).order_by(
            BoardList.position, BoardList.created_at, BoardList.id
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    @staticmethod
    async def update(
        db: AsyncSession,
        list_id: int,
        name: Optional[str] = None,
        color: Optional[str] = None,
        position: Optional[int] = None
    ) -> Optional[BoardList]:
        """Update a list's details; a new position renumbers every list on the board"""
        board_list = await ListService.get_by_id(db, list_id)
        if not board_list:
            return None

        if name is not None:
            board_list.name = name
        if color is not None:
            board_list.color = color
        board_list.updated_at = datetime.utcnow()

        if position is not None:
            siblings = await ListService.get_by_board_id(db, board_list.board_id)
            ListService._apply_resequence(siblings, pinned=board_list, index=position)

        await db.commit()
        return board_list

    @staticmethod
    async def delete(
        db: AsyncSession,
        list_id: int
    ) -> bool:
        """Delete a list together with all of its cards"""
        board_list = await ListService.get_by_id(db, list_id)
        if not board_list:
            return False

        board_id = board_list.board_id

        # Каскад: карточки списка удаляются всегда
        cards_result = await db.execute(delete(Card).where(Card.list_id == list_id))
        await db.execute(delete(BoardList).where(BoardList.id == list_id))
        await db.commit()
        debug_logger.info(
            f"Список {list_id} удален вместе с карточками ({cards_result.rowcount} шт.)"
        )

        remaining = await ListService.get_by_board_id(db, board_id)
        if ListService._apply_resequence(remaining):
            await db.commit()
        return True

    @staticmethod
    def _apply_resequence(
        lists: Sequence[BoardList],
        pinned: Optional[BoardList] = None,
        index: Optional[int] = None
    ) -> List[BoardList]:
        """Renumber the lists of one board; the caller commits"""
        changed = resequence(lists, pinned=pinned, index=index)
        current_time = datetime.utcnow()
        for board_list in changed:
            board_list.updated_at = current_time
        return changed
