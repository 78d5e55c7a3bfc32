from typing import List, Optional, Sequence
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.orm import selectinload
from datetime import datetime

from src.core.exceptions import NotFoundError
from src.db.transaction import transaction
from src.models.card import Card, Comment
from src.models.board_list import BoardList
from src.schemas.card import CardMove
from src.services.list_service import ListService
from src.services.ordering import resequence
from src.logs import debug_logger, log_function


class CardService:
    """Card CRUD plus single and batch repositioning"""

    @staticmethod
    @log_function()
    async def create(
        db: AsyncSession,
        board_id: int,
        list_id: int,
        name: str,
        description: Optional[str] = None,
        position: Optional[int] = None
    ) -> Card:
        """Create a card in a list; no position means append at the end"""
        board_list = await ListService.get_by_id(db, list_id)
        if not board_list or board_list.board_id != board_id:
            raise NotFoundError("List not found on this board")

        siblings = await CardService.get_by_list_id(db, list_id)

        card = Card(
            board_id=board_id,
            list_id=list_id,
            name=name,
            description=description,
        )
        db.add(card)

        current_time = datetime.utcnow()
        for sibling in resequence(siblings, pinned=card, index=position):
            sibling.updated_at = current_time

        await db.commit()
        await db.refresh(card)

        debug_logger.info(f"Создана карточка {card.id} в списке {list_id} на позиции {card.position}")
        return card

    @staticmethod
    async def get_by_id(
        db: AsyncSession,
        card_id: int,
        load_comments: bool = False
    ) -> Optional[Card]:
        """Get a card by ID, optionally with its comments and their authors"""
        query = select(Card).where(Card.id == card_id)

        if load_comments:
            query = query.options(selectinload(Card.comments).selectinload(Comment.user))

        result = await db.execute(query)
        return result.scalars().first()

    @staticmethod
    async def get_by_list_id(
        db: AsyncSession,
        list_id: int
    ) -> List[Card]:
        """Cards of one list in display order"""
        query = select(Card).where(Card.list_id == list_id).order_by(
            Card.position, Card.created_at, Card.id
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    @staticmethod
    async def get_by_board_id(
        db: AsyncSession,
        board_id: int
    ) -> List[Card]:
        """All cards of a board, grouped by list and in display order within each list"""
        query = select(Card).join(BoardList, Card.list_id == BoardList.id).where(
            Card.board_id == board_id
        ).order_by(BoardList.position, Card.position, Card.created_at, Card.id)
        result = await db.execute(query)
        return list(result.scalars().all())

    @staticmethod
    async def update(
        db: AsyncSession,
        card_id: int,
        name: Optional[str] = None,
        description: Optional[str] = None
    ) -> Optional[Card]:
        """Update text fields of a card; ordering is changed through reposition_card"""
        card = await CardService.get_by_id(db, card_id)
        if not card:
            debug_logger.warning(f"Карточка с ID {card_id} не найдена при попытке обновления")
            return None

        changed = False
        if name is not None:
            card.name = name
            changed = True
        if description is not None:
            card.description = description
            changed = True

        if changed:
            card.updated_at = datetime.utcnow()
            await db.commit()
            debug_logger.info(f"Карточка {card_id} обновлена")

        return card

    @staticmethod
    async def delete(
        db: AsyncSession,
        card_id: int
    ) -> bool:
        """Delete a card and close the gap it leaves in its list"""
        card = await CardService.get_by_id(db, card_id)
        if not card:
            debug_logger.warning(f"Карточка с ID {card_id} не найдена при попытке удаления")
            return False

        list_id = card.list_id
        await db.delete(card)
        await db.commit()

        remaining = await CardService.get_by_list_id(db, list_id)
        await CardService._apply_resequence(db, remaining)

        debug_logger.info(f"Карточка {card_id} удалена из списка {list_id}")
        return True

    @staticmethod
    async def _apply_resequence(
        db: AsyncSession,
        cards: Sequence[Card],
        pinned: Optional[Card] = None,
        index: Optional[int] = None
    ) -> List[Card]:
        """Renumber one list and commit the cards whose position changed"""
        changed = resequence(cards, pinned=pinned, index=index)
        if changed:
            current_time = datetime.utcnow()
            for card in changed:
                card.updated_at = current_time
            await db.commit()
        return changed

    @staticmethod
    @log_function()
    async def reposition_card(
        db: AsyncSession,
        card_id: int,
        new_position: int,
        new_list_id: Optional[int] = None
    ) -> Card:
        """
        Move one card to a position, optionally in another list of the same board

        Steps, each committed separately:
            1. the card's own position, list and updated_at
            2. the destination list, with the card inserted at new_position
               (clamped, so a position past the end appends)
            3. the origin list, if the card left it

        A failure in a later step does not undo the earlier ones.

        Raises:
            NotFoundError: card does not exist, or the target list does not
                           exist on the card's board
        """
        card = await CardService.get_by_id(db, card_id)
        if not card:
            raise NotFoundError("Card not found")

        origin_list_id = card.list_id
        destination_list_id = new_list_id if new_list_id is not None else origin_list_id

        if destination_list_id != origin_list_id:
            target_list = await ListService.get_by_id(db, destination_list_id)
            if not target_list or target_list.board_id != card.board_id:
                raise NotFoundError("List not found on this board")

        debug_logger.debug(
            f"Перемещение карточки {card_id}: список {origin_list_id} -> {destination_list_id}, "
            f"позиция {card.position} -> {new_position}"
        )

        card.position = new_position
        card.list_id = destination_list_id
        card.updated_at = datetime.utcnow()
        await db.commit()

        destination_cards = await CardService.get_by_list_id(db, destination_list_id)
        await CardService._apply_resequence(db, destination_cards, pinned=card, index=new_position)

        if origin_list_id != destination_list_id:
            origin_cards = await CardService.get_by_list_id(db, origin_list_id)
            await CardService._apply_resequence(db, origin_cards)

        debug_logger.info(f"Карточка {card_id} перемещена в список {destination_list_id} на позицию {card.position}")
        return card

    @staticmethod
    @log_function()
    async def reposition_cards(
        db: AsyncSession,
        board_id: int,
        moves: Sequence[CardMove]
    ) -> List[Card]:
        """
        Apply many card moves on one board as a single transaction

        Every card must belong to the board and every target list must be on
        the board, otherwise nothing is written. Positions are stored exactly
        as given; the caller supplies a consistent assignment for every list
        it touches.

        Returns:
            The updated cards in the same order as moves

        Raises:
            NotFoundError: a card or list is missing or on another board
            TransactionAbortError: any other failure; the transaction is rolled back
        """
        card_ids = [move.id for move in moves]
        list_ids = {move.list_id for move in moves if move.list_id is not None}

        async with transaction(db, "Error updating cards"):
            result = await db.execute(
                select(Card).where(Card.id.in_(card_ids), Card.board_id == board_id)
            )
            cards = {card.id: card for card in result.scalars().all()}

            if len(cards) != len(moves):
                raise NotFoundError("Some cards were not found or do not belong to the specified board")

            if list_ids:
                result = await db.execute(
                    select(BoardList.id).where(BoardList.id.in_(list_ids), BoardList.board_id == board_id)
                )
                if set(result.scalars().all()) != list_ids:
                    raise NotFoundError("Some lists were not found or do not belong to the specified board")

            current_time = datetime.utcnow()
            updated_cards = []
            for move in moves:
                card = cards[move.id]
                card.position = move.position
                if move.list_id is not None:
                    card.list_id = move.list_id
                card.updated_at = current_time
                updated_cards.append(card)

            await db.flush()

        debug_logger.info(f"Пакетно обновлено {len(updated_cards)} карточек на доске {board_id}")
        return updated_cards
