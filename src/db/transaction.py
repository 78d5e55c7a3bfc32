from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncSession

from src.core.exceptions import KanbanError, TransactionAbortError
from src.logs import debug_logger, api_logger


@asynccontextmanager
async def transaction(
    db: AsyncSession,
    failure_message: str = "Transaction aborted"
) -> AsyncIterator[AsyncSession]:
    """
    Run a block of reads and writes as one all-or-nothing unit

    Commits when the block finishes, rolls back exactly once when it raises.
    Service errors (KanbanError) are re-raised unchanged after the rollback;
    anything else is wrapped in TransactionAbortError with the original
    exception kept as the cause.

    The session itself belongs to the request scope (get_async_session),
    which closes it whether the block succeeded or not.

    Usage:
        async with transaction(db, "Error updating cards"):
            ...
    """
    debug_logger.debug("Начало транзакции")
    try:
        yield db
        await db.commit()
    except KanbanError as e:
        await db.rollback()
        debug_logger.warning(f"Транзакция отменена: {e.message}")
        raise
    except Exception as e:
        await db.rollback()
        debug_logger.error(f"Транзакция отменена из-за ошибки: {str(e)}")
        api_logger.error(f"{failure_message}: {str(e)}")
        raise TransactionAbortError(failure_message, cause=e) from e

    debug_logger.debug("Транзакция зафиксирована")
