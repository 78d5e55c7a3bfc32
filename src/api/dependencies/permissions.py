from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.models.user import User
from src.models.board import Board, BoardUserRole
from src.services.board_service import BoardService


async def check_board_permissions(
    db: AsyncSession,
    board: Board,
    user_id: int,
    required_roles: list[BoardUserRole]
) -> BoardUserRole:
    """
    Check that a user has one of the required relations to a board
    
    Returns:
        The user's role; raises HTTPException 403 otherwise
    """
    user_role = await BoardService.get_user_role(db, board.id, user_id, board=board)
    
    if not user_role:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized to access this board"
        )
    
    if user_role not in required_roles:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only board owner can perform this action"
        )
    
    return user_role


async def check_board_access(
    board_id: int,
    db: AsyncSession,
    current_user: User,
    require_owner: bool = False,
    load_lists: bool = False
) -> Board:
    """
    Check that the board exists and the user may work with it
    
    Args:
        board_id: ID of the board to check
        db: Database session
        current_user: Current authenticated user
        require_owner: If True only the owner passes, otherwise the owner
                       and collaborators do
        load_lists: Load the board's lists along with it
    
    Returns:
        The board
    """
    board = await BoardService.get_by_id(db=db, board_id=board_id, load_lists=load_lists)
    if not board:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Board not found"
        )
    
    required_roles = [BoardUserRole.OWNER] if require_owner else [
        BoardUserRole.OWNER, BoardUserRole.COLLABORATOR
    ]
    
    await check_board_permissions(
        db=db,
        board=board,
        user_id=current_user.id,
        required_roles=required_roles
    )
    
    return board
