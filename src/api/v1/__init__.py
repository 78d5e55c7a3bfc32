from fastapi import APIRouter
from src.api.v1.auth import router as auth_router
from src.api.v1.boards import router as boards_router
from src.api.v1.lists import router as lists_router, board_lists_router
from src.api.v1.cards import router as cards_router, board_cards_router
from src.api.v1.comments import router as comments_router
from src.api.v1.invitations import router as invitations_router, board_invitations_router

# Create main API router
api_router = APIRouter(prefix="/api/v1")

# Include routers
api_router.include_router(auth_router)
api_router.include_router(boards_router)
api_router.include_router(board_lists_router)
api_router.include_router(lists_router)
api_router.include_router(board_cards_router)
api_router.include_router(cards_router)
api_router.include_router(comments_router)
api_router.include_router(board_invitations_router)
api_router.include_router(invitations_router)
