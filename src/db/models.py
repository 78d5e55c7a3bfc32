# Import all models here for Alembic to discover them
from src.db.base import Base
from src.models.user import User
from src.models.board import Board, BoardUserRole, board_collaborators
from src.models.board_list import BoardList
from src.models.card import Card, Comment
from src.models.invitation import Invitation, InvitationStatus
