from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Table, Boolean
from sqlalchemy.orm import relationship
import enum

from src.db.base import Base


# Отношение пользователя к доске
class BoardUserRole(enum.Enum):
    OWNER = "owner"                # Создатель доски
    COLLABORATOR = "collaborator"  # Принял приглашение


# Участники доски, добавляются только через принятие приглашения
board_collaborators = Table(
    "board_collaborators",
    Base.metadata,
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("board_id", Integer, ForeignKey("boards.id", ondelete="CASCADE"), primary_key=True),
)


class Board(Base):
    """Модель доски для канбан-системы"""
    
    __tablename__ = "boards"
    
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    description = Column(String, nullable=True, default="")
    is_private = Column(Boolean, default=True)
    background_color = Column(String(7), default="#ffffff")
    owner_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    
    owner = relationship("User", backref="owned_boards", foreign_keys=[owner_id])
    collaborators = relationship("User", secondary=board_collaborators, backref="shared_boards")
    
    # Удаление доски каскадно удаляет списки и карточки
    lists = relationship(
        "BoardList",
        back_populates="board",
        cascade="all, delete", passive_deletes=True,
        order_by="BoardList.position",
    )
    cards = relationship("Card", back_populates="board", cascade="all, delete", passive_deletes=True)
    invitations = relationship("Invitation", back_populates="board", cascade="all, delete", passive_deletes=True)
