from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text
from sqlalchemy.orm import relationship

from src.db.base import Base


class Card(Base):
    """Модель карточки для канбан-системы"""
    
    __tablename__ = "cards"
    
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    position = Column(Integer, nullable=False, default=0)  # Порядок внутри списка
    # board_id дублируется для быстрых выборок по доске
    board_id = Column(Integer, ForeignKey("boards.id", ondelete="CASCADE"), nullable=False, index=True)
    list_id = Column(Integer, ForeignKey("lists.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    
    board = relationship("Board", back_populates="cards")
    board_list = relationship("BoardList", back_populates="cards")
    
    comments = relationship(
        "Comment",
        back_populates="card",
        cascade="all, delete", passive_deletes=True,
        order_by="Comment.created_at",
    )


class Comment(Base):
    """Модель комментария к карточке"""
    
    __tablename__ = "comments"
    
    id = Column(Integer, primary_key=True, index=True)
    text = Column(Text, nullable=False)
    card_id = Column(Integer, ForeignKey("cards.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    
    card = relationship("Card", back_populates="comments")
    user = relationship("User", backref="comments")
