from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, Boolean

from src.db.base import Base


class User(Base):
    """Модель пользователя"""
    
    __tablename__ = "users"
    
    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    name = Column(String, nullable=False, default="")
    hashed_password = Column(String, nullable=False)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)
