from datetime import datetime, timedelta
from typing import Optional, Dict, Any
from jose import jwt, JWTError
from passlib.context import CryptContext
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
import uuid

from src.models.user import User
from src.core import get_settings

# Get application settings
settings = get_settings()

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class SecurityService:
    """Password hashing and JWT authentication"""

    @staticmethod
    def create_password_hash(password: str) -> str:
        return pwd_context.hash(password)

    @staticmethod
    def verify_password(plain_password: str, hashed_password: str) -> bool:
        return pwd_context.verify(plain_password, hashed_password)

    @staticmethod
    async def get_user_by_email(db: AsyncSession, email: str) -> Optional[User]:
        query = select(User).where(User.email == email)
        result = await db.execute(query)
        return result.scalars().first()

    @staticmethod
    async def get_user_by_id(db: AsyncSession, user_id: int) -> Optional[User]:
        query = select(User).where(User.id == user_id)
        result = await db.execute(query)
        return result.scalars().first()

    @staticmethod
    async def authenticate_user(
        db: AsyncSession,
        email: str,
        password: str
    ) -> Optional[User]:
        """Return the user if the email exists and the password matches"""
        user = await SecurityService.get_user_by_email(db, email)
        if not user:
            return None

        if not SecurityService.verify_password(password, user.hashed_password):
            return None

        return user

    @staticmethod
    def _encode_token(data: Dict[str, Any], token_type: str, expires_delta: timedelta) -> str:
        to_encode = data.copy()
        to_encode.update({
            "exp": datetime.utcnow() + expires_delta,
            "type": token_type,
        })
        return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)

    @staticmethod
    def create_access_token(
        data: Dict[str, Any],
        expires_delta: Optional[timedelta] = None
    ) -> str:
        """Create a JWT access token"""
        return SecurityService._encode_token(
            data,
            "access",
            expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
        )

    @staticmethod
    def create_refresh_token(
        data: Dict[str, Any],
        expires_delta: Optional[timedelta] = None
    ) -> str:
        """Create a JWT refresh token with a unique jti"""
        to_encode = dict(data, jti=str(uuid.uuid4()))
        return SecurityService._encode_token(
            to_encode,
            "refresh",
            expires_delta or timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS)
        )

    @staticmethod
    def create_tokens(user_id: int) -> Dict[str, str]:
        """Create access and refresh tokens for a user"""
        token_data = {"sub": str(user_id)}
        return {
            "access_token": SecurityService.create_access_token(token_data),
            "refresh_token": SecurityService.create_refresh_token(token_data),
            "token_type": "bearer"
        }

    @staticmethod
    def verify_token(token: str, token_type: str = "access") -> Optional[Dict[str, Any]]:
        """Return the payload of a valid, unexpired token of the given type"""
        try:
            payload = jwt.decode(
                token,
                settings.SECRET_KEY,
                algorithms=[settings.ALGORITHM]
            )
        except JWTError:
            return None

        if payload.get("type") != token_type:
            return None

        # jose already rejects expired tokens; a token without exp is rejected here
        if payload.get("exp") is None:
            return None

        return payload

    @staticmethod
    async def get_current_user(
        db: AsyncSession,
        token: str
    ) -> Optional[User]:
        """Get the current user from an access token"""
        payload = SecurityService.verify_token(token)
        if not payload or payload.get("sub") is None:
            return None

        return await SecurityService.get_user_by_id(db, int(payload["sub"]))

    @staticmethod
    async def refresh_tokens(
        db: AsyncSession,
        refresh_token: str
    ) -> Optional[Dict[str, str]]:
        """Issue a new token pair from a valid refresh token"""
        payload = SecurityService.verify_token(refresh_token, token_type="refresh")
        if not payload or payload.get("sub") is None:
            return None

        user = await SecurityService.get_user_by_id(db, int(payload["sub"]))
        if not user:
            return None

        return SecurityService.create_tokens(user.id)
