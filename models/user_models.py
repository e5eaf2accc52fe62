# models/user_models.py
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional
from datetime import datetime, timezone
from passlib.context import CryptContext

_pwd_ctx = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=12)


def hash_password(password: str) -> str:
    return _pwd_ctx.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return _pwd_ctx.verify(password, password_hash)
    except ValueError:
        # malformed hash stored for this account
        return False


class UserAccount(BaseModel):
    """Admin account as stored in the users collection"""
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = Field(default=None, alias="_id")
    username: str
    email: str
    password: str = Field("", description="bcrypt hash")
    createdAt: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def to_document(self) -> dict:
        return self.model_dump(exclude={"id"})

    def to_public(self) -> dict:
        """User data without the password hash"""
        return {
            "_id": self.id,
            "username": self.username,
            "email": self.email,
            "createdAt": self.createdAt.isoformat() if self.createdAt else None,
        }
