from typing import Dict, Optional, Protocol
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from app.core.logger import logger
from app.models.user.user import User


class UserIdentity(BaseModel):
    id: int
    email: str
    name: str


class UserDirectory(Protocol):
    async def resolve_or_create(self, email: str) -> UserIdentity: ...


def _normalize_email(email: str) -> str:
    return email.strip().lower()


def _default_name(email: str) -> str:
    return email.split("@", 1)[0]


class SqlUserDirectory:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def resolve_or_create(self, email: str) -> UserIdentity:
        email = _normalize_email(email)
        result = await self.db.execute(select(User).where(User.email == email))
        user = result.scalar_one_or_none()
        if user is None:
            user = User(email=email, username=_default_name(email))
            self.db.add(user)
            await self.db.commit()
            await self.db.refresh(user)
            logger.info(f"Created minimal user {user.id} for {email}")
        return UserIdentity(id=user.id, email=user.email, name=user.username)


class InMemoryUserDirectory:
    def __init__(self) -> None:
        self._users: Dict[int, UserIdentity] = {}
        self._next_id = 1

    def add(self, email: str, name: Optional[str] = None) -> UserIdentity:
        email = _normalize_email(email)
        identity = UserIdentity(id=self._next_id, email=email, name=name or _default_name(email))
        self._users[identity.id] = identity
        self._next_id += 1
        return identity

    async def resolve_or_create(self, email: str) -> UserIdentity:
        email = _normalize_email(email)
        for identity in self._users.values():
            if identity.email == email:
                return identity
        return self.add(email)
