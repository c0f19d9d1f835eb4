from typing import List, Optional
from loguru import logger
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from users_service.errors import ConflictError
from users_service.models import User
from users_service.schemas import UserCreate

DUPLICATE_USER_MESSAGE = "User existed!!"


class UsersService:
    """Reads and registers users through one database session."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_all(self) -> List[User]:
        result = await self.session.execute(select(User))
        return list(result.scalars().all())

    async def find_one(self, user_id: int) -> Optional[User]:
        result = await self.session.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def find_by_email(self, email: str) -> Optional[User]:
        result = await self.session.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def create(self, payload: UserCreate) -> User:
        """Register a user unless the email is already taken.

        The lookup and the insert are separate statements; two concurrent
        registrations for one email can both pass the lookup, in which case
        the unique constraint on ``users.email`` rejects the second insert
        and it is reported as the same conflict.
        """
        existing = await self.find_by_email(payload.email)
        if existing is not None and existing.id:
            logger.warning(f"Email {payload.email} already registered")
            raise ConflictError(DUPLICATE_USER_MESSAGE)

        columns = set(User.__table__.columns.keys()) - {"id"}
        data = {k: v for k, v in payload.model_dump().items() if k in columns}
        user = User(**data)
        self.session.add(user)
        try:
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            logger.warning(f"Email {payload.email} rejected by unique constraint")
            raise ConflictError(DUPLICATE_USER_MESSAGE)
        await self.session.refresh(user)
        logger.info(f"User created with ID {user.id}")
        return user
