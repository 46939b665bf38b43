"""SQLAlchemy implementation of UnitOfWork."""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncSession

from cardledger.domain.interfaces import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """
    Unit of work bound to the request's session.

    Atomic blocks are SAVEPOINTs, so a failed block only discards its
    own writes and the session stays usable.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    @asynccontextmanager
    async def atomic(self) -> AsyncIterator[None]:
        async with self._session.begin_nested():
            yield

    async def commit(self) -> None:
        await self._session.commit()
