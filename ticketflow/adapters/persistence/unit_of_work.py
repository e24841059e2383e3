"""UnitOfWork over an AsyncSession shared with the repository and the queue."""

from sqlalchemy.ext.asyncio import AsyncSession

from ticketflow.application.ports.unit_of_work import UnitOfWork


class SqlUnitOfWork(UnitOfWork):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def commit(self) -> None:
        await self._s.commit()

    async def rollback(self) -> None:
        await self._s.rollback()
