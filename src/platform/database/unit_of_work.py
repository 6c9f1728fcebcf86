"""
Unit of Work Pattern - owns one database session and its transaction

Architecture:
- UoW opens the session on enter and closes it on exit
- UoW is responsible for commit/rollback (anything not committed is rolled back)
- Repositories share the UoW's session
- Use cases coordinate several repositories through one UoW
"""

from __future__ import annotations

import abc
from contextlib import AbstractAsyncContextManager
from typing import TYPE_CHECKING, Any, Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker


if TYPE_CHECKING:
    from src.service.party_booking.app.interface.i_booking_command_repo import (
        IBookingCommandRepo,
    )
    from src.service.party_booking.app.interface.i_customer_directory import (
        ICustomerDirectory,
    )
    from src.service.party_booking.app.interface.i_hold_command_repo import IHoldCommandRepo


class AbstractUnitOfWork(abc.ABC):
    """
    Abstract Unit of Work for the party booking service

    Usage:
        async with uow:
            await uow.hold_command_repo.lock_room(...)
            hold = await uow.hold_command_repo.create(hold=...)
            await uow.commit()
    """

    hold_command_repo: IHoldCommandRepo
    booking_command_repo: IBookingCommandRepo
    customer_directory: ICustomerDirectory

    async def __aenter__(self) -> AbstractUnitOfWork:
        return self

    async def __aexit__(self, *args) -> None:
        await self.rollback()

    async def commit(self) -> None:
        await self._commit()

    @abc.abstractmethod
    def savepoint(self) -> AbstractAsyncContextManager[Any]:
        """Nested transaction; an exception inside undoes only the savepoint's work"""
        raise NotImplementedError

    @abc.abstractmethod
    async def _commit(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    async def rollback(self) -> None:
        raise NotImplementedError


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    """
    SQLAlchemy implementation of Unit of Work

    Usage in use case:
        async with self.uow:
            booking = await self.uow.booking_command_repo.create(booking=...)
            await self.uow.commit()
    """

    def __init__(self, session_maker: async_sessionmaker[AsyncSession]) -> None:
        self.session_maker = session_maker
        self.session: Optional[AsyncSession] = None

    async def __aenter__(self) -> AbstractUnitOfWork:
        from src.service.party_booking.driven_adapter.repo.booking_command_repo_impl import (
            BookingCommandRepoImpl,
        )
        from src.service.party_booking.driven_adapter.repo.customer_directory_impl import (
            CustomerDirectoryImpl,
        )
        from src.service.party_booking.driven_adapter.repo.hold_command_repo_impl import (
            HoldCommandRepoImpl,
        )

        self.session = self.session_maker()
        self.hold_command_repo = HoldCommandRepoImpl(session=self.session)
        self.booking_command_repo = BookingCommandRepoImpl(session=self.session)
        self.customer_directory = CustomerDirectoryImpl(session=self.session)
        return await super().__aenter__()

    async def __aexit__(self, *args) -> None:
        try:
            await super().__aexit__(*args)
        finally:
            if self.session is not None:
                await self.session.close()
                self.session = None

    def savepoint(self) -> AbstractAsyncContextManager[Any]:
        assert self.session is not None, 'UnitOfWork used outside `async with`'
        return self.session.begin_nested()

    async def _commit(self) -> None:
        assert self.session is not None, 'UnitOfWork used outside `async with`'
        await self.session.commit()

    async def rollback(self) -> None:
        if self.session is not None:
            await self.session.rollback()
