from uuid import UUID

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession
from uuid_utils.compat import uuid7

from src.platform.logging.loguru_io import Logger
from src.service.party_booking.app.interface.i_customer_directory import ICustomerDirectory
from src.service.party_booking.domain.entity.customer_entity import Customer, CustomerInfo
from src.service.party_booking.driven_adapter.model.reservation_model import CustomerModel


class CustomerDirectoryImpl(ICustomerDirectory):
    def __init__(self, *, session: AsyncSession) -> None:
        self.session = session

    @Logger.io
    async def find_or_create(self, *, tenant_id: UUID, info: CustomerInfo) -> Customer:
        if info.email is None:
            customer = Customer.create(id=uuid7(), tenant_id=tenant_id, info=info)
            self.session.add(
                CustomerModel(
                    id=customer.id,
                    tenant_id=tenant_id,
                    name=customer.name,
                    email=None,
                    phone=customer.phone,
                )
            )
            await self.session.flush()
            return customer

        # upsert on (tenant_id, email): keeps the latest name/phone, safe under concurrent commits
        stmt = (
            insert(CustomerModel)
            .values(
                id=uuid7(),
                tenant_id=tenant_id,
                name=info.name,
                email=info.email,
                phone=info.phone,
            )
            .on_conflict_do_update(
                constraint='uq_customer_tenant_email',
                set_={'name': info.name, 'phone': info.phone},
            )
            .returning(CustomerModel.id)
        )
        customer_id = (await self.session.execute(stmt)).scalar_one()

        result = await self.session.execute(select(CustomerModel).where(CustomerModel.id == customer_id))
        customer_model = result.scalar_one()
        return Customer(
            id=customer_model.id,
            tenant_id=customer_model.tenant_id,
            name=customer_model.name,
            email=customer_model.email,
            phone=customer_model.phone,
        )
