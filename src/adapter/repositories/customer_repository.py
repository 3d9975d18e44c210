"""SQLAlchemy Customer Repository Implementation"""

from typing import Iterable, Optional
from sqlmodel import select, col
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.customer_repository import CustomerRepository
from src.domain.customer import Customer


class SqlAlchemyCustomerRepository(CustomerRepository):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, customer_id: str) -> Optional[Customer]:
        statement = select(Customer).where(Customer.id == customer_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def get_by_ids(self, customer_ids: Iterable[str]) -> dict[str, Customer]:
        ids = set(customer_ids)
        if not ids:
            return {}

        statement = select(Customer).where(col(Customer.id).in_(ids))
        result = await self.session.execute(statement)
        return {customer.id: customer for customer in result.scalars().all()}

    async def create(self, customer: Customer) -> Customer:
        self.session.add(customer)
        await self.session.flush()
        await self.session.refresh(customer)
        return customer
