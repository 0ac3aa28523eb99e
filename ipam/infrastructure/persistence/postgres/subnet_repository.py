"""PostgreSQL Implementation of ISubnetRepository"""

import ipaddress

from sqlalchemy import delete, insert, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ....core.entities import IPNetwork, Subnet
from ....core.exceptions import NotFoundException
from ....core.interfaces import ISubnetRepository
from .models import SubnetModel


class PostgresSubnetRepository(ISubnetRepository):
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    # =========================================================================
    # Mapping
    # =========================================================================

    def _model_to_subnet(self, row: SubnetModel) -> Subnet:
        return Subnet(
            id=row.id,
            cidr=ipaddress.ip_network(row.cidr),
            description=row.description or "",
            created_at=row.created_at,
            updated_at=row.updated_at,
        )

    # =========================================================================
    # CRUD
    # =========================================================================

    async def find_all(self) -> list[Subnet]:
        async with self._session_factory() as session:
            result = await session.execute(select(SubnetModel).order_by(SubnetModel.id))
            return [self._model_to_subnet(r) for r in result.scalars().all()]

    async def find_by_id(self, subnet_id: int) -> Subnet:
        async with self._session_factory() as session:
            row = await session.get(SubnetModel, subnet_id)
            if row is None:
                raise NotFoundException(f"Subnet {subnet_id} not found")
            return self._model_to_subnet(row)

    async def create(self, cidr: IPNetwork, description: str) -> Subnet:
        async with self._session_factory() as session:
            result = await session.execute(
                insert(SubnetModel)
                .values(cidr=str(cidr), description=description)
                .returning(SubnetModel)
            )
            row = result.scalar_one()
            await session.commit()
            return self._model_to_subnet(row)

    async def delete(self, subnet_id: int) -> bool:
        async with self._session_factory() as session:
            result = await session.execute(
                delete(SubnetModel).where(SubnetModel.id == subnet_id)
            )
            await session.commit()
            return result.rowcount > 0
