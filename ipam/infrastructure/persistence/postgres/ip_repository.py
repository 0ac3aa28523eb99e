"""PostgreSQL Implementation of IIPRepository"""

import ipaddress
import uuid

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ....core.entities import IPAddress, IPAddressValue
from ....core.exceptions import ConflictException, InvalidInputException, NotFoundException
from ....core.interfaces import IIPRepository
from .models import UNIQUE_IP_CONSTRAINT, IPAddressModel


def parse_ip_id(ip_id: str) -> uuid.UUID:
    try:
        return uuid.UUID(str(ip_id))
    except ValueError:
        raise InvalidInputException("invalid ip id") from None


def is_unique_ip_violation(exc: IntegrityError) -> bool:
    """Whether an IntegrityError was raised by the unique_ip constraint."""
    orig = exc.orig
    # asyncpg's UniqueViolationError is chained behind SQLAlchemy's DBAPI adapter
    for candidate in (orig, getattr(orig, "__cause__", None)):
        if getattr(candidate, "constraint_name", None) == UNIQUE_IP_CONSTRAINT:
            return True
    return UNIQUE_IP_CONSTRAINT in str(orig)


class PostgresIPRepository(IIPRepository):
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    # =========================================================================
    # Mapping
    # =========================================================================

    def _model_to_ip(self, row: IPAddressModel) -> IPAddress:
        return IPAddress(
            id=str(row.id),
            # INET values may come back as interfaces or plain strings
            ip=ipaddress.ip_interface(row.ip).ip,
            hostname=row.hostname or "",
            subnet_id=row.subnet_id,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )

    # =========================================================================
    # CRUD
    # =========================================================================

    async def list_by_subnet_id(self, subnet_id: int) -> list[IPAddress]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(IPAddressModel)
                .where(IPAddressModel.subnet_id == subnet_id)
                .order_by(IPAddressModel.created_at)
            )
            return [self._model_to_ip(r) for r in result.scalars().all()]

    async def find_by_id_and_subnet(self, ip_id: str, subnet_id: int) -> IPAddress:
        parsed_id = parse_ip_id(ip_id)
        async with self._session_factory() as session:
            result = await session.execute(
                select(IPAddressModel).where(
                    IPAddressModel.id == parsed_id,
                    IPAddressModel.subnet_id == subnet_id,
                )
            )
            row = result.scalar_one_or_none()
            if row is None:
                raise NotFoundException(f"IP {ip_id} not found")
            return self._model_to_ip(row)

    async def create(self, ip: IPAddressValue, hostname: str, subnet_id: int) -> IPAddress:
        async with self._session_factory() as session:
            try:
                result = await session.execute(
                    insert(IPAddressModel)
                    .values(id=uuid.uuid4(), ip=str(ip), hostname=hostname, subnet_id=subnet_id)
                    .returning(IPAddressModel)
                )
                row = result.scalar_one()
                await session.commit()
            except IntegrityError as e:
                await session.rollback()
                if is_unique_ip_violation(e):
                    raise ConflictException(f"IP {ip} already exists") from e
                raise
            return self._model_to_ip(row)

    async def update_hostname(self, ip_id: str, hostname: str) -> IPAddress:
        parsed_id = parse_ip_id(ip_id)
        async with self._session_factory() as session:
            result = await session.execute(
                update(IPAddressModel)
                .where(IPAddressModel.id == parsed_id)
                .values(hostname=hostname, updated_at=func.now())
                .returning(IPAddressModel)
            )
            row = result.scalar_one_or_none()
            if row is None:
                raise NotFoundException(f"IP {ip_id} not found")
            await session.commit()
            return self._model_to_ip(row)

    async def delete_by_id_and_subnet(self, ip_id: str, subnet_id: int) -> bool:
        parsed_id = parse_ip_id(ip_id)
        async with self._session_factory() as session:
            result = await session.execute(
                delete(IPAddressModel).where(
                    IPAddressModel.id == parsed_id,
                    IPAddressModel.subnet_id == subnet_id,
                )
            )
            await session.commit()
            return result.rowcount > 0
