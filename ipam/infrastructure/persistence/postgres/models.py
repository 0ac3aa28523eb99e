"""SQLAlchemy ORM Models for PostgreSQL

Maps domain entities to relational tables.

Design decisions:
- native CIDR/INET column types hold prefixes and addresses
- ip_addresses.ip is unique across the table (constraint "unique_ip");
  inserts rely on it instead of checking first
- ip_addresses rows are removed with their subnet (ON DELETE CASCADE)
"""

import uuid
from datetime import datetime

from sqlalchemy import (
    BigInteger,
    DateTime,
    ForeignKey,
    Identity,
    Index,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.dialects.postgresql import CIDR, INET, UUID
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

UNIQUE_IP_CONSTRAINT = "unique_ip"


class Base(DeclarativeBase):
    pass


# =============================================================================
# Subnets
# =============================================================================


class SubnetModel(Base):
    __tablename__ = "subnets"

    id: Mapped[int] = mapped_column(BigInteger, Identity(always=False), primary_key=True)
    cidr: Mapped[str] = mapped_column(CIDR, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="", server_default="")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )


# =============================================================================
# IP Addresses
# =============================================================================


class IPAddressModel(Base):
    __tablename__ = "ip_addresses"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        server_default=func.gen_random_uuid(),
    )
    ip: Mapped[str] = mapped_column(INET, nullable=False)
    hostname: Mapped[str] = mapped_column(Text, nullable=False, default="", server_default="")
    subnet_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("subnets.id", ondelete="CASCADE"), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    __table_args__ = (
        UniqueConstraint("ip", name=UNIQUE_IP_CONSTRAINT),
        Index("ix_ip_addresses_subnet_id", "subnet_id"),
    )
