"""initial_schema

Revision ID: 3f1c9a2b7d40
Revises:
Create Date: 2026-10-19

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "3f1c9a2b7d40"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # =========================================================
    # subnets
    # =========================================================
    op.create_table(
        "subnets",
        sa.Column("id", sa.BigInteger(), sa.Identity(always=False), nullable=False),
        sa.Column("cidr", postgresql.CIDR(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    # =========================================================
    # ip_addresses
    # =========================================================
    op.create_table(
        "ip_addresses",
        sa.Column(
            "id",
            postgresql.UUID(as_uuid=True),
            nullable=False,
            server_default=sa.text("gen_random_uuid()"),
        ),
        sa.Column("ip", postgresql.INET(), nullable=False),
        sa.Column("hostname", sa.Text(), nullable=False, server_default=""),
        sa.Column("subnet_id", sa.BigInteger(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["subnet_id"], ["subnets.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("ip", name="unique_ip"),
    )
    op.create_index("ix_ip_addresses_subnet_id", "ip_addresses", ["subnet_id"])


def downgrade() -> None:
    op.drop_index("ix_ip_addresses_subnet_id", table_name="ip_addresses")
    op.drop_table("ip_addresses")
    op.drop_table("subnets")
