"""Create inventory tables.

Revision ID: 0001_inventory_tables
Revises:
Create Date: 2026-10-19
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

from kprune.adapters.sqlalchemy.mappings import UTCDateTime

revision = "0001_inventory_tables"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "inventory",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("namespace", sa.String(length=253), nullable=False),
        sa.Column("name", sa.String(length=253), nullable=False),
        sa.Column("inventory_id", sa.String(length=253), nullable=False),
        sa.Column("updated_at", UTCDateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_inventory"),
        sa.UniqueConstraint(
            "namespace", "name", "inventory_id", name="uq_inventory_namespace"
        ),
    )
    op.create_table(
        "inventory_object",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("inventory_pk", sa.Integer(), nullable=False),
        sa.Column("group", sa.String(length=253), nullable=False),
        sa.Column("kind", sa.String(length=63), nullable=False),
        sa.Column("namespace", sa.String(length=253), nullable=False),
        sa.Column("name", sa.String(length=253), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_inventory_object"),
        sa.ForeignKeyConstraint(
            ["inventory_pk"],
            ["inventory.id"],
            name="fk_inventory_object_inventory_pk_inventory",
            ondelete="CASCADE",
        ),
        sa.UniqueConstraint(
            "inventory_pk",
            "group",
            "kind",
            "namespace",
            "name",
            name="uq_inventory_object_inventory_pk",
        ),
    )
    op.create_index(
        "ix_inventory_object_inventory_pk", "inventory_object", ["inventory_pk"]
    )


def downgrade() -> None:
    op.drop_index("ix_inventory_object_inventory_pk", table_name="inventory_object")
    op.drop_table("inventory_object")
    op.drop_table("inventory")
