"""Create users, brands and the five brand-scoped dashboard tables.

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _brand_fk() -> sa.ForeignKeyConstraint:
    return sa.ForeignKeyConstraint(["brand_id"], ["brands.id"], ondelete="CASCADE")


def upgrade() -> None:
    conn = op.get_bind()
    insp = sa.inspect(conn)
    existing = insp.get_table_names()

    if "brands" in existing:
        return  # Already applied (e.g. from create_all)

    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("username", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("role", sa.String(50), nullable=True, server_default="user"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("username"),
    )

    op.create_table(
        "brands",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("code", sa.String(32), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=True, server_default=sa.text("now()")),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
        sa.UniqueConstraint("code"),
    )

    op.create_table(
        "revenue",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("brand_id", sa.Integer(), nullable=False),
        sa.Column("date", sa.DateTime(), nullable=False),
        sa.Column("amount", sa.Float(), nullable=False),
        sa.Column("source", sa.String(100), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=True, server_default=sa.text("now()")),
        _brand_fk(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_revenue_brand_date", "revenue", ["brand_id", "date"])

    op.create_table(
        "ad_spend",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("brand_id", sa.Integer(), nullable=False),
        sa.Column("date", sa.DateTime(), nullable=False),
        sa.Column("amount", sa.Float(), nullable=False),
        sa.Column("platform", sa.String(100), nullable=False),
        sa.Column("campaign", sa.String(512), nullable=True),
        sa.Column("ad_set", sa.String(512), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True, server_default=sa.text("now()")),
        _brand_fk(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_ad_spend_brand_date", "ad_spend", ["brand_id", "date"])

    op.create_table(
        "ai_agents",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("brand_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("type", sa.String(50), nullable=False),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("cost", sa.Float(), nullable=True, server_default=sa.text("0")),
        sa.Column("metrics", sa.JSON(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True, server_default=sa.text("now()")),
        sa.Column("updated_at", sa.DateTime(), nullable=True, server_default=sa.text("now()")),
        _brand_fk(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_ai_agents_brand_id", "ai_agents", ["brand_id"])

    op.create_table(
        "ad_performance",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("brand_id", sa.Integer(), nullable=False),
        sa.Column("ad_set_id", sa.String(255), nullable=False),
        sa.Column("ad_set_name", sa.String(512), nullable=False),
        sa.Column("platform", sa.String(100), nullable=False),
        sa.Column("spend", sa.Float(), nullable=False),
        sa.Column("roas", sa.Float(), nullable=False),
        sa.Column("ctr", sa.Float(), nullable=False),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("thumbnail", sa.Text(), nullable=True),
        sa.Column("date", sa.DateTime(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=True, server_default=sa.text("now()")),
        _brand_fk(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_ad_performance_brand_platform", "ad_performance", ["brand_id", "platform"])

    op.create_table(
        "ops_tasks",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("brand_id", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(512), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("category", sa.String(100), nullable=False),
        sa.Column("due_date", sa.DateTime(), nullable=True),
        sa.Column("progress", sa.Integer(), nullable=True, server_default=sa.text("0")),
        sa.Column("created_at", sa.DateTime(), nullable=True, server_default=sa.text("now()")),
        sa.Column("updated_at", sa.DateTime(), nullable=True, server_default=sa.text("now()")),
        _brand_fk(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_ops_tasks_brand_status", "ops_tasks", ["brand_id", "status"])


def downgrade() -> None:
    for table in ("ops_tasks", "ad_performance", "ai_agents", "ad_spend", "revenue", "brands", "users"):
        op.drop_table(table)
