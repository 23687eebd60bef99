"""create ops board tables

Revision ID: a1c0b0a7d001
Revises:
Create Date: 2026-10-17 09:00:00.000000
"""

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "a1c0b0a7d001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=100), nullable=False, unique=True),
        sa.Column("pin", sa.String(length=255), nullable=False),
        sa.Column("role", sa.String(length=20), nullable=False, server_default="staff"),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("last_login", sa.DateTime(), nullable=True),
        sa.CheckConstraint("role IN ('admin', 'staff')", name="ck_users_role"),
    )
    op.create_index("ux_users_name_lower", "users", [sa.text("lower(name)")], unique=True)

    op.create_table(
        "stock_items",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("category", sa.String(length=8), nullable=False),
        sa.Column("item", sa.String(length=200), nullable=False),
        sa.Column("detail", sa.Text(), nullable=True),
        sa.Column("severity", sa.String(length=16), nullable=False, server_default="low"),
        sa.Column("created_by", sa.Integer(), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("resolved_at", sa.DateTime(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("1")),
        sa.CheckConstraint("category IN ('out', 'low')", name="ck_stock_category"),
        sa.CheckConstraint("severity IN ('none', 'low', 'maint')", name="ck_stock_severity"),
    )
    op.create_index("idx_stock_active", "stock_items", ["is_active", "category"])

    op.create_table(
        "maintenance",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("item", sa.String(length=200), nullable=False),
        sa.Column("detail", sa.Text(), nullable=True),
        sa.Column("severity", sa.String(length=16), nullable=False, server_default="maint"),
        sa.Column("priority", sa.Integer(), nullable=False, server_default="2"),
        sa.Column("created_by", sa.Integer(), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("resolved_at", sa.DateTime(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("1")),
        sa.CheckConstraint("severity IN ('none', 'low', 'maint')", name="ck_maint_severity"),
    )
    op.create_index("idx_maint_active", "maintenance", ["is_active"])

    op.create_table(
        "notes",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column("created_by", sa.Integer(), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("expires_at", sa.DateTime(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("1")),
    )
    op.create_index("idx_notes_active", "notes", ["is_active"])

    op.create_table(
        "shift_log",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("shift_type", sa.String(length=50), nullable=False),
        sa.Column("focus", sa.Text(), nullable=False),
        sa.Column("eta", sa.String(length=100), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_by", sa.Integer(), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("idx_shift_created", "shift_log", ["created_at"])

    op.create_table(
        "settings",
        sa.Column("key", sa.String(length=100), primary_key=True),
        sa.Column("value", sa.Text(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    )

    op.create_table(
        "activity_log",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
        sa.Column("action", sa.String(length=50), nullable=False),
        sa.Column("entity_type", sa.String(length=50), nullable=True),
        sa.Column("entity_id", sa.Integer(), nullable=True),
        sa.Column("details", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
    )
    op.create_index("ix_activity_log_created_at", "activity_log", ["created_at"])


def downgrade():
    op.drop_index("ix_activity_log_created_at", table_name="activity_log")
    op.drop_table("activity_log")
    op.drop_table("settings")
    op.drop_index("idx_shift_created", table_name="shift_log")
    op.drop_table("shift_log")
    op.drop_index("idx_notes_active", table_name="notes")
    op.drop_table("notes")
    op.drop_index("idx_maint_active", table_name="maintenance")
    op.drop_table("maintenance")
    op.drop_index("idx_stock_active", table_name="stock_items")
    op.drop_table("stock_items")
    op.drop_index("ux_users_name_lower", table_name="users")
    op.drop_table("users")
