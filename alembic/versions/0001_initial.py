"""initial schema

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None


invitation_status = sa.Enum("pending", "accepted", "rejected", name="invitationstatusenum")


def upgrade() -> None:
    op.create_table(
        "families",
        sa.Column("id", sa.String(length=32), primary_key=True),
        sa.Column("monthly_limit", sa.Float(), nullable=True),
        sa.Column("warning_percentage", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.Column("version", sa.Integer(), nullable=False, server_default="1"),
    )
    op.create_table(
        "users",
        sa.Column("id", sa.String(length=128), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=True),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("family_id", sa.String(length=32), sa.ForeignKey("families.id"), nullable=True),
        sa.Column("monthly_limit", sa.Float(), nullable=True),
        sa.Column("warning_percentage", sa.Integer(), nullable=True),
        sa.Column("version", sa.Integer(), nullable=False, server_default="1"),
    )
    op.create_index("ix_users_family_id", "users", ["family_id"])
    op.create_table(
        "family_members",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("family_id", sa.String(length=32), sa.ForeignKey("families.id"), nullable=False),
        sa.Column("user_id", sa.String(length=128), sa.ForeignKey("users.id"), nullable=False, unique=True),
        sa.Column("name", sa.String(length=255), nullable=True),
        sa.Column("email", sa.String(length=255), nullable=True),
    )
    op.create_index("ix_family_members_family_id", "family_members", ["family_id"])
    op.create_table(
        "categories",
        sa.Column("id", sa.String(length=32), primary_key=True),
        sa.Column("family_id", sa.String(length=32), sa.ForeignKey("families.id"), nullable=False),
        sa.Column("user_id", sa.String(length=128), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("color", sa.String(length=32), nullable=False),
    )
    op.create_index("ix_categories_family_user", "categories", ["family_id", "user_id"])
    op.create_table(
        "expenses",
        sa.Column("id", sa.String(length=32), primary_key=True),
        sa.Column("family_id", sa.String(length=32), sa.ForeignKey("families.id"), nullable=False),
        sa.Column("user_id", sa.String(length=128), nullable=False),
        sa.Column("user_name", sa.String(length=255), nullable=True),
        sa.Column("category_id", sa.String(length=32), nullable=True),
        sa.Column("amount", sa.Float(), nullable=False),
        sa.Column("currency", sa.String(length=8), nullable=False, server_default="EUR"),
        sa.Column("spent_on", sa.Date(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_expenses_family_user", "expenses", ["family_id", "user_id"])
    op.create_table(
        "invitations",
        sa.Column("id", sa.String(length=32), primary_key=True),
        sa.Column("from_user_id", sa.String(length=128), nullable=False),
        sa.Column("from_user_name", sa.String(length=255), nullable=True),
        sa.Column("to_user_id", sa.String(length=128), nullable=False),
        sa.Column("to_user_name", sa.String(length=255), nullable=True),
        sa.Column("status", invitation_status, nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("resolved_at", sa.DateTime(), nullable=True),
        sa.Column("version", sa.Integer(), nullable=False, server_default="1"),
    )
    op.create_index("ix_invitations_from_user_id", "invitations", ["from_user_id"])
    op.create_index("ix_invitations_to_user_id", "invitations", ["to_user_id"])


def downgrade() -> None:
    op.drop_table("invitations")
    op.drop_table("expenses")
    op.drop_table("categories")
    op.drop_table("family_members")
    op.drop_table("users")
    op.drop_table("families")
    invitation_status.drop(op.get_bind(), checkfirst=True)
