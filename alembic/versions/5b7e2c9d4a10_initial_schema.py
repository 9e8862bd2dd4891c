"""initial schema

Revision ID: 5b7e2c9d4a10
Revises:
Create Date: 2026-10-19

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "5b7e2c9d4a10"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
    ]


def upgrade() -> None:
    user_role = sa.Enum("user", "admin", name="user_role")
    publication_type = sa.Enum("newspaper", "magazine", name="publication_type")

    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("first_name", sa.String(255), nullable=True),
        sa.Column("last_name", sa.String(255), nullable=True),
        sa.Column("is_verified", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("last_login", sa.DateTime(timezone=True), nullable=True),
        sa.Column("role", user_role, nullable=False, server_default="user"),
        *_timestamps(),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    # Codes reference users by email only
    op.create_table(
        "password_reset_codes",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("code", sa.String(6), nullable=False),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("is_used", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
    )
    op.create_index(
        "ix_password_reset_codes_email_code", "password_reset_codes", ["email", "code"]
    )
    op.create_index(
        "ix_password_reset_codes_expires_at", "password_reset_codes", ["expires_at"]
    )

    op.create_table(
        "publications",
        sa.Column("index", sa.String(10), primary_key=True),
        sa.Column("type", publication_type, nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("monthly_cost", sa.Numeric(10, 2), nullable=False),
    )

    op.create_table(
        "recipients",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("full_name", sa.String(255), nullable=False),
        sa.Column("street", sa.String(255), nullable=False),
        sa.Column("house", sa.String(10), nullable=False),
        sa.Column("apartment", sa.String(10), nullable=True),
    )
    op.create_index("ix_recipients_id", "recipients", ["id"])

    op.create_table(
        "subscriptions",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("recipient_id", sa.Integer(), sa.ForeignKey("recipients.id"), nullable=False),
        sa.Column(
            "publication_index",
            sa.String(10),
            sa.ForeignKey("publications.index"),
            nullable=False,
        ),
        sa.Column("duration_months", sa.Integer(), nullable=False),
        sa.Column("start_month", sa.Integer(), nullable=False),
        sa.Column("start_year", sa.Integer(), nullable=False),
    )
    op.create_index("ix_subscriptions_id", "subscriptions", ["id"])
    op.create_index("ix_subscriptions_recipient_id", "subscriptions", ["recipient_id"])
    op.create_index("ix_subscriptions_publication_index", "subscriptions", ["publication_index"])
    op.create_index("ix_subscriptions_start", "subscriptions", ["start_year", "start_month"])


def downgrade() -> None:
    op.drop_table("subscriptions")
    op.drop_table("recipients")
    op.drop_table("publications")
    op.drop_table("password_reset_codes")
    op.drop_table("users")
    sa.Enum(name="publication_type").drop(op.get_bind(), checkfirst=True)
    sa.Enum(name="user_role").drop(op.get_bind(), checkfirst=True)
