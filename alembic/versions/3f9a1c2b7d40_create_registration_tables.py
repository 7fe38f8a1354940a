"""Create registration tables

Revision ID: 3f9a1c2b7d40
Revises:
Create Date: 2025-10-02 10:14:37.512811

"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3f9a1c2b7d40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


registration_status = sa.Enum(
    "upcoming", "pending", "completed", name="registration_status"
)


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "registrations",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("ticket_no", sa.INTEGER(), nullable=True),
        sa.Column("full_name", sa.VARCHAR(), nullable=False),
        sa.Column("email", sa.VARCHAR(), nullable=False),
        sa.Column("phone_number", sa.VARCHAR(), nullable=True),
        sa.Column("dob", sa.Date(), nullable=True),
        sa.Column("experience", sa.VARCHAR(), nullable=True),
        sa.Column("institution", sa.VARCHAR(), nullable=True),
        sa.Column("call_date_time", sa.DateTime(), nullable=True),
        sa.Column("hear_about_us", sa.VARCHAR(), nullable=True),
        sa.Column("current_profession", sa.VARCHAR(), nullable=True),
        sa.Column("specialization", sa.VARCHAR(), nullable=True),
        sa.Column("learning_goals", sa.VARCHAR(), nullable=True),
        sa.Column("training_programs", sa.JSON(), nullable=False),
        sa.Column("additional_programs", sa.JSON(), nullable=False),
        sa.Column("upload_id", sa.VARCHAR(), nullable=True),
        sa.Column(
            "status",
            registration_status,
            nullable=False,
            server_default="upcoming",
        ),
        sa.Column("is_expired", sa.BOOLEAN(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_registrations_ticket_no"), "registrations", ["ticket_no"], unique=True
    )
    op.create_index(
        op.f("ix_registrations_full_name"), "registrations", ["full_name"], unique=False
    )
    op.create_index(
        op.f("ix_registrations_email"), "registrations", ["email"], unique=False
    )
    op.create_index(
        op.f("ix_registrations_call_date_time"),
        "registrations",
        ["call_date_time"],
        unique=False,
    )
    op.create_index(
        op.f("ix_registrations_status"), "registrations", ["status"], unique=False
    )

    op.create_table(
        "counters",
        sa.Column("name", sa.VARCHAR(), nullable=False),
        sa.Column("seq", sa.INTEGER(), nullable=False),
        sa.PrimaryKeyConstraint("name"),
    )

    op.create_table(
        "stored_files",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("filename", sa.VARCHAR(), nullable=False),
        sa.Column("content_type", sa.VARCHAR(), nullable=False),
        sa.Column("size", sa.INTEGER(), nullable=False),
        sa.Column("data", sa.LargeBinary(), nullable=False),
        sa.Column("uploaded_at", sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("stored_files")
    op.drop_table("counters")
    op.drop_index(op.f("ix_registrations_status"), table_name="registrations")
    op.drop_index(op.f("ix_registrations_call_date_time"), table_name="registrations")
    op.drop_index(op.f("ix_registrations_email"), table_name="registrations")
    op.drop_index(op.f("ix_registrations_full_name"), table_name="registrations")
    op.drop_index(op.f("ix_registrations_ticket_no"), table_name="registrations")
    op.drop_table("registrations")
    registration_status.drop(op.get_bind(), checkfirst=True)
