"""create schedule tables: members, work_lines, assignments, day_site_status

Revision ID: 5b1e0c7a9d21
Revises:
Create Date: 2026-10-19 09:12:44.118203

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '5b1e0c7a9d21'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade():
    op.create_table(
        "members",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    )

    op.create_table(
        "work_lines",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("project_id", sa.String(64), nullable=True),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("color", sa.String(32), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    )
    op.create_index("ix_work_lines_project_id", "work_lines", ["project_id"])

    # natural key (work_line_id, member_id, date): one row per member per cell
    op.create_table(
        "assignments",
        sa.Column(
            "work_line_id",
            sa.String(64),
            sa.ForeignKey("work_lines.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "member_id",
            sa.String(64),
            sa.ForeignKey("members.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column("date", sa.Date(), primary_key=True),
        sa.Column("is_holiday", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_confirmed", sa.Boolean(), nullable=False, server_default=sa.false()),
    )
    op.create_index(
        "ix_assignments_work_line_date",
        "assignments",
        ["work_line_id", "date"],
    )

    # only locked cells have a row
    op.create_table(
        "day_site_status",
        sa.Column(
            "work_line_id",
            sa.String(64),
            sa.ForeignKey("work_lines.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column("date", sa.Date(), primary_key=True),
        sa.Column("is_locked", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column(
            "locked_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    )


def downgrade():
    op.drop_table("day_site_status")
    op.drop_index("ix_assignments_work_line_date", table_name="assignments")
    op.drop_table("assignments")
    op.drop_index("ix_work_lines_project_id", table_name="work_lines")
    op.drop_table("work_lines")
    op.drop_table("members")
