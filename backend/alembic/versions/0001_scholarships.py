"""create scholarships table

Revision ID: 0001_scholarships
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "0001_scholarships"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "scholarships",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("scholarship_name", sa.String(), nullable=False),
        sa.Column("university_name", sa.String(), nullable=False),
        sa.Column("country", sa.String(), nullable=False),
        sa.Column("funding_type", sa.String(), nullable=False),
        sa.Column("professor_email", sa.String(), nullable=True),
        sa.Column("required_documents", sa.JSON(), nullable=False),
        sa.Column("documents_done", sa.JSON(), nullable=False),
        sa.Column("deadline", sa.Date(), nullable=True),
        sa.Column("status", sa.String(), nullable=False, server_default="Not Started"),
        sa.Column("apply_link", sa.String(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("portal_signup", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("apply_started", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_scholarships_deadline", "scholarships", ["deadline"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_scholarships_deadline", table_name="scholarships")
    op.drop_table("scholarships")
