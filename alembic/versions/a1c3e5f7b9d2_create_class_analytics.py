"""create class_analytics snapshot table

Revision ID: a1c3e5f7b9d2
Revises:
Create Date: 2026-10-19 09:12:41.507213

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'a1c3e5f7b9d2'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "class_analytics",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("class_id", sa.Uuid(), sa.ForeignKey("classes.id", ondelete="CASCADE"), nullable=False),
        sa.Column("school_id", sa.Uuid(), sa.ForeignKey("schools.id"), nullable=False),
        sa.Column("reporting_period", sa.String(50), nullable=False),
        sa.Column("term", sa.String(20)),
        sa.Column("year", sa.String(10)),
        sa.Column("avg_grade", sa.Float()),
        sa.Column("prev_avg_grade", sa.Float()),
        sa.Column("performance_trend", sa.String(10), nullable=False, server_default="stable"),
        sa.Column("improvement", sa.Float()),
        sa.Column("top_students", sa.JSON(), nullable=False),
        sa.Column("best_subjects", sa.JSON(), nullable=False),
        sa.Column("weakest_subjects", sa.JSON(), nullable=False),
        sa.Column("attendance_rate", sa.Float()),
        sa.Column("low_attendance_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("fee_collection", sa.Numeric(14, 2), nullable=False, server_default="0"),
        sa.Column("outstanding_fees", sa.Numeric(14, 2), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("is_deleted", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.UniqueConstraint("class_id", "reporting_period", name="uq_class_analytics_period"),
    )
    op.create_index("ix_class_analytics_id", "class_analytics", ["id"])
    op.create_index("ix_class_analytics_class_id", "class_analytics", ["class_id"])
    op.create_index("ix_class_analytics_school_id", "class_analytics", ["school_id"])
    op.create_index("ix_class_analytics_created_at", "class_analytics", ["created_at"])
    op.create_index("ix_class_analytics_is_deleted", "class_analytics", ["is_deleted"])


def downgrade() -> None:
    op.drop_index("ix_class_analytics_is_deleted", table_name="class_analytics")
    op.drop_index("ix_class_analytics_created_at", table_name="class_analytics")
    op.drop_index("ix_class_analytics_school_id", table_name="class_analytics")
    op.drop_index("ix_class_analytics_class_id", table_name="class_analytics")
    op.drop_index("ix_class_analytics_id", table_name="class_analytics")
    op.drop_table("class_analytics")
