"""Initial migration

Revision ID: 0001
Revises:
Create Date: 2026-10-18 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    """Upgrade database schema."""
    op.create_table(
        "execution_logs",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("kind", sa.String(length=20), nullable=False, comment="execute, compare or test"),
        sa.Column("module_id", sa.String(length=255), nullable=False, comment="Module identifier"),
        sa.Column(
            "service_id",
            sa.String(length=255),
            nullable=True,
            comment="Targeted service identifier",
        ),
        sa.Column("method_ids", sa.JSON(), nullable=True, comment="Compared method identifiers"),
        sa.Column("params", sa.JSON(), nullable=True, comment="Input parameters"),
        sa.Column("result", sa.JSON(), nullable=True, comment="Result payload"),
        sa.Column("success", sa.Boolean(), nullable=False, comment="Call outcome"),
        sa.Column("error_message", sa.Text(), nullable=True, comment="Error message"),
        sa.Column(
            "duration_ms",
            sa.Float(),
            nullable=True,
            comment="Wall-clock duration in milliseconds",
        ),
        sa.Column("trace_id", sa.String(length=64), nullable=True, comment="Request trace id"),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_index("ix_execution_logs_kind", "execution_logs", ["kind"], unique=False)
    op.create_index("ix_execution_logs_module_id", "execution_logs", ["module_id"], unique=False)
    op.create_index("ix_execution_logs_success", "execution_logs", ["success"], unique=False)
    op.create_index("ix_execution_logs_trace_id", "execution_logs", ["trace_id"], unique=False)
    op.create_index("ix_execution_logs_created_at", "execution_logs", ["created_at"], unique=False)


def downgrade() -> None:
    """Downgrade database schema."""
    op.drop_index("ix_execution_logs_created_at", table_name="execution_logs")
    op.drop_index("ix_execution_logs_trace_id", table_name="execution_logs")
    op.drop_index("ix_execution_logs_success", table_name="execution_logs")
    op.drop_index("ix_execution_logs_module_id", table_name="execution_logs")
    op.drop_index("ix_execution_logs_kind", table_name="execution_logs")
    op.drop_table("execution_logs")
