"""initial schema: aura

Revision ID: 001_initial
Create Date: 18/10/2026
"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision = '001_initial'
down_revision = None

# Enum values
USER_ROLE = ('user', 'admin')
ERROR_SEVERITY = ('error', 'warning', 'info')

def upgrade() -> None:
    # ── 1. ENUM TYPES (idempotent) ──
    enums = {
        "userrole": USER_ROLE,
        "errorseverity": ERROR_SEVERITY,
    }

    for name, values in enums.items():
        vals_str = ", ".join([f"'{v}'" for v in values])
        op.execute(f"""
            DO $$
            BEGIN
                IF NOT EXISTS (SELECT 1 FROM pg_type WHERE typname = '{name}') THEN
                    CREATE TYPE {name} AS ENUM ({vals_str});
                END IF;
            END $$;
        """)

    # ── 2. TABLES ──
    # postgresql.ENUM(..., create_type=False): the types above already exist.

    op.create_table("users",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("email", sa.String, nullable=False, unique=True),
        sa.Column("name", sa.String, nullable=False),
        sa.Column("hashed_password", sa.String, nullable=False),
        sa.Column("role", postgresql.ENUM(*USER_ROLE, name='userrole', create_type=False), nullable=False, server_default="user"),
        sa.Column("is_active", sa.Boolean, default=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), onupdate=sa.func.now()),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_role", "users", ["role"])

    op.create_table("test_results",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("user_id", sa.Integer, sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("answers", sa.JSON, nullable=False),
        sa.Column("traits", sa.JSON, nullable=False),
        sa.Column("insights", sa.JSON, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_test_results_user_id", "test_results", ["user_id"])
    op.create_index("ix_test_results_completed_at", "test_results", ["completed_at"])

    op.create_table("shared_results",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("share_id", sa.String(32), nullable=False),
        sa.Column("test_result_id", sa.Integer, sa.ForeignKey("test_results.id", ondelete="CASCADE"), nullable=False, unique=True),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("view_count", sa.Integer, nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_shared_results_share_id", "shared_results", ["share_id"], unique=True)

    op.create_table("error_logs",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("user_id", sa.Integer, sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
        sa.Column("message", sa.Text, nullable=False),
        sa.Column("stack", sa.Text, nullable=True),
        sa.Column("context", sa.String, nullable=True),
        sa.Column("severity", postgresql.ENUM(*ERROR_SEVERITY, name='errorseverity', create_type=False), nullable=False, server_default="error"),
        sa.Column("url", sa.String, nullable=True),
        sa.Column("user_agent", sa.String, nullable=True),
        sa.Column("timestamp", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("resolved", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("resolved_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_error_logs_user_id", "error_logs", ["user_id"])
    op.create_index("ix_error_logs_timestamp", "error_logs", ["timestamp"])
    op.create_index("ix_error_logs_resolved", "error_logs", ["resolved"])

    op.create_table("performance_metrics",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("name", sa.String, nullable=False),
        sa.Column("value", sa.Float, nullable=False),
        sa.Column("tags", sa.JSON, nullable=False),
        sa.Column("timestamp", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_performance_metrics_name", "performance_metrics", ["name"])
    op.create_index("ix_performance_metrics_timestamp", "performance_metrics", ["timestamp"])

def downgrade() -> None:
    tables = [
        "performance_metrics", "error_logs",
        "shared_results", "test_results", "users",
    ]
    for table in tables:
        op.drop_table(table)

    enums = ["userrole", "errorseverity"]
    for e in enums:
        op.execute(f"DROP TYPE IF EXISTS {e}")
