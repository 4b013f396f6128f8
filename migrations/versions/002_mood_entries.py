"""mood entries

Revision ID: 002_mood_entries
Revises: 001_initial
Create Date: 18/10/2026
"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision = '002_mood_entries'
down_revision = '001_initial'

MOOD_CATEGORY = ('happy', 'calm', 'energetic', 'sad', 'anxious', 'angry')

def upgrade() -> None:
    vals_str = ", ".join([f"'{v}'" for v in MOOD_CATEGORY])
    op.execute(f"""
        DO $$
        BEGIN
            IF NOT EXISTS (SELECT 1 FROM pg_type WHERE typname = 'moodcategory') THEN
                CREATE TYPE moodcategory AS ENUM ({vals_str});
            END IF;
        END $$;
    """)

    op.create_table("mood_entries",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("user_id", sa.Integer, sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("date", sa.Date, nullable=False),
        sa.Column("level", sa.Integer, nullable=False),
        sa.Column("category", postgresql.ENUM(*MOOD_CATEGORY, name='moodcategory', create_type=False), nullable=False),
        sa.Column("notes", sa.Text, nullable=False, server_default=""),
        sa.Column("factors", sa.JSON, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), onupdate=sa.func.now()),
        sa.UniqueConstraint("user_id", "date", name="uq_mood_entries_user_date"),
    )
    op.create_index("ix_mood_entries_user_id", "mood_entries", ["user_id"])
    op.create_index("ix_mood_entries_date", "mood_entries", ["date"])

def downgrade() -> None:
    op.drop_table("mood_entries")
    op.execute("DROP TYPE IF EXISTS moodcategory")
