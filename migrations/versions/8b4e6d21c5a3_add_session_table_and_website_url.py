"""add_session_table_and_website_url

Revision ID: 8b4e6d21c5a3
Revises: 3f1c2a9d7b10
Create Date: 2025-04-11 16:52:08.903114

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '8b4e6d21c5a3'
down_revision: Union[str, None] = '3f1c2a9d7b10'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # Databases bootstrapped by hand may already have both
    op.execute("""
        CREATE TABLE IF NOT EXISTS "session" (
            "sid" varchar NOT NULL COLLATE "default",
            "sess" json NOT NULL,
            "expire" timestamp(6) NOT NULL,
            CONSTRAINT "session_pkey" PRIMARY KEY ("sid")
        )
    """)
    op.execute('CREATE INDEX IF NOT EXISTS "ix_session_expire" ON "session" ("expire")')
    op.execute("ALTER TABLE case_studies ADD COLUMN IF NOT EXISTS website_url text")


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_column('case_studies', 'website_url')
    op.drop_index('ix_session_expire', table_name='session')
    op.drop_table('session')
