"""create projects table

Revision ID: 3e91c0a4d7b2
Revises: 
Create Date: 2026-10-12 09:14:22.481530

"""
from typing import Sequence, Union

from alembic import op


# revision identifiers, used by Alembic.
revision: str = '3e91c0a4d7b2'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
    CREATE EXTENSION IF NOT EXISTS pgcrypto;

    CREATE TABLE IF NOT EXISTS projects (
        id uuid PRIMARY KEY DEFAULT gen_random_uuid(),

        name varchar(200) NOT NULL UNIQUE,
        description text NULL,

        created_at timestamptz NOT NULL DEFAULT now()
    );

    CREATE INDEX IF NOT EXISTS idx_projects_created_at
        ON projects (created_at DESC);
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS projects;")
