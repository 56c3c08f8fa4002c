"""create external_references table

Revision ID: a8d25f6e1c40
Revises: 3e91c0a4d7b2
Create Date: 2026-10-12 09:31:05.117204

"""
from typing import Sequence, Union

from alembic import op


# revision identifiers, used by Alembic.
revision: str = 'a8d25f6e1c40'
down_revision: Union[str, None] = '3e91c0a4d7b2'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # no FK to projects: references are keyed by project name and
    # may outlive a renamed project
    op.execute("""
    CREATE TABLE IF NOT EXISTS external_references (
        id uuid PRIMARY KEY DEFAULT gen_random_uuid(),

        url text NOT NULL,
        project_name varchar(200) NOT NULL,
        user_id varchar(128) NOT NULL,

        created_at timestamptz NOT NULL DEFAULT now()
    );

    CREATE INDEX IF NOT EXISTS idx_external_references_project_name
        ON external_references (project_name);

    CREATE INDEX IF NOT EXISTS idx_external_references_user_id
        ON external_references (user_id);
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS external_references;")
