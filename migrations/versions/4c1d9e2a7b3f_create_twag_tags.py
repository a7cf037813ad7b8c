"""create_twag_tags

Revision ID: 4c1d9e2a7b3f
Revises:
Create Date: 2025-05-17 21:44:39.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4c1d9e2a7b3f'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the twag_tags table keyed by the 14-character tag ID."""
    op.create_table('twag_tags',
        sa.Column('id', sa.CHAR(length=14), nullable=False),
        sa.Column('target_url', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.Column('last_accessed', sa.DateTime(timezone=True), nullable=True),
        sa.Column('access_count', sa.Integer(), server_default='0', nullable=False),
        sa.Column('last_seen_tap_count', sa.Integer(), nullable=True),
        sa.CheckConstraint("id ~ '^[0-9A-F]{14}$'", name='ck_twag_tags_id_hex'),
        sa.PrimaryKeyConstraint('id'),
    )


def downgrade() -> None:
    """Drop the twag_tags table."""
    op.drop_table('twag_tags')
