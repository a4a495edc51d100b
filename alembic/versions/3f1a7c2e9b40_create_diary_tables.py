"""create diary_entry and media_item tables

Revision ID: 3f1a7c2e9b40
Revises:
Create Date: 2025-10-12 09:30:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '3f1a7c2e9b40'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'diary_entry',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('date', sa.String(length=10), nullable=False),
        sa.Column('title', sa.String(length=300), nullable=True),
        sa.Column('mood', sa.String(length=16), nullable=True),
        sa.Column('content', sa.Text(), nullable=True),
        sa.Column(
            'files',
            postgresql.JSONB(astext_type=sa.Text()).with_variant(sa.JSON(), 'sqlite'),
            nullable=False,
        ),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('date'),
    )
    op.create_index('idx_diary_entry_updated_at', 'diary_entry', ['updated_at'], unique=False)

    op.create_table(
        'media_item',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('type', sa.String(length=100), nullable=False),
        sa.Column('url', sa.String(length=1024), nullable=False),
        sa.Column('favorite', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('added_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_media_item_added_at', 'media_item', ['added_at'], unique=False)


def downgrade() -> None:
    op.drop_index('idx_media_item_added_at', table_name='media_item')
    op.drop_table('media_item')
    op.drop_index('idx_diary_entry_updated_at', table_name='diary_entry')
    op.drop_table('diary_entry')
