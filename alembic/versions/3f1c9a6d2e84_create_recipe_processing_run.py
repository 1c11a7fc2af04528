"""Create sender and recipe_processing_run tables

Revision ID: 3f1c9a6d2e84
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1c9a6d2e84'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table('sender',
        sa.Column('id', sa.Text(), nullable=False),
        sa.Column('name', sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table('recipe_processing_run',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('phone_number', sa.Text(), nullable=False),
        sa.Column('content_id', sa.Text(), nullable=True),
        sa.Column('platform', sa.Text(), nullable=False),
        sa.Column('url', sa.Text(), nullable=False),
        sa.Column('status', sa.Text(), nullable=False),
        sa.Column('recipe_id', sa.Integer(), nullable=True),
        sa.Column('error_message', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.Column('user_id', sa.Text(), nullable=True),
        sa.Column('run_id', sa.Text(), nullable=True),
        sa.Column('good_recipe', sa.Boolean(), nullable=True),
        sa.Column('feedback', sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['sender.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_recipe_processing_run_created_at', 'recipe_processing_run', ['created_at'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('ix_recipe_processing_run_created_at', 'recipe_processing_run')
    op.drop_table('recipe_processing_run')
    op.drop_table('sender')
