"""Create users and friendships tables

Revision ID: a1f2c3d4e5b6
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'a1f2c3d4e5b6'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create users and directional friendship edges."""
    op.create_table('users',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('full_name', sa.String(length=255), nullable=False),
        sa.Column('phone_number', sa.String(length=32), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )

    # One row per direction; an accepted friendship is stored as two mirrored rows
    op.create_table('friendships',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('friend_user_id', sa.Integer(), nullable=False),
        sa.Column('status', sa.String(length=20), server_default='pending', nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['friend_user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint("status IN ('pending', 'accepted', 'declined')", name='chk_friendship_status'),
        sa.UniqueConstraint('user_id', 'friend_user_id', name='unique_friendship_edge')
    )
    op.create_index('idx_friendships_user', 'friendships', ['user_id'])
    op.create_index('idx_friendships_friend_user', 'friendships', ['friend_user_id'])


def downgrade() -> None:
    """Drop friendships and users."""
    op.drop_index('idx_friendships_friend_user', table_name='friendships')
    op.drop_index('idx_friendships_user', table_name='friendships')
    op.drop_table('friendships')
    op.drop_table('users')
