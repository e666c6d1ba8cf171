"""create profiles and refresh credentials

Revision ID: 7f3b2c1d9a10
Revises:
Create Date: 2024-06-01 00:00:00.000000
"""
import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = '7f3b2c1d9a10'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'profiles',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.String(length=128), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=254), nullable=False),
        sa.Column('firehearts', sa.Integer(), nullable=False),
        sa.Column('image', sa.JSON(), nullable=False),
        sa.Column('last_edited', sa.DateTime(timezone=True), nullable=False),
        sa.Column('year_of_study', sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_profiles')),
        sa.UniqueConstraint('user_id', name='uq_profiles_user_id'),
    )
    with op.batch_alter_table('profiles', schema=None) as batch_op:
        batch_op.create_index('ix_profiles_leaderboard', ['firehearts', 'last_edited'], unique=False)

    op.create_table(
        'refresh_credentials',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('token', sa.Text(), nullable=False),
        sa.Column('user_id', sa.String(length=128), nullable=False),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_refresh_credentials')),
    )
    with op.batch_alter_table('refresh_credentials', schema=None) as batch_op:
        batch_op.create_index('ix_refresh_credentials_token', ['token'], unique=False)
        batch_op.create_index('ix_refresh_credentials_user_id', ['user_id'], unique=False)


def downgrade():
    with op.batch_alter_table('refresh_credentials', schema=None) as batch_op:
        batch_op.drop_index('ix_refresh_credentials_user_id')
        batch_op.drop_index('ix_refresh_credentials_token')
    op.drop_table('refresh_credentials')

    with op.batch_alter_table('profiles', schema=None) as batch_op:
        batch_op.drop_index('ix_profiles_leaderboard')
    op.drop_table('profiles')
