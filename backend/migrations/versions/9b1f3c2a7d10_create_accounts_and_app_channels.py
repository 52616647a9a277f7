"""create accounts and app_channels

Revision ID: 9b1f3c2a7d10
Revises:
Create Date: 2026-10-19 00:00:00.000000
"""
import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = '9b1f3c2a7d10'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'accounts',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('username', sa.String(length=50), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('full_name', sa.String(length=100), nullable=False),
        sa.Column('access_token', sa.Text(), nullable=False, server_default=''),
        sa.Column('refresh_token', sa.Text(), nullable=False, server_default=''),
        sa.Column('is_deleted', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id', name='pk_accounts'),
        sa.UniqueConstraint('username', name='uq_accounts_username'),
    )
    op.create_table(
        'app_channels',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('channel_name', sa.String(length=100), nullable=False),
        sa.Column('owner_id', sa.Uuid(), nullable=False),
        sa.Column('is_deleted', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(
            ['owner_id'], ['accounts.id'],
            name='fk_app_channels_owner_id_accounts', ondelete='CASCADE',
        ),
        sa.PrimaryKeyConstraint('id', name='pk_app_channels'),
    )
    with op.batch_alter_table('app_channels', schema=None) as batch_op:
        batch_op.create_index('ix_app_channels_owner_id', ['owner_id'], unique=False)


def downgrade():
    with op.batch_alter_table('app_channels', schema=None) as batch_op:
        batch_op.drop_index('ix_app_channels_owner_id')
    op.drop_table('app_channels')
    op.drop_table('accounts')
