"""create user, round, sport_stats, round_result and play_session tables

Revision ID: 1a2b3c4d5e6f
Revises:
Create Date: 2025-06-01 00:00:00
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '1a2b3c4d5e6f'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'user',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('external_id', sa.String(length=128), nullable=False),
        sa.Column('username', sa.String(length=128), nullable=False),
        sa.Column('created', sa.DateTime(timezone=True), nullable=False),
        sa.Column('current_daily_streak', sa.Integer(), nullable=False),
        sa.Column('last_day_played', sa.String(length=10), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_user_external_id', 'user', ['external_id'], unique=True)

    op.create_table(
        'round',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('round_id', sa.String(length=64), nullable=False),
        sa.Column('sport', sa.String(length=32), nullable=False),
        sa.Column('play_date', sa.String(length=10), nullable=False),
        sa.Column('theme', sa.String(length=128), nullable=True),
        sa.Column('player', sa.Text(), nullable=False),
        sa.Column('created', sa.DateTime(timezone=True), nullable=False),
        sa.Column('last_updated', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('sport', 'play_date', name='uq_round_sport_play_date'),
    )
    op.create_index('ix_round_round_id', 'round', ['round_id'], unique=True)
    op.create_index('ix_round_sport', 'round', ['sport'], unique=False)
    op.create_index('ix_round_play_date', 'round', ['play_date'], unique=False)

    op.create_table(
        'sport_stats',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('sport', sa.String(length=32), nullable=False),
        sa.Column('stats', sa.Text(), nullable=True),
        sa.Column('history', sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['user.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'sport', name='uq_sport_stats_user_sport'),
    )

    op.create_table(
        'round_result',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('sport', sa.String(length=32), nullable=False),
        sa.Column('play_date', sa.String(length=10), nullable=False),
        sa.Column('score', sa.Integer(), nullable=False),
        sa.Column('is_correct', sa.Boolean(), nullable=False),
        sa.Column('tiles_flipped', sa.Text(), nullable=True),
        sa.Column('incorrect_guesses', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['user.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'sport', 'play_date', name='uq_round_result_user_sport_date'),
    )

    op.create_table(
        'play_session',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('sport', sa.String(length=32), nullable=False),
        sa.Column('play_date', sa.String(length=10), nullable=False),
        sa.Column('round_id', sa.String(length=64), nullable=True),
        sa.Column('state', sa.Text(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['user.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'sport', 'play_date', name='uq_play_session_user_sport_date'),
    )


def downgrade():
    op.drop_table('play_session')
    op.drop_table('round_result')
    op.drop_table('sport_stats')
    op.drop_index('ix_round_play_date', table_name='round')
    op.drop_index('ix_round_sport', table_name='round')
    op.drop_index('ix_round_round_id', table_name='round')
    op.drop_table('round')
    op.drop_index('ix_user_external_id', table_name='user')
    op.drop_table('user')
