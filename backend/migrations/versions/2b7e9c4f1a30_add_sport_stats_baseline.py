"""add baseline to sport_stats

Revision ID: 2b7e9c4f1a30
Revises: 1a2b3c4d5e6f
Create Date: 2025-07-15 00:00:00
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '2b7e9c4f1a30'
down_revision = '1a2b3c4d5e6f'
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    insp = sa.inspect(bind)
    cols = {c['name'] for c in insp.get_columns('sport_stats')}
    with op.batch_alter_table('sport_stats') as batch_op:
        if 'baseline' not in cols:
            batch_op.add_column(sa.Column('baseline', sa.Text(), nullable=True))


def downgrade():
    with op.batch_alter_table('sport_stats') as batch_op:
        batch_op.drop_column('baseline')
