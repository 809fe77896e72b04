"""create svgs table

Revision ID: 20250515_01
Revises: 20250507_01
Create Date: 2025-05-15
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '20250515_01'
down_revision = '20250507_01'
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'svgs',
        sa.Column('id', sa.Integer(), primary_key=True, nullable=False),
        sa.Column('icon_id', sa.Integer(), nullable=False),
        sa.Column('weight', sa.Text(), nullable=False),
        sa.Column('src', sa.Text(), nullable=False),
        sa.UniqueConstraint('icon_id', 'weight', name='uq_svgs_icon_weight'),
        schema='public'
    )

    op.create_foreign_key(
        'fk_svgs_icon',
        'svgs',
        'icons',
        ['icon_id'],
        ['id'],
        source_schema='public',
        referent_schema='public',
        ondelete='CASCADE'
    )


def downgrade() -> None:
    op.drop_constraint('fk_svgs_icon', 'svgs', type_='foreignkey', schema='public')
    op.drop_table('svgs', schema='public')
