"""create icons table and codepoint assignment trigger

Revision ID: 20250507_01
Revises:
Create Date: 2025-05-07
"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision = '20250507_01'
down_revision = None
branch_labels = None
depends_on = None


ASSIGN_CODE_POINT = """
CREATE OR REPLACE FUNCTION public.assign_code_point()
RETURNS TRIGGER AS $$
DECLARE
    next_cp INTEGER;
BEGIN
    IF NEW.code IS NOT NULL THEN
        RETURN NEW;
    END IF;

    -- BMP private use area first
    SELECT cp INTO next_cp FROM (
        SELECT generate_series(x'E000'::int, x'F8FF'::int, 2) AS cp
        EXCEPT
        SELECT code FROM public.icons WHERE code BETWEEN x'E000'::int AND x'F8FF'::int
    ) AS free_codes
    ORDER BY cp
    LIMIT 1;

    -- Then the supplementary private use area
    IF next_cp IS NULL THEN
        SELECT cp INTO next_cp FROM (
            SELECT generate_series(x'F0000'::int, x'FFFFD'::int, 2) AS cp
            EXCEPT
            SELECT code FROM public.icons WHERE code BETWEEN x'F0000'::int AND x'FFFFD'::int
        ) AS free_codes
        ORDER BY cp
        LIMIT 1;
    END IF;

    IF next_cp IS NULL THEN
        RAISE EXCEPTION 'No available code points in defined private use ranges';
    END IF;

    NEW.code := next_cp;
    RETURN NEW;
END;
$$ LANGUAGE plpgsql;
"""


def upgrade() -> None:
    op.create_table(
        'icons',
        sa.Column('id', sa.Integer(), primary_key=True, nullable=False),
        sa.Column('rid', sa.Text(), nullable=False),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('alias', sa.Text(), nullable=True),
        sa.Column('code', sa.Integer(), nullable=True),
        sa.Column('status', sa.Text(), nullable=False),
        sa.Column('category', sa.Text(), nullable=False),
        sa.Column('search_categories', postgresql.ARRAY(sa.Text()), nullable=False, server_default=sa.text("'{}'")),
        sa.Column('tags', postgresql.ARRAY(sa.Text()), nullable=False, server_default=sa.text("'{}'")),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('released_at', sa.Float(), nullable=True),
        sa.Column('last_updated_at', sa.Float(), nullable=True),
        sa.Column('deprecated_at', sa.Float(), nullable=True),
        sa.Column('published', sa.Boolean(), nullable=False, server_default=sa.text('FALSE')),
        sa.UniqueConstraint('rid', name='icons_rid_key'),
        sa.UniqueConstraint('name', name='icons_name_key'),
        sa.UniqueConstraint('code', name='icons_code_key'),
        sa.CheckConstraint(
            "(code BETWEEN x'E000'::int AND x'F8FF'::int OR code BETWEEN x'F0000'::int AND x'FFFFD'::int) "
            "AND code % 2 = 0",
            name='ck_icons_code_private_use',
        ),
        schema='public'
    )

    op.execute(ASSIGN_CODE_POINT)
    op.execute(
        "CREATE TRIGGER trigger_assign_code_point "
        "BEFORE INSERT ON public.icons "
        "FOR EACH ROW EXECUTE FUNCTION public.assign_code_point();"
    )


def downgrade() -> None:
    op.execute("DROP TRIGGER IF EXISTS trigger_assign_code_point ON public.icons;")
    op.execute("DROP FUNCTION IF EXISTS public.assign_code_point();")
    op.drop_table('icons', schema='public')
