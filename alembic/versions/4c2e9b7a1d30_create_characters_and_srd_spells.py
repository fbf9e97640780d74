"""Create characters and srd_spells tables

Revision ID: 4c2e9b7a1d30
Revises:
Create Date: 2025-10-12 19:41:07.218456

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4c2e9b7a1d30'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'characters',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('slug', sa.String(length=300), nullable=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('race', sa.String(length=100), nullable=False),
        sa.Column('class', sa.String(length=100), nullable=False),
        sa.Column('level', sa.Integer(), nullable=False),
        sa.Column('ability_scores', sa.JSON(), nullable=False),
        sa.Column('hp', sa.JSON(), nullable=False),
        sa.Column('spell_slots', sa.JSON(), nullable=False),
        sa.Column('equipment', sa.JSON(), nullable=False),
        sa.Column('skills', sa.JSON(), nullable=False),
        sa.Column('armor_class', sa.JSON(), nullable=False),
        sa.Column('saving_throw_proficiencies', sa.JSON(), nullable=False),
        sa.Column('notes', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint('level BETWEEN 1 AND 20', name='ck_characters_level'),
        sa.PrimaryKeyConstraint('id'),
    )
    # Unique but nullable: rows created before slugs existed keep NULL
    op.create_index('ix_characters_slug', 'characters', ['slug'], unique=True)

    op.create_table(
        'srd_spells',
        sa.Column('index', sa.String(length=100), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('level', sa.Integer(), nullable=False),
        sa.Column('school', sa.String(length=100), nullable=False),
        sa.Column('casting_time', sa.String(length=100), nullable=False),
        sa.Column('range', sa.String(length=100), nullable=False),
        sa.Column('duration', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('classes', sa.JSON(), nullable=False),
        sa.Column('cached_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('index'),
    )
    op.create_index('ix_srd_spells_name', 'srd_spells', ['name'], unique=False)
    op.create_index('ix_srd_spells_level', 'srd_spells', ['level'], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('ix_srd_spells_level', table_name='srd_spells')
    op.drop_index('ix_srd_spells_name', table_name='srd_spells')
    op.drop_table('srd_spells')
    op.drop_index('ix_characters_slug', table_name='characters')
    op.drop_table('characters')
