"""Inventory sheets and costed recipes

Revision ID: 3b7e91c2d4a0
Revises:
Create Date: 2026-10-18 09:12:44.118204

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3b7e91c2d4a0'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'inventory_sheet',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('sheet_key', sa.String(length=50), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('description', sa.String(length=255), nullable=True),
        sa.Column('columns', sa.JSON(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    with op.batch_alter_table('inventory_sheet', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_inventory_sheet_sheet_key'), ['sheet_key'], unique=True)

    op.create_table(
        'inventory_row',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('sheet_id', sa.Integer(), nullable=False),
        sa.Column('order', sa.Integer(), nullable=True),
        sa.Column('values', sa.JSON(), nullable=True),
        sa.Column('is_deleted', sa.Boolean(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['sheet_id'], ['inventory_sheet.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    with op.batch_alter_table('inventory_row', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_inventory_row_sheet_id'), ['sheet_id'], unique=False)
        batch_op.create_index(batch_op.f('ix_inventory_row_is_deleted'), ['is_deleted'], unique=False)

    op.create_table(
        'recipe',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('type', sa.String(length=20), nullable=True),
        sa.Column('item_number', sa.Integer(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('batch_notes', sa.Text(), nullable=True),
        sa.Column('background_color', sa.String(length=7), nullable=True),
        sa.Column('metadata', sa.JSON(), nullable=True),
        sa.Column('items', sa.JSON(), nullable=True),
        sa.Column('volume_oz', sa.Float(), nullable=True),
        sa.Column('cost_each', sa.Float(), nullable=True),
        sa.Column('batch_size', sa.Float(), nullable=True),
        sa.Column('batch_unit', sa.String(length=2), nullable=True),
        sa.Column('batch_yield_count', sa.Float(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    with op.batch_alter_table('recipe', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_recipe_title'), ['title'], unique=False)
        batch_op.create_index(batch_op.f('ix_recipe_type'), ['type'], unique=False)
        batch_op.create_index(batch_op.f('ix_recipe_item_number'), ['item_number'], unique=False)


def downgrade():
    op.drop_table('recipe')
    op.drop_table('inventory_row')
    op.drop_table('inventory_sheet')
