"""Initial schema: catalog, stock ledger, movements and folio counters

Revision ID: 001_initial
Revises: 
Create Date: 2026-10-18 09:30:00

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001_initial'
down_revision = None
branch_labels = None
depends_on = None

MOVEMENT_TYPES = ('entrada', 'salida', 'transferencia', 'ajuste')
MOVEMENT_STATUSES = ('completed', 'pending', 'cancelled')


def upgrade():
    # Create categories table
    op.create_table(
        'categories',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name')
    )

    # Create products table
    op.create_table(
        'products',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('code', sa.String(length=50), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('category_id', sa.String(length=36), nullable=True),
        sa.Column('unit', sa.String(length=20), nullable=False),
        sa.Column('min_stock', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('standard_cost', sa.Numeric(precision=12, scale=2), nullable=False, server_default='0'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.ForeignKeyConstraint(['category_id'], ['categories.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_products_code', 'products', ['code'], unique=True)

    # Create warehouses table
    op.create_table(
        'warehouses',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('code', sa.String(length=50), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('location', sa.String(length=255), nullable=True),
        sa.Column('manager', sa.String(length=100), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_warehouses_code', 'warehouses', ['code'], unique=True)

    # Create stock table
    op.create_table(
        'stock',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('product_id', sa.String(length=36), nullable=False),
        sa.Column('warehouse_id', sa.String(length=36), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('last_updated', sa.DateTime(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.Column('version', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['product_id'], ['products.id']),
        sa.ForeignKeyConstraint(['warehouse_id'], ['warehouses.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('product_id', 'warehouse_id', name='uq_stock_product_warehouse')
    )
    op.create_index('ix_stock_product_id', 'stock', ['product_id'])
    op.create_index('ix_stock_warehouse_id', 'stock', ['warehouse_id'])

    # Create movements table
    op.create_table(
        'movements',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('folio', sa.String(length=20), nullable=False),
        sa.Column('type', sa.Enum(*MOVEMENT_TYPES, name='movement_type'), nullable=False),
        sa.Column('warehouse_id', sa.String(length=36), nullable=False),
        sa.Column('warehouse_destination_id', sa.String(length=36), nullable=True),
        sa.Column('user_id', sa.String(length=100), nullable=False, server_default='system'),
        sa.Column('reason', sa.Text(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('status', sa.Enum(*MOVEMENT_STATUSES, name='movement_status'), nullable=False,
                  server_default='completed'),
        sa.Column('total_value', sa.Numeric(precision=12, scale=2), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.ForeignKeyConstraint(['warehouse_id'], ['warehouses.id']),
        sa.ForeignKeyConstraint(['warehouse_destination_id'], ['warehouses.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_movements_folio', 'movements', ['folio'], unique=True)
    op.create_index('ix_movements_type', 'movements', ['type'])
    op.create_index('ix_movements_created_at', 'movements', ['created_at'])

    # Create movement_details table
    op.create_table(
        'movement_details',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('movement_id', sa.String(length=36), nullable=False),
        sa.Column('line_number', sa.Integer(), nullable=False),
        sa.Column('product_id', sa.String(length=36), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('unit_cost', sa.Numeric(precision=12, scale=2), nullable=False, server_default='0'),
        sa.ForeignKeyConstraint(['movement_id'], ['movements.id']),
        sa.ForeignKeyConstraint(['product_id'], ['products.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_movement_details_movement_id', 'movement_details', ['movement_id'])

    # Create folio_counters table
    op.create_table(
        'folio_counters',
        sa.Column('movement_type', sa.Enum(*MOVEMENT_TYPES, name='folio_movement_type'), nullable=False),
        sa.Column('current_value', sa.Integer(), nullable=False, server_default='0'),
        sa.PrimaryKeyConstraint('movement_type')
    )


def downgrade():
    op.drop_table('folio_counters')
    op.drop_index('ix_movement_details_movement_id', table_name='movement_details')
    op.drop_table('movement_details')
    op.drop_index('ix_movements_created_at', table_name='movements')
    op.drop_index('ix_movements_type', table_name='movements')
    op.drop_index('ix_movements_folio', table_name='movements')
    op.drop_table('movements')
    op.drop_index('ix_stock_warehouse_id', table_name='stock')
    op.drop_index('ix_stock_product_id', table_name='stock')
    op.drop_table('stock')
    op.drop_index('ix_warehouses_code', table_name='warehouses')
    op.drop_table('warehouses')
    op.drop_index('ix_products_code', table_name='products')
    op.drop_table('products')
    op.drop_table('categories')
